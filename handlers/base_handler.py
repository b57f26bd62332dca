"""
Abstract base handler for all notification transports.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Tuple
import logging

import requests

from utils.errors import NotificationError

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = 'github-release-monitor/1.0'


class BaseHandler(ABC):
    """Abstract base class for all notification transport handlers."""

    def __init__(self, settings: Dict[str, Any] = None):
        """
        Initialize handler with application settings.

        Args:
            settings: Application settings (reads the 'http' section)
        """
        self.settings = settings or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def send(self, destination: str, message: str) -> None:
        """
        Deliver a message to the destination.

        Args:
            destination: Channel descriptor
            message: Formatted message body

        Raises:
            NotificationError: if delivery failed
        """
        pass

    @abstractmethod
    def get_schemes(self) -> Tuple[str, ...]:
        """
        Get the descriptor schemes served by this handler.

        Returns:
            Tuple of scheme names such as ('discord',)
        """
        pass

    @staticmethod
    def split_destination(destination: str) -> Tuple[str, str]:
        """Split 'scheme://rest' into (scheme, rest)."""
        scheme, sep, rest = destination.partition('://')
        if not sep:
            raise NotificationError(f"channel descriptor has no scheme: {destination!r}")
        return scheme, rest

    def post(
        self,
        url: str,
        data: Optional[bytes] = None,
        json_body: Any = None,
        content_type: Optional[str] = None
    ) -> requests.Response:
        """
        POST to a webhook and check the response.

        Raises:
            NotificationError: on transport failure or a non-2xx status
        """
        http_settings = self.settings.get('http') or {}
        timeout = http_settings.get('timeout', DEFAULT_TIMEOUT)
        headers = {'User-Agent': http_settings.get('user_agent', DEFAULT_USER_AGENT)}
        if content_type:
            headers['Content-Type'] = content_type

        try:
            response = requests.post(
                url,
                data=data,
                json=json_body,
                headers=headers,
                timeout=timeout
            )
        except requests.exceptions.RequestException as e:
            raise NotificationError(f"{type(e).__name__}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise NotificationError(f"webhook returned HTTP {response.status_code}")

        return response
