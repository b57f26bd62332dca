"""
Release Source Client - Looks up the latest published release of a GitHub repository.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple

import requests

from utils.errors import (
    ValidationError,
    ReleaseSourceError,
    ReleaseNotFoundError,
    RateLimitError,
)

DEFAULT_API_URL = 'https://api.github.com'
DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = 'github-release-monitor/1.0'


def parse_identifier(identifier: str) -> Tuple[str, str]:
    """
    Split a repository identifier into namespace and name.

    Only the first '/' separates the parts, so 'a/b/c' gives ('a', 'b/c').

    Args:
        identifier: Repository identifier such as 'octocat/Hello-World'

    Returns:
        (namespace, name)

    Raises:
        ValidationError: if there is no '/' or either part is empty
    """
    namespace, sep, name = identifier.partition('/')
    if not sep or not namespace or not name:
        raise ValidationError(f"invalid identifier format: {identifier}")
    return namespace, name


class ReleaseSourceClient:
    """Client for the GitHub releases API."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        settings: Dict[str, Any] = None,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session = None
    ):
        """
        Initialize the client.

        Args:
            access_token: Bearer token attached to every request, or None for anonymous access
            settings: Application settings (reads the 'http' section)
            api_url: Base URL of the GitHub API
            session: Optional pre-built requests session
        """
        self.settings = settings or {}
        self.api_url = api_url.rstrip('/')
        self.logger = logging.getLogger('ReleaseSourceClient')

        http_settings = self.settings.get('http') or {}
        self.timeout = http_settings.get('timeout', DEFAULT_TIMEOUT)
        user_agent = http_settings.get('user_agent', DEFAULT_USER_AGENT)

        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': '2022-11-28',
            'User-Agent': user_agent,
        })
        self._authenticated = bool(access_token)
        if access_token:
            self.session.headers['Authorization'] = f"Bearer {access_token}"

    @property
    def authenticated(self) -> bool:
        """Whether requests carry an access token."""
        return self._authenticated

    def fetch_latest_tag(self, namespace: str, name: str) -> str:
        """
        Fetch the tag of the latest published release.

        Args:
            namespace: Repository owner
            name: Repository name

        Returns:
            Release tag name

        Raises:
            ReleaseNotFoundError: repository missing or without releases
            RateLimitError: API rate limit exhausted
            ReleaseSourceError: any other transport or response failure
        """
        slug = f"{namespace}/{name}"
        url = f"{self.api_url}/repos/{slug}/releases/latest"

        self.logger.debug(f"Fetching latest release from {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ReleaseSourceError(f"request for {slug} failed: {e}") from e

        if response.status_code == 404:
            raise ReleaseNotFoundError(f"no published release found for {slug}")

        if response.status_code in (403, 429) and response.headers.get('X-RateLimit-Remaining') == '0':
            raise RateLimitError(
                f"rate limit exceeded while fetching {slug}; "
                f"resets at {self._format_reset(response.headers.get('X-RateLimit-Reset'))}"
            )

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise ReleaseSourceError(f"release lookup for {slug} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ReleaseSourceError(f"invalid JSON in release response for {slug}") from e

        tag = data.get('tag_name') if isinstance(data, dict) else None
        if not tag:
            raise ReleaseSourceError(f"release response for {slug} has no tag_name")

        return tag

    @staticmethod
    def _format_reset(value: Optional[str]) -> str:
        """Render the X-RateLimit-Reset epoch seconds header."""
        try:
            return datetime.fromtimestamp(int(value), tz=timezone.utc).isoformat()
        except (TypeError, ValueError, OverflowError, OSError):
            return 'unknown time'

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()
