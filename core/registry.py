"""
Handler Registry - Maps channel descriptor schemes to notification transports.
"""

import logging
from typing import Dict, Any, Optional, Type, List

from handlers.base_handler import BaseHandler
from handlers.webhook_handler import WebhookHandler
from handlers.discord_handler import DiscordHandler
from handlers.slack_handler import SlackHandler
from handlers.logger_handler import LoggerHandler
from utils.errors import UnsupportedChannelError


class HandlerRegistry:
    """Registry that picks the transport handler for a channel descriptor."""

    # Map descriptor schemes to handler classes
    HANDLER_MAP: Dict[str, Type[BaseHandler]] = {
        'generic+http': WebhookHandler,
        'generic+https': WebhookHandler,
        'generic+powerautomate': WebhookHandler,
        'discord': DiscordHandler,
        'slack': SlackHandler,
        'logger': LoggerHandler,
    }

    def __init__(self, settings: Dict[str, Any] = None):
        """
        Initialize the registry.

        Args:
            settings: Application settings passed on to every handler
        """
        self.settings = settings or {}
        self.logger = logging.getLogger('HandlerRegistry')
        self._handler_classes: Dict[str, Type[BaseHandler]] = dict(self.HANDLER_MAP)
        self._instances: Dict[Type[BaseHandler], BaseHandler] = {}

    def register(self, handler_class: Type[BaseHandler], schemes: Optional[List[str]] = None) -> None:
        """
        Register a transport handler.

        Args:
            handler_class: BaseHandler subclass
            schemes: Schemes to serve; defaults to the handler's own get_schemes()
        """
        handler = handler_class(self.settings)
        self._instances[handler_class] = handler
        for scheme in schemes or handler.get_schemes():
            self._handler_classes[scheme] = handler_class

    def get_handler(self, destination: str) -> BaseHandler:
        """
        Get the handler instance for a descriptor.

        Args:
            destination: Channel descriptor

        Returns:
            Handler instance

        Raises:
            UnsupportedChannelError: if no handler serves the descriptor's scheme
        """
        scheme, sep, _ = destination.partition('://')
        handler_class = self._handler_classes.get(scheme) if sep else None
        if handler_class is None:
            problem = f"no transport for scheme {scheme!r}" if sep else "descriptor has no scheme"
            raise UnsupportedChannelError(f"{problem} (supported: {', '.join(self.list_schemes())})")

        # handlers keep no per-message state, one instance per class is shared
        handler = self._instances.get(handler_class)
        if handler is None:
            handler = handler_class(self.settings)
            self._instances[handler_class] = handler
        return handler

    def list_schemes(self) -> list:
        """List all supported descriptor schemes."""
        return sorted(self._handler_classes)
