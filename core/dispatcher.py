"""
Notification Dispatcher - Sends a release event to every configured channel.
"""

import logging
from typing import List, Sequence

from core.formatters import FormatterRegistry, default_registry, default_message
from core.registry import HandlerRegistry
from models.check_result import ReleaseEvent
from models.repository import ChannelDescriptor
from utils.errors import NotificationError


class NotificationDispatcher:
    """Formats and sends release events; a failing channel never stops the others."""

    def __init__(
        self,
        handlers: HandlerRegistry = None,
        formatters: FormatterRegistry = None,
        dry_run: bool = False
    ):
        """
        Initialize the dispatcher.

        Args:
            handlers: Transport handler registry
            formatters: Message formatter registry
            dry_run: Log messages instead of sending them
        """
        self.handlers = handlers or HandlerRegistry()
        self.formatters = formatters or default_registry()
        self.dry_run = dry_run
        self.logger = logging.getLogger('NotificationDispatcher')

    def notify(self, event: ReleaseEvent, channels: Sequence[ChannelDescriptor]) -> List[str]:
        """
        Send an event to all channels, one after another.

        Args:
            event: Release to announce
            channels: Destinations

        Returns:
            One error message per channel that failed (empty when all succeeded)
        """
        self.logger.info(default_message(event))

        failures = []
        for channel in channels:
            try:
                message = self.formatters.format(channel.destination, event)

                if self.dry_run:
                    self.logger.info(f"[dry run] would notify {channel.redacted()}")
                    continue

                handler = self.handlers.get_handler(channel.destination)
                handler.send(channel.destination, message)
            except NotificationError as e:
                failures.append(self._report(event, channel, str(e)))
            except Exception as e:
                failures.append(self._report(event, channel, f"{type(e).__name__}: {e}"))
            else:
                self.logger.debug(f"Notified {channel.redacted()} about {event.identifier} {event.tag}")

        return failures

    def _report(self, event: ReleaseEvent, channel: ChannelDescriptor, cause: str) -> str:
        error = f"Error sending notification for {event.identifier} to {channel.redacted()}: {cause}"
        self.logger.error(error)
        return error
