"""
Message formatters - Turn a release event into the body sent to a channel.

Formatting depends only on the channel descriptor. A registry holds
(predicate, formatter) pairs that are tried in registration order; the
first matching predicate wins and the default message is the fallback.
"""

import json
from typing import Callable, List, Tuple

from models.check_result import ReleaseEvent

Predicate = Callable[[str], bool]
Formatter = Callable[[ReleaseEvent], str]

POWER_AUTOMATE_PREFIX = 'generic+powerautomate'


def prefix_predicate(prefix: str) -> Predicate:
    """Predicate matching descriptors that start with prefix."""
    def matches(destination: str) -> bool:
        return destination.startswith(prefix)
    return matches


def default_message(event: ReleaseEvent) -> str:
    return f"New release for {event.identifier}: {event.tag}"


def adaptive_card_message(event: ReleaseEvent) -> str:
    """Teams / Power Automate adaptive card with a title and a fact list."""
    card = {
        'type': 'message',
        'attachments': [{
            'contentType': 'application/vnd.microsoft.card.adaptive',
            'content': {
                'type': 'AdaptiveCard',
                'version': '1.2',
                'body': [
                    {
                        'type': 'TextBlock',
                        'text': 'New Release Available',
                        'weight': 'bolder',
                        'size': 'large',
                    },
                    {
                        'type': 'FactSet',
                        'facts': [
                            {'title': 'Repository:', 'value': event.identifier},
                            {'title': 'Version:', 'value': event.tag},
                        ],
                    },
                ],
            },
        }],
    }
    return json.dumps(card, indent=2)


class FormatterRegistry:
    """Ordered set of formatter strategies keyed by descriptor predicate."""

    def __init__(self, default: Formatter = default_message):
        self.default = default
        self._formatters: List[Tuple[Predicate, Formatter]] = []

    def register(self, predicate: Predicate, formatter: Formatter) -> None:
        """Add a formatter; earlier registrations take precedence."""
        self._formatters.append((predicate, formatter))

    def register_prefix(self, prefix: str, formatter: Formatter) -> None:
        self.register(prefix_predicate(prefix), formatter)

    def format(self, destination: str, event: ReleaseEvent) -> str:
        """
        Format an event for one destination.

        Args:
            destination: Channel descriptor
            event: Release to announce

        Returns:
            Message body
        """
        for predicate, formatter in self._formatters:
            if predicate(destination):
                return formatter(event)
        return self.default(event)

    def __len__(self) -> int:
        return len(self._formatters)


def default_registry() -> FormatterRegistry:
    """Registry with the built-in formatters."""
    registry = FormatterRegistry()
    registry.register_prefix(POWER_AUTOMATE_PREFIX, adaptive_card_message)
    return registry
