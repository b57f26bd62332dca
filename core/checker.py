"""
Repository Checker - Fetch, compare, update and notify for a single repository.
"""

import logging
from typing import Sequence

from core.dispatcher import NotificationDispatcher
from core.release_source import ReleaseSourceClient, parse_identifier
from models.check_result import CheckResult, ReleaseEvent
from models.repository import RepositoryEntry, ChannelDescriptor
from utils.errors import CheckError, ValidationError, ReleaseSourceError


class RepositoryChecker:
    """Checks one repository entry against the release source."""

    def __init__(self, client: ReleaseSourceClient, dispatcher: NotificationDispatcher):
        self.client = client
        self.dispatcher = dispatcher
        self.logger = logging.getLogger('RepositoryChecker')

    def check(self, entry: RepositoryEntry, channels: Sequence[ChannelDescriptor]) -> CheckResult:
        """
        Check a repository for a new release.

        The entry's last_seen_tag is updated in place before any notification
        is sent, so a failed send is not repeated on the next cycle. An empty
        last_seen_tag counts as a change: the first check always announces the
        current release.

        Args:
            entry: Repository entry, mutated when the tag changed
            channels: Destinations for the notification

        Returns:
            CheckResult describing the outcome

        Raises:
            CheckError: malformed identifier or failed fetch; entry left untouched
        """
        try:
            namespace, name = parse_identifier(entry.identifier)
        except ValidationError as e:
            raise CheckError(entry.identifier, e, str(e)) from e

        try:
            tag = self.client.fetch_latest_tag(namespace, name)
        except ReleaseSourceError as e:
            raise CheckError(
                entry.identifier, e, f"error fetching release for {entry.identifier}: {e}"
            ) from e

        result = CheckResult(
            identifier=entry.identifier,
            previous_tag=entry.last_seen_tag,
            current_tag=tag,
        )

        if tag == entry.last_seen_tag:
            self.logger.debug(f"{entry.identifier} still at {tag}")
            return result

        entry.last_seen_tag = tag
        result.changed = True
        result.notification_errors = self.dispatcher.notify(
            ReleaseEvent(identifier=entry.identifier, tag=tag),
            channels
        )
        return result
