"""
Monitor state models.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass
class RepositoryEntry:
    """A monitored repository and the last release tag seen for it."""

    identifier: str
    last_seen_tag: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> 'RepositoryEntry':
        """Create RepositoryEntry from a config mapping."""
        return cls(
            identifier=data['slug'],
            last_seen_tag=data.get('current_release_tag') or "",
        )

    def to_dict(self) -> dict:
        """Convert to the persisted mapping."""
        return {
            'slug': self.identifier,
            'current_release_tag': self.last_seen_tag,
        }


@dataclass
class ChannelDescriptor:
    """An outbound notification destination."""

    destination: str

    @classmethod
    def from_dict(cls, data: dict) -> 'ChannelDescriptor':
        return cls(destination=data['url'])

    def to_dict(self) -> dict:
        return {'url': self.destination}

    def redacted(self) -> str:
        """
        Destination safe for logging.

        Webhook URLs usually carry their secret in the path or userinfo,
        so only the scheme and host are kept.
        """
        scheme, sep, rest = self.destination.partition('://')
        if not sep:
            return '<invalid destination>'
        host = rest.split('/', 1)[0].split('?', 1)[0]
        if '@' in host:
            host = host.rsplit('@', 1)[1]
        return f"{scheme}://{host}/..." if host else f"{scheme}://"


@dataclass
class MonitorState:
    """
    Root aggregate loaded from and persisted to the config file.

    `settings` holds every other top-level key of the document (http,
    logging, max_workers, anything unknown) so a save keeps them.
    """

    access_token: Optional[str] = None
    interval: int = 0
    repositories: List[RepositoryEntry] = field(default_factory=list)
    notifications: List[ChannelDescriptor] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted document, keeping key order stable."""
        data: Dict[str, Any] = {}
        if self.access_token:
            data['access_token'] = self.access_token
        data['interval'] = self.interval
        data['repositories'] = [repo.to_dict() for repo in self.repositories]
        data['notifications'] = [channel.to_dict() for channel in self.notifications]
        for key, value in self.settings.items():
            data[key] = value
        return data
