"""
Exception types raised by the release monitor.
"""

from typing import Optional


class MonitorError(Exception):
    """Base class for all release monitor errors."""


class ConfigError(MonitorError):
    """Config file is missing, unreadable or malformed."""


class ValidationError(MonitorError):
    """A value from the config does not have the expected shape."""


class ReleaseSourceError(MonitorError):
    """Fetching the latest release failed."""


class ReleaseNotFoundError(ReleaseSourceError):
    """Repository does not exist or has no published release."""


class RateLimitError(ReleaseSourceError):
    """The release source refused the request because the rate limit is exhausted."""


class NotificationError(MonitorError):
    """Sending a message to a channel failed."""


class UnsupportedChannelError(NotificationError):
    """No transport handler accepts the channel descriptor."""


class CheckError(MonitorError):
    """
    A single repository check failed.

    Carries the repository identifier and the underlying cause so the
    orchestrator can report it without knowing what went wrong.
    """

    def __init__(self, identifier: str, cause: Optional[BaseException] = None, message: str = None):
        self.identifier = identifier
        self.cause = cause
        if message is None:
            message = f"error checking repository {identifier}: {cause}"
        super().__init__(message)
