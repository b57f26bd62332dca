"""
Utils package - Shared utility functions.
"""

from utils.logger import setup_logging, configure_from_settings
from utils.credentials import resolve_access_token
from utils.errors import (
    MonitorError,
    ConfigError,
    ValidationError,
    ReleaseSourceError,
    ReleaseNotFoundError,
    RateLimitError,
    NotificationError,
    UnsupportedChannelError,
    CheckError,
)

__all__ = [
    'setup_logging',
    'configure_from_settings',
    'resolve_access_token',
    'MonitorError',
    'ConfigError',
    'ValidationError',
    'ReleaseSourceError',
    'ReleaseNotFoundError',
    'RateLimitError',
    'NotificationError',
    'UnsupportedChannelError',
    'CheckError',
]
