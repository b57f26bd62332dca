"""
Models package - Data classes for the application.
"""

from models.repository import MonitorState, RepositoryEntry, ChannelDescriptor
from models.check_result import CheckResult, ReleaseEvent

__all__ = [
    'MonitorState',
    'RepositoryEntry',
    'ChannelDescriptor',
    'CheckResult',
    'ReleaseEvent',
]
