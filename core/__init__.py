"""
Core package - Contains main business logic.
"""

from core.state_store import StateStore, get_config_file
from core.release_source import ReleaseSourceClient, parse_identifier
from core.formatters import FormatterRegistry, default_registry
from core.registry import HandlerRegistry
from core.dispatcher import NotificationDispatcher
from core.checker import RepositoryChecker
from core.orchestrator import CheckOrchestrator
from core.monitor import ReleaseMonitor

__all__ = [
    'StateStore',
    'get_config_file',
    'ReleaseSourceClient',
    'parse_identifier',
    'FormatterRegistry',
    'default_registry',
    'HandlerRegistry',
    'NotificationDispatcher',
    'RepositoryChecker',
    'CheckOrchestrator',
    'ReleaseMonitor'
]
