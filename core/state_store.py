"""
State Store - Loads and persists the monitor config and last seen release tags.
"""

import os
import tempfile
import logging
from threading import Lock
from typing import Dict, Any, Optional

import yaml

from utils.errors import ConfigError
from models.repository import MonitorState, RepositoryEntry, ChannelDescriptor

CONFIG_ENV_VAR = 'GITHUB_RELEASE_MONITOR_CONFIG'
DEFAULT_CONFIG_FILE = 'config.yml'

KNOWN_KEYS = ('access_token', 'interval', 'repositories', 'notifications')


def get_config_file(explicit: Optional[str] = None) -> str:
    """
    Resolve the config file path.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        explicit path, else the environment override, else config.yml
    """
    if explicit:
        return explicit
    env_config = os.getenv(CONFIG_ENV_VAR)
    if env_config:
        return env_config
    return DEFAULT_CONFIG_FILE


class StateStore:
    """Reads and writes MonitorState as a YAML document."""

    def __init__(self, config_file: str = None):
        """
        Initialize state store.

        Args:
            config_file: Path to the YAML config file
        """
        self.config_file = get_config_file(config_file)
        self.logger = logging.getLogger('StateStore')
        self._lock = Lock()

    def load(self) -> MonitorState:
        """
        Load state from the config file.

        Returns:
            MonitorState built from the document

        Raises:
            ConfigError: if the file is missing, empty or malformed
        """
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"cannot read config file {self.config_file}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"cannot parse config file {self.config_file}: {e}") from e

        if data is None:
            raise ConfigError(f"config file {self.config_file} is empty")
        if not isinstance(data, dict):
            raise ConfigError(f"config file {self.config_file} must contain a mapping")

        state = self._parse(data)
        self.logger.debug(
            f"Loaded {len(state.repositories)} repositories and "
            f"{len(state.notifications)} notification channels from {self.config_file}"
        )
        return state

    def _parse(self, data: Dict[str, Any]) -> MonitorState:
        interval = data.get('interval')
        if interval is None:
            interval = 0
        # bool is an int subclass; "interval: yes" is not a period
        if isinstance(interval, bool) or not isinstance(interval, int) or interval < 0:
            raise ConfigError(f"interval must be a non-negative integer, got {interval!r}")

        access_token = data.get('access_token')
        if access_token is not None and not isinstance(access_token, str):
            raise ConfigError("access_token must be a string")

        repositories = []
        for index, item in enumerate(self._list_field(data, 'repositories')):
            if not isinstance(item, dict) or not isinstance(item.get('slug'), str):
                raise ConfigError(f"repositories[{index}] must be a mapping with a string 'slug'")
            tag = item.get('current_release_tag')
            if tag is not None and not isinstance(tag, str):
                # unquoted numeric tags such as 1.0 come back as floats
                item = {**item, 'current_release_tag': str(tag)}
            repositories.append(RepositoryEntry.from_dict(item))

        notifications = []
        for index, item in enumerate(self._list_field(data, 'notifications')):
            if not isinstance(item, dict) or not isinstance(item.get('url'), str):
                raise ConfigError(f"notifications[{index}] must be a mapping with a string 'url'")
            notifications.append(ChannelDescriptor.from_dict(item))

        settings = {key: value for key, value in data.items() if key not in KNOWN_KEYS}
        self._check_settings(settings)

        return MonitorState(
            access_token=access_token or None,
            interval=interval,
            repositories=repositories,
            notifications=notifications,
            settings=settings,
        )

    @staticmethod
    def _check_settings(settings: Dict[str, Any]) -> None:
        """Reject malformed values for the settings the monitor reads."""
        max_workers = settings.get('max_workers')
        if max_workers is not None and (
            isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1
        ):
            raise ConfigError(f"max_workers must be a positive integer, got {max_workers!r}")

        http = settings.get('http')
        if http is not None:
            if not isinstance(http, dict):
                raise ConfigError("http must be a mapping")
            timeout = http.get('timeout')
            if timeout is not None and (
                isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
            ):
                raise ConfigError(f"http.timeout must be a positive number, got {timeout!r}")
            user_agent = http.get('user_agent')
            if user_agent is not None and not isinstance(user_agent, str):
                raise ConfigError("http.user_agent must be a string")

        log_settings = settings.get('logging')
        if log_settings is not None:
            if not isinstance(log_settings, dict):
                raise ConfigError("logging must be a mapping")
            for key in ('level', 'format', 'file'):
                value = log_settings.get(key)
                if value is not None and not isinstance(value, str):
                    raise ConfigError(f"logging.{key} must be a string")

    @staticmethod
    def _list_field(data: Dict[str, Any], key: str) -> list:
        value = data.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise ConfigError(f"{key} must be a list")
        return value

    def save(self, state: MonitorState) -> None:
        """
        Save state to the config file.

        The document is written to a temporary file in the same directory
        and renamed over the old one, so a crash mid-write leaves the
        previous file intact.

        Raises:
            OSError: if the file cannot be written
        """
        with self._lock:
            text = yaml.safe_dump(
                state.to_dict(),
                sort_keys=False,
                default_flow_style=False,
                allow_unicode=True,
            )

            dir_path = os.path.dirname(os.path.abspath(self.config_file))
            fd, tmp = tempfile.mkstemp(dir=dir_path, prefix='.config-', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())
                os.chmod(tmp, 0o644)
                os.replace(tmp, self.config_file)
            except BaseException:
                try:
                    os.unlink(tmp)
                except OSError:
                    pass
                raise

        self.logger.debug(f"Saved state to {self.config_file}")
