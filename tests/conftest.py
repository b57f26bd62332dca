"""
Pytest configuration and fixtures.
"""

import os
import sys
from unittest.mock import Mock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

SAMPLE_CONFIG = """\
access_token: ghp_example
interval: 0
repositories:
- slug: octocat/Hello-World
  current_release_tag: v1.0.0
- slug: containrrr/shoutrrr
  current_release_tag: ''
notifications:
- url: logger://
- url: generic+powerautomate://prod.example.com/workflows/abc?sig=secret
"""


@pytest.fixture
def config_file(tmp_path):
    """Write the sample config to a temporary file and return its path."""
    path = tmp_path / 'config.yml'
    path.write_text(SAMPLE_CONFIG, encoding='utf-8')
    return str(path)


@pytest.fixture
def write_config(tmp_path):
    """Factory writing arbitrary YAML text to a temporary config file."""
    def _write(text: str, name: str = 'config.yml') -> str:
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture
def mock_client():
    """Release source client whose tags come from a dict keyed by 'owner/name'."""
    client = Mock()
    client.tags = {}

    def fetch(namespace, name):
        value = client.tags[f"{namespace}/{name}"]
        if isinstance(value, Exception):
            raise value
        return value

    client.fetch_latest_tag.side_effect = fetch
    return client


@pytest.fixture
def mock_dispatcher():
    """Dispatcher that records events and reports no failures."""
    dispatcher = Mock()
    dispatcher.notify.return_value = []
    return dispatcher
