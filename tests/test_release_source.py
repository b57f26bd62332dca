"""
Tests for the GitHub release source client.
"""

import os
import sys
from unittest.mock import Mock, patch

import pytest
import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.release_source import ReleaseSourceClient, parse_identifier
from utils.credentials import resolve_access_token
from utils.errors import (
    ValidationError,
    ReleaseSourceError,
    ReleaseNotFoundError,
    RateLimitError,
)


def make_response(status_code=200, payload=None, headers=None):
    response = Mock()
    response.status_code = status_code
    response.headers = headers or {}
    response.json = Mock(return_value=payload if payload is not None else {})
    if status_code >= 400:
        response.raise_for_status = Mock(
            side_effect=requests.exceptions.HTTPError(f"{status_code} Error")
        )
    else:
        response.raise_for_status = Mock()
    return response


def make_client(response=None, token=None, settings=None, side_effect=None):
    session = requests.Session()
    session.get = Mock(return_value=response, side_effect=side_effect)
    return ReleaseSourceClient(token, settings, session=session)


class TestParseIdentifier:
    """Tests for identifier parsing."""

    def test_owner_and_name(self):
        assert parse_identifier('octocat/Hello-World') == ('octocat', 'Hello-World')

    def test_extra_slashes_stay_in_name(self):
        assert parse_identifier('a/b/c') == ('a', 'b/c')

    @pytest.mark.parametrize('identifier', ['no-slash', '/name', 'owner/', '/', ''])
    def test_invalid(self, identifier):
        with pytest.raises(ValidationError, match='invalid identifier format'):
            parse_identifier(identifier)


class TestReleaseSourceClient:
    """Tests for ReleaseSourceClient.fetch_latest_tag."""

    def test_fetch_latest_tag(self):
        client = make_client(make_response(payload={'tag_name': 'v2.1.0'}))

        assert client.fetch_latest_tag('octocat', 'Hello-World') == 'v2.1.0'
        url = client.session.get.call_args[0][0]
        assert url == 'https://api.github.com/repos/octocat/Hello-World/releases/latest'
        assert client.session.get.call_args[1]['timeout'] == 30

    def test_token_is_sent(self):
        client = make_client(make_response(payload={'tag_name': 'v1'}), token='ghp_secret')

        assert client.authenticated is True
        assert client.session.headers['Authorization'] == 'Bearer ghp_secret'

    def test_anonymous_access(self):
        client = make_client(make_response(payload={'tag_name': 'v1'}))

        assert client.authenticated is False
        assert 'Authorization' not in client.session.headers

    def test_http_settings(self):
        settings = {'http': {'timeout': 5, 'user_agent': 'test-agent'}}
        client = make_client(make_response(payload={'tag_name': 'v1'}), settings=settings)
        client.fetch_latest_tag('a', 'b')

        assert client.session.get.call_args[1]['timeout'] == 5
        assert client.session.headers['User-Agent'] == 'test-agent'

    def test_not_found(self):
        client = make_client(make_response(404))
        with pytest.raises(ReleaseNotFoundError, match='octocat/missing'):
            client.fetch_latest_tag('octocat', 'missing')

    def test_rate_limited(self):
        headers = {'X-RateLimit-Remaining': '0', 'X-RateLimit-Reset': '1700000000'}
        client = make_client(make_response(403, headers=headers))
        with pytest.raises(RateLimitError, match='2023-11-14'):
            client.fetch_latest_tag('a', 'b')

    def test_forbidden_without_rate_limit(self):
        client = make_client(make_response(403, headers={'X-RateLimit-Remaining': '12'}))
        with pytest.raises(ReleaseSourceError) as excinfo:
            client.fetch_latest_tag('a', 'b')
        assert not isinstance(excinfo.value, RateLimitError)

    def test_server_error(self):
        client = make_client(make_response(502))
        with pytest.raises(ReleaseSourceError, match='a/b'):
            client.fetch_latest_tag('a', 'b')

    def test_connection_error(self):
        client = make_client(side_effect=requests.exceptions.ConnectionError('refused'))
        with pytest.raises(ReleaseSourceError, match='refused'):
            client.fetch_latest_tag('a', 'b')

    def test_missing_tag_name(self):
        client = make_client(make_response(payload={'name': 'Release without tag'}))
        with pytest.raises(ReleaseSourceError, match='tag_name'):
            client.fetch_latest_tag('a', 'b')

    def test_invalid_json(self):
        response = make_response()
        response.json.side_effect = ValueError('no json')
        client = make_client(response)
        with pytest.raises(ReleaseSourceError, match='invalid JSON'):
            client.fetch_latest_tag('a', 'b')


class TestResolveAccessToken:
    """Tests for access token resolution."""

    @patch('utils.credentials.load_dotenv')
    def test_config_token_wins(self, mock_load, monkeypatch):
        monkeypatch.setenv('GITHUB_TOKEN', 'from-env')
        assert resolve_access_token('from-config') == ('from-config', 'config')
        mock_load.assert_not_called()

    @patch('utils.credentials.load_dotenv')
    def test_environment_fallback(self, mock_load, monkeypatch):
        monkeypatch.setenv('GITHUB_TOKEN', 'from-env')
        assert resolve_access_token(None) == ('from-env', 'environment')
        mock_load.assert_called_once()
        assert mock_load.call_args[1] == {'override': False}

    @patch('utils.credentials.load_dotenv')
    def test_anonymous(self, mock_load, monkeypatch):
        monkeypatch.delenv('GITHUB_TOKEN', raising=False)
        assert resolve_access_token('') == (None, 'anonymous')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
