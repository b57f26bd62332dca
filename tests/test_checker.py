"""
Tests for the repository checker.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.checker import RepositoryChecker
from models.check_result import ReleaseEvent
from models.repository import RepositoryEntry, ChannelDescriptor
from utils.errors import CheckError, ReleaseNotFoundError, ValidationError

CHANNELS = [ChannelDescriptor('logger://')]


class TestRepositoryChecker:
    """Tests for RepositoryChecker.check."""

    def test_first_observation_notifies(self, mock_client, mock_dispatcher):
        mock_client.tags['octocat/Hello-World'] = 'v1.0.0'
        entry = RepositoryEntry('octocat/Hello-World')

        result = RepositoryChecker(mock_client, mock_dispatcher).check(entry, CHANNELS)

        assert result.changed is True
        assert entry.last_seen_tag == 'v1.0.0'
        mock_dispatcher.notify.assert_called_once_with(
            ReleaseEvent('octocat/Hello-World', 'v1.0.0'), CHANNELS
        )

    def test_second_run_is_quiet(self, mock_client, mock_dispatcher):
        mock_client.tags['a/b'] = 'v3'
        entry = RepositoryEntry('a/b', 'v2')
        checker = RepositoryChecker(mock_client, mock_dispatcher)

        first = checker.check(entry, CHANNELS)
        second = checker.check(entry, CHANNELS)

        assert first.changed is True
        assert first.previous_tag == 'v2'
        assert second.changed is False
        assert second.status == 'unchanged'
        assert mock_dispatcher.notify.call_count == 1

    def test_unchanged_tag(self, mock_client, mock_dispatcher):
        mock_client.tags['a/b'] = 'v2'
        entry = RepositoryEntry('a/b', 'v2')

        result = RepositoryChecker(mock_client, mock_dispatcher).check(entry, CHANNELS)

        assert result.changed is False
        mock_dispatcher.notify.assert_not_called()

    def test_tags_compared_as_strings(self, mock_client, mock_dispatcher):
        # an older tag is still a change; no version ordering is applied
        mock_client.tags['a/b'] = 'v1.0.0'
        entry = RepositoryEntry('a/b', 'v2.0.0')

        RepositoryChecker(mock_client, mock_dispatcher).check(entry, CHANNELS)

        assert entry.last_seen_tag == 'v1.0.0'
        mock_dispatcher.notify.assert_called_once()

    def test_invalid_identifier(self, mock_client, mock_dispatcher):
        entry = RepositoryEntry('no-slash', 'v1')

        with pytest.raises(CheckError, match='invalid identifier format: no-slash') as excinfo:
            RepositoryChecker(mock_client, mock_dispatcher).check(entry, CHANNELS)

        assert isinstance(excinfo.value.cause, ValidationError)
        assert excinfo.value.identifier == 'no-slash'
        mock_client.fetch_latest_tag.assert_not_called()
        mock_dispatcher.notify.assert_not_called()
        assert entry.last_seen_tag == 'v1'

    def test_fetch_failure_leaves_state(self, mock_client, mock_dispatcher):
        mock_client.tags['a/b'] = ReleaseNotFoundError('no published release found for a/b')
        entry = RepositoryEntry('a/b', 'v1')

        with pytest.raises(CheckError, match='error fetching release for a/b') as excinfo:
            RepositoryChecker(mock_client, mock_dispatcher).check(entry, CHANNELS)

        assert isinstance(excinfo.value.cause, ReleaseNotFoundError)
        assert entry.last_seen_tag == 'v1'
        mock_dispatcher.notify.assert_not_called()

    def test_tag_updated_before_dispatch(self, mock_client, mock_dispatcher):
        mock_client.tags['a/b'] = 'v5'
        entry = RepositoryEntry('a/b', 'v4')
        seen_during_notify = []

        def notify(event, channels):
            seen_during_notify.append(entry.last_seen_tag)
            return ['Error sending notification for a/b to logger://: boom']

        mock_dispatcher.notify.side_effect = notify

        result = RepositoryChecker(mock_client, mock_dispatcher).check(entry, CHANNELS)

        assert seen_during_notify == ['v5']
        assert entry.last_seen_tag == 'v5'
        assert result.notification_errors == ['Error sending notification for a/b to logger://: boom']

    def test_name_with_slashes(self, mock_client, mock_dispatcher):
        mock_client.tags['group/sub/project'] = 'r1'
        entry = RepositoryEntry('group/sub/project')

        RepositoryChecker(mock_client, mock_dispatcher).check(entry, CHANNELS)

        mock_client.fetch_latest_tag.assert_called_once_with('group', 'sub/project')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
