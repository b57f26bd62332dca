"""
Check Orchestrator - Runs the repository checker across all monitored repositories.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from core.checker import RepositoryChecker
from models.check_result import CheckResult
from models.repository import MonitorState, RepositoryEntry, ChannelDescriptor
from utils.errors import CheckError

DEFAULT_MAX_WORKERS = 10


class CheckOrchestrator:
    """Fans out one check per repository on a bounded thread pool."""

    def __init__(
        self,
        checker: RepositoryChecker,
        max_workers: int = DEFAULT_MAX_WORKERS,
        stop_event: Optional[threading.Event] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            checker: Repository checker
            max_workers: Upper bound on concurrent checks
            stop_event: When set, checks that have not started yet are skipped
        """
        self.checker = checker
        self.max_workers = max(1, max_workers)
        self.stop_event = stop_event
        self.logger = logging.getLogger('CheckOrchestrator')
        self._errors_lock = threading.Lock()

    def check_all(self, state: MonitorState) -> List[CheckResult]:
        """
        Check every repository in the state.

        Each task writes only to its own RepositoryEntry. Errors are logged
        and recorded per repository and never abort the batch.

        Args:
            state: Monitor state, repository tags are updated in place

        Returns:
            One CheckResult per repository, in configuration order
        """
        repositories = state.repositories
        self.logger.info(f"Checking {len(repositories)} repositories...")
        if not repositories:
            return []

        results: List[Optional[CheckResult]] = [None] * len(repositories)
        channels = list(state.notifications)
        workers = min(self.max_workers, len(repositories))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='check') as executor:
            for index, entry in enumerate(repositories):
                executor.submit(self._run_one, index, entry, channels, results)

        return results

    def _run_one(
        self,
        index: int,
        entry: RepositoryEntry,
        channels: List[ChannelDescriptor],
        results: List[Optional[CheckResult]]
    ) -> None:
        if self.stop_event is not None and self.stop_event.is_set():
            results[index] = CheckResult(
                identifier=entry.identifier,
                previous_tag=entry.last_seen_tag,
                skipped=True
            )
            return

        try:
            results[index] = self.checker.check(entry, channels)
        except CheckError as e:
            self._record_error(index, entry, str(e), results)
        except Exception as e:
            self._record_error(
                index, entry, f"unexpected error checking repository {entry.identifier}: {e}", results
            )
            self.logger.debug("Traceback:", exc_info=True)

    def _record_error(
        self,
        index: int,
        entry: RepositoryEntry,
        message: str,
        results: List[Optional[CheckResult]]
    ) -> None:
        with self._errors_lock:
            self.logger.error(f"Error checking repository {entry.identifier}: {message}")
        results[index] = CheckResult(
            identifier=entry.identifier,
            previous_tag=entry.last_seen_tag,
            error=message
        )
