"""
Release Monitor - Drives check cycles on a fixed interval and persists state.
"""

import time
import logging
import threading
from typing import Optional, List, Union

from core.checker import RepositoryChecker
from core.dispatcher import NotificationDispatcher
from core.orchestrator import CheckOrchestrator, DEFAULT_MAX_WORKERS
from core.registry import HandlerRegistry
from core.release_source import ReleaseSourceClient
from core.state_store import StateStore
from models.check_result import CheckResult
from utils.credentials import resolve_access_token


class ReleaseMonitor:
    """
    Main monitoring agent.

    Lifecycle: load state, run one check cycle straight away, then either
    stop (interval 0) or keep running a cycle per interval until
    request_shutdown() is called. State is saved after every cycle and once
    more on the way out if anything changed since the last save.
    """

    def __init__(
        self,
        config_file: str = None,
        client: ReleaseSourceClient = None,
        dispatcher: NotificationDispatcher = None,
        dry_run: bool = False,
        interval: Optional[Union[int, float]] = None
    ):
        """
        Initialize the monitor.

        Args:
            config_file: Path to the YAML config file
            client: Release source client; built from the config when omitted
            dispatcher: Notification dispatcher; built from the config when omitted
            dry_run: Check without sending notifications or saving state
            interval: Override the configured interval in seconds

        Raises:
            ConfigError: if the config cannot be loaded
        """
        self.logger = logging.getLogger('ReleaseMonitor')
        self.store = StateStore(config_file)
        self.state = self.store.load()
        self.settings = self.state.settings
        self.dry_run = dry_run
        self.interval = self.state.interval if interval is None else interval
        self.stop_event = threading.Event()
        self._unsaved = False

        self._owns_client = client is None
        if client is None:
            client = self._create_client()
        self.client = client

        if dispatcher is None:
            dispatcher = NotificationDispatcher(HandlerRegistry(self.settings), dry_run=dry_run)
        self.dispatcher = dispatcher

        self.checker = RepositoryChecker(self.client, self.dispatcher)
        self.orchestrator = CheckOrchestrator(
            self.checker,
            max_workers=self.settings.get('max_workers', DEFAULT_MAX_WORKERS),
            stop_event=self.stop_event
        )

    def _create_client(self) -> ReleaseSourceClient:
        token, origin = resolve_access_token(self.state.access_token)
        if origin == 'config':
            self.logger.info("Using provided GitHub access token for authentication")
        elif origin == 'environment':
            self.logger.info("Using GitHub access token from environment variable")
        else:
            self.logger.info("No GitHub access token configured, using anonymous access")
        return ReleaseSourceClient(token, self.settings)

    def request_shutdown(self) -> None:
        """Ask the loop to stop; no new cycle starts afterwards. Safe to call from a signal handler."""
        self.stop_event.set()

    def run_check(self) -> List[CheckResult]:
        """
        Run one check cycle and save the state.

        Returns:
            One CheckResult per repository
        """
        self._unsaved = True
        results = self.orchestrator.check_all(self.state)
        self.persist()
        self.logger.info("Check completed")
        return results

    def persist(self) -> bool:
        """
        Save the in-memory state.

        Write failures are logged and retried on the next cycle.

        Returns:
            True if the state was written
        """
        if self.dry_run:
            self.logger.debug("Dry run, state not saved")
            self._unsaved = False
            return False

        try:
            self.store.save(self.state)
        except OSError as e:
            self.logger.error(f"Error writing config {self.store.config_file}: {e}")
            return False

        self._unsaved = False
        return True

    def run(self) -> None:
        """Run until one-shot completion or shutdown."""
        try:
            self.logger.info("Starting initial repository check...")
            self.run_check()

            if not self.interval:
                self.logger.info("Running in one-shot mode (no interval)")
                return

            self.logger.info(f"Running in daemon mode, checking every {self.interval}s")
            self._loop()
        finally:
            if self._unsaved:
                self.persist()
            if self._owns_client:
                self.client.close()

    def _loop(self) -> None:
        # fixed-rate schedule; ticks missed during a slow cycle are dropped
        next_tick = time.monotonic() + self.interval
        while True:
            timeout = max(0.0, next_tick - time.monotonic())
            if self.stop_event.wait(timeout):
                self.logger.info("Received shutdown signal, saving config and exiting...")
                return

            self.run_check()

            next_tick += self.interval
            now = time.monotonic()
            if next_tick <= now:
                missed = int((now - next_tick) // self.interval) + 1
                self.logger.warning(f"Check cycle overran the interval, skipping {missed} tick(s)")
                next_tick += missed * self.interval
