#!/usr/bin/env python3
"""
Main entry point for the GitHub Release Monitor.

Checks the repositories listed in the config file for new releases,
notifies the configured channels and writes the last seen tags back.
With `interval: 0` it runs once and exits; otherwise it keeps checking
every `interval` seconds until SIGINT or SIGTERM.

Config path: --config, else $GITHUB_RELEASE_MONITOR_CONFIG, else config.yml.
"""

import argparse
import logging
import signal
import sys

from core.monitor import ReleaseMonitor
from utils.errors import ConfigError
from utils.logger import setup_logging, configure_from_settings

logger = logging.getLogger('main')


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='GitHub Release Monitor - notify on new repository releases'
    )
    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='Path to the config file (default: $GITHUB_RELEASE_MONITOR_CONFIG or config.yml)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    return parser.parse_args(argv)


def install_signal_handlers(monitor: ReleaseMonitor) -> None:
    """Route SIGINT and SIGTERM to a graceful shutdown."""
    def handle_signal(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}")
        monitor.request_shutdown()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(level='DEBUG' if args.verbose else 'INFO')

    try:
        monitor = ReleaseMonitor(config_file=args.config)
    except ConfigError as e:
        logger.error(f"Error loading config: {e}")
        return 1

    configure_from_settings(monitor.settings, verbose=args.verbose)
    install_signal_handlers(monitor)
    monitor.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
