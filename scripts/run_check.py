#!/usr/bin/env python3
"""
CLI script to run a single release check manually.

Usage:
    python run_check.py                      # Check all repositories once
    python run_check.py --config my.yml      # Use another config file
    python run_check.py --list               # List monitored repositories and channels
    python run_check.py --dry-run            # Check without notifying or saving
    python run_check.py --json               # Print the results as JSON
"""

import argparse
import json
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.monitor import ReleaseMonitor
from utils.errors import ConfigError
from utils.logger import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='GitHub Release Monitor - one-off release check'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Config file path (default: $GITHUB_RELEASE_MONITOR_CONFIG or config.yml)'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List monitored repositories and notification channels'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Do not send notifications or write the config file'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the check results as JSON instead of a summary'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    return parser.parse_args(argv)


def print_listing(monitor):
    print("\nMonitored Repositories:")
    print("-" * 50)
    for entry in monitor.state.repositories:
        print(f"  {entry.identifier:40} {entry.last_seen_tag or '(none yet)'}")
    print("\nNotification Channels:")
    print("-" * 50)
    for channel in monitor.state.notifications:
        print(f"  {channel.redacted()}")


def print_summary(results):
    print("\nResults Summary:")
    print("-" * 70)
    counts = {'updated': 0, 'unchanged': 0, 'skipped': 0, 'error': 0}
    for result in results:
        counts[result.status] += 1
        tag = f" -> {result.current_tag}" if result.changed else ""
        print(f"  [{result.status.upper():10}] {result.identifier}{tag}")
        if result.error:
            print(f"               {result.error}")
        for failure in result.notification_errors:
            print(f"               {failure}")

    print(
        f"\nSummary: {counts['updated']} updated, {counts['unchanged']} unchanged, "
        f"{counts['skipped']} skipped, {counts['error']} errors"
    )


def main(argv=None):
    args = parse_args(argv)

    log_level = 'DEBUG' if args.verbose else 'WARNING'
    setup_logging(level=log_level)

    try:
        monitor = ReleaseMonitor(config_file=args.config, dry_run=args.dry_run)
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    try:
        if args.list:
            print_listing(monitor)
            return 0

        if not args.json:
            if args.dry_run:
                print("Dry run: notifications and config writes are DISABLED")
            print("\nChecking all repositories...")

        results = monitor.run_check()
    finally:
        monitor.client.close()

    if args.json:
        print(json.dumps([result.to_dict() for result in results], indent=2))
    else:
        print_summary(results)
    return 0


if __name__ == '__main__':
    sys.exit(main())
