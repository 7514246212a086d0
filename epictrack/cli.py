#!/usr/bin/env python3
"""epictrack CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from epictrack.lib.config import TrackerConfig, load_tracker_config
from epictrack.lib.errors import StoreError
from epictrack.pm.repository import Repository
from epictrack.pm.store import JsonFileStore
from epictrack.ui.app import run_app

logger = logging.getLogger(__name__)


def setup_logging(config: TrackerConfig) -> None:
    """Send log records to the log file so they never draw over the UI."""
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=config.log_file,
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    parser = argparse.ArgumentParser(
        prog='epictrack',
        description='Track epics and their stories from the terminal',
    )
    parser.parse_args()

    try:
        config = load_tracker_config(Path.cwd())
    except ValueError as e:
        print(f"ERROR: Invalid config: {e}", file=sys.stderr)
        return 2

    try:
        setup_logging(config)
    except OSError as e:
        print(f"ERROR: Cannot open log file {config.log_file}: {e}", file=sys.stderr)
        return 2

    store = JsonFileStore(config.db_path)
    try:
        store.initialize()
    except StoreError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    logger.info(f"Starting with snapshot {config.db_path}")
    return run_app(Repository(store))


if __name__ == '__main__':
    sys.exit(main())
