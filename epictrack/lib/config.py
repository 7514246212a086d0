"""
Configuration loader for epictrack.

Loads settings from an optional tracker.env file in the working directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from . import envparse
from .constants import CONFIG_FILENAME, DEFAULT_DB_PATH, DEFAULT_LOG_FILE, DEFAULT_LOG_LEVEL

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class TrackerConfig:
    """Tracker configuration from tracker.env"""
    db_path: Path  # JSON snapshot file
    log_file: Path  # Log output (kept off the terminal UI)
    log_level: str


def _resolve(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def load_tracker_config(base_dir: Path) -> TrackerConfig:
    """Load tracker.env from base_dir and return TrackerConfig.

    A missing file means all defaults. Relative paths resolve against base_dir.

    Raises:
        ValueError: If the file has invalid syntax
    """
    config_path = base_dir / CONFIG_FILENAME
    env = envparse.load_env(config_path) if config_path.exists() else {}

    log_level = env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in VALID_LOG_LEVELS:
        logger.warning(
            f"Unknown LOG_LEVEL '{log_level}' in {config_path}, "
            f"using {DEFAULT_LOG_LEVEL}. Valid levels: {', '.join(VALID_LOG_LEVELS)}"
        )
        log_level = DEFAULT_LOG_LEVEL

    return TrackerConfig(
        db_path=_resolve(base_dir, env.get("DB_PATH") or DEFAULT_DB_PATH),
        log_file=_resolve(base_dir, env.get("LOG_FILE") or DEFAULT_LOG_FILE),
        log_level=log_level,
    )
