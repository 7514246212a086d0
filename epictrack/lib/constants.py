"""Shared constants for epictrack."""

# Config file looked up in the working directory
CONFIG_FILENAME = "tracker.env"
DEFAULT_DB_PATH = "data/db.json"
DEFAULT_LOG_FILE = "data/epictrack.log"
DEFAULT_LOG_LEVEL = "INFO"

# Page table column widths
ID_COLUMN_WIDTH = 11
NAME_COLUMN_WIDTH = 32
DESCRIPTION_COLUMN_WIDTH = 32
STATUS_COLUMN_WIDTH = 17
