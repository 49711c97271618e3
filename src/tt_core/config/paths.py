"""Path constants for tt-core.

Locations of the data directory and database file. The database path can be
overridden with the TT_DB_PATH environment variable or the --db CLI option.
"""

from pathlib import Path

DATA_DIR_NAME = "tt"
DB_FILENAME = "tt.db"
ENV_FILENAME = ".env"

# In-memory database, mostly useful for tests
MEMORY_DB = ":memory:"


def default_data_dir() -> Path:
    """Return the per-user data directory (XDG style)."""
    return Path.home() / ".local" / "share" / DATA_DIR_NAME


def default_db_path() -> Path:
    """Return the default database file path."""
    return default_data_dir() / DB_FILENAME
