"""SQLite file holding the widget's saved preferences."""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

# Bumped whenever the preferences table changes; stored in PRAGMA user_version
SCHEMA_VERSION = 1

PREFERENCES_DDL = """
CREATE TABLE IF NOT EXISTS preferences (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


def open_db(db_path: str | Path) -> sqlite3.Connection:
    """Open the settings database, creating the file and table on first use."""
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    ensure_schema(conn)
    return conn


def ensure_schema(conn: sqlite3.Connection) -> bool:
    """Create the preferences table if this file predates it.

    Returns True when the schema was (re)created, False when already current.
    """
    version = conn.execute("PRAGMA user_version").fetchone()[0]
    if version >= SCHEMA_VERSION:
        return False
    conn.execute(PREFERENCES_DDL)
    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
    conn.commit()
    logger.info("Initialized settings schema v%d", SCHEMA_VERSION)
    return True
