"""Tests for opening the settings database."""

import sqlite3
from pathlib import Path

from timeweather.storage.database import SCHEMA_VERSION, ensure_schema, open_db


class TestDatabase:
    def test_open_creates_parent_dirs(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "settings.db"
        conn = open_db(db_path)
        conn.close()
        assert db_path.exists()

    def test_wal_mode(self, tmp_path: Path):
        conn = open_db(tmp_path / "test.db")
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode == "wal"
        conn.close()

    def test_creates_preferences_only(self, tmp_db: sqlite3.Connection):
        tables = {
            r[0]
            for r in tmp_db.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
        assert tables == {"preferences"}
        assert tmp_db.execute("PRAGMA user_version").fetchone()[0] == SCHEMA_VERSION

    def test_ensure_schema_idempotent(self, tmp_db: sqlite3.Connection):
        assert ensure_schema(tmp_db) is False

    def test_reopen_keeps_rows(self, tmp_path: Path):
        db_path = tmp_path / "test.db"
        conn = open_db(db_path)
        conn.execute("INSERT INTO preferences (key, value) VALUES ('tw_city', 'nyc')")
        conn.commit()
        conn.close()

        conn = open_db(db_path)
        row = conn.execute("SELECT value FROM preferences WHERE key = 'tw_city'").fetchone()
        conn.close()
        assert row[0] == "nyc"

    def test_in_memory(self):
        conn = open_db(":memory:")
        assert ensure_schema(conn) is False
        conn.close()
