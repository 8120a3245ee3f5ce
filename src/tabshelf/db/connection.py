# ABOUTME: SQLite database connection management for the tabshelf store.
# ABOUTME: Opens or creates the database and brings its schema up to the latest version.

import sqlite3
from pathlib import Path

from tabshelf.db.schema import MIGRATIONS, SCHEMA_V1

DEFAULT_DB_PATH = Path.home() / ".tabshelf" / "library.db"


def schema_version(conn: sqlite3.Connection) -> int:
    """Return the newest applied schema version, or 0 for a fresh database."""
    has_table = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name='schema_version'"
    ).fetchone()
    if has_table is None:
        return 0
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def _upgrade(conn: sqlite3.Connection) -> None:
    if schema_version(conn) == 0:
        conn.executescript(SCHEMA_V1)

    for version, sql in MIGRATIONS:
        if version <= schema_version(conn):
            continue
        conn.executescript(sql)
        conn.execute("INSERT INTO schema_version (version) VALUES (?)", (version,))
        conn.commit()


def open_store(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the tabshelf database.

    Parent directories are created as needed. The connection uses WAL
    journaling and returns sqlite3.Row objects.

    Args:
        path: Path to the database file. Defaults to ~/.tabshelf/library.db.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    _upgrade(conn)
    return conn
