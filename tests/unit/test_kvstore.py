# ABOUTME: Unit tests for the key-value stores and database connection management.
# ABOUTME: Validates schema creation, WAL mode, upserts, and persistence across connections.

from pathlib import Path

import pytest

from tabshelf.db.connection import DEFAULT_DB_PATH, open_store, schema_version
from tabshelf.db.kvstore import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "test_library.db"


class TestOpenStore:
    """Tests for open_store() connection factory."""

    def test_creates_database_file(self, db_path: Path) -> None:
        conn = open_store(db_path)
        conn.close()
        assert db_path.exists()

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        nested = tmp_path / "deep" / "nested" / "library.db"
        conn = open_store(nested)
        conn.close()
        assert nested.exists()

    def test_creates_kv_table(self, db_path: Path) -> None:
        conn = open_store(db_path)
        columns = {row[1] for row in conn.execute("PRAGMA table_info(kv)").fetchall()}
        conn.close()
        assert columns == {"key", "value", "updated_at"}

    def test_wal_mode(self, db_path: Path) -> None:
        conn = open_store(db_path)
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        conn.close()
        assert mode == "wal"

    def test_reopen_keeps_single_schema_version(self, db_path: Path) -> None:
        open_store(db_path).close()
        conn = open_store(db_path)
        count = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
        conn.close()
        assert count == 1

    def test_fresh_database_is_version_one(self, db_path: Path) -> None:
        conn = open_store(db_path)
        assert schema_version(conn) == 1
        conn.close()

    def test_pending_migrations_run_once(self, db_path: Path, monkeypatch) -> None:
        open_store(db_path).close()
        monkeypatch.setattr(
            "tabshelf.db.connection.MIGRATIONS",
            [(2, "CREATE TABLE extra (id INTEGER PRIMARY KEY);")],
        )

        open_store(db_path).close()
        conn = open_store(db_path)

        assert schema_version(conn) == 2
        assert conn.execute("SELECT COUNT(*) FROM extra").fetchone()[0] == 0
        conn.close()

    def test_default_path(self) -> None:
        assert DEFAULT_DB_PATH == Path.home() / ".tabshelf" / "library.db"


class TestSqliteKeyValueStore:
    """Tests for SqliteKeyValueStore."""

    def test_get_missing(self, db_path: Path) -> None:
        conn = open_store(db_path)
        assert SqliteKeyValueStore(conn).get("nope") is None
        conn.close()

    def test_set_then_get(self, db_path: Path) -> None:
        conn = open_store(db_path)
        kv = SqliteKeyValueStore(conn)
        kv.set("k", "v1")
        kv.set("k", "v2")
        assert kv.get("k") == "v2"
        assert conn.execute("SELECT COUNT(*) FROM kv").fetchone()[0] == 1
        conn.close()

    def test_delete(self, db_path: Path) -> None:
        conn = open_store(db_path)
        kv = SqliteKeyValueStore(conn)
        kv.set("k", "v")
        kv.delete("k")
        kv.delete("k")
        assert kv.get("k") is None
        conn.close()

    def test_value_survives_reopen(self, db_path: Path) -> None:
        conn = open_store(db_path)
        SqliteKeyValueStore(conn).set("catalog", '{"items": []}')
        conn.close()

        conn = open_store(db_path)
        assert SqliteKeyValueStore(conn).get("catalog") == '{"items": []}'
        conn.close()


class TestProtocol:
    """Both stores satisfy the KeyValueStore protocol."""

    def test_memory_store(self) -> None:
        assert isinstance(MemoryKeyValueStore(), KeyValueStore)

    def test_sqlite_store(self, db_path: Path) -> None:
        conn = open_store(db_path)
        assert isinstance(SqliteKeyValueStore(conn), KeyValueStore)
        conn.close()

    def test_memory_store_copies_initial(self) -> None:
        initial = {"a": "1"}
        kv = MemoryKeyValueStore(initial)
        kv.set("b", "2")
        assert initial == {"a": "1"}
        assert kv.get("a") == "1"
        assert kv.get("b") == "2"
