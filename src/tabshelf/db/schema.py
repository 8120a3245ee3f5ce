# ABOUTME: SQL DDL statements for the tabshelf key-value store.
# ABOUTME: Defines the kv table, schema versioning, and sequential migrations.

SCHEMA_V1 = """
-- Single-table key-value store; values are JSON text
CREATE TABLE kv (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# (version, sql) pairs; open_store runs each one newer than the database and records it
MIGRATIONS: list[tuple[int, str]] = []
