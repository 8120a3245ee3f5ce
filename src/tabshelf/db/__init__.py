# ABOUTME: Public API for the tabshelf storage layer.
# ABOUTME: Exports connection management, key-value stores, and the catalog store.

from tabshelf.db.catalog import CatalogStore, MergeResult
from tabshelf.db.connection import DEFAULT_DB_PATH, open_store
from tabshelf.db.kvstore import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore

__all__ = [
    "DEFAULT_DB_PATH",
    "CatalogStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "MergeResult",
    "SqliteKeyValueStore",
    "open_store",
]
