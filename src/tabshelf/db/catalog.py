# ABOUTME: Catalog store: the authoritative, deduplicated set of catalog entries.
# ABOUTME: Load, merge, update, and remove entries, persisting the whole set on every change.

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, fields, replace
from typing import Any

from tabshelf.db.kvstore import KeyValueStore
from tabshelf.db.mapping import MalformedRecordError, entry_to_record, record_to_entry
from tabshelf.fs.ref import FileRef
from tabshelf.library.types import CatalogEntry, normalize_entry

logger = logging.getLogger(__name__)

CATALOG_KEY = "catalog_v1"
LAST_FOLDER_KEY = "last_folder"

_PATCHABLE_FIELDS = frozenset(f.name for f in fields(CatalogEntry)) - {"id"}


@dataclass
class MergeResult:
    """Summary of an import merge."""

    added: int = 0
    replaced: int = 0


class CatalogStore:
    """Keeps the catalog in memory and in a KeyValueStore, always in step.

    Every mutation builds the next snapshot, writes it under CATALOG_KEY,
    and only then makes it current. If the write raises, the in-memory
    catalog is left untouched.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._entries: dict[str, CatalogEntry] = {}

    # --- Reading ---

    def load(self) -> list[CatalogEntry]:
        """Read the full catalog from storage.

        A missing record yields an empty catalog. A record that is not
        valid JSON or lacks an ``items`` list is logged and treated as
        absent; so is any individual item that fails to parse.

        Returns:
            The loaded entries, in stored order.
        """
        self._entries = self._read()
        return list(self._entries.values())

    def _read(self) -> dict[str, CatalogEntry]:
        raw = self._kv.get(CATALOG_KEY)
        if raw is None:
            return {}

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring malformed catalog record: %s", exc)
            return {}

        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            logger.warning("Ignoring catalog record without an items list")
            return {}

        entries: dict[str, CatalogEntry] = {}
        for position, item in enumerate(items):
            try:
                entry = record_to_entry(item)
            except MalformedRecordError as exc:
                logger.warning("Skipping malformed catalog item #%d: %s", position, exc)
                continue
            entries[entry.id] = entry
        return entries

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        """Snapshot of the current catalog."""
        return tuple(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def get(self, entry_id: str) -> CatalogEntry | None:
        """Retrieve an entry by id."""
        return self._entries.get(entry_id)

    # --- Mutating ---

    def _commit(self, entries: dict[str, CatalogEntry]) -> None:
        payload = {"items": [entry_to_record(entry) for entry in entries.values()]}
        self._kv.set(CATALOG_KEY, json.dumps(payload))
        self._entries = entries

    def import_merge(self, new_entries: Iterable[CatalogEntry]) -> MergeResult:
        """Merge entries into the catalog keyed by id.

        An incoming entry overwrites any existing entry with the same id.
        A re-imported file whose modification time changed has a new id,
        so it is added beside the old entry rather than replacing it.

        Returns:
            MergeResult counting added and replaced entries.
        """
        result = MergeResult()
        merged = dict(self._entries)
        for entry in new_entries:
            entry = normalize_entry(entry)
            if entry.id in merged:
                result.replaced += 1
            else:
                result.added += 1
            merged[entry.id] = entry

        self._commit(merged)
        logger.info("Merged catalog: %d added, %d replaced", result.added, result.replaced)
        return result

    def update(self, entry_id: str, **patch: Any) -> CatalogEntry | None:
        """Replace named fields of an entry.

        Unknown ids are a no-op. Blank band or song values are normalized
        the same way as on import.

        Returns:
            The updated entry, or None if entry_id is not in the catalog.

        Raises:
            ValueError: If the patch names an unknown field or tries to change id.
        """
        unknown = set(patch) - _PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot patch field(s): {', '.join(sorted(unknown))}")

        current = self._entries.get(entry_id)
        if current is None:
            logger.debug("Update for unknown entry %s ignored", entry_id)
            return None

        if isinstance(patch.get("file_ref"), str):
            patch["file_ref"] = FileRef(patch["file_ref"])

        updated = normalize_entry(replace(current, **patch))
        merged = dict(self._entries)
        merged[entry_id] = updated
        self._commit(merged)
        return updated

    def remove(self, entry_id: str) -> bool:
        """Delete an entry from the catalog. The backing document is untouched.

        Returns:
            True if an entry was removed, False if entry_id was unknown.
        """
        if entry_id not in self._entries:
            return False
        remaining = {key: entry for key, entry in self._entries.items() if key != entry_id}
        self._commit(remaining)
        return True

    # --- Indexes for filter pickers ---

    def bands(self) -> list[str]:
        """Distinct band names, sorted."""
        return sorted({entry.band for entry in self._entries.values()})

    def albums(self, band: str | None = None) -> list[str]:
        """Distinct album names, optionally limited to one band. Loose songs are excluded."""
        return sorted(
            {
                entry.album
                for entry in self._entries.values()
                if entry.album and (band is None or entry.band == band)
            }
        )

    def songs(self) -> list[str]:
        """Distinct song titles, sorted."""
        return sorted({entry.song for entry in self._entries.values()})

    # --- Last authorized folder ---

    def remember_folder(self, ref: FileRef) -> None:
        """Persist the folder the user last granted access to."""
        self._kv.set(LAST_FOLDER_KEY, json.dumps({"ref": ref.token}))

    def last_folder(self) -> FileRef | None:
        """The remembered folder, or None if absent or unreadable."""
        raw = self._kv.get(LAST_FOLDER_KEY)
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring malformed last-folder record: %s", exc)
            return None
        token = payload.get("ref") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            logger.warning("Ignoring last-folder record without a reference")
            return None
        return FileRef(token)

    def forget_folder(self) -> None:
        self._kv.delete(LAST_FOLDER_KEY)
