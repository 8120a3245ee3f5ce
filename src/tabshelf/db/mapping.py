# ABOUTME: Converts between CatalogEntry dataclasses and their persisted JSON records.
# ABOUTME: Validates shape on the way in so malformed records can be skipped, not crashed on.

from typing import Any

from tabshelf.fs.ref import FileRef
from tabshelf.library.types import CatalogEntry


class MalformedRecordError(ValueError):
    """Raised when a persisted record does not have the expected shape."""


def entry_to_record(entry: CatalogEntry) -> dict[str, Any]:
    """Convert a CatalogEntry to a JSON-serializable dict.

    Optional fields (album, notes) are omitted when absent, so an entry
    without an album round-trips with album still absent.
    """
    record: dict[str, Any] = {
        "id": entry.id,
        "band": entry.band,
        "song": entry.song,
        "fileRef": entry.file_ref.token,
        "fileName": entry.file_name,
        "fileSize": entry.file_size,
        "lastModified": entry.last_modified,
    }
    if entry.album is not None:
        record["album"] = entry.album
    if entry.notes is not None:
        record["notes"] = entry.notes
    return record


def _require(record: dict[str, Any], key: str, kind: type) -> Any:
    value = record.get(key)
    # bool is an int subclass; never accept it for numeric fields
    if not isinstance(value, kind) or isinstance(value, bool):
        raise MalformedRecordError(f"Field {key!r} missing or not {kind.__name__}: {value!r}")
    return value


def _optional_str(record: dict[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedRecordError(f"Field {key!r} is not a string: {value!r}")
    return value


def record_to_entry(record: Any) -> CatalogEntry:
    """Convert a persisted dict back to a CatalogEntry.

    Raises:
        MalformedRecordError: If a required field is missing or mistyped.
    """
    if not isinstance(record, dict):
        raise MalformedRecordError(f"Expected an object, got {type(record).__name__}")

    band = _require(record, "band", str)
    song = _require(record, "song", str)
    if not band or not song:
        raise MalformedRecordError("Fields 'band' and 'song' must not be empty")

    return CatalogEntry(
        id=_require(record, "id", str),
        band=band,
        album=_optional_str(record, "album"),
        song=song,
        notes=_optional_str(record, "notes"),
        file_ref=FileRef(_require(record, "fileRef", str)),
        file_name=_require(record, "fileName", str),
        file_size=_require(record, "fileSize", int),
        last_modified=_require(record, "lastModified", int),
    )
