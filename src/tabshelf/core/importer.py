# ABOUTME: Import pipeline for cataloging a Band/Album/Song folder tree.
# ABOUTME: Walks a directory reference, derives taxonomy from paths, and merges entries into the store.

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from tabshelf.db.catalog import CatalogStore
from tabshelf.fs.access import (
    DirEntry,
    FileAccessError,
    FileAccessProvider,
    PermissionDeniedError,
)
from tabshelf.fs.ref import FileRef
from tabshelf.library.grouping import natural_key
from tabshelf.library.types import UNKNOWN_BAND, CatalogEntry, derive_entry_id

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS: frozenset[str] = frozenset({".pdf"})


@dataclass(frozen=True)
class FoundFile:
    """A document discovered under the import root."""

    ref: FileRef
    segments: tuple[str, ...]  # path relative to the root, e.g. ("Band", "Album", "Song.pdf")


@dataclass
class ImportResult:
    """Summary of an import operation."""

    added: int = 0
    updated: int = 0
    errors: int = 0
    error_details: list[tuple[str, str]] = field(default_factory=list)

    @property
    def found(self) -> int:
        return self.added + self.updated + self.errors


@dataclass(frozen=True)
class Taxonomy:
    band: str
    song: str
    album: str | None = None


def _has_extension(name: str, extensions: frozenset[str]) -> bool:
    lowered = name.lower()
    return any(lowered.endswith(ext) for ext in extensions)


def _strip_extension(name: str) -> str:
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def walk_documents(
    files: FileAccessProvider,
    root: FileRef,
    *,
    extensions: frozenset[str] = DOCUMENT_EXTENSIONS,
    _parents: tuple[str, ...] = (),
) -> Iterator[FoundFile]:
    """Recursively yield document files under root with their relative path segments."""
    for child in files.iter_directory(root):
        if child.kind == "directory":
            yield from walk_documents(
                files, child.ref, extensions=extensions, _parents=(*_parents, child.name)
            )
        elif _has_extension(child.name, extensions):
            yield FoundFile(ref=child.ref, segments=(*_parents, child.name))


def parse_segments(segments: tuple[str, ...]) -> Taxonomy:
    """Derive band, album, and song from a path relative to the import root.

    The last three segments are read as Band/Album/Song. Two segments give
    Band/Song with no album. A lone file name gives only the song, filed
    under the "Unknown" band. Deeper paths ignore the leading directories.
    """
    if not segments:
        return Taxonomy(band=UNKNOWN_BAND, song=UNKNOWN_BAND)

    song = _strip_extension(segments[-1]) or UNKNOWN_BAND
    if len(segments) >= 3:
        return Taxonomy(band=segments[-3] or UNKNOWN_BAND, album=segments[-2] or None, song=song)
    if len(segments) == 2:
        return Taxonomy(band=segments[0] or UNKNOWN_BAND, song=song)
    return Taxonomy(band=UNKNOWN_BAND, song=song)


def build_entry(files: FileAccessProvider, found: FoundFile) -> CatalogEntry:
    """Stat a discovered file and build its catalog entry.

    Raises:
        StaleReferenceError: If the file vanished since it was listed.
    """
    info = files.stat(found.ref)
    taxonomy = parse_segments(found.segments)
    return CatalogEntry(
        id=derive_entry_id(info.name, info.last_modified),
        band=taxonomy.band,
        album=taxonomy.album,
        song=taxonomy.song,
        file_ref=found.ref,
        file_name=info.name,
        file_size=info.size,
        last_modified=info.last_modified,
    )


def import_folder(
    files: FileAccessProvider,
    root: FileRef,
    store: CatalogStore,
    *,
    extensions: frozenset[str] = DOCUMENT_EXTENSIONS,
) -> ImportResult:
    """Catalog every document under a folder.

    Read permission for the root is confirmed before anything else; the
    catalog is left untouched when it is denied. Files that fail to stat
    are recorded as errors and skipped. The rest are merged into the
    store in a single write.

    Args:
        files: Provider used to list and stat the tree.
        root: Directory reference chosen by the user.
        store: Catalog to merge into.
        extensions: Lower-case file extensions treated as documents.

    Returns:
        ImportResult with added, updated, and errored counts.

    Raises:
        PermissionDeniedError: If read permission for root is not granted.
    """
    if not files.request_permission(root):
        raise PermissionDeniedError(f"Read permission denied for {root}")

    result = ImportResult()
    entries: list[CatalogEntry] = []
    for found in walk_documents(files, root, extensions=extensions):
        try:
            entries.append(build_entry(files, found))
        except FileAccessError as exc:
            result.errors += 1
            result.error_details.append(("/".join(found.segments), str(exc)))

    if entries:
        merge = store.import_merge(entries)
        result.added = merge.added
        result.updated = merge.replaced

    logger.info(
        "Imported %s: %d added, %d updated, %d error(s)",
        root,
        result.added,
        result.updated,
        result.errors,
    )
    return result


def restore_last_folder(files: FileAccessProvider, store: CatalogStore) -> FileRef | None:
    """Return the remembered folder if read permission is still granted."""
    ref = store.last_folder()
    if ref is None:
        return None
    if not files.request_permission(ref):
        return None
    return ref


def list_folder_documents(
    files: FileAccessProvider,
    folder: FileRef,
    *,
    extensions: frozenset[str] = DOCUMENT_EXTENSIONS,
) -> list[DirEntry]:
    """List the documents directly inside a folder, in natural name order.

    Subdirectories are not descended into. Nothing is catalogued; this is
    the listing behind opening a loose file ad hoc.

    Raises:
        PermissionDeniedError: If read permission for the folder is not granted.
    """
    if not files.request_permission(folder):
        raise PermissionDeniedError(f"Read permission denied for {folder}")
    documents = [
        child
        for child in files.iter_directory(folder)
        if child.kind == "file" and _has_extension(child.name, extensions)
    ]
    return sorted(documents, key=lambda child: natural_key(child.name))
