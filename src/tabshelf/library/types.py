# ABOUTME: Core data structures for the Band/Album/Song document catalog.
# ABOUTME: CatalogEntry is the record that flows through import, storage, grouping, and navigation.

from dataclasses import dataclass, replace
from enum import Enum

from tabshelf.fs.ref import FileRef

UNKNOWN_BAND = "Unknown"
SINGLE_ALBUM = "Single"


def derive_entry_id(file_name: str, last_modified: int) -> str:
    """Build the stable catalog id for a file.

    The same unchanged file always yields the same id; a file whose
    modification time changed yields a new one.
    """
    return f"{file_name}:{last_modified}"


@dataclass(frozen=True)
class CatalogEntry:
    """One catalogued document: its taxonomy, provenance, and reference.

    Entries are immutable. Changes go through whole-record replacement in
    the catalog store. `album` stays None for loose songs even though they
    are grouped under the "Single" pseudo-album.
    """

    id: str
    band: str
    song: str
    file_ref: FileRef
    file_name: str
    file_size: int
    last_modified: int
    album: str | None = None
    notes: str | None = None

    @property
    def album_group(self) -> str:
        """The album key used for grouping: the album or "Single"."""
        return self.album if self.album is not None else SINGLE_ALBUM

    @property
    def label(self) -> str:
        """Display label: 'Band - Album - Song'."""
        return f"{self.band} - {self.album_group} - {self.song}"


@dataclass(frozen=True)
class Filters:
    """User filter criteria. Every field that is set must match."""

    band: str | None = None
    album: str | None = None
    query: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.band or self.album or self.query)


class SortKey(str, Enum):
    """Field the grouped projection is ordered by."""

    BAND = "band"
    ALBUM = "album"
    SONG = "song"
    LAST_MODIFIED = "lastModified"


@dataclass(frozen=True)
class GroupedAlbum:
    """Songs of one album within a band, already ordered."""

    album: str
    latest_modified: int
    entries: tuple[CatalogEntry, ...]


@dataclass(frozen=True)
class GroupedBand:
    """Albums of one band, already ordered."""

    band: str
    latest_modified: int
    albums: tuple[GroupedAlbum, ...]

    @property
    def entry_count(self) -> int:
        return sum(len(album.entries) for album in self.albums)


def normalize_entry(entry: CatalogEntry) -> CatalogEntry:
    """Enforce the taxonomy invariants on an entry.

    Blank bands become "Unknown", blank songs fall back to the file stem,
    and a blank album is treated as no album. Surrounding whitespace is
    stripped from all three.
    """
    band = entry.band.strip() or UNKNOWN_BAND
    song = entry.song.strip() or entry.file_name.rsplit(".", 1)[0].strip() or UNKNOWN_BAND
    album = entry.album.strip() if entry.album else None
    return replace(entry, band=band, song=song, album=album or None)
