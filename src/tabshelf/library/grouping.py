# ABOUTME: Filter, group, sort, and linearize catalog entries into the Band/Album/Song view.
# ABOUTME: Pure functions: identical inputs always give the identical projection and sequence.

import re
import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from tabshelf.library.types import (
    UNKNOWN_BAND,
    CatalogEntry,
    Filters,
    GroupedAlbum,
    GroupedBand,
    SortKey,
)

_DIGITS_RE = re.compile(r"(\d+)")


def natural_key(text: str) -> tuple:
    """Sort key for locale-friendly, numeric-aware string ordering.

    Accents and case are folded so "Émile" sorts beside "emile", and runs
    of digits compare as numbers so "Track 2" comes before "Track 10".
    The original text is the final tiebreaker to keep ordering total.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    # re.split with a capture group alternates text, digits, text, ...
    parts = tuple(
        int(chunk) if index % 2 else chunk
        for index, chunk in enumerate(_DIGITS_RE.split(folded))
    )
    return (parts, text)


def _search_text(entry: CatalogEntry) -> str:
    return f"{entry.band} {entry.album or ''} {entry.song}".casefold()


def matches(entry: CatalogEntry, filters: Filters) -> bool:
    """Check whether an entry satisfies every filter that is set."""
    if filters.band and entry.band != filters.band:
        return False
    if filters.album and entry.album != filters.album:
        return False
    if filters.query and filters.query.casefold() not in _search_text(entry):
        return False
    return True


def filter_entries(entries: Iterable[CatalogEntry], filters: Filters) -> list[CatalogEntry]:
    """Return the entries matching filters, preserving input order."""
    return [entry for entry in entries if matches(entry, filters)]


@dataclass
class _AlbumBucket:
    entries: list[CatalogEntry] = field(default_factory=list)
    latest_modified: int = 0


@dataclass
class _BandBucket:
    albums: dict[str, _AlbumBucket] = field(default_factory=dict)
    latest_modified: int = 0


def _bucket(entries: Iterable[CatalogEntry]) -> dict[str, _BandBucket]:
    """Partition entries by band then album, rolling up latest_modified."""
    bands: dict[str, _BandBucket] = {}
    for entry in entries:
        band = bands.setdefault(entry.band or UNKNOWN_BAND, _BandBucket())
        album = band.albums.setdefault(entry.album_group, _AlbumBucket())
        album.entries.append(entry)
        album.latest_modified = max(album.latest_modified, entry.last_modified)
        band.latest_modified = max(band.latest_modified, album.latest_modified)
    return bands


def group_and_sort(
    entries: Iterable[CatalogEntry],
    sort_key: SortKey = SortKey.BAND,
    ascending: bool = True,
) -> list[GroupedBand]:
    """Build the Band -> Album -> Song projection in display order.

    Bands are ordered by name, or by their newest member when sorting by
    last modified. Albums follow the same rule within their band, keyed on
    the album name only when sorting by album. Songs within an album are
    ordered by title, or by their own modification time when sorting by
    last modified. The direction flag applies to all three levels at once.

    Args:
        entries: Entries to group (normally already filtered).
        sort_key: Which field drives the ordering.
        ascending: False reverses every level.

    Returns:
        Ordered list of GroupedBand.
    """
    reverse = not ascending
    by_recency = sort_key is SortKey.LAST_MODIFIED
    buckets = _bucket(entries)

    def band_order(name: str) -> tuple:
        if by_recency:
            return (buckets[name].latest_modified, natural_key(name))
        return natural_key(name)

    grouped: list[GroupedBand] = []
    for band_name in sorted(buckets, key=band_order, reverse=reverse):
        band = buckets[band_name]

        def album_order(name: str, band: _BandBucket = band) -> tuple:
            if by_recency:
                return (band.albums[name].latest_modified, natural_key(name))
            return natural_key(name)

        albums = []
        for album_name in sorted(band.albums, key=album_order, reverse=reverse):
            bucket = band.albums[album_name]
            albums.append(
                GroupedAlbum(
                    album=album_name,
                    latest_modified=bucket.latest_modified,
                    entries=tuple(sorted(bucket.entries, key=_song_order(sort_key), reverse=reverse)),
                )
            )

        grouped.append(
            GroupedBand(
                band=band_name,
                latest_modified=band.latest_modified,
                albums=tuple(albums),
            )
        )
    return grouped


def _song_order(sort_key: SortKey):
    if sort_key is SortKey.LAST_MODIFIED:
        return lambda entry: (entry.last_modified, natural_key(entry.song), entry.id)
    return lambda entry: (natural_key(entry.song), entry.id)


def linearize(groups: Iterable[GroupedBand]) -> list[CatalogEntry]:
    """Flatten the projection into the exact top-to-bottom visible sequence."""
    return [
        entry
        for band in groups
        for album in band.albums
        for entry in album.entries
    ]


def build_projection(
    entries: Iterable[CatalogEntry],
    filters: Filters | None = None,
    sort_key: SortKey = SortKey.BAND,
    ascending: bool = True,
) -> list[GroupedBand]:
    """Filter entries, then group and sort the survivors."""
    selected = filter_entries(entries, filters) if filters else list(entries)
    return group_and_sort(selected, sort_key, ascending)


def index_of(sequence: Sequence[CatalogEntry], entry_id: str | None) -> int:
    """Position of entry_id in sequence, or -1 when absent."""
    if entry_id is None:
        return -1
    for position, entry in enumerate(sequence):
        if entry.id == entry_id:
            return position
    return -1
