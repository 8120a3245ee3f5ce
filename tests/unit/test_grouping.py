# ABOUTME: Unit tests for the filter, group, sort, and linearize functions.
# ABOUTME: Covers natural ordering, rollups, direction symmetry, and the Metallica scenario.

import pytest

from tabshelf.library.grouping import (
    build_projection,
    filter_entries,
    group_and_sort,
    index_of,
    linearize,
    matches,
    natural_key,
)
from tabshelf.library.types import CatalogEntry, Filters, SortKey


def _songs(entries: list[CatalogEntry]) -> list[str]:
    return [entry.song for entry in entries]


class TestNaturalKey:
    """natural_key orders strings case-insensitively with numeric runs as numbers."""

    def test_numbers_compare_numerically(self) -> None:
        names = ["Track 10", "Track 2", "Track 1"]
        assert sorted(names, key=natural_key) == ["Track 1", "Track 2", "Track 10"]

    def test_case_insensitive(self) -> None:
        assert sorted(["beta", "Alpha", "gamma"], key=natural_key) == ["Alpha", "beta", "gamma"]

    def test_accents_sort_with_base_letter(self) -> None:
        names = ["Zebra", "Émile", "Eagle"]
        assert sorted(names, key=natural_key) == ["Eagle", "Émile", "Zebra"]

    def test_digits_before_letters(self) -> None:
        assert sorted(["abc", "10 Years"], key=natural_key) == ["10 Years", "abc"]

    def test_case_variants_are_not_equal(self) -> None:
        """The original text breaks ties so ordering stays total."""
        assert natural_key("abc") != natural_key("ABC")


class TestFilters:
    """matches() and filter_entries() apply every set filter conjunctively."""

    def test_empty_filters_match_everything(self, metallica) -> None:
        assert filter_entries(metallica, Filters()) == metallica

    def test_band_filter_exact(self, make_entry) -> None:
        entry = make_entry(band="Metallica")
        assert matches(entry, Filters(band="Metallica"))
        assert not matches(entry, Filters(band="metallica"))

    def test_album_filter_excludes_loose_songs(self, make_entry) -> None:
        loose = make_entry(album=None, song="Orion")
        assert not matches(loose, Filters(album="Single"))

    def test_query_is_case_insensitive_across_fields(self, make_entry) -> None:
        entry = make_entry(band="Metallica", album="Master of Puppets", song="Battery")
        assert matches(entry, Filters(query="PUPPETS"))
        assert matches(entry, Filters(query="metallica master"))
        assert matches(entry, Filters(query="batt"))
        assert not matches(entry, Filters(query="lightning"))

    def test_filters_are_conjunctive(self, metallica) -> None:
        result = filter_entries(
            metallica, Filters(band="Metallica", album="Ride the Lightning", query="fade")
        )
        assert _songs(result) == ["Fade to Black"]

    def test_preserves_input_order(self, metallica) -> None:
        result = filter_entries(metallica, Filters(album="Ride the Lightning"))
        assert _songs(result) == ["For Whom the Bell Tolls", "Fade to Black"]


class TestGroupAndSort:
    """group_and_sort builds the three-level projection."""

    def test_metallica_song_sort_scenario(self, metallica) -> None:
        """Albums stay grouped; songs are ordered within each album."""
        groups = group_and_sort(metallica, SortKey.SONG, ascending=True)
        assert _songs(linearize(groups)) == [
            "Battery",
            "Fade to Black",
            "For Whom the Bell Tolls",
        ]

    def test_loose_songs_grouped_as_single(self, make_entry) -> None:
        loose = make_entry(album=None, song="Orion")
        groups = group_and_sort([loose])
        assert groups[0].albums[0].album == "Single"
        assert groups[0].albums[0].entries[0].album is None

    def test_latest_modified_rollup(self, metallica) -> None:
        groups = group_and_sort(metallica)
        band = groups[0]
        assert band.latest_modified == 3_000
        by_album = {album.album: album.latest_modified for album in band.albums}
        assert by_album == {"Master of Puppets": 2_000, "Ride the Lightning": 3_000}

    def test_band_sort_descending(self, make_entry) -> None:
        entries = [make_entry(band=name, song=name) for name in ["Abba", "Ghost", "Toto"]]
        groups = group_and_sort(entries, SortKey.BAND, ascending=False)
        assert [band.band for band in groups] == ["Toto", "Ghost", "Abba"]

    def test_band_order_defaults_to_name_for_song_key(self, make_entry) -> None:
        entries = [make_entry(band=name, song="x" + name) for name in ["Toto", "Abba"]]
        groups = group_and_sort(entries, SortKey.SONG)
        assert [band.band for band in groups] == ["Abba", "Toto"]

    def test_album_sort_is_numeric_aware(self, make_entry) -> None:
        entries = [
            make_entry(album="Vol 10", song="a"),
            make_entry(album="Vol 2", song="b"),
        ]
        groups = group_and_sort(entries, SortKey.ALBUM)
        assert [album.album for album in groups[0].albums] == ["Vol 2", "Vol 10"]

    def test_last_modified_orders_groups_by_rollup(self, make_entry) -> None:
        entries = [
            make_entry(band="Old", song="a", last_modified=100),
            make_entry(band="New", song="b", last_modified=900),
            make_entry(band="Old", song="c", last_modified=200),
        ]
        groups = group_and_sort(entries, SortKey.LAST_MODIFIED, ascending=False)
        assert [band.band for band in groups] == ["New", "Old"]
        assert _songs(linearize(groups)) == ["b", "c", "a"]

    def test_last_modified_orders_songs_by_own_time(self, metallica) -> None:
        groups = group_and_sort(metallica, SortKey.LAST_MODIFIED, ascending=True)
        ride = next(album for album in groups[0].albums if album.album == "Ride the Lightning")
        assert _songs(list(ride.entries)) == ["Fade to Black", "For Whom the Bell Tolls"]

    def test_empty_input(self) -> None:
        assert group_and_sort([]) == []
        assert linearize([]) == []

    def test_deterministic(self, metallica) -> None:
        first = group_and_sort(metallica, SortKey.ALBUM, ascending=False)
        second = group_and_sort(list(reversed(metallica)), SortKey.ALBUM, ascending=False)
        assert linearize(first) == linearize(second)


@pytest.fixture
def mixed(make_entry) -> list[CatalogEntry]:
    """Entries with no ties on any sort key."""
    return [
        make_entry(band="Metallica", album="Master of Puppets", song="Battery", last_modified=5),
        make_entry(band="Metallica", album="Ride the Lightning", song="Fade to Black", last_modified=1),
        make_entry(band="Metallica", album=None, song="Orion", last_modified=7),
        make_entry(band="Abba", album="Arrival", song="Dancing Queen", last_modified=3),
        make_entry(band="Abba", album="Arrival", song="Knowing Me", last_modified=9),
        make_entry(band="Ghost", album="Meliora", song="Cirice", last_modified=4),
    ]


class TestProjectionProperties:
    """Properties that must hold for any entry set."""

    def test_grouping_totality(self, mixed) -> None:
        groups = group_and_sort(mixed)
        placed = [entry.id for band in groups for album in band.albums for entry in album.entries]
        assert sorted(placed) == sorted(entry.id for entry in mixed)
        assert sum(band.entry_count for band in groups) == len(mixed)

    @pytest.mark.parametrize("sort_key", list(SortKey))
    def test_direction_symmetry(self, mixed, sort_key: SortKey) -> None:
        ascending = linearize(group_and_sort(mixed, sort_key, ascending=True))
        descending = linearize(group_and_sort(mixed, sort_key, ascending=False))
        assert descending == list(reversed(ascending))

    @pytest.mark.parametrize(
        "filters",
        [Filters(band="Metallica"), Filters(query="a"), Filters(album="Arrival"), Filters(query="zzz")],
    )
    def test_filter_monotonicity(self, mixed, filters: Filters) -> None:
        full = linearize(build_projection(mixed, None, SortKey.SONG))
        narrowed = linearize(build_projection(mixed, filters, SortKey.SONG))
        positions = [full.index(entry) for entry in narrowed]
        assert positions == sorted(positions)
        assert len(narrowed) == len(filter_entries(mixed, filters))


class TestIndexOf:
    """index_of finds an entry by id in a sequence."""

    def test_found(self, metallica) -> None:
        assert index_of(metallica, metallica[2].id) == 2

    def test_missing_or_none(self, metallica) -> None:
        assert index_of(metallica, "nope") == -1
        assert index_of(metallica, None) == -1
