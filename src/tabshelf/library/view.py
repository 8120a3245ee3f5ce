# ABOUTME: LibraryView holds the user's filter and sort criteria over a catalog.
# ABOUTME: Recomputes the grouped projection and linearized sequence from the current snapshot.

from collections.abc import Callable, Sequence
from dataclasses import replace

from tabshelf.library.grouping import build_projection, linearize
from tabshelf.library.types import CatalogEntry, Filters, GroupedBand, SortKey

EntrySource = Callable[[], Sequence[CatalogEntry]]


class LibraryView:
    """User-selected criteria plus the derived views of a catalog snapshot.

    The projection and the sequence are never cached: each access reads the
    current entries from `source`, so they always reflect the latest
    catalog, filters, sort key, and direction.
    """

    def __init__(
        self,
        source: EntrySource,
        *,
        filters: Filters | None = None,
        sort_key: SortKey = SortKey.BAND,
        ascending: bool = True,
    ) -> None:
        self._source = source
        self.filters = filters or Filters()
        self.sort_key = sort_key
        self.ascending = ascending

    def set_filters(
        self,
        *,
        band: str | None = None,
        album: str | None = None,
        query: str | None = None,
    ) -> None:
        """Replace all filters at once. Empty strings clear a filter."""
        self.filters = Filters(band=band or None, album=album or None, query=query or None)

    def set_band(self, band: str | None) -> None:
        """Filter by band. Changing the band always clears the album filter."""
        self.filters = replace(self.filters, band=band or None, album=None)

    def set_album(self, album: str | None) -> None:
        self.filters = replace(self.filters, album=album or None)

    def set_query(self, query: str | None) -> None:
        self.filters = replace(self.filters, query=query or None)

    def set_sort(self, sort_key: SortKey, ascending: bool | None = None) -> None:
        self.sort_key = sort_key
        if ascending is not None:
            self.ascending = ascending

    def toggle_direction(self) -> None:
        self.ascending = not self.ascending

    @property
    def projection(self) -> list[GroupedBand]:
        """Filtered, grouped, and ordered view of the current catalog."""
        return build_projection(self._source(), self.filters, self.sort_key, self.ascending)

    @property
    def sequence(self) -> list[CatalogEntry]:
        """The flat navigation sequence, in visible order."""
        return linearize(self.projection)
