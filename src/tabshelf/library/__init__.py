# ABOUTME: Library package: catalog data model, grouped views, and navigation.
# ABOUTME: Exports the types and functions that turn a catalog into a browsable sequence.

from tabshelf.fs.ref import FileRef
from tabshelf.library.grouping import build_projection, filter_entries, group_and_sort, linearize
from tabshelf.library.navigation import NavigationController, NavState
from tabshelf.library.types import (
    CatalogEntry,
    Filters,
    GroupedAlbum,
    GroupedBand,
    SortKey,
)
from tabshelf.library.view import LibraryView

__all__ = [
    "CatalogEntry",
    "FileRef",
    "Filters",
    "GroupedAlbum",
    "GroupedBand",
    "LibraryView",
    "NavState",
    "NavigationController",
    "SortKey",
    "build_projection",
    "filter_entries",
    "group_and_sort",
    "linearize",
]
