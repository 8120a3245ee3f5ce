# ABOUTME: Shared Click options and helpers for tabshelf CLI commands.
# ABOUTME: Provides --db, the filter/sort options, and a context manager for the loaded catalog.

import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click

from tabshelf.db.catalog import CatalogStore
from tabshelf.db.connection import DEFAULT_DB_PATH, open_store
from tabshelf.db.kvstore import SqliteKeyValueStore
from tabshelf.library.types import Filters, SortKey
from tabshelf.library.view import LibraryView

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="TABSHELF_DB",
    help=f"Path to library database (default: {DEFAULT_DB_PATH}, env: TABSHELF_DB)",
)


def view_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --band/--album/--query/--sort/--asc|--desc and pass a `criteria` dict."""

    @click.option("--band", default=None, help="Only show this band.")
    @click.option("--album", default=None, help="Only show this album.")
    @click.option("-q", "--query", default=None, help="Case-insensitive search across band, album, and song.")
    @click.option(
        "--sort",
        "sort_key",
        type=click.Choice([key.value for key in SortKey]),
        default=SortKey.BAND.value,
        show_default=True,
        help="Field to order by.",
    )
    @click.option("--asc/--desc", "ascending", default=True, help="Sort direction for every level.")
    @functools.wraps(func)
    def wrapper(
        *args: Any,
        band: str | None,
        album: str | None,
        query: str | None,
        sort_key: str,
        ascending: bool,
        **kwargs: Any,
    ) -> Any:
        kwargs["criteria"] = {
            "filters": Filters(band=band or None, album=album or None, query=query or None),
            "sort_key": SortKey(sort_key),
            "ascending": ascending,
        }
        return func(*args, **kwargs)

    return wrapper


def make_view(store: CatalogStore, criteria: dict[str, Any]) -> LibraryView:
    """Build a LibraryView over a store from parsed view options."""
    return LibraryView(lambda: store.entries, **criteria)


@contextmanager
def open_catalog(db_path: Path | None) -> Iterator[CatalogStore]:
    """Open the database, load the catalog, and close the connection afterwards."""
    conn = open_store(db_path or DEFAULT_DB_PATH)
    try:
        store = CatalogStore(SqliteKeyValueStore(conn))
        store.load()
        yield store
    finally:
        conn.close()
