# ABOUTME: The `tabshelf ls` command for listing the catalog.
# ABOUTME: Prints the Band/Album/Song tree, the flat navigation order, or a distinct-name index.

from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from tabshelf.cli.options import db_option, make_view, open_catalog, view_options
from tabshelf.db.catalog import CatalogStore
from tabshelf.library.grouping import linearize
from tabshelf.library.types import SINGLE_ALBUM

console = Console()

_INDEXES = ("bands", "albums", "songs")


def _index(store: CatalogStore, name: str, band: str | None) -> list[str]:
    if name == "bands":
        return store.bands()
    if name == "albums":
        return store.albums(band=band)
    return store.songs()


@click.command("ls")
@db_option
@view_options
@click.option("--flat", is_flag=True, default=False, help="Show the numbered navigation order.")
@click.option(
    "--index",
    "index_name",
    type=click.Choice(_INDEXES),
    default=None,
    help="List distinct band, album, or song names instead (albums honor --band).",
)
def ls(db_path: Path | None, flat: bool, index_name: str | None, criteria: dict[str, Any]) -> None:
    """List catalogued documents grouped by band and album."""
    with open_catalog(db_path) as store:
        if not len(store):
            console.print("[yellow]No documents in the library.[/yellow]")
            return
        if index_name is not None:
            names = _index(store, index_name, criteria["filters"].band)
            for name in names:
                console.print(escape(name), soft_wrap=True)
            console.print(f"\n[dim]{len(names)} {index_name}[/dim]")
            return
        groups = make_view(store, criteria).projection

    sequence = linearize(groups)
    if not sequence:
        console.print("[yellow]No documents match the current filters.[/yellow]")
        return

    if flat:
        table = Table()
        table.add_column("#", style="dim", justify="right")
        table.add_column("Band", style="bold")
        table.add_column("Album")
        table.add_column("Song")
        table.add_column("ID", style="dim")
        for position, entry in enumerate(sequence, start=1):
            table.add_row(
                str(position),
                escape(entry.band),
                escape(entry.album) if entry.album else f"[dim]{SINGLE_ALBUM}[/dim]",
                escape(entry.song),
                escape(entry.id),
            )
        console.print(table)
    else:
        tree = Tree("[bold]Library[/bold]")
        for band in groups:
            band_node = tree.add(f"[bold]{escape(band.band)}[/bold]")
            for album in band.albums:
                album_node = band_node.add(escape(album.album))
                for entry in album.entries:
                    album_node.add(f"{escape(entry.song)} [dim]({escape(entry.id)})[/dim]")
        console.print(tree)

    console.print(f"\n[dim]{len(sequence)} document(s)[/dim]")
