# ABOUTME: The `tabshelf edit` command for correcting an entry's band, album, song, or notes.
# ABOUTME: Replaces only the fields given on the command line.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from tabshelf.cli.options import db_option, open_catalog

console = Console()


@click.command("edit")
@click.argument("entry_id")
@db_option
@click.option("--band", default=None, help="New band name.")
@click.option("--album", default=None, help="New album name (empty string for none).")
@click.option("--song", default=None, help="New song title.")
@click.option("--notes", default=None, help="Free-text notes (empty string clears).")
def edit(
    entry_id: str,
    db_path: Path | None,
    band: str | None,
    album: str | None,
    song: str | None,
    notes: str | None,
) -> None:
    """Change metadata fields of ENTRY_ID."""
    patch: dict[str, str | None] = {}
    if band is not None:
        patch["band"] = band
    if album is not None:
        patch["album"] = album or None
    if song is not None:
        patch["song"] = song
    if notes is not None:
        patch["notes"] = notes or None

    if not patch:
        console.print("[yellow]Nothing to change.[/yellow]")
        return

    with open_catalog(db_path) as store:
        updated = store.update(entry_id, **patch)

    if updated is None:
        console.print(f"[red]Entry '{escape(entry_id)}' not found.[/red]")
        raise SystemExit(1)

    console.print(f"Updated [bold]{escape(updated.label)}[/bold]")
