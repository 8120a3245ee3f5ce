# ABOUTME: The `tabshelf rm` command for removing an entry from the catalog.
# ABOUTME: Only the catalog record is deleted; the document on disk is left alone.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from tabshelf.cli.options import db_option, open_catalog

console = Console()


@click.command("rm")
@click.argument("entry_id")
@db_option
def rm(entry_id: str, db_path: Path | None) -> None:
    """Remove ENTRY_ID from the catalog (the file itself is kept)."""
    with open_catalog(db_path) as store:
        entry = store.get(entry_id)
        if entry is None or not store.remove(entry_id):
            console.print(f"[red]Entry '{escape(entry_id)}' not found.[/red]")
            raise SystemExit(1)

    console.print(f"Removed [bold]{escape(entry.label)}[/bold]")
