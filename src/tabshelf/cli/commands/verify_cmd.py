# ABOUTME: The `tabshelf verify` command for checking catalog integrity.
# ABOUTME: Reports entries whose file is gone or changed since import.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tabshelf.cli.options import db_option, open_catalog
from tabshelf.core.verifier import verify_catalog
from tabshelf.fs.access import LocalFileAccess

console = Console()


@click.command("verify")
@db_option
def verify(db_path: Path | None) -> None:
    """Verify catalog integrity: check for moved, deleted, or changed files."""
    with open_catalog(db_path) as store:
        result = verify_catalog(store, LocalFileAccess())

    if result.total_issues > 0:
        table = Table()
        table.add_column("ID", style="dim")
        table.add_column("Entry", style="bold")
        table.add_column("Issue", style="red")

        for entry in result.missing:
            table.add_row(escape(entry.id), escape(entry.label), "Missing file")

        for entry in result.outdated:
            table.add_row(escape(entry.id), escape(entry.label), "Changed since import")

        console.print(table)

    if result.missing:
        console.print(
            f"\n[red]{result.total_issues} issue(s) found, {result.ok} document(s) verified.[/red]"
        )
        raise SystemExit(1)

    if result.outdated:
        console.print(
            f"\n[yellow]{len(result.outdated)} changed, {result.ok} document(s) verified.[/yellow]"
        )
        return

    console.print(f"[green]All {result.ok} document(s) verified.[/green]")
