# ABOUTME: The `tabshelf import` command for cataloging a Band/Album/Song folder.
# ABOUTME: Checks read permission, walks the tree, and merges entries into the library DB.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from tabshelf.cli.options import db_option, open_catalog
from tabshelf.core.importer import import_folder
from tabshelf.fs.access import FileAccessError, LocalFileAccess, PermissionDeniedError
from tabshelf.fs.ref import ref_for_path

console = Console()


@click.command("import")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@db_option
@click.option(
    "--remember/--no-remember",
    default=True,
    help="Remember this folder as the last authorized folder.",
)
def import_command(directory: Path, db_path: Path | None, remember: bool) -> None:
    """Scan DIRECTORY (Band/Album/Song.pdf) and catalog every document."""
    files = LocalFileAccess()
    root = ref_for_path(directory)

    with open_catalog(db_path) as store:
        try:
            result = import_folder(files, root, store)
        except PermissionDeniedError as exc:
            console.print(f"[red]Permission denied:[/red] {escape(str(exc))}")
            raise SystemExit(1) from exc
        except FileAccessError as exc:
            console.print(f"[red]Import failed:[/red] {escape(str(exc))}")
            raise SystemExit(1) from exc

        if remember:
            store.remember_folder(root)

    if not result.found:
        console.print(f"[yellow]No documents found in {escape(str(directory))}[/yellow]")
        return

    console.print(f"Found [bold]{result.found}[/bold] document(s)\n")

    parts = []
    if result.added:
        parts.append(f"[green]{result.added} added[/green]")
    if result.updated:
        parts.append(f"[yellow]{result.updated} updated[/yellow]")
    if result.errors:
        parts.append(f"[red]{result.errors} error(s)[/red]")
    console.print(", ".join(parts))

    if result.error_details:
        console.print(f"\n[yellow]{result.errors} file(s) could not be read:[/yellow]")
        for name, msg in result.error_details:
            console.print(f"  [dim]{escape(name)}:[/dim] {escape(msg)}")
