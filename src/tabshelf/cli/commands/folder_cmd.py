# ABOUTME: The `tabshelf folder` command for the last authorized folder.
# ABOUTME: Shows or forgets the remembered folder, or opens its loose documents without cataloging them.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tabshelf.cli.options import db_option, open_catalog
from tabshelf.cli.surface import ConsoleSurface
from tabshelf.core.importer import list_folder_documents, restore_last_folder
from tabshelf.fs.access import DirEntry, FileAccessError, LocalFileAccess
from tabshelf.library.navigation import OPEN_FAILED_NOTICE, NavigationController

console = Console()

_PROMPT = "number, [q]uit"


@click.command("folder")
@db_option
@click.option("--forget", is_flag=True, default=False, help="Forget the remembered folder.")
@click.option(
    "--open",
    "open_documents",
    is_flag=True,
    default=False,
    help="List the folder's documents and open them one at a time, bypassing the catalog.",
)
@click.option(
    "--out",
    "mirror",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="With --open, write each opened document to this file for an external viewer.",
)
def folder(db_path: Path | None, forget: bool, open_documents: bool, mirror: Path | None) -> None:
    """Show, open, or forget the folder last imported from."""
    files = LocalFileAccess()
    with open_catalog(db_path) as store:
        if forget:
            store.forget_folder()
            console.print("Forgot the remembered folder.")
            return

        remembered = store.last_folder()
        restored = restore_last_folder(files, store)

    if remembered is None:
        console.print("[yellow]No folder remembered.[/yellow]")
        return
    if restored is None:
        console.print(f"[yellow]{escape(str(remembered))} is no longer readable.[/yellow]")
        return
    if not open_documents:
        console.print(escape(str(restored)), soft_wrap=True)
        return

    try:
        documents = list_folder_documents(files, restored)
    except FileAccessError as exc:
        console.print(f"[red]Cannot list folder:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    if not documents:
        console.print(f"[yellow]No documents in {escape(str(restored))}[/yellow]")
        return

    _open_loop(files, documents, ConsoleSurface(console, mirror))


def _open_loop(files: LocalFileAccess, documents: list[DirEntry], surface: ConsoleSurface) -> None:
    controller = NavigationController(files, surface, lambda: ())

    table = Table()
    table.add_column("#", style="dim", justify="right")
    table.add_column("File")
    for position, document in enumerate(documents, start=1):
        table.add_row(str(position), escape(document.name))
    console.print(table)

    while True:
        choice = click.prompt(_PROMPT, default="q", show_default=False).strip().lower()
        if choice in ("q", "quit"):
            break
        if not choice.isdigit():
            console.print(f"[dim]Unknown choice '{escape(choice)}'.[/dim]")
            continue
        if not 1 <= int(choice) <= len(documents):
            console.print(f"[dim]No document at position {choice}.[/dim]")
            continue

        document = documents[int(choice) - 1]
        try:
            content = asyncio.run(files.read(document.ref))
        except FileAccessError:
            surface.clear()
            surface.notify(OPEN_FAILED_NOTICE)
            continue
        controller.open_raw(content)
        console.print(f"[bold]{escape(document.name)}[/bold]")
