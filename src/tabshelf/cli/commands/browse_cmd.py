# ABOUTME: The `tabshelf browse` command for stepping through documents in visible order.
# ABOUTME: Drives the navigation controller with next/previous/jump prompts.

import asyncio
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from tabshelf.cli.options import db_option, make_view, open_catalog, view_options
from tabshelf.cli.surface import ConsoleSurface
from tabshelf.fs.access import LocalFileAccess
from tabshelf.library.navigation import NavigationController

console = Console()

_PROMPT = "[n]ext, [p]rev, number, [q]uit"


@click.command("browse")
@db_option
@view_options
@click.option("--start", "start_id", default=None, help="Entry ID to open first.")
@click.option(
    "--out",
    "mirror",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write each opened document to this file for an external viewer.",
)
def browse(
    db_path: Path | None,
    start_id: str | None,
    mirror: Path | None,
    criteria: dict[str, Any],
) -> None:
    """Open documents one by one in the same order `ls` shows them."""
    with open_catalog(db_path) as store:
        view = make_view(store, criteria)
        sequence = view.sequence
        if not sequence:
            console.print("[yellow]No documents match the current filters.[/yellow]")
            return

        start = sequence[0]
        if start_id is not None:
            start = store.get(start_id)
            if start is None:
                console.print(f"[red]Entry '{escape(start_id)}' not found.[/red]")
                raise SystemExit(1)

        controller = NavigationController(
            LocalFileAccess(),
            ConsoleSurface(console, mirror),
            lambda: view.sequence,
        )
        asyncio.run(controller.open_entry(start))

        while True:
            total = len(view.sequence)
            position = controller.index
            where = f"{position + 1}/{total}" if position >= 0 else f"-/{total}"
            console.print(f"[bold]{where}[/bold] {escape(controller.current_label)}")

            choice = click.prompt(_PROMPT, default="q", show_default=False).strip().lower()
            if choice in ("q", "quit"):
                break
            if choice in ("n", "next"):
                if controller.can_go_next:
                    asyncio.run(controller.go_next())
                else:
                    console.print("[dim]Already at the last document.[/dim]")
            elif choice in ("p", "prev"):
                if controller.can_go_previous:
                    asyncio.run(controller.go_previous())
                else:
                    console.print("[dim]Already at the first document.[/dim]")
            elif choice.isdigit() and 1 <= int(choice) <= total:
                asyncio.run(controller.go_to(int(choice) - 1))
            elif choice.isdigit():
                console.print(f"[dim]No document at position {choice}.[/dim]")
            else:
                console.print(f"[dim]Unknown choice '{escape(choice)}'.[/dim]")
