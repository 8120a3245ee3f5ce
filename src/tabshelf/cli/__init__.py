# ABOUTME: CLI package for tabshelf, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from tabshelf.cli.commands import (
    browse_cmd,
    edit_cmd,
    folder_cmd,
    import_cmd,
    ls_cmd,
    rm_cmd,
    verify_cmd,
)


@click.group()
@click.version_option(package_name="tabshelf")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """tabshelf - browse a Band/Album/Song library of documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


cli.add_command(import_cmd.import_command)
cli.add_command(ls_cmd.ls)
cli.add_command(rm_cmd.rm)
cli.add_command(edit_cmd.edit)
cli.add_command(verify_cmd.verify)
cli.add_command(folder_cmd.folder)
cli.add_command(browse_cmd.browse)
