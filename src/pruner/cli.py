"""Command line interface for pruner."""

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pruner import __version__
from pruner.branches import Branch
from pruner.errors import PruneError
from pruner.git import GitRepo
from pruner.interactive import Pruner
from pruner.log import setup_logging
from pruner.terminal import Terminal

app = typer.Typer(help="Interactively prune local git branches")
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"pruner {__version__}")
        raise typer.Exit()


def create_summary_table(deleted: list[Branch]) -> Table:
    """Create a table of deleted branches and how to get them back."""
    table = Table(
        title=f"Deleted {len(deleted)} branch(es)",
        show_header=True,
        header_style="bold",
        title_style="bold green",
        show_edge=True,
    )
    table.add_column("Branch", style="cyan", no_wrap=True)
    table.add_column("Restore with", style="yellow", no_wrap=True)
    for branch in deleted:
        table.add_row(escape(branch.name), escape(branch.restore_command))
    return table


@app.command()
def prune(
    path: Annotated[
        Optional[Path],
        typer.Option(help="Path to git repository (default: discovered from GIT_DIR or the current directory)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Walk local branches oldest first and keep, delete or undo each one."""
    setup_logging("DEBUG" if verbose else "WARNING")
    terminal = Terminal(sys.stdin.buffer, sys.stdout)

    try:
        pruner = Pruner(GitRepo(path), terminal)
        with terminal.raw_mode():
            pruner.run()
    except PruneError as err:
        err_console.print(f"[red]Error:[/red] {escape(str(err))}", soft_wrap=True)
        raise typer.Exit(code=1) from err

    if pruner.deleted:
        console.print()  # Add a blank line
        console.print(create_summary_table(pruner.deleted))


if __name__ == "__main__":
    app()
