"""Main entry point for junction-mover CLI."""

import typer
from typing import Optional

from junction_mover.commands.move import move_command
from junction_mover.commands.status import status_command

app = typer.Typer(
    name="junction-mover",
    help="Relocate directories and leave junctions at their original paths",
    add_completion=True,
    no_args_is_help=True,
)

# Add subcommands
app.command(name="move", help="Move subdirectories to a new root and link the old paths")(move_command)
app.command(name="status", help="Show link support and relocation state")(status_command)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        is_eager=True,
    )
):
    """
    Junction Mover - relocate directory trees without breaking old paths.

    Every immediate subdirectory of a source folder is moved to a target
    folder and replaced by a junction, so programs that still use the old
    path keep working.

    Available commands:
    - move: Relocate every subdirectory of SOURCE into TARGET and link the old paths
    - status: Show the link mechanism, elevated rights and the state of a folder

    Use --install-completion to enable shell auto-completion.
    """
    if version:
        from junction_mover import __version__
        typer.echo(f"junction-mover version {__version__}")
        raise typer.Exit()

    # Show help if no command is provided
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
