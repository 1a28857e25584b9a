"""Relocate the subdirectories of a folder and leave junctions behind."""

import os
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from junction_mover.core.engine import plan_relocation, run_relocation
from junction_mover.core.errors import PreconditionError
from junction_mover.core.links import link_mechanism
from junction_mover.core.paths import resolve_request, to_absolute
from junction_mover.core.privileges import has_elevated_rights, relaunch_elevated
from junction_mover.core.reporter import RichReporter

console = Console(log_path=False)


def bind_arguments(
    positionals: List[Optional[str]],
    source_opt: Optional[str],
    target_opt: Optional[str],
) -> Tuple[str, str]:
    """Bind named options first, then hand leftover positionals to the unbound ones in order.

    ``--source S T`` and ``--target T S`` both mean source S, target T.
    """
    remaining = [p for p in positionals if p is not None]
    bound = {}
    for label, named in (("SOURCE", source_opt), ("TARGET", target_opt)):
        if named is not None:
            bound[label] = named
        elif remaining:
            bound[label] = remaining.pop(0)
        else:
            bound[label] = None

    if remaining:
        raise typer.BadParameter(f"Unexpected extra argument: {remaining[0]}")

    for label, value in bound.items():
        if value is None or not value.strip():
            raise typer.BadParameter(f"{label} directory is required and cannot be empty", param_hint=label)
    return bound["SOURCE"], bound["TARGET"]


def elevated_argv(source: str, target: str, dry_run: bool, force: bool) -> List[str]:
    """Arguments for the elevated child, with paths made absolute here."""
    argv = ["move", "--source", str(to_absolute(source)), "--target", str(to_absolute(target)), "--no-elevate"]
    if dry_run:
        argv.append("--dry-run")
    if force:
        argv.append("--force")
    return argv


def show_plan(plan: list) -> None:
    table = Table(title="Relocation Plan", box=box.ROUNDED)
    table.add_column("Directory", style="cyan")
    table.add_column("Action")
    table.add_column("Target", style="green", overflow="fold")

    for task, action in plan:
        if action == "skip":
            table.add_row(task.name, "[yellow]Skip (target exists)[/yellow]", str(task.target_path))
        else:
            table.add_row(task.name, f"Move + {link_mechanism()}", str(task.target_path))

    console.print(table)


def move_command(
    source: Optional[str] = typer.Argument(
        None,
        help="Directory whose immediate subdirectories will be relocated"
    ),
    target: Optional[str] = typer.Argument(
        None,
        help="Directory that will receive them (created if missing)"
    ),
    source_opt: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Source directory, by name; positionals then fill the remaining parameter"
    ),
    target_opt: Optional[str] = typer.Option(
        None,
        "--target",
        "-t",
        help="Target directory, by name; positionals then fill the remaining parameter"
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Preview changes without making them"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompts"
    ),
    no_elevate: bool = typer.Option(
        False,
        "--no-elevate",
        help="Fail instead of re-launching with elevated rights"
    ),
):
    """
    Move every subdirectory of SOURCE into TARGET and link the old paths.

    Each directory is moved as a unit and a junction (a directory symlink on
    non-Windows systems) is left at its original location. Directories that
    already exist under TARGET are skipped, so the command can be re-run.

    Examples:
        # Move all game folders to another drive
        junction-mover move C:\\Games D:\\Games

        # Same, with named arguments
        junction-mover move --target D:\\Games --source C:\\Games

        # Preview only
        junction-mover move --dry-run ~/Projects /mnt/data/Projects
    """
    source_value, target_value = bind_arguments([source, target], source_opt, target_opt)

    if not has_elevated_rights():
        if no_elevate:
            console.print("[red]Error: Elevated rights are required to create junctions[/red]")
            raise typer.Exit(1)
        console.print("[yellow]Elevated rights required, re-launching...[/yellow]")
        if relaunch_elevated(elevated_argv(source_value, target_value, dry_run, force), os.getcwd()):
            raise typer.Exit(0)
        console.print("[red]Error: Could not obtain elevated rights[/red]")
        raise typer.Exit(1)

    try:
        request = resolve_request(source_value, target_value)
    except PreconditionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[cyan]Source:[/cyan] {request.source_root}")
    console.print(f"[cyan]Target:[/cyan] {request.target_root}")

    if dry_run or not force:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Scanning directories...", total=None)
            plan = plan_relocation(request)

        if not plan:
            console.print("[yellow]Nothing to process: source has no subdirectories[/yellow]")
            raise typer.Exit(0)

        show_plan(plan)

        if dry_run:
            console.print(Panel(
                "[cyan]Dry run completed. No changes were made.[/cyan]",
                border_style="cyan",
                box=box.DOUBLE
            ))
            raise typer.Exit(0)

        if not typer.confirm("\nProceed with relocation?"):
            console.print("[yellow]Operation cancelled[/yellow]")
            raise typer.Exit(0)

    reporter = RichReporter(console)
    try:
        summary = run_relocation(request, reporter)
    except KeyboardInterrupt:
        console.print("[yellow]⚠️  Interrupted. Remaining directories were not processed.[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        raise typer.Exit(1)

    raise typer.Exit(summary.exit_code)
