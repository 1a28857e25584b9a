"""Show link support, privileges and the state of a source directory."""

import os
import platform
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.columns import Columns
from rich import box

from junction_mover.core.links import is_link, link_mechanism, read_link_target
from junction_mover.core.paths import to_absolute
from junction_mover.core.privileges import has_elevated_rights

console = Console()


def describe_entry(path: Path) -> tuple[str, str]:
    """Classify a directory entry as (state, detail) for display."""
    if is_link(path):
        destination = read_link_target(path)
        if os.path.isdir(path):
            return "[green]linked[/green]", str(destination)
        return "[red]broken link[/red]", str(destination)
    if os.path.isdir(path):
        return "[cyan]directory[/cyan]", ""
    return "[dim]file[/dim]", ""


def status_command(
    source: Optional[str] = typer.Argument(
        None,
        help="Optional source directory to inspect"
    ),
):
    """Display platform link support and, optionally, which entries are already relocated."""

    console.print(Panel.fit(
        "[bold blue]Junction Mover Status[/bold blue]",
        border_style="bright_blue"
    ))

    sys_table = Table(title="System Information", box=box.ROUNDED)
    sys_table.add_column("Property", style="cyan", no_wrap=True)
    sys_table.add_column("Value", style="green")

    sys_table.add_row("Platform", platform.system())
    sys_table.add_row("Python Version", platform.python_version())
    sys_table.add_row("User", os.environ.get("USER", os.environ.get("USERNAME", "Unknown")))

    link_table = Table(title="Link Support", box=box.ROUNDED)
    link_table.add_column("Property", style="cyan", no_wrap=True)
    link_table.add_column("Value", style="yellow")

    elevated = has_elevated_rights()
    link_table.add_row("Link Type", link_mechanism())
    link_table.add_row("Elevated Rights", "[green]yes[/green]" if elevated else "[red]no[/red]")

    console.print(Columns([sys_table, link_table], padding=1))

    if source is None:
        return

    root = to_absolute(source)
    if not os.path.isdir(root):
        console.print(f"[red]Error: Not a directory: {root}[/red]")
        raise typer.Exit(1)

    entries_table = Table(title=str(root), box=box.ROUNDED)
    entries_table.add_column("Name")
    entries_table.add_column("State")
    entries_table.add_column("Points To", overflow="fold")

    for name in sorted(os.listdir(root)):
        state, detail = describe_entry(root / name)
        entries_table.add_row(name, state, detail)

    console.print(entries_table)
