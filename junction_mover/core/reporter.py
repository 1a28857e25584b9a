"""Outcome reporting: the Reporter protocol and its Rich console implementation."""
from __future__ import annotations

from abc import abstractmethod
from typing import Optional, Protocol

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models import DirectoryTask, OutcomeStatus, RelocationRequest, RunSummary, TaskOutcome


class Reporter(Protocol):
    """Receives outcome events from a run. Return values are ignored."""

    @abstractmethod
    def on_task_outcome(self, task: DirectoryTask, outcome: TaskOutcome) -> None:
        ...

    @abstractmethod
    def on_run_complete(self, summary: RunSummary) -> None:
        ...

    @abstractmethod
    def on_nothing_to_do(self, request: RelocationRequest) -> None:
        """Called instead of any task events when there are no candidates."""
        ...


class RichReporter:
    """Renders outcomes as timestamped, colored console lines."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(log_path=False)

    def on_task_outcome(self, task: DirectoryTask, outcome: TaskOutcome) -> None:
        if outcome.status is OutcomeStatus.SUCCESS:
            self.console.log(f"[green]✓[/green] Relocated: {task.name} → {task.target_path}")
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.console.log(f"[yellow]↷[/yellow] Skipped: {task.name} ({outcome.detail})")
        elif outcome.status is OutcomeStatus.ROLLED_BACK:
            self.console.log(
                f"[red]✗[/red] Link failed for {task.name}, rolled back: {outcome.detail}"
            )
        elif outcome.critical:
            self.console.log(f"[bold red]✗ CRITICAL[/bold red] {task.name} needs manual attention")
            self.console.print(self._critical_panel(task, outcome))
        else:
            step = outcome.step.value if outcome.step else "unknown"
            self.console.log(f"[red]✗[/red] Failed ({step}): {task.name} - {outcome.detail}")

    def _critical_panel(self, task: DirectoryTask, outcome: TaskOutcome) -> Panel:
        step = outcome.step.value if outcome.step else "unknown"
        return Panel(
            f"[bold red]{task.name}[/bold red] failed at step [bold]{step}[/bold]\n"
            f"{outcome.detail}\n\n"
            f"[dim]Original path: {task.source_path}[/dim]\n"
            f"[dim]Target path:   {task.target_path}[/dim]\n"
            "[yellow]Check both paths and restore the directory by hand.[/yellow]",
            title="Manual intervention required",
            border_style="red",
            box=box.DOUBLE,
        )

    def on_nothing_to_do(self, request: RelocationRequest) -> None:
        self.console.log(
            f"[yellow]Nothing to process: no subdirectories in {request.source_root}[/yellow]"
        )

    def on_run_complete(self, summary: RunSummary) -> None:
        if summary.nothing_to_do:
            return

        table = Table(title="Relocation Summary", box=box.ROUNDED)
        table.add_column("Result", style="cyan")
        table.add_column("Count", justify="right")
        table.add_row("Relocated", f"[green]{summary.success_count}[/green]")
        table.add_row("Skipped", f"[yellow]{summary.skip_count}[/yellow]")
        table.add_row("Errors", f"[red]{summary.error_count}[/red]")
        if summary.critical_count:
            table.add_row("Critical", f"[bold red]{summary.critical_count}[/bold red]")
        self.console.print(table)

        if summary.critical_count:
            self.console.print(Panel(
                f"[bold red]{summary.critical_count} directory(ies) left in an inconsistent state[/bold red]\n"
                "[dim]See the messages above for the affected paths.[/dim]",
                border_style="red",
                box=box.DOUBLE,
            ))
        elif summary.error_count:
            self.console.print(Panel(
                f"[yellow]⚠️  Completed with {summary.error_count} error(s)[/yellow]\n"
                "[dim]Check the messages above for details.[/dim]",
                border_style="yellow",
                box=box.DOUBLE,
            ))
        else:
            self.console.print(Panel(
                "[bold green]✨ Relocation complete[/bold green]",
                border_style="green",
                box=box.DOUBLE,
            ))
