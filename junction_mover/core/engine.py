"""Relocation engine: move a directory, link its old path, verify, roll back on failure."""
from __future__ import annotations

import os
from typing import Callable, List, Optional, Tuple

from .errors import PartialMoveError, TaskStepError
from .interrupts import InterruptFlag, defer_interrupts
from .links import create_directory_junction, move_directory, resolves_to
from .models import (
    DirectoryTask,
    RelocationRequest,
    RunSummary,
    TaskOutcome,
    TaskStep,
)
from .reporter import Reporter
from .scanner import list_immediate_subdirectories


class RelocationEngine:
    """Applies the move-then-link protocol to one task at a time.

    Tasks share no state, so every call to :meth:`relocate` is independent.
    The move and link primitives are injectable for testing.
    """

    def __init__(
        self,
        mover: Optional[Callable] = None,
        linker: Optional[Callable] = None,
    ):
        self.mover = mover or move_directory
        self.linker = linker or create_directory_junction

    def relocate(self, task: DirectoryTask) -> TaskOutcome:
        """Run one task to a final outcome. Only OSErrors become outcomes."""
        if os.path.lexists(task.target_path):
            return TaskOutcome.skipped(task, "target already exists")

        try:
            self._execute_move(task)
        except TaskStepError as e:
            # A half-finished cross-device move leaves data split across both paths
            partial = isinstance(e.cause, PartialMoveError)
            return TaskOutcome.failed(task, e.step, str(e.cause), critical=partial)

        try:
            self._execute_link(task)
        except TaskStepError as link_error:
            return self._rollback(task, link_error)

        if not resolves_to(task.source_path, task.target_path):
            # Content is safe at the target; leave the broken link for a human
            return TaskOutcome.failed(
                task,
                TaskStep.VERIFY,
                f"link at {task.source_path} does not resolve to {task.target_path}; "
                f"content is at {task.target_path}",
                critical=True,
            )

        return TaskOutcome.success(task)

    def _execute_move(self, task: DirectoryTask) -> None:
        try:
            self.mover(task.source_path, task.target_path)
        except (OSError, PartialMoveError) as e:
            raise TaskStepError(TaskStep.MOVE, e) from e

    def _execute_link(self, task: DirectoryTask) -> None:
        try:
            self.linker(task.source_path, task.target_path)
        except OSError as e:
            raise TaskStepError(TaskStep.LINK, e) from e

    def _rollback(self, task: DirectoryTask, link_error: TaskStepError) -> TaskOutcome:
        """Move the directory back after a failed link."""
        stranded = (
            f"link creation failed ({link_error.cause}) and rollback failed; "
            f"content is only at {task.target_path}"
        )

        if os.path.lexists(task.source_path) or not os.path.exists(task.target_path):
            return TaskOutcome.failed(
                task,
                TaskStep.ROLLBACK,
                f"{stranded}: cannot restore, original path is occupied or target is missing",
                critical=True,
            )

        try:
            self.mover(task.target_path, task.source_path)
        except OSError as e:
            return TaskOutcome.failed(task, TaskStep.ROLLBACK, f"{stranded}: {e}", critical=True)

        return TaskOutcome.rolled_back(task, str(link_error.cause))


def tasks_for(request: RelocationRequest, lister: Callable = list_immediate_subdirectories) -> List[DirectoryTask]:
    """Derive one task per candidate, in scan order."""
    return [DirectoryTask.for_candidate(c, request) for c in lister(request.source_root)]


def plan_relocation(
    request: RelocationRequest,
    lister: Callable = list_immediate_subdirectories,
) -> List[Tuple[DirectoryTask, str]]:
    """Preview what a run would do without touching the filesystem."""
    plan = []
    for task in tasks_for(request, lister):
        action = "skip" if os.path.lexists(task.target_path) else "move"
        plan.append((task, action))
    return plan


def run_relocation(
    request: RelocationRequest,
    reporter: Reporter,
    engine: Optional[RelocationEngine] = None,
    lister: Callable = list_immediate_subdirectories,
) -> RunSummary:
    """Relocate every candidate under the source root, sequentially.

    Task failures never stop the run. Ctrl+C is honored between tasks: the
    summary so far is reported, then KeyboardInterrupt is raised.
    """
    engine = engine or RelocationEngine()
    summary = RunSummary()

    tasks = tasks_for(request, lister)
    if not tasks:
        summary.nothing_to_do = True
        reporter.on_nothing_to_do(request)
        reporter.on_run_complete(summary)
        return summary

    flag = InterruptFlag()
    for index, task in enumerate(tasks):
        with defer_interrupts(flag):
            outcome = engine.relocate(task)
        summary.record(outcome)
        reporter.on_task_outcome(task, outcome)

        # Nothing left to cancel after the last task
        if flag.requested and index < len(tasks) - 1:
            reporter.on_run_complete(summary)
            raise KeyboardInterrupt()

    reporter.on_run_complete(summary)
    return summary
