"""Data model for a relocation run - immutable except for the tally."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class TaskStep(Enum):
    """Where in the move-then-link protocol a task stopped."""
    CHECK = "check"
    MOVE = "move"
    LINK = "link"
    VERIFY = "verify"
    ROLLBACK = "rollback"


class OutcomeStatus(Enum):
    """Final state of a single task."""
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True, slots=True)
class RelocationRequest:
    """Resolved source and target roots for one run."""
    source_root: Path
    target_root: Path


@dataclass(frozen=True, slots=True)
class Candidate:
    """An immediate subdirectory found under the source root."""
    name: str
    full_path: Path


@dataclass(frozen=True, slots=True)
class DirectoryTask:
    """Relocation of one candidate directory."""
    name: str
    source_path: Path
    target_path: Path

    @classmethod
    def for_candidate(cls, candidate: Candidate, request: RelocationRequest) -> "DirectoryTask":
        return cls(
            name=candidate.name,
            source_path=request.source_root / candidate.name,
            target_path=request.target_root / candidate.name,
        )


@dataclass(frozen=True, slots=True)
class TaskOutcome:
    """Result of running one task through the engine."""
    task: DirectoryTask
    status: OutcomeStatus
    detail: str = ""
    step: Optional[TaskStep] = None
    critical: bool = False

    @property
    def is_error(self) -> bool:
        return self.status in (OutcomeStatus.FAILED, OutcomeStatus.ROLLED_BACK)

    @classmethod
    def success(cls, task: DirectoryTask) -> "TaskOutcome":
        return cls(task, OutcomeStatus.SUCCESS)

    @classmethod
    def skipped(cls, task: DirectoryTask, reason: str) -> "TaskOutcome":
        return cls(task, OutcomeStatus.SKIPPED, detail=reason, step=TaskStep.CHECK)

    @classmethod
    def failed(
        cls,
        task: DirectoryTask,
        step: TaskStep,
        error: str,
        critical: bool = False,
    ) -> "TaskOutcome":
        return cls(task, OutcomeStatus.FAILED, detail=error, step=step, critical=critical)

    @classmethod
    def rolled_back(cls, task: DirectoryTask, error: str) -> "TaskOutcome":
        return cls(task, OutcomeStatus.ROLLED_BACK, detail=error, step=TaskStep.LINK)


@dataclass
class RunSummary:
    """Running tally of task outcomes.

    Rolled-back tasks count as errors: the directory is back where it was,
    but the requested relocation did not happen.
    """
    success_count: int = 0
    skip_count: int = 0
    error_count: int = 0
    critical_count: int = 0
    nothing_to_do: bool = False

    def record(self, outcome: TaskOutcome) -> None:
        if outcome.status is OutcomeStatus.SUCCESS:
            self.success_count += 1
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.skip_count += 1
        else:
            self.error_count += 1
            if outcome.critical:
                self.critical_count += 1

    @property
    def total(self) -> int:
        return self.success_count + self.skip_count + self.error_count

    @property
    def exit_code(self) -> int:
        return 1 if self.error_count > 0 else 0
