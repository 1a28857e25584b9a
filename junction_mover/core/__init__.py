"""Relocation engine, data model and filesystem collaborators."""
from .engine import RelocationEngine, plan_relocation, run_relocation
from .errors import JunctionMoverError, PreconditionError
from .models import (
    Candidate,
    DirectoryTask,
    OutcomeStatus,
    RelocationRequest,
    RunSummary,
    TaskOutcome,
    TaskStep,
)
from .reporter import Reporter, RichReporter

__all__ = [
    # Engine
    "RelocationEngine",
    "plan_relocation",
    "run_relocation",
    # Errors
    "JunctionMoverError",
    "PreconditionError",
    # Models
    "Candidate",
    "DirectoryTask",
    "OutcomeStatus",
    "RelocationRequest",
    "RunSummary",
    "TaskOutcome",
    "TaskStep",
    # Reporting
    "Reporter",
    "RichReporter",
]
