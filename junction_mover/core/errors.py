class JunctionMoverError(Exception):
    """Base error for the project."""


class PreconditionError(JunctionMoverError):
    """Raised when a run cannot start at all (bad roots, uncreatable target)."""


class TaskStepError(JunctionMoverError):
    """A single relocation step failed; carries the step and underlying cause."""

    def __init__(self, step, cause: BaseException):
        self.step = step
        self.cause = cause
        super().__init__(f"{step.value} failed: {cause}")


class PartialMoveError(JunctionMoverError):
    """A cross-device move copied everything but could not remove the source."""

    def __init__(self, source, target, cause: BaseException):
        self.source = source
        self.target = target
        self.cause = cause
        super().__init__(
            f"content complete at {target}, but {source} was only partially removed: {cause}"
        )
