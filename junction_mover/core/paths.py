"""Path resolution and root validation."""

import os
from pathlib import Path
from typing import Union

from .errors import PreconditionError
from .models import RelocationRequest


def to_absolute(path: Union[str, Path]) -> Path:
    """Resolve ``path`` against the current directory, expanding ``~``."""
    return Path(os.path.abspath(os.path.expanduser(str(path))))


def ensure_directory_exists(path: Path) -> Path:
    """Create ``path`` (and parents) if needed and return it."""
    if os.path.exists(path) and not os.path.isdir(path):
        raise PreconditionError(f"Target exists but is not a directory: {path}")
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise PreconditionError(f"Cannot create target directory {path}: {e}") from e
    return path


def _is_within(child: Path, parent: Path) -> bool:
    try:
        child.relative_to(parent)
        return True
    except ValueError:
        return False


def validate_roots(source: Path, target: Path) -> None:
    """Reject a missing source and equal or nested roots.

    Compared on resolved paths, so a target reached through a link into the
    source is caught too.
    """
    if not os.path.exists(source):
        raise PreconditionError(f"Source directory does not exist: {source}")
    if not os.path.isdir(source):
        raise PreconditionError(f"Source must be a directory, not a file: {source}")

    real_source = source.resolve()
    real_target = target.resolve()

    if real_source == real_target:
        raise PreconditionError("Source and target are the same directory")
    if _is_within(real_target, real_source):
        raise PreconditionError(f"Target cannot be inside the source directory: {target}")
    if _is_within(real_source, real_target):
        raise PreconditionError(f"Source cannot be inside the target directory: {source}")


def resolve_request(source: Union[str, Path], target: Union[str, Path]) -> RelocationRequest:
    """Turn user input into a validated request, creating the target root.

    Nothing is created unless every check on the source passes.
    """
    source_root = to_absolute(source)
    target_root = to_absolute(target)
    validate_roots(source_root, target_root)
    ensure_directory_exists(target_root)
    return RelocationRequest(source_root=source_root, target_root=target_root)
