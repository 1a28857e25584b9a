"""Filesystem primitives: directory move, junction creation and link inspection."""

import errno
import os
import shutil
import sys
from pathlib import Path
from typing import Optional

from .errors import PartialMoveError


def link_mechanism() -> str:
    """Name of the reparse point kind this platform creates."""
    return "junction" if sys.platform == "win32" else "symlink"


def move_directory(source: Path, target: Path) -> None:
    """Move a directory tree as a unit.

    Uses a plain rename, which is atomic within a volume. Only a cross-device
    rename falls back to copy-then-delete; a failed copy is removed again so
    the source remains the only copy.
    """
    try:
        os.rename(source, target)
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise

    if os.path.lexists(target):
        raise FileExistsError(errno.EEXIST, "Target already exists", str(target))
    try:
        shutil.copytree(source, target, symlinks=True)
    except OSError:
        shutil.rmtree(target, ignore_errors=True)
        raise
    # Target is complete from here on
    try:
        shutil.rmtree(source)
    except OSError as e:
        raise PartialMoveError(source, target, e) from e


def create_directory_junction(link: Path, target: Path) -> None:
    """Create a directory reparse point at ``link`` resolving to ``target``.

    On Windows this is a real junction (no symlink privilege semantics,
    transparent to every path operation). Elsewhere it is a directory symlink.
    """
    if os.path.lexists(link):
        raise FileExistsError(errno.EEXIST, "Link path already exists", str(link))

    if sys.platform == "win32":
        # _winapi is private CPython; if it ever goes away, `cmd /c mklink /J link target` is the replacement
        import _winapi
        _winapi.CreateJunction(str(target), str(link))
    else:
        os.symlink(str(target), str(link), target_is_directory=True)


def is_link(path: Path) -> bool:
    """True for symlinks and Windows junctions."""
    return os.path.islink(path) or os.path.isjunction(path)


def read_link_target(path: Path) -> Optional[Path]:
    """Return where a link points, or None for a regular entry."""
    if not is_link(path):
        return None
    return Path(os.readlink(path))


def resolves_to(link: Path, target: Path) -> bool:
    """Check that ``link`` is a traversable directory that is ``target``."""
    if not os.path.isdir(link):
        return False
    try:
        return os.path.samefile(link, target)
    except OSError:
        return False
