"""Elevated-rights check and elevated re-launch."""

import os
import subprocess
import sys
from typing import Optional, Sequence


def has_elevated_rights() -> bool:
    """Check whether this process may create directory reparse points.

    Windows requires an administrator token. POSIX symlinks need no
    privilege, so there is nothing to check there.
    """
    if sys.platform != "win32":
        return True

    import ctypes
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except OSError:
        return False


def relaunch_elevated(argv: Optional[Sequence[str]] = None, cwd: Optional[str] = None) -> bool:
    """Start this program again with elevation (UAC prompt).

    The elevated process starts in ``cwd`` (default: the current directory)
    rather than the system directory, but callers should still pass absolute
    paths in ``argv``. Returns True if the elevated process was started; the
    caller should then exit. Always False off Windows.
    """
    if sys.platform != "win32":
        return False

    import ctypes
    args = list(sys.argv[1:] if argv is None else argv)
    params = subprocess.list2cmdline(["-m", "junction_mover.main", *args])
    directory = cwd or os.getcwd()
    # ShellExecuteW returns a value > 32 on success
    result = ctypes.windll.shell32.ShellExecuteW(None, "runas", sys.executable, params, directory, 1)
    return int(result) > 32
