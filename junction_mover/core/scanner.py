"""Candidate discovery: immediate subdirectories of the source root."""

import os
from pathlib import Path
from typing import List

from .models import Candidate


def list_immediate_subdirectories(root: Path) -> List[Candidate]:
    """Snapshot the directories directly under ``root``, sorted by name.

    Non-recursive. Links to directories count as directories, so a source that
    was already relocated shows up again and gets skipped by the engine.
    """
    candidates = []
    with os.scandir(root) as entries:
        for entry in entries:
            if entry.is_dir():
                candidates.append(Candidate(name=entry.name, full_path=Path(entry.path)))
    candidates.sort(key=lambda c: c.name)
    return candidates
