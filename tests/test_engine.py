"""Tests for the per-directory move/link/verify/rollback protocol."""

import os
import tempfile
import shutil
import pytest
from pathlib import Path
from unittest.mock import Mock

from junction_mover.core.engine import RelocationEngine
from junction_mover.core.errors import PartialMoveError
from junction_mover.core.links import move_directory
from junction_mover.core.models import DirectoryTask, OutcomeStatus, TaskStep


def make_tree(root: Path) -> None:
    """Populate a small directory tree with known content."""
    (root / "sub").mkdir(parents=True)
    (root / "data.txt").write_text("hello")
    (root / "sub" / "inner.bin").write_bytes(b"\x00\x01\x02")


def read_tree(root: Path) -> dict:
    """Map relative file paths to bytes, following links at the root."""
    contents = {}
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            full = Path(dirpath) / filename
            contents[str(full.relative_to(root))] = full.read_bytes()
    return contents


class TestRelocationEngine:
    """Test each exit of the relocation state machine."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.source_root = self.temp_dir / "source"
        self.target_root = self.temp_dir / "target"
        self.source_root.mkdir()
        self.target_root.mkdir()

        make_tree(self.source_root / "A")
        self.original = read_tree(self.source_root / "A")
        self.task = DirectoryTask(
            name="A",
            source_path=self.source_root / "A",
            target_path=self.target_root / "A",
        )

    def teardown_method(self):
        """Clean up test environment."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_successful_relocation(self):
        """Directory is moved and its old path becomes a working link."""
        outcome = RelocationEngine().relocate(self.task)

        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.is_error is False
        assert os.path.islink(self.task.source_path)
        assert os.path.isdir(self.task.target_path)
        assert not os.path.islink(self.task.target_path)

    def test_no_content_loss(self):
        """Content is reachable through both the link and the target."""
        RelocationEngine().relocate(self.task)

        assert read_tree(self.task.source_path) == self.original
        assert read_tree(self.task.target_path) == self.original

    def test_writes_through_link_land_in_target(self):
        RelocationEngine().relocate(self.task)

        (self.task.source_path / "new.txt").write_text("via link")
        assert (self.task.target_path / "new.txt").read_text() == "via link"

    def test_skip_when_target_exists(self):
        """An existing target leaves the source completely untouched."""
        (self.task.target_path).mkdir()
        (self.task.target_path / "marker").write_text("existing")
        mover = Mock()

        outcome = RelocationEngine(mover=mover).relocate(self.task)

        assert outcome.status is OutcomeStatus.SKIPPED
        assert outcome.detail == "target already exists"
        assert outcome.is_error is False
        mover.assert_not_called()
        assert not os.path.islink(self.task.source_path)
        assert read_tree(self.task.source_path) == self.original
        assert (self.task.target_path / "marker").read_text() == "existing"

    def test_skip_when_target_is_file(self):
        self.task.target_path.write_text("file in the way")

        outcome = RelocationEngine().relocate(self.task)

        assert outcome.status is OutcomeStatus.SKIPPED

    def test_skip_when_target_is_dangling_link(self):
        os.symlink(self.temp_dir / "nowhere", self.task.target_path)

        outcome = RelocationEngine().relocate(self.task)

        assert outcome.status is OutcomeStatus.SKIPPED
        assert read_tree(self.task.source_path) == self.original

    def test_move_failure_has_no_side_effects(self):
        """A failed move leaves the source in place and no target."""
        mover = Mock(side_effect=PermissionError(13, "Permission denied"))
        linker = Mock()

        outcome = RelocationEngine(mover=mover, linker=linker).relocate(self.task)

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.step is TaskStep.MOVE
        assert outcome.critical is False
        assert "Permission denied" in outcome.detail
        linker.assert_not_called()
        assert read_tree(self.task.source_path) == self.original
        assert not os.path.exists(self.task.target_path)

    def test_partial_cross_device_move_is_critical(self):
        """Data split between both paths after a cross-device move needs attention."""
        mover = Mock(side_effect=PartialMoveError(
            self.task.source_path, self.task.target_path, PermissionError(13, "Access is denied")))
        linker = Mock()

        outcome = RelocationEngine(mover=mover, linker=linker).relocate(self.task)

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.step is TaskStep.MOVE
        assert outcome.critical is True
        assert "partially removed" in outcome.detail
        linker.assert_not_called()

    def test_link_failure_rolls_back(self):
        """A failed link moves the directory back to where it was."""
        linker = Mock(side_effect=OSError("privilege revoked"))

        outcome = RelocationEngine(linker=linker).relocate(self.task)

        assert outcome.status is OutcomeStatus.ROLLED_BACK
        assert outcome.step is TaskStep.LINK
        assert outcome.critical is False
        assert outcome.is_error is True
        assert "privilege revoked" in outcome.detail
        assert os.path.isdir(self.task.source_path)
        assert not os.path.islink(self.task.source_path)
        assert read_tree(self.task.source_path) == self.original
        assert not os.path.exists(self.task.target_path)

    def test_failed_rollback_is_critical(self):
        """If moving back fails, the data stays at the target and it is flagged."""
        calls = []

        def mover(source, target):
            calls.append((source, target))
            if len(calls) > 1:
                raise OSError("device busy")
            move_directory(source, target)

        linker = Mock(side_effect=OSError("privilege revoked"))

        outcome = RelocationEngine(mover=mover, linker=linker).relocate(self.task)

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.step is TaskStep.ROLLBACK
        assert outcome.critical is True
        assert str(self.task.target_path) in outcome.detail
        assert calls[1] == (self.task.target_path, self.task.source_path)
        assert not os.path.lexists(self.task.source_path)
        assert read_tree(self.task.target_path) == self.original

    def test_rollback_refuses_when_original_path_occupied(self):
        """A half-created link at the original path blocks the move back."""
        def linker(link, target):
            Path(link).write_text("partial")
            raise OSError("link creation interrupted")

        mover = Mock(side_effect=move_directory)

        outcome = RelocationEngine(mover=mover, linker=linker).relocate(self.task)

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.step is TaskStep.ROLLBACK
        assert outcome.critical is True
        assert mover.call_count == 1
        assert read_tree(self.task.target_path) == self.original

    def test_verification_failure_is_critical_without_rollback(self):
        """Linker reports success but nothing resolves at the original path."""
        mover = Mock(side_effect=move_directory)
        linker = Mock()

        outcome = RelocationEngine(mover=mover, linker=linker).relocate(self.task)

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.step is TaskStep.VERIFY
        assert outcome.critical is True
        assert mover.call_count == 1
        assert not os.path.exists(self.task.source_path)
        assert read_tree(self.task.target_path) == self.original

    def test_verification_failure_when_link_points_elsewhere(self):
        decoy = self.temp_dir / "decoy"
        decoy.mkdir()

        def linker(link, target):
            os.symlink(decoy, link, target_is_directory=True)

        outcome = RelocationEngine(linker=linker).relocate(self.task)

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.step is TaskStep.VERIFY
        assert os.path.islink(self.task.source_path)
        assert read_tree(self.task.target_path) == self.original

    def test_programming_errors_propagate(self):
        """Only OSErrors become outcomes."""
        linker = Mock(side_effect=ValueError("bug"))

        with pytest.raises(ValueError):
            RelocationEngine(linker=linker).relocate(self.task)
