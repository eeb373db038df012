"""Unit tests for atomic_write function."""

import os

import pytest

from mdpaste.graph import files
from mdpaste.graph.files import atomic_write
from mdpaste.services.exceptions import FileModifiedError


def bump_mtime(path):
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))


class TestAtomicWrite:
    """Test atomic_write with modification detection."""

    def test_atomic_write_creates_new_file(self, tmp_path):
        target = tmp_path / "new_page.md"

        atomic_write(target, "- Block 1\n- Block 2\n")

        assert target.read_text() == "- Block 1\n- Block 2\n"
        assert not list(tmp_path.glob(".*.tmp.*"))

    def test_atomic_write_overwrites_unmodified_file(self, tmp_path):
        target = tmp_path / "existing.md"
        target.write_text("Old content")

        atomic_write(target, "New content", expected_mtime=target.stat().st_mtime)

        assert target.read_text() == "New content"

    def test_new_file_that_appeared_meanwhile(self, tmp_path):
        target = tmp_path / "race.md"
        target.write_text("someone else")

        with pytest.raises(FileModifiedError, match="early check"):
            atomic_write(target, "mine")
        assert target.read_text() == "someone else"

    def test_detects_early_modification(self, tmp_path):
        target = tmp_path / "file.md"
        target.write_text("Initial content")
        loaded_mtime = target.stat().st_mtime

        target.write_text("Modified by external process")
        bump_mtime(target)

        with pytest.raises(FileModifiedError, match="early check"):
            atomic_write(target, "New content", expected_mtime=loaded_mtime)
        assert target.read_text() == "Modified by external process"

    def test_detects_late_modification(self, tmp_path, monkeypatch):
        target = tmp_path / "file.md"
        target.write_text("Initial content")
        loaded_mtime = target.stat().st_mtime

        original_fsync = os.fsync

        def fsync_then_external_edit(fd):
            original_fsync(fd)
            target.write_text("Edited during write")
            bump_mtime(target)

        monkeypatch.setattr(files.os, "fsync", fsync_then_external_edit)

        with pytest.raises(FileModifiedError, match="late check"):
            atomic_write(target, "New content", expected_mtime=loaded_mtime)

        assert target.read_text() == "Edited during write"
        assert not list(tmp_path.glob(".*.tmp.*"))
