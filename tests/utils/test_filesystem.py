# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for filesystem utilities.

Atomic writes are tested by verifying that the target file either has the
full new content or keeps its old content, never a partial write.
"""

from pathlib import Path

import pytest

from rustgrade.utils.filesystem import atomic_write, ensure_directory


class TestAtomicWrite:
    def test_writes_content_successfully(self, tmp_path: Path) -> None:
        target = tmp_path / "output.json"
        atomic_write(target, "{}")
        assert target.read_text(encoding="utf-8") == "{}"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "deep" / "output.json"
        atomic_write(target, "nested content")
        assert target.read_text(encoding="utf-8") == "nested content"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "overwrite.json"
        atomic_write(target, "first version")
        atomic_write(target, "second version")
        assert target.read_text(encoding="utf-8") == "second version"

    def test_failed_write_keeps_old_content(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        target = tmp_path / "keep.json"
        atomic_write(target, "old")

        def _boom(self: Path, other: Path) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", _boom)
        with pytest.raises(OSError, match="disk full"):
            atomic_write(target, "new")
        monkeypatch.undo()

        assert target.read_text(encoding="utf-8") == "old"
        assert list(tmp_path.glob(".rustgrade_tmp_*")) == []


class TestEnsureDirectory:
    def test_creates_nested(self, tmp_path: Path) -> None:
        path = ensure_directory(tmp_path / "a" / "b")
        assert path.is_dir()

    def test_existing_is_fine(self, tmp_path: Path) -> None:
        assert ensure_directory(tmp_path) == tmp_path
