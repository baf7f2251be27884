"""
Unit tests for infrastructure components.
"""

import os
import stat

import pytest

from scaffoldfs.core.types import FileMode
from scaffoldfs.infrastructure.filesystem import MockFileSystem, RealFileSystem


class TestFileMode:
    """Tests for FileMode open flags."""

    def test_create_or_update_truncates(self):
        flags = FileMode.CREATE_OR_UPDATE.open_flags()
        assert flags & os.O_TRUNC
        assert not flags & os.O_EXCL

    def test_create_new_is_exclusive(self):
        flags = FileMode.CREATE_NEW.open_flags()
        assert flags & os.O_EXCL
        assert not flags & os.O_TRUNC


class TestMockFileSystem:
    """Tests for MockFileSystem."""

    def test_exists_returns_false_for_nonexistent_file(self):
        fs = MockFileSystem()
        assert fs.exists("/nonexistent.txt") is False

    def test_root_directories_exist(self):
        fs = MockFileSystem()
        assert fs.exists("/") is True
        assert fs.exists(".") is True
        assert fs.exists("") is True
        assert fs.permission("/") is None

    def test_open_root_directory_fails(self):
        fs = MockFileSystem()
        with pytest.raises(IsADirectoryError):
            fs.open_file("/", FileMode.CREATE_OR_UPDATE, 0o644)

    def test_open_absolute_top_level_file(self):
        fs = MockFileSystem()
        fs.open_file("/top.txt", FileMode.CREATE_NEW, 0o600).close()
        assert fs.permission("/top.txt") == 0o600
        assert fs.directories == {}

    def test_make_directories_records_each_level(self):
        fs = MockFileSystem()
        fs.make_directories("/srv/app/pkg", 0o750)
        assert fs.directories == {"/srv": 0o750, "/srv/app": 0o750, "/srv/app/pkg": 0o750}

    def test_make_directories_keeps_existing_permission(self):
        fs = MockFileSystem()
        fs.make_directories("a", 0o700)
        fs.make_directories("a/b", 0o755)
        assert fs.permission("a") == 0o700
        assert fs.permission("a/b") == 0o755

    def test_make_directories_through_file_fails(self):
        fs = MockFileSystem()
        fs.open_file("a", FileMode.CREATE_OR_UPDATE, 0o644).close()
        with pytest.raises(NotADirectoryError):
            fs.make_directories("a/b", 0o755)

    def test_open_requires_parent(self):
        fs = MockFileSystem()
        with pytest.raises(FileNotFoundError):
            fs.open_file("missing/f.txt", FileMode.CREATE_OR_UPDATE, 0o644)

    def test_open_directory_fails(self):
        fs = MockFileSystem()
        fs.make_directories("a", 0o755)
        with pytest.raises(IsADirectoryError):
            fs.open_file("a", FileMode.CREATE_OR_UPDATE, 0o644)

    def test_write_and_read(self):
        fs = MockFileSystem()
        handle = fs.open_file("/test.txt", FileMode.CREATE_OR_UPDATE, 0o644)
        handle.write(b"Hello, World!")
        handle.close()
        assert fs.read("/test.txt") == b"Hello, World!"
        assert handle.closed

    def test_create_new_on_existing_raises(self):
        fs = MockFileSystem()
        fs.open_file("f", FileMode.CREATE_NEW, 0o644).close()
        with pytest.raises(FileExistsError):
            fs.open_file("f", FileMode.CREATE_NEW, 0o644)

    def test_injected_failures(self):
        fs = MockFileSystem()
        fs.fail_write.add("f")
        fs.fail_close.add("f")
        handle = fs.open_file("f", FileMode.CREATE_OR_UPDATE, 0o644)
        with pytest.raises(OSError):
            handle.write(b"x")
        with pytest.raises(OSError):
            handle.close()

    def test_read_nonexistent_raises_error(self):
        fs = MockFileSystem()
        with pytest.raises(FileNotFoundError):
            fs.read("/nonexistent.txt")


class TestRealFileSystem:
    """Tests for RealFileSystem."""

    def test_make_directories_applies_permission(self, tmp_path):
        fs = RealFileSystem()
        old_umask = os.umask(0)
        try:
            fs.make_directories(str(tmp_path / "a" / "b"), 0o700)
        finally:
            os.umask(old_umask)

        for directory in (tmp_path / "a", tmp_path / "a" / "b"):
            assert stat.S_IMODE(directory.stat().st_mode) == 0o700

    def test_make_directories_existing_is_ok(self, tmp_path):
        fs = RealFileSystem()
        fs.make_directories(str(tmp_path), 0o755)
        assert tmp_path.is_dir()

    def test_open_write_close(self, tmp_path):
        fs = RealFileSystem()
        target = tmp_path / "out.bin"
        handle = fs.open_file(str(target), FileMode.CREATE_OR_UPDATE, 0o644)
        assert handle.write(b"abc") == 3
        handle.close()
        assert target.read_bytes() == b"abc"

    def test_write_returning_zero_bytes_raises(self, tmp_path, monkeypatch):
        handle = RealFileSystem().open_file(
            str(tmp_path / "f"), FileMode.CREATE_OR_UPDATE, 0o644
        )
        monkeypatch.setattr(os, "write", lambda fd, data: 0)
        try:
            with pytest.raises(OSError):
                handle.write(b"abc")
        finally:
            monkeypatch.undo()
            handle.close()

    def test_open_create_new_existing(self, tmp_path):
        target = tmp_path / "out.bin"
        target.write_bytes(b"")
        with pytest.raises(FileExistsError):
            RealFileSystem().open_file(str(target), FileMode.CREATE_NEW, 0o644)

    def test_close_twice_raises(self, tmp_path):
        handle = RealFileSystem().open_file(
            str(tmp_path / "f"), FileMode.CREATE_OR_UPDATE, 0o644
        )
        handle.close()
        with pytest.raises(OSError):
            handle.close()
