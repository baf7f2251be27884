"""
SCAFFOLDFS - Platform Filesystem Abstraction

Provides abstraction layer for the raw file I/O primitives.
This allows mocking in tests and keeps os calls in one place.
"""

import errno
import logging
import os
import posixpath
from typing import Dict, Optional, Protocol, Set, Tuple

from scaffoldfs.core.types import FileMode

logger = logging.getLogger(__name__)

# Normalized paths that always exist as directories in MockFileSystem
ROOT_DIRECTORIES = frozenset({"/", "."})


class PlatformFile(Protocol):
    """Protocol for an open, writable file handle."""

    def write(self, data: bytes) -> int:
        """Write bytes and return the number written."""
        ...

    def close(self) -> None:
        """Close the handle."""
        ...


class PlatformFileSystem(Protocol):
    """Protocol for platform filesystem operations."""

    def exists(self, path: str) -> bool:
        """Check if a file or directory exists."""
        ...

    def make_directories(self, path: str, permission: int) -> None:
        """Create a directory and any missing parents."""
        ...

    def open_file(self, path: str, mode: FileMode, permission: int) -> PlatformFile:
        """Open a file for writing according to mode."""
        ...


class RealFile:
    """File handle backed by an OS file descriptor."""

    def __init__(self, fd: int):
        self._fd = fd

    def write(self, data: bytes) -> int:
        view = memoryview(data)
        written = 0
        while written < len(view):
            count = os.write(self._fd, view[written:])
            if count == 0:
                raise OSError(errno.EIO, "write returned no bytes")
            written += count
        return written

    def close(self) -> None:
        os.close(self._fd)


class RealFileSystem:
    """Real filesystem implementation."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def make_directories(self, path: str, permission: int) -> None:
        missing = []
        current = os.path.abspath(path)
        while not os.path.isdir(current):
            missing.append(current)
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent

        # Create top-down so each level gets the requested permission
        for directory in reversed(missing):
            try:
                os.mkdir(directory, permission)
            except FileExistsError:
                if not os.path.isdir(directory):
                    raise
            logger.debug(f"Created directory {directory} ({oct(permission)})")

    def open_file(self, path: str, mode: FileMode, permission: int) -> RealFile:
        fd = os.open(path, mode.open_flags(), permission)
        return RealFile(fd)


class MockFile:
    """In-memory file handle returned by MockFileSystem."""

    def __init__(self, fs: "MockFileSystem", path: str):
        self._fs = fs
        self._path = path
        self.closed = False

    def write(self, data: bytes) -> int:
        if self._path in self._fs.fail_write:
            raise OSError(errno.EIO, "injected write failure", self._path)
        permission, content = self._fs.files[self._path]
        self._fs.files[self._path] = (permission, content + bytes(data))
        return len(data)

    def close(self) -> None:
        if self._path in self._fs.fail_close:
            raise OSError(errno.EIO, "injected close failure", self._path)
        self.closed = True


class MockFileSystem:
    """
    Mock filesystem for testing.

    Keeps directories and files in memory along with the permission each
    was created with. Paths listed in the fail_* sets raise OSError from
    the matching operation.
    """

    def __init__(self):
        self.directories: Dict[str, int] = {}
        self.files: Dict[str, Tuple[int, bytes]] = {}
        self.fail_make_directories: Set[str] = set()
        self.fail_open: Set[str] = set()
        self.fail_write: Set[str] = set()
        self.fail_close: Set[str] = set()

    @staticmethod
    def _normalize(path: str) -> str:
        return posixpath.normpath(os.fspath(path))

    def _is_directory(self, path: str) -> bool:
        return path in ROOT_DIRECTORIES or path in self.directories

    def exists(self, path: str) -> bool:
        path = self._normalize(path)
        return path in self.files or self._is_directory(path)

    def make_directories(self, path: str, permission: int) -> None:
        path = self._normalize(path)
        if path in self.fail_make_directories:
            raise OSError(errno.EACCES, "injected mkdir failure", path)

        parts = [p for p in path.split("/") if p and p != "."]
        prefix = "/" if path.startswith("/") else ""
        current = ""
        for part in parts:
            current = posixpath.join(current, part) if current else prefix + part
            if current in self.files:
                raise NotADirectoryError(errno.ENOTDIR, "not a directory", current)
            self.directories.setdefault(current, permission)

    def open_file(self, path: str, mode: FileMode, permission: int) -> MockFile:
        path = self._normalize(path)
        if path in self.fail_open:
            raise OSError(errno.EACCES, "injected open failure", path)
        if self._is_directory(path):
            raise IsADirectoryError(errno.EISDIR, "is a directory", path)

        parent = posixpath.dirname(path) or "."
        if not self._is_directory(parent):
            raise FileNotFoundError(errno.ENOENT, "no such directory", parent)

        if path in self.files:
            if mode is FileMode.CREATE_NEW:
                raise FileExistsError(errno.EEXIST, "file exists", path)
            existing_permission, _ = self.files[path]
            self.files[path] = (existing_permission, b"")
        else:
            self.files[path] = (permission, b"")

        return MockFile(self, path)

    def read(self, path: str) -> bytes:
        """Get file contents for assertions in tests."""
        path = self._normalize(path)
        if path not in self.files:
            raise FileNotFoundError(f"File not found: {path}")
        return self.files[path][1]

    def permission(self, path: str) -> Optional[int]:
        """
        Get the permission a file or directory was created with.

        Root directories exist without having been created, so they have none.
        """
        path = self._normalize(path)
        if path in self.directories:
            return self.directories[path]
        if path in self.files:
            return self.files[path][0]
        return None
