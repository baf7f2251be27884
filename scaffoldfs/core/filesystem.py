"""
SCAFFOLDFS - Scaffold File System

Creates files for scaffold generators on top of a platform filesystem,
applying the configured permissions and file mode, and wrapping every
low-level failure in the matching FileSystemError.
"""

import dataclasses
import logging
import os
from typing import Callable, Optional, Protocol, Union

from scaffoldfs.config.settings import FileSystemConfig, parse_file_mode
from scaffoldfs.core.errors import (
    CloseFileError,
    CreateDirectoryError,
    CreateFileError,
    WriteFileError,
)
from scaffoldfs.core.types import FileMode
from scaffoldfs.infrastructure.filesystem import PlatformFile, PlatformFileSystem, RealFileSystem

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
Option = Callable[[FileSystemConfig], FileSystemConfig]


class FileWriter:
    """
    Writable handle returned by FileSystem.create.

    The caller owns the handle and must close it, either explicitly or by
    using it as a context manager.
    """

    def __init__(self, path: str, handle: PlatformFile):
        self._path = path
        self._handle = handle
        self._closed = False

    @property
    def path(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: Union[bytes, str]) -> int:
        """
        Write data to the file.

        Args:
            data: Bytes, or text encoded as UTF-8

        Returns:
            Number of bytes written

        Raises:
            WriteFileError: If the handle is closed or the write fails
        """
        if self._closed:
            cause = ValueError("write to closed file")
            raise WriteFileError(self._path, cause) from cause
        if isinstance(data, str):
            data = data.encode("utf-8")

        try:
            return self._handle.write(data)
        except OSError as e:
            logger.warning(f"Write failed for {self._path}: {e}")
            raise WriteFileError(self._path, e) from e

    def close(self) -> None:
        """
        Close the file. Closing twice is a no-op.

        Raises:
            CloseFileError: If the underlying close fails
        """
        if self._closed:
            return
        self._closed = True

        try:
            self._handle.close()
        except OSError as e:
            logger.warning(f"Close failed for {self._path}: {e}")
            raise CloseFileError(self._path, e) from e

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        if exc_type is None:
            self.close()
            return False

        # Don't let a close failure replace the error already in flight
        try:
            self.close()
        except CloseFileError as e:
            logger.debug(f"Ignoring close error during unwind: {e}")
        return False


class FileSystem(Protocol):
    """Protocol for scaffold file-system operations."""

    def exists(self, path: PathLike) -> bool:
        """Check if a file or directory exists."""
        ...

    def create(self, path: PathLike) -> FileWriter:
        """Create a file and its parent directories, returning a writer."""
        ...


class ScaffoldFileSystem:
    """
    FileSystem implementation delegating to a platform filesystem.

    Holds only the immutable configuration and the platform, so a single
    instance can be reused for any number of operations.
    """

    def __init__(
        self,
        config: Optional[FileSystemConfig] = None,
        platform: Optional[PlatformFileSystem] = None,
    ):
        """
        Initialize the file system.

        Args:
            config: Permissions and file mode (defaults if omitted)
            platform: Underlying filesystem (RealFileSystem if omitted)
        """
        self._config = config if config is not None else FileSystemConfig()
        self._platform = platform if platform is not None else RealFileSystem()

    @property
    def config(self) -> FileSystemConfig:
        return self._config

    @property
    def platform(self) -> PlatformFileSystem:
        return self._platform

    def exists(self, path: PathLike) -> bool:
        return self._platform.exists(os.fspath(path))

    def create(self, path: PathLike) -> FileWriter:
        """
        Create a file, creating any missing parent directories first.

        Args:
            path: File path

        Returns:
            FileWriter for the new file

        Raises:
            CreateDirectoryError: If parent directories cannot be created
            CreateFileError: If the file cannot be created (including an
                existing file in CREATE_NEW mode)
        """
        path = os.fspath(path)
        directory = os.path.dirname(path)

        if directory:
            try:
                self._platform.make_directories(directory, self._config.directory_permission)
            except OSError as e:
                logger.warning(f"Could not create directory {directory}: {e}")
                raise CreateDirectoryError(path, e) from e

        try:
            handle = self._platform.open_file(
                path, self._config.file_mode, self._config.file_permission
            )
        except OSError as e:
            logger.warning(f"Could not create file {path}: {e}")
            raise CreateFileError(path, e) from e

        logger.debug(f"Created {path} ({self._config.file_mode.value})")
        return FileWriter(path, handle)


def directory_permissions(permission: int) -> Option:
    """Option setting the permission used for created directories."""

    def apply(config: FileSystemConfig) -> FileSystemConfig:
        return dataclasses.replace(config, directory_permission=permission)

    return apply


def file_permissions(permission: int) -> Option:
    """Option setting the permission used for created files."""

    def apply(config: FileSystemConfig) -> FileSystemConfig:
        return dataclasses.replace(config, file_permission=permission)

    return apply


def file_mode(mode: Union[FileMode, str]) -> Option:
    """Option selecting what happens when the target file already exists."""
    mode = parse_file_mode(mode)

    def apply(config: FileSystemConfig) -> FileSystemConfig:
        return dataclasses.replace(config, file_mode=mode)

    return apply


def create_new() -> Option:
    """Option making create fail on files that already exist."""
    return file_mode(FileMode.CREATE_NEW)


def new(
    *options: Option,
    config: Optional[FileSystemConfig] = None,
    platform: Optional[PlatformFileSystem] = None,
) -> ScaffoldFileSystem:
    """
    Build a scaffold file system.

    Args:
        *options: Config transformations applied in order
        config: Base configuration (defaults if omitted)
        platform: Underlying filesystem (RealFileSystem if omitted)

    Returns:
        ScaffoldFileSystem instance

    Raises:
        ConfigurationError: If an option produces an invalid configuration
    """
    resolved = config if config is not None else FileSystemConfig()
    for option in options:
        resolved = option(resolved)

    return ScaffoldFileSystem(resolved, platform)


def write_file(fs: FileSystem, path: PathLike, content: Union[bytes, str]) -> None:
    """
    Create a file, write content to it and close it.

    A close failure is raised only when the write succeeded; otherwise the
    write error is raised.

    Raises:
        CreateDirectoryError, CreateFileError, WriteFileError, CloseFileError
    """
    writer = fs.create(path)
    with writer:
        writer.write(content)
