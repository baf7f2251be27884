"""
SCAFFOLDFS - Custom Exception Classes

Defines the exception hierarchy for the package.
All custom exceptions inherit from ScaffoldFsError.
"""

from typing import Optional, Type


class ScaffoldFsError(Exception):
    """Base exception for all SCAFFOLDFS errors."""

    pass


class ConfigurationError(ScaffoldFsError):
    """Raised when there are configuration issues."""

    pass


class FileSystemError(ScaffoldFsError):
    """
    Base for errors raised by a file-system operation.

    Carries the path involved and the low-level error that caused it.
    """

    action = "access"

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to {self.action} {path}: {cause}")


class CreateDirectoryError(FileSystemError):
    """Raised when the parent directories of a file cannot be created."""

    action = "create directory for"


class CreateFileError(FileSystemError):
    """Raised when a file cannot be created or opened."""

    action = "create"


class WriteFileError(FileSystemError):
    """Raised when writing to a file fails."""

    action = "write to"


class CloseFileError(FileSystemError):
    """Raised when closing a file fails."""

    action = "close"


def _find(err: Optional[BaseException], kind: Type[FileSystemError]) -> bool:
    seen = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, kind):
            return True
        seen.add(id(err))
        # Only explicit wrapping (raise ... from) counts, not implicit context
        err = err.__cause__
    return False


def is_create_directory_error(err: Optional[BaseException]) -> bool:
    """Check whether err is, or wraps, a CreateDirectoryError."""
    return _find(err, CreateDirectoryError)


def is_create_file_error(err: Optional[BaseException]) -> bool:
    """Check whether err is, or wraps, a CreateFileError."""
    return _find(err, CreateFileError)


def is_write_file_error(err: Optional[BaseException]) -> bool:
    """Check whether err is, or wraps, a WriteFileError."""
    return _find(err, WriteFileError)


def is_close_file_error(err: Optional[BaseException]) -> bool:
    """Check whether err is, or wraps, a CloseFileError."""
    return _find(err, CloseFileError)
