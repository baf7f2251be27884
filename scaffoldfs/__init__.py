"""
SCAFFOLDFS - File system abstraction for scaffold generators.
"""

from scaffoldfs.config.settings import FileSystemConfig
from scaffoldfs.core.errors import (
    CloseFileError,
    ConfigurationError,
    CreateDirectoryError,
    CreateFileError,
    FileSystemError,
    ScaffoldFsError,
    WriteFileError,
    is_close_file_error,
    is_create_directory_error,
    is_create_file_error,
    is_write_file_error,
)
from scaffoldfs.core.filesystem import (
    FileSystem,
    FileWriter,
    ScaffoldFileSystem,
    create_new,
    directory_permissions,
    file_mode,
    file_permissions,
    new,
    write_file,
)
from scaffoldfs.core.types import FileMode

__all__ = [
    "CloseFileError",
    "ConfigurationError",
    "CreateDirectoryError",
    "CreateFileError",
    "FileMode",
    "FileSystem",
    "FileSystemConfig",
    "FileSystemError",
    "FileWriter",
    "ScaffoldFileSystem",
    "ScaffoldFsError",
    "WriteFileError",
    "create_new",
    "directory_permissions",
    "file_mode",
    "file_permissions",
    "is_close_file_error",
    "is_create_directory_error",
    "is_create_file_error",
    "is_write_file_error",
    "new",
    "write_file",
]
