"""
SCAFFOLDFS - Core Types

Common types and constants used throughout the package.
"""

import os
from enum import Enum

DEFAULT_DIRECTORY_PERMISSION = 0o755
DEFAULT_FILE_PERMISSION = 0o644


class FileMode(Enum):
    """Policy applied when the target file already exists."""

    CREATE_OR_UPDATE = "create_or_update"  # Truncate and overwrite
    CREATE_NEW = "create_new"  # Fail if the file exists

    def open_flags(self) -> int:
        """
        Get the os.open flag set for this mode.

        Returns:
            Bitwise OR of os.O_* flags
        """
        if self is FileMode.CREATE_NEW:
            return os.O_WRONLY | os.O_CREAT | os.O_EXCL
        return os.O_WRONLY | os.O_CREAT | os.O_TRUNC


DEFAULT_FILE_MODE = FileMode.CREATE_OR_UPDATE
