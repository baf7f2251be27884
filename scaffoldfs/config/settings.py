"""
SCAFFOLDFS - Configuration Management

Handles file-system configuration from defaults, environment variables and files.
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

import yaml

from scaffoldfs.core.errors import ConfigurationError
from scaffoldfs.core.types import (
    DEFAULT_DIRECTORY_PERMISSION,
    DEFAULT_FILE_MODE,
    DEFAULT_FILE_PERMISSION,
    FileMode,
)

logger = logging.getLogger(__name__)

MAX_PERMISSION = 0o7777


def parse_permission(value: Union[int, str]) -> int:
    """
    Parse permission bits from an int or an octal string.

    Args:
        value: Permission as int (0o755) or octal string ("0755", "755", "0o755")

    Returns:
        Permission bits as int

    Raises:
        ConfigurationError: If value is not a valid permission
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid permission: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 8)
        except ValueError:
            raise ConfigurationError(f"Invalid octal permission: {value!r}") from None
    raise ConfigurationError(f"Invalid permission: {value!r}")


def parse_file_mode(value: Union[FileMode, str]) -> FileMode:
    """
    Parse a file mode from its enum value or name.

    Raises:
        ConfigurationError: If value names no known mode
    """
    if isinstance(value, FileMode):
        return value
    try:
        return FileMode(str(value).strip().lower())
    except ValueError:
        choices = [m.value for m in FileMode]
        raise ConfigurationError(f"Unknown file mode: {value!r}. Available: {choices}") from None


@dataclass(frozen=True)
class FileSystemConfig:
    """Immutable configuration for a scaffold file system."""

    directory_permission: int = DEFAULT_DIRECTORY_PERMISSION
    file_permission: int = DEFAULT_FILE_PERMISSION
    file_mode: FileMode = DEFAULT_FILE_MODE

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_env(cls) -> "FileSystemConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - SCAFFOLDFS_DIRECTORY_PERMISSION: Octal directory permission (e.g. 0755)
        - SCAFFOLDFS_FILE_PERMISSION: Octal file permission (e.g. 0644)
        - SCAFFOLDFS_FILE_MODE: create_or_update or create_new
        """
        return cls(**_env_overrides())

    @classmethod
    def from_file(cls, path: str) -> "FileSystemConfig":
        """
        Load configuration from YAML or JSON file.

        Args:
            path: Path to configuration file (.yaml, .yml, or .json)

        Returns:
            FileSystemConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config file format or content is invalid
        """
        return cls(**_read_file(path))

    @classmethod
    def load(cls, config_file: Optional[str] = None) -> "FileSystemConfig":
        """
        Load configuration with priority: file > env > defaults.

        Args:
            config_file: Optional path to configuration file

        Returns:
            FileSystemConfig instance
        """
        values = _env_overrides()

        if config_file and os.path.exists(config_file):
            values.update(_read_file(config_file))
        elif config_file:
            logger.debug(f"Config file not found, using env/defaults: {config_file}")

        return cls(**values)

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        for name in ("directory_permission", "file_permission"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an int, got {value!r}")
            if value < 0 or value > MAX_PERMISSION:
                raise ConfigurationError(f"{name} out of range: {oct(value)}")

        if not isinstance(self.file_mode, FileMode):
            raise ConfigurationError(f"file_mode must be a FileMode, got {self.file_mode!r}")


def _coerce(data: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(FileSystemConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "file_mode":
            values[key] = parse_file_mode(value)
        else:
            values[key] = parse_permission(value)
    return values


def _env_overrides() -> Dict[str, Any]:
    env = {
        "directory_permission": os.environ.get("SCAFFOLDFS_DIRECTORY_PERMISSION"),
        "file_permission": os.environ.get("SCAFFOLDFS_FILE_PERMISSION"),
        "file_mode": os.environ.get("SCAFFOLDFS_FILE_MODE"),
    }
    return _coerce({k: v for k, v in env.items() if v})


def _read_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        if path.endswith((".yaml", ".yml")):
            data = yaml.safe_load(f)
        elif path.endswith(".json"):
            data = json.load(f)
        else:
            raise ConfigurationError(f"Unsupported config file format: {path}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")

    return _coerce(data)
