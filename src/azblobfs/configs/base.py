"""Configuration models for filesystem implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, get_args

import fsspec
from pydantic import BaseModel, ConfigDict


if TYPE_CHECKING:
    from fsspec import AbstractFileSystem
    from upath import UPath


class FileSystemConfig(BaseModel):
    """Base configuration for filesystem implementations."""

    model_config = ConfigDict(extra="allow", use_attribute_docstrings=True)

    type: str
    """Type of filesystem"""

    root_path: str | None = None
    """Root directory to restrict filesystem access to (wraps in DirFileSystem)."""

    @classmethod
    def get_available_configs(cls) -> dict[str, type[FileSystemConfig]]:
        """Return all available filesystem configurations.

        Returns:
            Dictionary mapping type values to configuration classes
        """
        result: dict[str, type[FileSystemConfig]] = {}
        for subclass in cls.__subclasses__():
            result.update(subclass.get_available_configs())
            if fs_types := get_args(subclass.model_fields["type"].annotation):
                result[fs_types[0]] = subclass
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileSystemConfig:
        """Create appropriate config instance based on type.

        Args:
            data: Dictionary containing configuration data with type

        Returns:
            Instantiated configuration object of the appropriate type

        Raises:
            ValueError: If type is missing or no config is registered for it
        """
        fs_type = data.get("type")
        if not fs_type:
            msg = "type must be specified"
            raise ValueError(msg)

        configs = cls.get_available_configs()
        if fs_type not in configs:
            msg = f"Unknown filesystem type {fs_type!r}, expected one of {sorted(configs)}"
            raise ValueError(msg)
        return configs[fs_type](**data)

    def _wrap_fs(self, fs: AbstractFileSystem) -> AbstractFileSystem:
        # Apply path prefix (DirFileSystem wrapper) - sandboxed, can't escape
        if self.root_path:
            fs = fsspec.filesystem("dir", path=self.root_path, fs=fs)
        return fs

    def create_fs(self) -> AbstractFileSystem:
        """Create a filesystem instance based on this configuration."""
        raise NotImplementedError

    def create_upath(self, path: str | None = None) -> UPath:
        """Create a UPath object for the specified path on this filesystem.

        Args:
            path: Path within the filesystem, relative to root_path when set
        """
        raise NotImplementedError
