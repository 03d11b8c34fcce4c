"""The filesystem base classes."""

from __future__ import annotations

from fsspec.spec import AbstractFileSystem
from upath import UPath


class BaseFileSystem[TPath: UPath](AbstractFileSystem):
    """Synchronous fsspec filesystem that hands out UPaths bound to itself."""

    upath_cls: type[TPath]

    def get_upath(self, path: str | None = None) -> TPath:
        """Get a UPath object for the given path.

        Args:
            path: The path to the file or directory. If None, the root path is returned.
        """
        protocol = self.protocol if isinstance(self.protocol, str) else self.protocol[0]
        path_obj = self.upath_cls(path if path is not None else self.root_marker, protocol=protocol)
        path_obj._fs_cached = self  # pyright: ignore[reportAttributeAccessIssue]
        return path_obj
