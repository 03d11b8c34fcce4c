"""Base filesystem classes."""

from __future__ import annotations

from azblobfs.filesystems.base.basefilesystem import BaseFileSystem
from azblobfs.filesystems.base.file_objects import BlobInputFile, FileInfo, FileType, IOContext

__all__ = [
    "BaseFileSystem",
    "BlobInputFile",
    "FileInfo",
    "FileType",
    "IOContext",
]
