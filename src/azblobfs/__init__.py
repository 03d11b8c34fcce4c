"""azblobfs: a read-only fsspec filesystem over Azure Blob Storage."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from azblobfs.configs import AzureBlobFilesystemConfig, AzureOptions, FileSystemConfig
from azblobfs.exceptions import (
    AzureFSError,
    FSNotImplementedError,
    InvalidArgumentError,
    InvalidPathError,
    NotAFileError,
    PathNotFoundError,
    StorageIOError,
)
from azblobfs.filesystems import AzureBlobFileSystem, AzureBlobPath, BlobInputFile, FileInfo, IOContext
from azblobfs.paths import BlobAddress

try:
    __version__ = version("azblobfs")
except PackageNotFoundError:
    __version__ = "0.0.0"


def register_all_filesystems() -> None:
    """Register the azblob protocol with fsspec and universal-pathlib."""
    from fsspec import register_implementation as register_fs
    from upath.registry import register_implementation as register_path

    register_fs(AzureBlobFileSystem.protocol, AzureBlobFileSystem, clobber=True)
    register_path(AzureBlobFileSystem.protocol, AzureBlobPath, clobber=True)


__all__ = [
    "AzureBlobFileSystem",
    "AzureBlobFilesystemConfig",
    "AzureBlobPath",
    "AzureFSError",
    "AzureOptions",
    "BlobAddress",
    "BlobInputFile",
    "FSNotImplementedError",
    "FileInfo",
    "FileSystemConfig",
    "IOContext",
    "InvalidArgumentError",
    "InvalidPathError",
    "NotAFileError",
    "PathNotFoundError",
    "StorageIOError",
    "register_all_filesystems",
]
