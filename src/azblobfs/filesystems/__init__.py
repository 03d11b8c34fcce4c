"""Filesystem implementations for azblobfs."""

from .base import BlobInputFile, FileInfo, IOContext
from .blob_store import AzureBlobReader, BlobProperties, BlobReader
from .azure_fs import AzureBlobFileSystem, AzureBlobPath

__all__ = [
    "AzureBlobFileSystem",
    "AzureBlobPath",
    "AzureBlobReader",
    "BlobInputFile",
    "BlobProperties",
    "BlobReader",
    "FileInfo",
    "IOContext",
]
