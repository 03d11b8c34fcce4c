"""Filesystem error taxonomy and the mapping from Azure store errors onto it."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

from azure.core.exceptions import ResourceNotFoundError


if TYPE_CHECKING:
    from azure.core.exceptions import AzureError

    from azblobfs.paths import BlobAddress


NOT_IMPLEMENTED_MSG = "The Azure FileSystem is not fully implemented"


class AzureFSError(Exception):
    """Base exception for all azblobfs errors."""


class InvalidArgumentError(AzureFSError, ValueError):
    """Raised for bad arguments: negative positions, closed files and the like."""


class InvalidPathError(InvalidArgumentError):
    """Raised when a string cannot be parsed into a blob address."""


class PathNotFoundError(AzureFSError, FileNotFoundError):
    """Raised when a container or blob does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path does not exist '{path}'")


class NotAFileError(AzureFSError, IsADirectoryError):
    """Raised when a container-like address is used where a blob is expected."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Not a regular file: '{path}'")


class StorageIOError(AzureFSError, OSError):
    """Raised for reads past the end of a blob and for failed store calls."""


class FSNotImplementedError(AzureFSError, NotImplementedError):
    """Raised by the mutating and listing operations this filesystem lacks."""


def is_not_found(exc: AzureError) -> bool:
    """Whether the store error means the container or blob is missing."""
    if isinstance(exc, ResourceNotFoundError):
        return True
    return getattr(exc, "status_code", None) == HTTPStatus.NOT_FOUND


def map_store_error(prefix: str, exc: AzureError, address: BlobAddress) -> AzureFSError:
    """Translate a store exception into the filesystem error taxonomy.

    Args:
        prefix: Human-readable context describing the failed operation
        exc: The error raised by the Azure SDK
        address: Address the operation targeted

    Returns:
        PathNotFoundError for "not found" responses, otherwise a StorageIOError
        whose message keeps the store's own text.
    """
    if is_not_found(exc):
        return PathNotFoundError(address.full_path)
    return StorageIOError(f"{prefix} Azure Error: {exc}")


def validate_file_address(address: BlobAddress) -> None:
    """Reject addresses that cannot name a blob, before any network access."""
    if not address.container:
        raise PathNotFoundError(address.full_path)
    if not address.relative_path:
        raise NotAFileError(address.full_path)
