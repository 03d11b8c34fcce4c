"""Configuration models for filesystem implementations and utilities."""

from __future__ import annotations

from azblobfs.configs.azure_config import AzureBlobFilesystemConfig
from azblobfs.configs.base import FileSystemConfig
from azblobfs.configs.options import AzureBackend, AzureOptions, CredentialKind, account_urls

__all__ = [
    "AzureBackend",
    "AzureBlobFilesystemConfig",
    "AzureOptions",
    "CredentialKind",
    "FileSystemConfig",
    "account_urls",
]
