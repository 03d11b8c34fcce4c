"""Declarative configuration for the Azure blob filesystem."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import Field, SecretStr

from azblobfs.configs.base import FileSystemConfig
from azblobfs.configs.options import (
    AzureBackend,  # noqa: TC001
    AzureOptions,
    CredentialKind,  # noqa: TC001
)


if TYPE_CHECKING:
    from fsspec import AbstractFileSystem
    from upath import UPath

    from azblobfs.filesystems.azure_fs import AzureBlobFileSystem


class AzureBlobFilesystemConfig(FileSystemConfig):
    """Configuration for Azure Blob Storage filesystem."""

    type: Literal["azblob"] = Field("azblob", init=False)
    """Azure blob filesystem type"""

    account_name: str = Field(
        title="Storage Account",
        examples=["devstoreaccount1"],
        pattern=r"^[a-z0-9]{3,24}$",
    )
    """Name of the storage account"""

    credential_kind: CredentialKind = Field(default="default_identity", title="Credential Kind")
    """Authentication mechanism"""

    account_key: SecretStr | None = Field(default=None, title="Account Key")
    """Shared key, required for the shared_key credential kind"""

    tenant_id: str | None = Field(default=None, title="Tenant ID")
    """Entra ID tenant, required for service_principal"""

    client_id: str | None = Field(default=None, title="Client ID")
    """Application id (service_principal) or user-assigned identity id (managed_identity)"""

    client_secret: SecretStr | None = Field(default=None, title="Client Secret")
    """Application secret, required for service_principal"""

    backend: AzureBackend = Field(default="azure", title="Backend")
    """Real Azure storage or the local Azurite emulator"""

    timeout: float | None = Field(default=None, gt=0, title="Request Timeout")
    """Per-request timeout in seconds"""

    def to_options(self) -> AzureOptions:
        """Resolve URLs and build the credential.

        Raises:
            ValueError: If a secret required by the credential kind is missing
        """
        match self.credential_kind:
            case "shared_key":
                if self.account_key is None:
                    msg = "account_key is required for shared_key credentials"
                    raise ValueError(msg)
                return AzureOptions.from_account_key(
                    self.account_name, self.account_key.get_secret_value(), self.backend
                )
            case "default_identity":
                return AzureOptions.from_default_credential(self.account_name, self.backend)
            case "managed_identity":
                return AzureOptions.from_managed_identity(
                    self.account_name, self.client_id, self.backend
                )
            case "service_principal":
                if not (self.tenant_id and self.client_id and self.client_secret):
                    msg = "tenant_id, client_id and client_secret are required for service_principal"
                    raise ValueError(msg)
                return AzureOptions.from_service_principal(
                    self.account_name,
                    self.tenant_id,
                    self.client_id,
                    self.client_secret.get_secret_value(),
                    self.backend,
                )

    def _create_azure_fs(self) -> AzureBlobFileSystem:
        from azblobfs.filesystems.azure_fs import AzureBlobFileSystem
        from azblobfs.filesystems.base import IOContext

        return AzureBlobFileSystem(
            options=self.to_options(), io_context=IOContext(timeout=self.timeout)
        )

    def create_fs(self) -> AbstractFileSystem:
        """Create the filesystem, wrapped in a DirFileSystem when root_path is set."""
        return self._wrap_fs(self._create_azure_fs())

    def create_upath(self, path: str | None = None) -> UPath:
        """Create an AzureBlobPath, resolving `path` below root_path when set."""
        parts = [p.strip("/") for p in (self.root_path, path) if p]
        return self._create_azure_fs().get_upath("/".join(p for p in parts if p) or None)
