"""Account endpoints and credentials for an Azure storage account."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


AzureBackend = Literal["azure", "azurite"]
CredentialKind = Literal["shared_key", "default_identity", "managed_identity", "service_principal"]

AZURITE_BLOB_ENDPOINT = "http://127.0.0.1:10000"


def account_urls(account_name: str, backend: AzureBackend = "azure") -> tuple[str, str]:
    """Return the (dfs, blob) base URLs of a storage account."""
    if backend == "azurite":
        url = f"{AZURITE_BLOB_ENDPOINT}/{account_name}/"
        return url, url
    return (
        f"https://{account_name}.dfs.core.windows.net/",
        f"https://{account_name}.blob.core.windows.net/",
    )


class AzureOptions(BaseModel):
    """Resolved account URLs plus the credential used to reach them.

    Equality only looks at the two URLs and the credential kind, so options
    built from different secrets for the same account compare equal.
    """

    model_config = ConfigDict(
        frozen=True, arbitrary_types_allowed=True, use_attribute_docstrings=True
    )

    backend: AzureBackend = "azure"
    """Real Azure storage or the local Azurite emulator"""

    account_dfs_url: str = ""
    """Data Lake (hierarchical namespace) endpoint of the account"""

    account_blob_url: str = ""
    """Blob endpoint of the account"""

    credentials_kind: CredentialKind | None = None
    """Which authentication mechanism `credential` implements"""

    credential: Any = Field(default=None, exclude=True, repr=False)
    """Opaque credential object handed to the store client"""

    @classmethod
    def from_account_key(
        cls, account_name: str, account_key: str, backend: AzureBackend = "azure"
    ) -> AzureOptions:
        """Authenticate with a storage account shared key."""
        from azure.core.credentials import AzureNamedKeyCredential

        dfs_url, blob_url = account_urls(account_name, backend)
        return cls(
            backend=backend,
            account_dfs_url=dfs_url,
            account_blob_url=blob_url,
            credentials_kind="shared_key",
            credential=AzureNamedKeyCredential(account_name, account_key),
        )

    @classmethod
    def from_default_credential(
        cls, account_name: str, backend: AzureBackend = "azure", **kwargs: Any
    ) -> AzureOptions:
        """Authenticate through ``DefaultAzureCredential`` (environment, CLI, identity...)."""
        from azure.identity import DefaultAzureCredential

        dfs_url, blob_url = account_urls(account_name, backend)
        return cls(
            backend=backend,
            account_dfs_url=dfs_url,
            account_blob_url=blob_url,
            credentials_kind="default_identity",
            credential=DefaultAzureCredential(**kwargs),
        )

    @classmethod
    def from_managed_identity(
        cls, account_name: str, client_id: str | None = None, backend: AzureBackend = "azure"
    ) -> AzureOptions:
        """Authenticate with a system- or user-assigned managed identity."""
        from azure.identity import ManagedIdentityCredential

        dfs_url, blob_url = account_urls(account_name, backend)
        return cls(
            backend=backend,
            account_dfs_url=dfs_url,
            account_blob_url=blob_url,
            credentials_kind="managed_identity",
            credential=ManagedIdentityCredential(client_id=client_id),
        )

    @classmethod
    def from_service_principal(
        cls,
        account_name: str,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        backend: AzureBackend = "azure",
    ) -> AzureOptions:
        """Authenticate as an Entra ID application with a client secret."""
        from azure.identity import ClientSecretCredential

        dfs_url, blob_url = account_urls(account_name, backend)
        return cls(
            backend=backend,
            account_dfs_url=dfs_url,
            account_blob_url=blob_url,
            credentials_kind="service_principal",
            credential=ClientSecretCredential(tenant_id, client_id, client_secret),
        )

    def _key(self) -> tuple[str, str, str | None]:
        return (self.account_dfs_url, self.account_blob_url, self.credentials_kind)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AzureOptions):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())
