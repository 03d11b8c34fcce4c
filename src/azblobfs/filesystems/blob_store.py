"""The two store capabilities a readable blob handle needs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:
    from collections.abc import Mapping

    from azure.storage.blob import BlobClient


@dataclass(frozen=True)
class BlobProperties:
    """Size and user metadata of a blob."""

    size: int
    metadata: Mapping[str, str] = field(default_factory=dict)


class BlobReader(Protocol):
    """Property fetch and ranged download for a single blob."""

    @property
    def url(self) -> str: ...

    def get_properties(self, *, timeout: float | None = None) -> BlobProperties: ...

    def download_range(
        self, offset: int, length: int, *, timeout: float | None = None
    ) -> bytes: ...


class AzureBlobReader:
    """BlobReader backed by an ``azure.storage.blob.BlobClient``."""

    def __init__(self, client: BlobClient) -> None:
        self.client = client

    @property
    def url(self) -> str:
        return self.client.url

    def get_properties(self, *, timeout: float | None = None) -> BlobProperties:
        kwargs = {} if timeout is None else {"timeout": timeout}
        props = self.client.get_blob_properties(**kwargs)
        return BlobProperties(size=props.size, metadata=dict(props.metadata or {}))

    def download_range(self, offset: int, length: int, *, timeout: float | None = None) -> bytes:
        """Download ``[offset, offset + length)``. The store may return fewer bytes."""
        kwargs = {} if timeout is None else {"timeout": timeout}
        return self.client.download_blob(offset=offset, length=length, **kwargs).readall()

    def __repr__(self) -> str:
        return f"AzureBlobReader({self.url!r})"
