from __future__ import annotations

import shutil
import socket
import subprocess
import time
from types import SimpleNamespace
from typing import Any

from azure.core.exceptions import ResourceNotFoundError
import pytest

from azblobfs.filesystems.blob_store import BlobProperties


AZURITE_ACCOUNT_NAME = "devstoreaccount1"
AZURITE_ACCOUNT_KEY = (
    "Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=="
)


class FakeReader:
    """In-memory BlobReader with optional short reads and injected failures."""

    def __init__(
        self,
        data: bytes = b"",
        metadata: dict[str, str] | None = None,
        *,
        max_chunk: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self.data = data
        self.metadata = metadata or {}
        self.max_chunk = max_chunk
        self.error = error
        self.calls: list[tuple[Any, ...]] = []

    @property
    def url(self) -> str:
        return "https://fake.blob.core.windows.net/container/blob"

    def get_properties(self, *, timeout: float | None = None) -> BlobProperties:
        self.calls.append(("properties", timeout))
        if self.error is not None:
            raise self.error
        return BlobProperties(size=len(self.data), metadata=dict(self.metadata))

    def download_range(self, offset: int, length: int, *, timeout: float | None = None) -> bytes:
        self.calls.append(("download", offset, length, timeout))
        if self.error is not None:
            raise self.error
        chunk = self.data[offset : offset + length]
        if self.max_chunk is not None:
            chunk = chunk[: self.max_chunk]
        return chunk


class FakeBlobClient:
    """Mimics the parts of ``azure.storage.blob.BlobClient`` used for reading."""

    def __init__(self, service: FakeServiceClient, container: str, blob: str) -> None:
        self.service = service
        self.container = container
        self.blob = blob

    @property
    def url(self) -> str:
        return f"https://fake.blob.core.windows.net/{self.container}/{self.blob}"

    def _lookup(self) -> tuple[bytes, dict[str, str]]:
        if self.service.error is not None:
            raise self.service.error
        blobs = self.service.containers.get(self.container)
        if blobs is None:
            msg = "The specified container does not exist."
            raise ResourceNotFoundError(msg)
        if self.blob not in blobs:
            msg = "The specified blob does not exist."
            raise ResourceNotFoundError(msg)
        return blobs[self.blob]

    def get_blob_properties(self, **kwargs: Any) -> SimpleNamespace:
        self.service.calls.append(("properties", self.container, self.blob, kwargs))
        data, metadata = self._lookup()
        return SimpleNamespace(size=len(data), metadata=dict(metadata))

    def download_blob(self, offset: int, length: int, **kwargs: Any) -> SimpleNamespace:
        self.service.calls.append(("download", self.container, self.blob, offset, length))
        data, _ = self._lookup()
        chunk = data[offset : offset + length]
        return SimpleNamespace(readall=lambda: chunk)


class FakeServiceClient:
    """Mimics ``BlobServiceClient.get_blob_client`` over an in-memory account."""

    def __init__(self) -> None:
        self.containers: dict[str, dict[str, tuple[bytes, dict[str, str]]]] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.error: Exception | None = None

    def add_blob(
        self, container: str, blob: str, data: bytes, metadata: dict[str, str] | None = None
    ) -> None:
        self.containers.setdefault(container, {})[blob] = (data, metadata or {})

    def get_blob_client(self, container: str, blob: str) -> FakeBlobClient:
        self.calls.append(("client", container, blob))
        return FakeBlobClient(self, container, blob)


@pytest.fixture
def make_reader() -> type[FakeReader]:
    """Factory for in-memory blob readers."""
    return FakeReader


@pytest.fixture
def service_client() -> FakeServiceClient:
    """Account with one container holding a couple of blobs."""
    client = FakeServiceClient()
    client.add_blob("container", "file.txt", b"Hello Azure!", {"origin": "test"})
    client.add_blob("container", "dir/nested.bin", bytes(range(32)))
    return client


def _wait_for_port(host: str, port: int, timeout: float) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            with socket.create_connection((host, port), timeout=0.5):
                return True
        except OSError:
            time.sleep(0.1)
    return False


@pytest.fixture(scope="session")
def azurite(tmp_path_factory: pytest.TempPathFactory):
    """Run the Azurite emulator for the duration of the test session."""
    exe_path = shutil.which("azurite")
    if exe_path is None:
        pytest.skip("Could not find Azurite emulator.")
    location = tmp_path_factory.mktemp("azurefs-test-")
    process = subprocess.Popen(  # noqa: S603
        [exe_path, "--silent", "--location", str(location), "--debug", str(location / "debug.log")],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    try:
        if not _wait_for_port("127.0.0.1", 10000, timeout=30):
            pytest.skip("Could not start Azurite emulator.")
        yield SimpleNamespace(account_name=AZURITE_ACCOUNT_NAME, account_key=AZURITE_ACCOUNT_KEY)
    finally:
        process.terminate()
        process.wait()
