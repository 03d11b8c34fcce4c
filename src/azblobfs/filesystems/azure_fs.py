"""Azure Blob Storage filesystem with UPath integration (requires azure-storage-blob)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, NoReturn

from azure.storage.blob import BlobServiceClient
from upath import UPath

from azblobfs.configs.options import AzureOptions
from azblobfs.exceptions import (
    NOT_IMPLEMENTED_MSG,
    FSNotImplementedError,
    NotAFileError,
    PathNotFoundError,
    validate_file_address,
)
from azblobfs.filesystems.base import BaseFileSystem, BlobInputFile, FileInfo, IOContext
from azblobfs.filesystems.blob_store import AzureBlobReader
from azblobfs.paths import SEP, BlobAddress


if TYPE_CHECKING:
    from collections.abc import Mapping


logger = logging.getLogger(__name__)


class AzureBlobPath(UPath):
    """UPath for blobs served by AzureBlobFileSystem."""

    __slots__ = ()

    def open_input_file(self) -> BlobInputFile:
        """Open this blob for random-access reading."""
        return self.fs.open_input_file(self.path)


class AzureBlobFileSystem(BaseFileSystem[AzureBlobPath]):
    """Read-only filesystem over the containers and blobs of one storage account.

    Paths have the form ``container/dir/blob``. Only reading is supported;
    listing and every mutating operation raise FSNotImplementedError.
    """

    protocol = "azblob"
    root_marker = ""
    cachable = False
    upath_cls = AzureBlobPath
    type_name: ClassVar[str] = "azure"

    def __init__(
        self,
        options: AzureOptions | None = None,
        io_context: IOContext | None = None,
        service_client: Any = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the filesystem.

        Args:
            options: Account URLs and credential
            io_context: Execution settings shared with every opened file
            service_client: Pre-built client exposing ``get_blob_client(container, blob)``.
                Defaults to a BlobServiceClient for ``options.account_blob_url``.
            **kwargs: Additional filesystem options
        """
        super().__init__(**kwargs)
        self.options = options or AzureOptions()
        self.io_context = io_context or IOContext()
        if service_client is None:
            if not self.options.account_blob_url:
                msg = "AzureOptions must define an account blob URL"
                raise ValueError(msg)
            service_client = BlobServiceClient(
                account_url=self.options.account_blob_url,
                credential=self.options.credential,
            )
        self.service_client = service_client

    def _make_reader(self, address: BlobAddress) -> AzureBlobReader:
        client = self.service_client.get_blob_client(address.container, address.relative_path)
        return AzureBlobReader(client)

    def _open_address(self, address: BlobAddress, size: int | None = None) -> BlobInputFile:
        validate_file_address(address)
        logger.debug("Opening %s (size=%s)", address.full_path, size)
        f = BlobInputFile(self._make_reader(address), self.io_context, address, size=size)
        try:
            f.init()
        except BaseException:
            f.close()
            raise
        return f

    def open_input_file(self, path: str | FileInfo | Mapping[str, Any]) -> BlobInputFile:
        """Open a blob for random-access reading.

        Args:
            path: Path string, or an info record from a listing. The record's
                size, if present and non-negative, saves a property fetch.

        Returns:
            A file whose size is already known

        Raises:
            InvalidPathError: If the path cannot be parsed
            PathNotFoundError: If the container or blob does not exist
            NotAFileError: If the path denotes a container or directory
            StorageIOError: If the store reports any other failure
        """
        if isinstance(path, str):
            if path.endswith(SEP):
                raise NotAFileError(path)
            return self._open_address(BlobAddress.from_string(path))
        name = path["name"]
        if name.endswith(SEP):
            raise NotAFileError(name)
        match path.get("type"):
            case "not_found":
                raise PathNotFoundError(name)
            case "file" | "unknown" | None:
                pass
            case _:
                raise NotAFileError(name)
        size = path.get("size")
        # Listings report -1 when the size is unknown
        if size is not None and size < 0:
            size = None
        return self._open_address(BlobAddress.from_string(name), size=size)

    open_input_stream = open_input_file

    def _open(
        self,
        path: str,
        mode: str = "rb",
        block_size: int | None = None,
        autocommit: bool = True,
        cache_options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> BlobInputFile:
        if mode != "rb":
            self._not_implemented(f"open(mode={mode!r})")
        return self.open_input_file(path)

    def _not_implemented(self, operation: str) -> NoReturn:
        logger.debug("Unsupported operation requested: %s", operation)
        msg = f"{operation}: {NOT_IMPLEMENTED_MSG}"
        raise FSNotImplementedError(msg)

    def get_file_info(self, path: str | list[str], **kwargs: Any) -> NoReturn:
        self._not_implemented("get_file_info")

    def info(self, path: str, **kwargs: Any) -> NoReturn:
        self._not_implemented("info")

    def ls(self, path: str, detail: bool = True, **kwargs: Any) -> NoReturn:
        self._not_implemented("ls")

    def mkdir(self, path: str, create_parents: bool = True, **kwargs: Any) -> NoReturn:
        self._not_implemented("mkdir")

    def makedirs(self, path: str, exist_ok: bool = False) -> NoReturn:
        self._not_implemented("makedirs")

    def rmdir(self, path: str) -> NoReturn:
        self._not_implemented("rmdir")

    def delete_dir_contents(self, path: str, missing_dir_ok: bool = False) -> NoReturn:
        self._not_implemented("delete_dir_contents")

    def delete_root_dir_contents(self) -> NoReturn:
        self._not_implemented("delete_root_dir_contents")

    def rm_file(self, path: str) -> NoReturn:
        self._not_implemented("rm_file")

    def mv(self, path1: str, path2: str, **kwargs: Any) -> NoReturn:
        self._not_implemented("mv")

    def cp_file(self, path1: str, path2: str, **kwargs: Any) -> NoReturn:
        self._not_implemented("cp_file")

    def pipe_file(self, path: str, value: bytes, **kwargs: Any) -> NoReturn:
        self._not_implemented("pipe_file")

    def open_output_stream(self, path: str, metadata: Mapping[str, str] | None = None) -> NoReturn:
        self._not_implemented("open_output_stream")

    def open_append_stream(self, path: str, metadata: Mapping[str, str] | None = None) -> NoReturn:
        self._not_implemented("open_append_stream")

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if getattr(other, "type_name", None) != self.type_name:
            return False
        return isinstance(other, AzureBlobFileSystem) and self.options == other.options

    def __hash__(self) -> int:
        return hash((self.type_name, self.options))
