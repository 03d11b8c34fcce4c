"""Base File objects."""

from __future__ import annotations

from dataclasses import dataclass
import io
import logging
from typing import TYPE_CHECKING, Literal, NotRequired, Required, TypedDict

from azure.core.exceptions import AzureError

from azblobfs.exceptions import InvalidArgumentError, StorageIOError, map_store_error
from azblobfs.filesystems.blob_store import BlobProperties


if TYPE_CHECKING:
    from collections.abc import Buffer, Mapping

    from azblobfs.filesystems.blob_store import BlobReader
    from azblobfs.paths import BlobAddress


logger = logging.getLogger(__name__)

FileType = Literal["file", "directory", "not_found", "unknown"]


class FileInfo(TypedDict):
    """Info dict describing a path, as returned by a listing."""

    name: Required[str]
    type: Required[FileType]
    size: NotRequired[int | None]


@dataclass(frozen=True)
class IOContext:
    """Execution settings shared by a filesystem and the files it opens."""

    timeout: float | None = None
    """Per-request timeout in seconds passed to the store client."""


class BlobInputFile(io.RawIOBase):
    """Random-access read-only view of one blob.

    Size and metadata are fetched once by `init` (skipped when the size is
    already known) and never re-checked. Reads are clamped to the known size
    and served by ranged downloads. A second `close` is a no-op.
    """

    def __init__(
        self,
        reader: BlobReader,
        io_context: IOContext,
        address: BlobAddress,
        size: int | None = None,
    ) -> None:
        """Initialize the file.

        Args:
            reader: Store client for the blob, owned by this file until closed
            io_context: Execution settings borrowed from the filesystem
            address: Address of the blob
            size: Known blob size, e.g. from a listing. Skips the property fetch.
        """
        super().__init__()
        self._reader: BlobReader | None = reader
        self.io_context = io_context
        self.address = address
        self._pos = 0
        self._properties: BlobProperties | None = None
        if size is not None:
            if size < 0:
                msg = f"Blob size cannot be negative, got {size}"
                raise InvalidArgumentError(msg)
            self._properties = BlobProperties(size=size)

    def init(self) -> None:
        """Resolve size and metadata unless they are already known."""
        if self._properties is not None:
            return
        reader = self._get_reader("fetch properties")
        logger.debug("Fetching properties for %s", reader.url)
        try:
            self._properties = reader.get_properties(timeout=self.io_context.timeout)
        except AzureError as e:
            # A missing container is reported the same way as a missing blob.
            prefix = f"When fetching properties for '{reader.url}':"
            raise map_store_error(prefix, e, self.address) from e

    @property
    def content_length(self) -> int:
        if self._properties is None:
            msg = f"Size of '{self.address}' has not been resolved, call init() first"
            raise InvalidArgumentError(msg)
        return self._properties.size

    def _get_reader(self, action: str) -> BlobReader:
        if self._reader is None:
            msg = f"Cannot {action} on closed file."
            raise InvalidArgumentError(msg)
        return self._reader

    def _check_closed(self, action: str) -> None:
        self._get_reader(action)

    def _check_position(self, position: int, action: str) -> None:
        if position < 0:
            msg = f"Cannot {action} from negative position"
            raise InvalidArgumentError(msg)
        if position > self.content_length:
            msg = f"Cannot {action} past end of file"
            raise StorageIOError(msg)

    def read_metadata(self) -> Mapping[str, str]:
        """User metadata captured by the property fetch."""
        return {} if self._properties is None else dict(self._properties.metadata)

    async def read_metadata_async(self) -> Mapping[str, str]:
        """Same as `read_metadata`; the value is cached so nothing is awaited."""
        return self.read_metadata()

    def close(self) -> None:
        """Release the store client. Closing twice does nothing."""
        if self.closed:
            return
        self._reader = None
        super().close()

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        self._check_closed("tell")
        return self._pos

    def size(self) -> int:
        self._check_closed("size")
        return self.content_length

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_closed("seek")
        match whence:
            case io.SEEK_SET:
                position = offset
            case io.SEEK_CUR:
                position = self._pos + offset
            case io.SEEK_END:
                position = self.content_length + offset
            case _:
                msg = f"Invalid whence ({whence})"
                raise InvalidArgumentError(msg)
        self._check_position(position, "seek")
        self._pos = position
        return self._pos

    def readinto_at(self, position: int, buffer: Buffer) -> int:
        """Read up to ``len(buffer)`` bytes starting at ``position`` into ``buffer``.

        The request is clamped to the end of the blob. The returned count is
        what the store delivered, which may be less than requested.

        Args:
            position: Absolute offset to read from
            buffer: Writable buffer to fill

        Returns:
            Number of bytes written into ``buffer``
        """
        reader = self._get_reader("read")
        self._check_position(position, "read")
        with memoryview(buffer) as raw, raw.cast("B") as view:
            nbytes = min(len(view), self.content_length - position)
            if nbytes == 0:
                return 0
            logger.debug("Reading %d bytes at %d from %s", nbytes, position, reader.url)
            try:
                data = reader.download_range(position, nbytes, timeout=self.io_context.timeout)
            except AzureError as e:
                prefix = (
                    f"When reading from '{reader.url}' at position {position} for {nbytes} bytes:"
                )
                raise map_store_error(prefix, e, self.address) from e
            # The store's content range is authoritative, not the requested length.
            view[: len(data)] = data
            return len(data)

    def read_at(self, position: int, nbytes: int) -> bytes:
        """Read up to ``nbytes`` bytes starting at ``position``.

        Args:
            position: Absolute offset to read from
            nbytes: Maximum number of bytes to read

        Returns:
            The bytes delivered, possibly fewer than requested
        """
        self._check_closed("read")
        self._check_position(position, "read")
        nbytes = min(nbytes, self.content_length - position)
        buffer = bytearray(max(nbytes, 0))
        if nbytes > 0:
            bytes_read = self.readinto_at(position, buffer)
            del buffer[bytes_read:]
        return bytes(buffer)

    def readinto(self, buffer: Buffer) -> int:
        bytes_read = self.readinto_at(self._pos, buffer)
        self._pos += bytes_read
        return bytes_read

    def read(self, size: int | None = -1) -> bytes:
        self._check_closed("read")
        if size is None or size < 0:
            size = self.content_length - self._pos
        data = self.read_at(self._pos, size)
        self._pos += len(data)
        return data

    def readall(self) -> bytes:
        return self.read(-1)

    def __repr__(self) -> str:
        return f"BlobInputFile({self.address.full_path!r})"
