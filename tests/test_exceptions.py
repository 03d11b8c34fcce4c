"""Tests for the error taxonomy and store error mapping."""

from __future__ import annotations

from azure.core.exceptions import HttpResponseError, ResourceNotFoundError, ServiceRequestError
import pytest

from azblobfs.exceptions import (
    AzureFSError,
    FSNotImplementedError,
    InvalidArgumentError,
    InvalidPathError,
    NotAFileError,
    PathNotFoundError,
    StorageIOError,
    is_not_found,
    map_store_error,
    validate_file_address,
)
from azblobfs.paths import BlobAddress


ADDRESS = BlobAddress.from_string("container/dir/blob.txt")


class TestMapStoreError:
    """Store exceptions map onto filesystem errors."""

    def test_not_found_maps_to_path_not_found(self):
        err = map_store_error("When reading:", ResourceNotFoundError("gone"), ADDRESS)
        assert isinstance(err, PathNotFoundError)
        assert err.path == "container/dir/blob.txt"
        assert "container/dir/blob.txt" in str(err)

    def test_404_status_maps_to_path_not_found(self):
        exc = HttpResponseError("missing")
        exc.status_code = 404
        assert is_not_found(exc)
        assert isinstance(map_store_error("ctx:", exc, ADDRESS), PathNotFoundError)

    def test_other_errors_keep_store_message(self):
        err = map_store_error("When reading from 'x':", HttpResponseError("Server busy"), ADDRESS)
        assert isinstance(err, StorageIOError)
        assert str(err).startswith("When reading from 'x':")
        assert "Azure Error: Server busy" in str(err)

    def test_connection_errors_are_io_errors(self):
        err = map_store_error("ctx:", ServiceRequestError("connection refused"), ADDRESS)
        assert isinstance(err, StorageIOError)
        assert "connection refused" in str(err)


class TestValidateFileAddress:
    """Local checks that run before any store access."""

    def test_empty_container_is_not_found(self):
        with pytest.raises(PathNotFoundError):
            validate_file_address(BlobAddress.from_string(""))

    def test_container_only_is_not_a_file(self):
        with pytest.raises(NotAFileError) as exc_info:
            validate_file_address(BlobAddress.from_string("container"))
        assert exc_info.value.path == "container"

    def test_blob_address_is_valid(self):
        validate_file_address(ADDRESS)


@pytest.mark.parametrize(
    ("error_cls", "builtin"),
    [
        (InvalidArgumentError, ValueError),
        (InvalidPathError, ValueError),
        (PathNotFoundError, FileNotFoundError),
        (NotAFileError, IsADirectoryError),
        (StorageIOError, OSError),
        (FSNotImplementedError, NotImplementedError),
    ],
)
def test_errors_extend_builtins(error_cls: type[Exception], builtin: type[Exception]):
    assert issubclass(error_cls, AzureFSError)
    assert issubclass(error_cls, builtin)
