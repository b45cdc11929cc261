"""Backing store protocol and data types.

This module defines the narrow interface the storage adapter needs from an
object store: put, get, head and delete by bucket and key.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Protocol

NO_SUCH_KEY = "NoSuchKey"


class StorageError(RuntimeError):
    """Raised when object storage operations fail."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class ObjectNotFoundError(StorageError):
    """Raised when the requested key does not exist in the bucket."""

    def __init__(self, message: str, *, code: str | None = NO_SUCH_KEY) -> None:
        super().__init__(message, code=code)


@dataclass(frozen=True, slots=True)
class ObjectHead:
    """Metadata from a HEAD object request."""

    size_bytes: int
    last_modified: datetime | None
    etag: str | None
    content_type: str | None


@dataclass(frozen=True, slots=True)
class ObjectBody:
    """Result of a GET object request.

    ``stream`` is the open response body; whoever receives it must close it.
    """

    stream: BinaryIO
    size_bytes: int
    last_modified: datetime | None
    etag: str | None
    content_type: str | None


class ObjectStoreClient(Protocol):
    """Protocol defining the interface for object storage backends.

    Implementations raise ``ObjectNotFoundError`` when the backend reports the
    key as absent and ``StorageError`` for every other failure.
    """

    def put_object(
        self,
        *,
        bucket: str,
        object_key: str,
        body: bytes,
        content_type: str | None = None,
    ) -> None:
        """Create or overwrite an object.

        Args:
            bucket: Target bucket name.
            object_key: Object key (path) in the bucket.
            body: Full object content.
            content_type: MIME type of the object.

        Raises:
            StorageError: If the upload fails.
        """
        ...

    def get_object(self, *, bucket: str, object_key: str) -> ObjectBody:
        """Retrieve an object with its streaming body.

        Raises:
            ObjectNotFoundError: If the key does not exist.
            StorageError: If the operation fails.
        """
        ...

    def head_object(self, *, bucket: str, object_key: str) -> ObjectHead:
        """Get object metadata without downloading the content.

        Raises:
            ObjectNotFoundError: If the key does not exist.
            StorageError: If the operation fails.
        """
        ...

    def delete_object(self, *, bucket: str, object_key: str) -> None:
        """Delete an object from storage.

        Raises:
            StorageError: If the operation fails.
        """
        ...
