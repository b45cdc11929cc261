"""File handles exchanged with the storage adapter."""

from __future__ import annotations

import io
from datetime import datetime
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class File(Protocol):
    """Readable, closable content with a known size."""

    @property
    def size(self) -> int: ...

    def read(self, size: int = -1) -> bytes: ...

    def read_all(self) -> bytes: ...

    def close(self) -> None: ...


class ContentFile:
    """In-memory file built from bytes, typically passed to ``save``."""

    def __init__(self, content: bytes | str) -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._content = bytes(content)
        self._buffer = io.BytesIO(self._content)

    @property
    def size(self) -> int:
        return len(self._content)

    @property
    def closed(self) -> bool:
        return self._buffer.closed

    def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)

    def read_all(self) -> bytes:
        return self._buffer.read()

    def close(self) -> None:
        self._buffer.close()

    def __enter__(self) -> "ContentFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ObjectFile:
    """Stream over a retrieved object's body.

    The caller owns the handle and must close it to release the underlying
    connection; use it as a context manager where possible.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        size: int,
        last_modified: datetime | None = None,
        content_type: str | None = None,
    ) -> None:
        self._stream = stream
        self._size = int(size)
        self._closed = False
        self.last_modified = last_modified
        self.content_type = content_type

    @property
    def size(self) -> int:
        return self._size

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, size: int = -1) -> bytes:
        if self._closed:
            raise ValueError("I/O operation on closed file")
        if size is None or size < 0:
            return self._stream.read()
        return self._stream.read(size)

    def read_all(self) -> bytes:
        return self.read()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stream.close()

    def __enter__(self) -> "ObjectFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ObjectFile(size={self._size}, closed={self._closed})"
