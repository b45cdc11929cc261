"""Generic file storage interface.

Callers depend on ``Storage`` rather than a concrete backend. Keys passed to
every method are relative paths; the backend resolves them with ``path``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from s3generic.infra.storage.files import File


@runtime_checkable
class Storage(Protocol):
    def save(self, path: str, file: File) -> None:
        """Create or overwrite the file stored at ``path``."""
        ...

    def path(self, path: str) -> str:
        """Return the backend key ``path`` resolves to."""
        ...

    def exists(self, path: str) -> bool: ...

    def delete(self, path: str) -> None: ...

    def open(self, path: str) -> File:
        """Open ``path`` for reading. The caller must close the result."""
        ...

    def modified_time(self, path: str) -> datetime: ...

    def size(self, path: str) -> int:
        """Return the stored size in bytes, or 0 when ``path`` is absent."""
        ...

    def url(self, path: str) -> str:
        """Return a public URL for ``path``, or an empty string if none."""
        ...

    def is_not_exist(self, error: BaseException | None) -> bool:
        """Tell whether ``error`` means the file does not exist."""
        ...
