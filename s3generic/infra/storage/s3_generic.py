"""Generic storage adapter backed by an S3-compatible object store.

All keys are resolved through ``S3GenericStorage.path`` so reads, writes and
deletes addressing the same relative path agree on one backend key.

Missing keys are the only failure ``exists`` and ``size`` absorb; any other
backend error (permissions, connectivity) propagates as ``StorageError``.
"""

from __future__ import annotations

import logging
import mimetypes
import posixpath
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING, Iterator

from botocore.exceptions import ClientError

from s3generic.infra.observability.metrics import OperationOutcome, track_operation
from s3generic.infra.storage.client import (
    NO_SUCH_KEY,
    ObjectNotFoundError,
    ObjectStoreClient,
    StorageError,
)
from s3generic.infra.storage.files import File, ObjectFile
from s3generic.infra.storage.s3_client import S3StorageClient, error_code

if TYPE_CHECKING:
    from s3generic.common.config import Settings

logger = logging.getLogger(__name__)


def join_key(*elements: str) -> str:
    """Join path elements with "/" and clean the result.

    Empty elements are skipped, duplicate separators collapse, ``.`` and
    ``..`` are resolved lexically. Returns "" when every element is empty.
    """
    joined = "/".join(element for element in elements if element)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    # POSIX keeps exactly two leading slashes; keys never should.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


class S3GenericStorage:
    """``Storage`` implementation for S3, MinIO and other S3-compatible stores."""

    def __init__(
        self,
        endpoint: str | None,
        access_key: str | None,
        secret_key: str | None,
        bucket: str,
        base_url: str = "",
        location: str = "",
        *,
        region: str = "us-east-1",
        addressing_style: str = "path",
        use_ssl: bool = True,
        metrics_enabled: bool = True,
        client: ObjectStoreClient | None = None,
    ) -> None:
        self._bucket = bucket
        self._base_url = base_url or ""
        self._location = location or ""
        self._metrics_enabled = metrics_enabled
        self._client = client or S3StorageClient(
            endpoint_url=endpoint,
            access_key_id=access_key,
            secret_access_key=secret_key,
            region=region,
            addressing_style=addressing_style,
            use_ssl=use_ssl,
        )

    @classmethod
    def from_settings(
        cls, settings: "Settings", *, client: ObjectStoreClient | None = None
    ) -> "S3GenericStorage":
        return cls(
            settings.S3_ENDPOINT_URL,
            settings.S3_ACCESS_KEY_ID,
            settings.S3_SECRET_ACCESS_KEY,
            settings.S3_BUCKET or "",
            base_url=settings.S3_BASE_URL,
            location=settings.S3_LOCATION,
            region=settings.S3_REGION,
            addressing_style=settings.S3_ADDRESSING_STYLE,
            use_ssl=settings.S3_USE_SSL,
            metrics_enabled=settings.ENABLE_METRICS,
            client=client,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def location(self) -> str:
        return self._location

    @contextmanager
    def _operation(self, name: str, key: str) -> Iterator[OperationOutcome]:
        logger.debug("storage_%s bucket=%s key=%s", name, self._bucket, key)
        with track_operation(name, enabled=self._metrics_enabled) as outcome:
            try:
                yield outcome
            except StorageError as exc:
                level = logging.WARNING
                if self.is_not_exist(exc):
                    outcome.value = "not_found"
                    level = logging.DEBUG
                logger.log(
                    level,
                    "storage_%s_failed bucket=%s key=%s error=%s",
                    name,
                    self._bucket,
                    key,
                    exc,
                    extra={
                        "extra": {
                            "operation": name,
                            "bucket": self._bucket,
                            "key": key,
                            "code": exc.code,
                        }
                    },
                )
                raise

    def save(self, path: str, file: File) -> None:
        key = self.path(path)
        content = file.read_all()
        content_type, _ = mimetypes.guess_type(key)
        with self._operation("save", key):
            self._client.put_object(
                bucket=self._bucket,
                object_key=key,
                body=content,
                content_type=content_type,
            )

    def path(self, path: str) -> str:
        return join_key(self._location, path)

    def exists(self, path: str) -> bool:
        key = self.path(path)
        with self._operation("exists", key) as outcome:
            try:
                self._client.head_object(bucket=self._bucket, object_key=key)
            except ObjectNotFoundError:
                outcome.value = "not_found"
                return False
        return True

    def delete(self, path: str) -> None:
        key = self.path(path)
        with self._operation("delete", key):
            self._client.delete_object(bucket=self._bucket, object_key=key)

    def open(self, path: str) -> ObjectFile:
        key = self.path(path)
        with self._operation("open", key):
            body = self._client.get_object(bucket=self._bucket, object_key=key)
        return ObjectFile(
            body.stream,
            size=body.size_bytes,
            last_modified=body.last_modified,
            content_type=body.content_type,
        )

    def modified_time(self, path: str) -> datetime:
        key = self.path(path)
        with self._operation("modified_time", key):
            head = self._client.head_object(bucket=self._bucket, object_key=key)
            if head.last_modified is None:
                raise StorageError("S3 response missing LastModified")
        return head.last_modified

    def size(self, path: str) -> int:
        """Return the object's size, or 0 if it does not exist.

        A missing key and an empty object both yield 0; call ``exists`` to
        tell them apart.
        """
        key = self.path(path)
        with self._operation("size", key) as outcome:
            try:
                head = self._client.head_object(bucket=self._bucket, object_key=key)
            except ObjectNotFoundError:
                outcome.value = "not_found"
                return 0
        return head.size_bytes

    def url(self, path: str) -> str:
        if self.has_base_url():
            return "/".join([self._base_url, self.path(path)])
        return ""

    def has_base_url(self) -> bool:
        return self._base_url != ""

    def is_not_exist(self, error: BaseException | None) -> bool:
        if error is None:
            return False
        if isinstance(error, StorageError):
            return error.code == NO_SUCH_KEY
        if isinstance(error, ClientError):
            return error_code(error) == NO_SUCH_KEY
        return False

    def __repr__(self) -> str:
        return (
            f"S3GenericStorage(bucket={self._bucket!r}, location={self._location!r}, "
            f"base_url={self._base_url!r})"
        )
