"""S3-compatible storage client implementation.

This module provides an S3-compatible storage client that works with
AWS S3, MinIO, and other S3-compatible object storage services.

Dependencies:
    - boto3
    - botocore
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from s3generic.infra.storage.client import (
    NO_SUCH_KEY,
    ObjectBody,
    ObjectHead,
    ObjectNotFoundError,
    StorageError,
)

if TYPE_CHECKING:
    from s3generic.common.config import Settings

logger = logging.getLogger(__name__)

# HEAD responses carry no body, so botocore reports a bare status code there.
NOT_FOUND_CODES = frozenset({NO_SUCH_KEY, "NotFound", "404"})


def error_code(exc: BaseException) -> str | None:
    """Extract the backend error code from a botocore ``ClientError``."""
    response = getattr(exc, "response", None)
    if not isinstance(response, dict):
        return None
    code = response.get("Error", {}).get("Code")
    return str(code) if code is not None else None


class S3StorageClient:
    """S3-compatible object storage client.

    Supports AWS S3, MinIO, and other S3-compatible services.
    Uses boto3 for all storage operations.
    """

    def __init__(
        self,
        *,
        endpoint_url: str | None,
        access_key_id: str | None,
        secret_access_key: str | None,
        region: str = "us-east-1",
        addressing_style: str = "path",
        use_ssl: bool = True,
    ) -> None:
        """Initialize the S3 client.

        Raises:
            StorageError: If boto3 is not installed or the client cannot be built.
        """
        self._endpoint_url = endpoint_url
        self._client = self._build_client(
            endpoint_url=endpoint_url,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            region=region,
            addressing_style=addressing_style,
            use_ssl=use_ssl,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "S3StorageClient":
        return cls(
            endpoint_url=settings.S3_ENDPOINT_URL,
            access_key_id=settings.S3_ACCESS_KEY_ID,
            secret_access_key=settings.S3_SECRET_ACCESS_KEY,
            region=settings.S3_REGION,
            addressing_style=settings.S3_ADDRESSING_STYLE,
            use_ssl=settings.S3_USE_SSL,
        )

    @staticmethod
    def _build_client(
        *,
        endpoint_url: str | None,
        access_key_id: str | None,
        secret_access_key: str | None,
        region: str,
        addressing_style: str,
        use_ssl: bool,
    ) -> Any:
        """Create a boto3 S3 client with static credentials."""
        try:
            import boto3
            from botocore.config import Config
        except ImportError as exc:
            raise StorageError(
                "boto3 and botocore are required for S3 storage backend. "
                "Install with: pip install boto3"
            ) from exc

        style = (addressing_style or "path").strip().lower()
        config = Config(s3={"addressing_style": style})

        try:
            return boto3.client(
                "s3",
                endpoint_url=endpoint_url or None,
                region_name=region,
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
                use_ssl=bool(use_ssl),
                config=config,
            )
        except Exception as exc:
            logger.error(
                "s3_client_init_failed endpoint=%s error=%s",
                endpoint_url or "-",
                exc,
                extra={"extra": {"endpoint": endpoint_url, "error": repr(exc)}},
            )
            raise StorageError(f"Failed to create S3 client: {exc}") from exc

    @staticmethod
    def _translate(exc: Exception, action: str) -> StorageError:
        code = error_code(exc)
        if code in NOT_FOUND_CODES:
            return ObjectNotFoundError(f"Failed to {action} object: {exc}")
        return StorageError(f"Failed to {action} object: {exc}", code=code)

    def put_object(
        self,
        *,
        bucket: str,
        object_key: str,
        body: bytes,
        content_type: str | None = None,
    ) -> None:
        """Create or overwrite an object."""
        params: dict[str, Any] = {"Bucket": bucket, "Key": object_key, "Body": body}
        if content_type:
            params["ContentType"] = content_type

        try:
            self._client.put_object(**params)
        except Exception as exc:
            raise self._translate(exc, "upload") from exc

    def get_object(self, *, bucket: str, object_key: str) -> ObjectBody:
        """Retrieve an object with its streaming body."""
        try:
            response = self._client.get_object(Bucket=bucket, Key=object_key)
        except Exception as exc:
            raise self._translate(exc, "get") from exc

        body = response.get("Body")
        if body is None:
            raise StorageError("S3 response missing Body")

        size = response.get("ContentLength")
        return ObjectBody(
            stream=body,
            size_bytes=int(size) if size is not None else 0,
            last_modified=response.get("LastModified"),
            etag=response.get("ETag"),
            content_type=response.get("ContentType"),
        )

    def head_object(self, *, bucket: str, object_key: str) -> ObjectHead:
        """Get object metadata without downloading the content."""
        try:
            response = self._client.head_object(Bucket=bucket, Key=object_key)
        except Exception as exc:
            raise self._translate(exc, "get metadata for") from exc

        size = response.get("ContentLength")
        return ObjectHead(
            size_bytes=int(size) if size is not None else 0,
            last_modified=response.get("LastModified"),
            etag=response.get("ETag"),
            content_type=response.get("ContentType"),
        )

    def delete_object(self, *, bucket: str, object_key: str) -> None:
        """Delete an object from storage."""
        try:
            self._client.delete_object(Bucket=bucket, Key=object_key)
        except Exception as exc:
            raise self._translate(exc, "delete") from exc
