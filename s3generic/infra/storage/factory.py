from __future__ import annotations

from s3generic.common.config import Settings, get_settings
from s3generic.infra.storage.base import Storage
from s3generic.infra.storage.client import ObjectStoreClient
from s3generic.infra.storage.s3_generic import S3GenericStorage


class StorageBackendNotConfiguredError(Exception):
    """Raised when the storage backend is not properly configured."""


def build_storage(
    settings: Settings | None = None, *, client: ObjectStoreClient | None = None
) -> Storage:
    """Build the storage backend selected by configuration."""
    settings = settings or get_settings()
    backend = (settings.STORAGE_BACKEND or "").strip().lower()
    if backend != "s3":
        raise StorageBackendNotConfiguredError(
            f"Unsupported storage backend: {backend}. Only 's3' is supported."
        )
    if not settings.S3_BUCKET:
        raise StorageBackendNotConfiguredError("S3_BUCKET is required")
    if client is None and (
        not settings.S3_ACCESS_KEY_ID or not settings.S3_SECRET_ACCESS_KEY
    ):
        raise StorageBackendNotConfiguredError(
            "S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY are required"
        )
    return S3GenericStorage.from_settings(settings, client=client)
