"""Object storage abstraction layer.

This module provides a protocol-based file storage interface and its
implementation for S3, MinIO, and other S3-compatible services.
"""

from .base import Storage
from .client import (
    ObjectBody,
    ObjectHead,
    ObjectNotFoundError,
    ObjectStoreClient,
    StorageError,
)
from .factory import StorageBackendNotConfiguredError, build_storage
from .files import ContentFile, File, ObjectFile
from .s3_client import S3StorageClient
from .s3_generic import S3GenericStorage, join_key

__all__ = [
    "ContentFile",
    "File",
    "ObjectBody",
    "ObjectFile",
    "ObjectHead",
    "ObjectNotFoundError",
    "ObjectStoreClient",
    "S3GenericStorage",
    "S3StorageClient",
    "Storage",
    "StorageBackendNotConfiguredError",
    "StorageError",
    "build_storage",
    "join_key",
]
