#!/usr/bin/env python3
"""Round-trip a probe object through the configured storage backend.

Usage:
  .venv/bin/python scripts/storage_probe.py
  .venv/bin/python scripts/storage_probe.py --key healthchecks/probe.txt --keep

Writes the payload, checks exists/size/open/modified time, then deletes it
and confirms it is gone. Exits non-zero on the first failed check.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime

from prometheus_client import generate_latest

from s3generic.common.config import get_settings
from s3generic.common.logging import setup_logging
from s3generic.infra.storage import (
    ContentFile,
    Storage,
    StorageBackendNotConfiguredError,
    StorageError,
    build_storage,
)

logger = logging.getLogger("storage_probe")

DEFAULT_KEY = ".probe/storage_probe.txt"
DEFAULT_PAYLOAD = "s3generic probe"


class ProbeFailure(Exception):
    """Raised when the storage backend does not behave as expected."""


@dataclass
class ProbeResult:
    key: str
    size: int
    modified_time: datetime
    url: str
    deleted: bool
    checks: list[str] = field(default_factory=list)


def probe_storage(
    storage: Storage, *, path: str = DEFAULT_KEY, payload: bytes, keep: bool = False
) -> ProbeResult:
    checks: list[str] = []
    storage.save(path, ContentFile(payload))
    checks.append("save")

    if not storage.exists(path):
        raise ProbeFailure(f"{path} missing right after save")
    checks.append("exists")

    size = storage.size(path)
    if size != len(payload):
        raise ProbeFailure(f"size mismatch: expected {len(payload)}, got {size}")
    checks.append("size")

    with storage.open(path) as handle:
        content = handle.read_all()
    if content != payload:
        raise ProbeFailure("content read back differs from payload")
    checks.append("open")

    modified = storage.modified_time(path)
    checks.append("modified_time")

    deleted = False
    if not keep:
        storage.delete(path)
        if storage.exists(path):
            raise ProbeFailure(f"{path} still present after delete")
        deleted = True
        checks.append("delete")

    return ProbeResult(
        key=storage.path(path),
        size=size,
        modified_time=modified,
        url=storage.url(path),
        deleted=deleted,
        checks=checks,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Probe the configured object storage")
    parser.add_argument(
        "--key",
        default=DEFAULT_KEY,
        help=f"Relative path of the probe object (default: {DEFAULT_KEY})",
    )
    parser.add_argument(
        "--payload",
        default=DEFAULT_PAYLOAD,
        help="Text content written to the probe object",
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Leave the probe object in place instead of deleting it",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Print storage metrics in Prometheus text format when done",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings)
    try:
        storage = build_storage(settings)
        result = probe_storage(
            storage, path=args.key, payload=args.payload.encode("utf-8"), keep=args.keep
        )
    except (ProbeFailure, StorageBackendNotConfiguredError, StorageError) as exc:
        logger.error("probe_failed error=%s", exc)
        print(f"FAILED: {exc}")
        return 1

    print(f"OK key={result.key} size={result.size} modified={result.modified_time.isoformat()}")
    print(f"checks: {', '.join(result.checks)}")
    if result.url:
        print(f"url: {result.url}")
    if args.metrics:
        print(generate_latest().decode("utf-8"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
