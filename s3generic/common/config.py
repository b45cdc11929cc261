from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_FILE = Path(".env")

ADDRESSING_STYLES: tuple[str, ...] = ("path", "virtual", "auto")
LOG_FORMATS: tuple[str, ...] = ("json", "plain")


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y", "on"}


def _as_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    STORAGE_BACKEND: str = "s3"
    S3_ENDPOINT_URL: str | None = None
    S3_REGION: str = "us-east-1"
    S3_ACCESS_KEY_ID: str | None = None
    S3_SECRET_ACCESS_KEY: str | None = None
    S3_BUCKET: str | None = None
    S3_BASE_URL: str = ""
    S3_LOCATION: str = ""
    S3_ADDRESSING_STYLE: str = "path"
    S3_USE_SSL: bool = True
    ENABLE_METRICS: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    def __post_init__(self) -> None:
        if self.S3_ADDRESSING_STYLE.strip().lower() not in ADDRESSING_STYLES:
            raise ValueError(
                "S3_ADDRESSING_STYLE must be one of: " + ", ".join(ADDRESSING_STYLES)
            )
        if self.LOG_FORMAT.strip().lower() not in LOG_FORMATS:
            raise ValueError("LOG_FORMAT must be one of: " + ", ".join(LOG_FORMATS))

    @classmethod
    def from_environment(cls) -> "Settings":
        _load_env_file()
        return cls(
            STORAGE_BACKEND=os.environ.get("STORAGE_BACKEND", cls.STORAGE_BACKEND),
            S3_ENDPOINT_URL=_as_optional(os.environ.get("S3_ENDPOINT_URL")),
            S3_REGION=os.environ.get("S3_REGION", cls.S3_REGION),
            S3_ACCESS_KEY_ID=_as_optional(os.environ.get("S3_ACCESS_KEY_ID")),
            S3_SECRET_ACCESS_KEY=_as_optional(os.environ.get("S3_SECRET_ACCESS_KEY")),
            S3_BUCKET=_as_optional(os.environ.get("S3_BUCKET")),
            S3_BASE_URL=os.environ.get("S3_BASE_URL", cls.S3_BASE_URL),
            S3_LOCATION=os.environ.get("S3_LOCATION", cls.S3_LOCATION),
            S3_ADDRESSING_STYLE=os.environ.get(
                "S3_ADDRESSING_STYLE", cls.S3_ADDRESSING_STYLE
            ),
            S3_USE_SSL=_as_bool(os.environ.get("S3_USE_SSL"), cls.S3_USE_SSL),
            ENABLE_METRICS=_as_bool(
                os.environ.get("ENABLE_METRICS"), cls.ENABLE_METRICS
            ),
            LOG_LEVEL=os.environ.get("LOG_LEVEL", cls.LOG_LEVEL).upper(),
            LOG_FORMAT=os.environ.get("LOG_FORMAT", cls.LOG_FORMAT).lower(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
