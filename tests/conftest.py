from __future__ import annotations

import os

import pytest

from s3generic.common import config
from s3generic.common.config import get_settings

SETTINGS_ENV_PREFIXES = ("S3_", "STORAGE_", "LOG_", "ENABLE_METRICS")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep host environment and any local .env file out of every test."""
    for name in list(os.environ):
        if name.startswith(SETTINGS_ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "ENV_FILE", tmp_path / ".env")
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]
