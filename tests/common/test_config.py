from __future__ import annotations

import os

import pytest

from s3generic.common import config
from s3generic.common.config import Settings, get_settings


def test_defaults():
    settings = Settings.from_environment()

    assert settings.STORAGE_BACKEND == "s3"
    assert settings.S3_ENDPOINT_URL is None
    assert settings.S3_REGION == "us-east-1"
    assert settings.S3_BUCKET is None
    assert settings.S3_BASE_URL == ""
    assert settings.S3_LOCATION == ""
    assert settings.S3_ADDRESSING_STYLE == "path"
    assert settings.S3_USE_SSL is True
    assert settings.ENABLE_METRICS is True
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FORMAT == "json"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("S3_ENDPOINT_URL", "http://minio:9000")
    monkeypatch.setenv("S3_ACCESS_KEY_ID", "ak")
    monkeypatch.setenv("S3_SECRET_ACCESS_KEY", "sk")
    monkeypatch.setenv("S3_BUCKET", "media-bucket")
    monkeypatch.setenv("S3_BASE_URL", "https://cdn.example.com")
    monkeypatch.setenv("S3_LOCATION", "uploads")
    monkeypatch.setenv("S3_USE_SSL", "no")
    monkeypatch.setenv("ENABLE_METRICS", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "PLAIN")

    settings = Settings.from_environment()

    assert settings.S3_ENDPOINT_URL == "http://minio:9000"
    assert settings.S3_ACCESS_KEY_ID == "ak"
    assert settings.S3_SECRET_ACCESS_KEY == "sk"
    assert settings.S3_BUCKET == "media-bucket"
    assert settings.S3_BASE_URL == "https://cdn.example.com"
    assert settings.S3_LOCATION == "uploads"
    assert settings.S3_USE_SSL is False
    assert settings.ENABLE_METRICS is False
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "plain"


def test_blank_optional_values_are_none(monkeypatch):
    monkeypatch.setenv("S3_BUCKET", "  ")
    monkeypatch.setenv("S3_ENDPOINT_URL", "")

    settings = Settings.from_environment()

    assert settings.S3_BUCKET is None
    assert settings.S3_ENDPOINT_URL is None


def test_env_file_does_not_override_environment(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# storage\nS3_BUCKET='from-file'\nS3_LOCATION=\"assets\"\ninvalid line\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(config, "ENV_FILE", env_file)
    # the loader writes into os.environ; give it a throwaway copy
    monkeypatch.setattr(os, "environ", dict(os.environ))
    os.environ["S3_LOCATION"] = "from-env"

    settings = Settings.from_environment()

    assert settings.S3_BUCKET == "from-file"
    assert settings.S3_LOCATION == "from-env"


def test_rejects_unknown_addressing_style():
    with pytest.raises(ValueError, match="S3_ADDRESSING_STYLE"):
        Settings(S3_ADDRESSING_STYLE="sideways")


def test_rejects_unknown_log_format():
    with pytest.raises(ValueError, match="LOG_FORMAT"):
        Settings(LOG_FORMAT="xml")


def test_settings_are_immutable():
    settings = Settings()

    with pytest.raises(AttributeError):
        settings.S3_BUCKET = "other"  # type: ignore[misc]


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("S3_BUCKET", "first")
    first = get_settings()
    monkeypatch.setenv("S3_BUCKET", "second")

    assert get_settings() is first
    assert os.environ["S3_BUCKET"] == "second"
