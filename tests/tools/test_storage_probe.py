from __future__ import annotations

from unittest.mock import patch

import pytest

from s3generic.infra.storage import S3GenericStorage, StorageError
from scripts import storage_probe
from scripts.storage_probe import ProbeFailure, probe_storage
from tests.infra.mock_storage import MockObjectStoreClient


@pytest.fixture()
def mock_client():
    return MockObjectStoreClient()


@pytest.fixture()
def storage(mock_client):
    return S3GenericStorage(
        None,
        None,
        None,
        "bucket",
        base_url="https://cdn.example.com",
        location="media",
        client=mock_client,
    )


def test_probe_round_trip(storage, mock_client):
    result = probe_storage(storage, path="probe.txt", payload=b"ping")

    assert result.key == "media/probe.txt"
    assert result.size == 4
    assert result.url == "https://cdn.example.com/media/probe.txt"
    assert result.deleted is True
    assert result.checks == ["save", "exists", "size", "open", "modified_time", "delete"]
    assert mock_client.objects == {}
    assert all(stream.closed for stream in mock_client.streams)


def test_probe_keep_leaves_object(storage, mock_client):
    result = probe_storage(storage, path="probe.txt", payload=b"ping", keep=True)

    assert result.deleted is False
    assert "bucket/media/probe.txt" in mock_client.objects


def test_probe_detects_delete_that_does_not_remove(storage, mock_client):
    mock_client.delete_object = lambda **kwargs: None

    with pytest.raises(ProbeFailure, match="still present"):
        probe_storage(storage, path="probe.txt", payload=b"ping")


def test_main_reports_success(storage, capsys):
    with patch.object(storage_probe, "build_storage", return_value=storage):
        exit_code = storage_probe.main(["--key", "hc.txt", "--payload", "hello", "--metrics"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "OK key=media/hc.txt size=5" in out
    assert "url: https://cdn.example.com/media/hc.txt" in out
    assert "storage_operations_total" in out


def test_main_reports_storage_failure(storage, mock_client, capsys):
    mock_client.failures["put_object"] = StorageError("Failed to upload object: denied")

    with patch.object(storage_probe, "build_storage", return_value=storage):
        exit_code = storage_probe.main([])

    assert exit_code == 1
    assert "FAILED: Failed to upload object: denied" in capsys.readouterr().out


def test_main_reports_missing_configuration(capsys):
    exit_code = storage_probe.main([])

    assert exit_code == 1
    assert "FAILED: S3_BUCKET is required" in capsys.readouterr().out
