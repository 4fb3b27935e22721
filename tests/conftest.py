"""Shared fixtures for NHN Cloud CLI tests."""

import pytest

from nhncloud_cli.models import DbInstance, NasVolume
from nhncloud_cli.utils import set_debug_enabled


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's credentials file and environment."""
    monkeypatch.setenv("NHN_CLOUD_CONFIG_FILE", str(tmp_path / "missing-credentials"))
    for name in ("NHN_CLOUD_PROFILE", "NHN_CLOUD_OUTPUT", "NHN_CLOUD_QUERY"):
        monkeypatch.delenv(name, raising=False)
    yield
    set_debug_enabled(False)


@pytest.fixture
def sample_volumes():
    return [
        NasVolume(
            volume_id="vol-1",
            name="backup",
            size_gb=300,
            status="ACTIVE",
            protocol="nfs",
            interfaces=[{"subnetId": "subnet-1", "path": "10.0.0.5:/backup"}],
        ),
        NasVolume(volume_id="vol-2", name="logs", size_gb=100, status="CREATING"),
    ]


@pytest.fixture
def sample_db_instance():
    return DbInstance(
        db_instance_id="db-123",
        name="orders",
        status="AVAILABLE",
        version="MYSQL_V8032",
        flavor_id="m2.c4m8",
        storage_size=100,
        subnet_id="subnet-9",
    )


@pytest.fixture
def sample_event_documents():
    return [
        {
            "eventId": "evt-1",
            "eventTime": "2024-01-01T00:00:00Z",
            "eventType": "CREATE_INSTANCE",
            "eventSourceType": "CONSOLE",
            "memberId": "user@example.com",
            "sourceIp": "10.0.0.1",
            "productId": "compute",
            "request": {"flavor": "m2.c2m4"},
        },
        {
            "eventId": "evt-2",
            "eventTime": "2024-01-01T01:00:00Z",
            "eventType": "DELETE_VOLUME",
            "eventSourceType": "API",
            "memberId": "bot@example.com",
        },
    ]
