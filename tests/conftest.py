"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from wazaifi_api.app.core.config import Settings
from wazaifi_api.app.core.storage import CollectionStore, JsonFileBackend
from wazaifi_api.app.main import create_app


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def store(data_dir):
    """A file-backed store in a fresh temporary directory."""
    return CollectionStore(JsonFileBackend(data_dir))


@pytest.fixture
def settings(data_dir):
    return Settings(data_dir=str(data_dir), storage_backend="json", cors_origins=["*"])


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store)
    with TestClient(app) as test_client:
        yield test_client
