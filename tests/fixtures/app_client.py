"""Application fixtures."""
import pytest
from fastapi.testclient import TestClient

from files_api.main import create_app
from files_api.settings import Settings, load_settings
from files_api.storage_adapter import StorageAdapter


@pytest.fixture
def settings(mocked_aws) -> Settings:
    return load_settings(_env_file=None)


@pytest.fixture
def storage(settings: Settings) -> StorageAdapter:
    return StorageAdapter(settings)


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as client:
        yield client
