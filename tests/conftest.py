"""
Shared fixtures: every test gets its own data and upload directories under tmp_path.
"""

import pytest
from fastapi.testclient import TestClient

from worklog.api.main import create_app
from worklog.core.store import DataStore
from worklog.core.uploads import UploadStorage


@pytest.fixture
def store(tmp_path):
    """A DataStore over empty files in a temporary directory."""
    return DataStore.in_directory(tmp_path / "data")


@pytest.fixture
def uploads(tmp_path):
    return UploadStorage(tmp_path / "uploads", "/uploads")


@pytest.fixture
def client(store, uploads):
    """Test client for an app without seed data."""
    app = create_app(store=store, uploads=uploads, seed=False)
    with TestClient(app) as test_client:
        yield test_client
