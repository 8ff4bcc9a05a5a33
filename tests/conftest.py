"""Shared fixtures: every backend gets its own temporary root."""

import pytest
from fastapi.testclient import TestClient

from app.config import PUBLIC_FOLDER
from app.services.asset_uploads import AssetUploadCoordinator
from app.storage import get_storage
from app.storage.local_storage import LocalStorage


@pytest.fixture
def local_storage(tmp_path):
    """LocalStorage rooted in an isolated temp directory."""
    return LocalStorage(tmp_path / "root", public_folder="user-content", chunk_size=4)


@pytest.fixture
def uploads(local_storage):
    """Coordinator over the temp-dir backend, no size limit."""
    return AssetUploadCoordinator(local_storage, chunk_size=4)


@pytest.fixture
def api_storage(tmp_path):
    """Backend the API is wired to; uses the configured public folder so the serve route matches."""
    return LocalStorage(tmp_path / "api-root", public_folder=PUBLIC_FOLDER)


@pytest.fixture
def client(api_storage):
    from app.main import app

    app.dependency_overrides[get_storage] = lambda: api_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
