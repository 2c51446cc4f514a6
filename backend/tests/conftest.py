"""Shared test fixtures and configuration for backend tests."""
from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from seminar_storage.main import app
from seminar_storage.presentations.router import get_storage_service, set_storage_service
from seminar_storage.presentations.service import FileStorageService


@pytest.fixture
def storage_service(tmp_path):
    """A FileStorageService rooted in a per-test temporary project directory."""
    service = FileStorageService(project_root=tmp_path)
    yield service
    service.error_log.close()


@pytest.fixture
def make_source(tmp_path) -> Callable[..., Path]:
    """Factory writing presenter-local files outside the storage root."""
    local_dir = tmp_path / "presenter-laptop"

    def _make(name: str, content: bytes = b"slide content") -> Path:
        local_dir.mkdir(exist_ok=True)
        path = local_dir / name
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def api_client(storage_service):
    """Provide a TestClient with the temporary storage service installed."""
    original = get_storage_service()
    set_storage_service(storage_service)
    yield TestClient(app)
    set_storage_service(original)
