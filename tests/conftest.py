"""
Pytest configuration and fixtures for Design Editor API tests.

Every test gets its own storage root under ``tmp_path`` and a fresh
in-memory record store, so tests never share files or ids.
"""
import base64
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from editor_api.config import Settings
from editor_api.designs import DesignService
from editor_api.ingest import AssetIngestor
from editor_api.main import create_app
from editor_api.records import InMemoryRecordStore
from editor_api.storage import AssetCategory, BlobStore, StorageConfig

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PNG_BYTES = base64.b64decode(PNG_BASE64)
PNG_DATA_URL = f"data:image/png;base64,{PNG_BASE64}"


class FakeClock:
    """Controllable replacement for the record store's clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# ============================================
# Test Fixtures
# ============================================

@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def png_data_url() -> str:
    return PNG_DATA_URL


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """Storage root with every category directory created."""
    root = tmp_path / "storage"
    for category in AssetCategory:
        (root / category.directory).mkdir(parents=True)
    return root


@pytest.fixture
def blob_store(storage_root: Path) -> BlobStore:
    return BlobStore(config=StorageConfig(root=str(storage_root)))


@pytest.fixture
def ingestor(blob_store: BlobStore) -> AssetIngestor:
    return AssetIngestor(blob_store, max_file_size=1024, max_files=5)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def records(clock: FakeClock) -> InMemoryRecordStore:
    return InMemoryRecordStore(clock=clock)


@pytest.fixture
def design_service(
    blob_store: BlobStore,
    ingestor: AssetIngestor,
    records: InMemoryRecordStore,
) -> DesignService:
    return DesignService(blob_store, ingestor, records)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing storage at a temporary directory."""
    return Settings(
        STORAGE_ROOT=str(tmp_path / "api-storage"),
        MAX_FILE_SIZE=64 * 1024,
        MAX_FILES=5,
        DEBUG=True,
    )


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """Test client running the app lifespan (creates storage directories)."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def api_storage(test_settings: Settings) -> Path:
    return Path(test_settings.STORAGE_ROOT).resolve()


# ============================================
# Pytest Configuration
# ============================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "fast: Fast unit tests (no network, temp storage only)"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that drive the HTTP API"
    )
