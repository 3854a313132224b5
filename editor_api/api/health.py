"""Health check endpoint.

Endpoints:
    GET /api/health - Service status, storage writability and endpoint list
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from editor_api.api.dependencies import get_app_settings, get_blob_store
from editor_api.config import Settings
from editor_api.schemas import HealthResponse, StorageStatus
from editor_api.storage import BlobStore

router = APIRouter(tags=["Health"])

ENDPOINTS = [
    "POST /api/upload/font",
    "POST /api/upload/image",
    "POST /api/designs",
    "GET /api/designs",
    "GET /api/designs/:id",
    "DELETE /api/designs/:id",
    "DELETE /api/cleanup?days=7",
]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    blob_store: BlobStore = Depends(get_blob_store),
) -> HealthResponse:
    """Check application health.

    Probes the storage root with a write/remove cycle on every call.
    """
    writable = await blob_store.check_writable()
    return HealthResponse(
        status="OK",
        message="Server is running",
        timestamp=datetime.now(timezone.utc),
        storage=StorageStatus(writable=writable, max_file_size=settings.MAX_FILE_SIZE),
        endpoints=ENDPOINTS,
    )
