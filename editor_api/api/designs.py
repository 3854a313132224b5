"""Design API endpoints.

Endpoints:
    POST /api/designs - Save a rendered design
    GET /api/designs - List designs
    GET /api/designs/{id} - Get design by ID
    DELETE /api/designs/{id} - Delete design and its image
    DELETE /api/cleanup?days=N - Evict designs older than N days

Examples:
    >>> POST /api/designs
    >>> {"text": "Hello", "finalImage": "data:image/png;base64,iVBOR..."}
    >>>
    >>> # Response (201)
    >>> {"success": true, "data": {"designId": 1, "design": {...}}}
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from editor_api.api.dependencies import get_design_service
from editor_api.designs import DesignService
from editor_api.records import parse_days
from editor_api.schemas import (
    CleanupData,
    CleanupResponse,
    DesignCreate,
    DesignCreatedData,
    DesignCreatedResponse,
    DesignData,
    DesignDeletedData,
    DesignDeletedResponse,
    DesignListData,
    DesignListResponse,
    DesignResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["designs"])


@router.post(
    "/designs",
    response_model=DesignCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_design(
    request: DesignCreate,
    service: DesignService = Depends(get_design_service),
) -> DesignCreatedResponse:
    """Save a design and its rendered image.

    Raises:
        IncompleteData: text or finalImage missing
        InvalidImageFormat: finalImage is not an image data URL
    """
    logger.info("Save design request received")
    design = await service.save_design(request)
    return DesignCreatedResponse(
        message="Design saved successfully",
        data=DesignCreatedData(design=design, design_id=design.id),
    )


@router.get("/designs", response_model=DesignListResponse)
async def list_designs(
    service: DesignService = Depends(get_design_service),
) -> DesignListResponse:
    """List all designs in creation order."""
    count, designs = service.list_designs()
    return DesignListResponse(data=DesignListData(count=count, designs=designs))


@router.get("/designs/{design_id}", response_model=DesignResponse)
async def get_design(
    design_id: int,
    service: DesignService = Depends(get_design_service),
) -> DesignResponse:
    """Get design by ID.

    Raises:
        DesignNotFound: If no design has this ID
    """
    return DesignResponse(data=DesignData(design=service.get_design(design_id)))


@router.delete("/designs/{design_id}", response_model=DesignDeletedResponse)
async def delete_design(
    design_id: int,
    service: DesignService = Depends(get_design_service),
) -> DesignDeletedResponse:
    """Delete a design by ID.

    Also deletes its result image, best-effort.

    Raises:
        DesignNotFound: If no design has this ID
    """
    deletion = await service.delete_design(design_id)
    return DesignDeletedResponse(
        message="Design deleted successfully",
        data=DesignDeletedData(design_id=design_id, file_deleted=deletion.file_deleted),
    )


@router.delete("/cleanup", response_model=CleanupResponse)
async def cleanup(
    days: str | None = Query(None, description="Age threshold in days (default 7)"),
    service: DesignService = Depends(get_design_service),
) -> CleanupResponse:
    """Evict designs older than ``days`` days together with their images."""
    result = await service.cleanup(parse_days(days))
    return CleanupResponse(
        message="Cleanup completed",
        data=CleanupData(
            deleted_files=result.deleted_files,
            remaining_designs=result.remaining,
            evicted_designs=result.evicted_count,
        ),
    )
