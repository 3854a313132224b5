"""API module for the editor backend.

Contains the ``/api`` router and its sub-routers.
"""

from fastapi import APIRouter

from editor_api.api.designs import router as designs_router
from editor_api.api.health import router as health_router
from editor_api.api.uploads import router as uploads_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(uploads_router)
router.include_router(designs_router)

__all__ = ["router"]
