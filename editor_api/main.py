"""FastAPI application for the Design Editor API.

This module provides the application factory with the API routes, static
storage serving, error handlers and lifecycle management.

Run with:
    uvicorn editor_api.main:app --reload

Examples:
    >>> # Health check
    >>> curl http://localhost:3001/api/health

    >>> # API docs (DEBUG only)
    >>> # Open http://localhost:3001/docs

Tests:
    - tests/unit/test_main.py
    - tests/integration/test_api_designs.py
    - tests/integration/test_api_uploads.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from editor_api import __version__
from editor_api.api import router as api_router
from editor_api.config import Settings, get_settings
from editor_api.designs import DesignService
from editor_api.errors import EditorError
from editor_api.ingest import AssetIngestor
from editor_api.records import InMemoryRecordStore, RecordStore
from editor_api.schemas import ErrorResponse
from editor_api.storage import BlobStore, StorageConfig

# Configure logging
logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    error: str,
    details: str | None = None,
    code: str | None = None,
) -> JSONResponse:
    """Build the failure envelope."""
    body = ErrorResponse(error=error, details=details, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Handles startup tasks:
    - Create storage directories
    - Probe storage writability
    """
    settings: Settings = app.state.settings
    blob_store: BlobStore = app.state.blob_store

    # Startup
    logger.info(f"Starting Design Editor API v{__version__}")
    logger.info(f"Storage: {blob_store.root}")
    await blob_store.ensure_directories()
    if await blob_store.check_writable():
        logger.info("Storage directory is writable")
    logger.info(f"Max file size: {settings.max_file_size_mb:g}MB")

    yield

    # Shutdown
    logger.info("Shutting down Design Editor API")


def create_app(
    settings: Settings | None = None,
    records: RecordStore | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings (defaults to cached environment settings).
        records: Design record store (defaults to a fresh in-memory store).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Design Editor API",
        description="Asset storage and design persistence for the text editor",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    blob_store = BlobStore.from_config(StorageConfig(root=settings.STORAGE_ROOT))
    ingestor = AssetIngestor(
        blob_store,
        max_file_size=settings.MAX_FILE_SIZE,
        max_files=settings.MAX_FILES,
    )
    app.state.settings = settings
    app.state.blob_store = blob_store
    app.state.ingestor = ingestor
    app.state.design_service = DesignService(
        blob_store,
        ingestor,
        records if records is not None else InMemoryRecordStore(),
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    app.mount(
        "/storage",
        StaticFiles(directory=str(blob_store.root), check_dir=False),
        name="storage",
    )

    # Exception handlers
    @app.exception_handler(EditorError)
    async def editor_error_handler(request: Request, exc: EditorError):
        """Map domain errors to the failure envelope."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc}")
        return error_response(exc.status_code, exc.message, exc.details, exc.code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies and parameters as bad input."""
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request",
            details,
            "ValidationError",
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with consistent response format."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(
                exc.status_code,
                "Endpoint not found",
                f"Method: {request.method}, Path: {request.url.path}",
                "NotFound",
            )
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unhandled error: {exc}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            None if settings.is_production else str(exc),
        )

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """Root endpoint with basic info."""
        return {
            "name": "Design Editor API",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/health",
        }

    return app


app = create_app()


# Entry point for development
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "editor_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
