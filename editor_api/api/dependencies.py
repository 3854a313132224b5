"""Request-scoped accessors for the services created by the app factory."""

from fastapi import Request

from editor_api.config import Settings
from editor_api.designs import DesignService
from editor_api.ingest import AssetIngestor
from editor_api.storage import BlobStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


def get_ingestor(request: Request) -> AssetIngestor:
    return request.app.state.ingestor


def get_design_service(request: Request) -> DesignService:
    return request.app.state.design_service
