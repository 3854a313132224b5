"""
Pydantic schemas for request/response validation.

JSON bodies use camelCase keys to match the editor client; Python code
uses snake_case attribute names.
"""
from datetime import datetime

from pydantic import Field

from editor_api.models import CamelModel, DesignRecord, TextPosition


# Requests

class DesignCreate(CamelModel):
    """Request to save a design.

    ``text`` and ``final_image`` are checked by the design service so that
    missing values are reported as incomplete data rather than as a schema
    error.
    """
    text: str | None = Field(None, description="Text rendered on the canvas")
    font_size: int | None = Field(None, gt=0, description="Font size in pixels")
    font_color: str | None = Field(None, description="CSS color of the text")
    text_position: TextPosition | None = None
    font_url: str | None = Field(None, description="Public URL of an uploaded font")
    canvas_width: int | None = Field(None, gt=0)
    canvas_height: int | None = Field(None, gt=0)
    final_image: str | None = Field(
        None,
        description="Rendered design as a data:image/...;base64 URL",
    )


# Responses

class ErrorResponse(CamelModel):
    """Failure envelope."""
    success: bool = False
    error: str
    details: str | None = None
    code: str | None = None


class MessageResponse(CamelModel):
    """Success envelope without a payload."""
    success: bool = True
    message: str


class StorageStatus(CamelModel):
    writable: bool
    max_file_size: int


class HealthResponse(CamelModel):
    """Health check response."""
    status: str
    message: str
    timestamp: datetime
    storage: StorageStatus
    endpoints: list[str]


class FontUploadData(CamelModel):
    font_url: str
    filename: str
    original_name: str | None
    size: int
    mime_type: str


class FontUploadResponse(CamelModel):
    success: bool = True
    message: str
    data: FontUploadData


class ImageUploadData(CamelModel):
    image_url: str
    filename: str
    original_name: str | None
    size: int
    mime_type: str


class ImageUploadResponse(CamelModel):
    success: bool = True
    message: str
    data: ImageUploadData


class DesignCreatedData(CamelModel):
    design: DesignRecord
    design_id: int


class DesignCreatedResponse(CamelModel):
    success: bool = True
    message: str
    data: DesignCreatedData


class DesignListData(CamelModel):
    count: int
    designs: list[DesignRecord]


class DesignListResponse(CamelModel):
    success: bool = True
    data: DesignListData


class DesignData(CamelModel):
    design: DesignRecord


class DesignResponse(CamelModel):
    success: bool = True
    data: DesignData


class DesignDeletedData(CamelModel):
    design_id: int
    file_deleted: bool


class DesignDeletedResponse(CamelModel):
    success: bool = True
    message: str
    data: DesignDeletedData


class CleanupData(CamelModel):
    deleted_files: int
    remaining_designs: int
    evicted_designs: int


class CleanupResponse(CamelModel):
    success: bool = True
    message: str
    data: CleanupData
