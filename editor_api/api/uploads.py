"""Asset upload endpoints.

Endpoints:
    POST /api/upload/font - Upload a font file (multipart field "font")
    POST /api/upload/image - Upload an image file (multipart field "image")

Examples:
    >>> # curl -F "font=@Roboto.ttf" http://localhost:3001/api/upload/font
    >>> {"success": true, "data": {"fontUrl": "/storage/fonts/Roboto-....ttf", ...}}
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from editor_api.api.dependencies import get_ingestor
from editor_api.errors import NoFileUploaded
from editor_api.ingest import AssetIngestor
from editor_api.models import AssetDescriptor
from editor_api.schemas import (
    FontUploadData,
    FontUploadResponse,
    ImageUploadData,
    ImageUploadResponse,
)
from editor_api.storage import AssetCategory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["uploads"])


async def ingest_form_file(
    request: Request,
    ingestor: AssetIngestor,
    category: AssetCategory,
    field: str,
) -> AssetDescriptor:
    """Pull one file out of a multipart request and ingest it.

    Starlette spools the form part to a temporary file; only one byte past
    the size limit is read from it, and oversized files never reach the
    storage tree.

    Raises:
        TooManyFiles: More files than allowed in the request.
        NoFileUploaded: ``field`` is missing or is not a file.
    """
    async with request.form() as form:
        files = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]
        ingestor.check_file_count(len(files))

        upload = form.get(field)
        if not isinstance(upload, UploadFile) or not upload.filename:
            raise NoFileUploaded(field)

        data = await upload.read(ingestor.max_file_size + 1)
        return await ingestor.ingest_upload(
            category,
            upload.filename,
            data,
            content_type=upload.content_type,
        )


@router.post("/font", response_model=FontUploadResponse)
async def upload_font(
    request: Request,
    ingestor: AssetIngestor = Depends(get_ingestor),
) -> FontUploadResponse:
    """Upload a font file.

    Accepts .ttf, .otf, .woff and .woff2 files.
    """
    logger.info("Font upload request received")
    asset = await ingest_form_file(request, ingestor, AssetCategory.FONT, "font")
    return FontUploadResponse(
        message="Font uploaded successfully",
        data=FontUploadData(
            font_url=asset.public_url,
            filename=asset.filename,
            original_name=asset.original_name,
            size=asset.size,
            mime_type=asset.mime_type,
        ),
    )


@router.post("/image", response_model=ImageUploadResponse)
async def upload_image(
    request: Request,
    ingestor: AssetIngestor = Depends(get_ingestor),
) -> ImageUploadResponse:
    """Upload an image file.

    Accepts .jpg, .jpeg, .png, .gif, .webp and .bmp files.
    """
    logger.info("Image upload request received")
    asset = await ingest_form_file(request, ingestor, AssetCategory.IMAGE, "image")
    return ImageUploadResponse(
        message="Image uploaded successfully",
        data=ImageUploadData(
            image_url=asset.public_url,
            filename=asset.filename,
            original_name=asset.original_name,
            size=asset.size,
            mime_type=asset.mime_type,
        ),
    )
