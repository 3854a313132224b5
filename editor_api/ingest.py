"""Asset ingestion: validate and land one binary payload per call.

Two entry points feed the blob store:

- ``ingest_upload`` for multipart files (fonts, images, other uploads),
  checked for extension and size before anything touches the disk.
- ``ingest_data_url`` for inline ``data:<mime>;base64,<payload>`` strings,
  such as the rendered design image the editor sends.

Examples:
    >>> ingestor = AssetIngestor(blob_store, max_file_size=10 * 1024 * 1024)
    >>> asset = await ingestor.ingest_upload(AssetCategory.FONT, "Roboto.ttf", data)
    >>> asset.public_url
    '/storage/fonts/Roboto-1b4e28ba-2fa1-41d2-883f-0016d3cca427.ttf'

Tests:
    - tests/unit/test_ingest.py
"""

from __future__ import annotations

import base64
import binascii
import logging
import re

from editor_api.config import DEFAULT_MAX_FILE_SIZE
from editor_api.errors import (
    FileTooLarge,
    ImageSaveFailed,
    InvalidImageFormat,
    StorageFailure,
    TooManyFiles,
    UnsupportedFileType,
)
from editor_api.models import AssetDescriptor
from editor_api.storage import AssetCategory, BlobStore
from editor_api.storage.naming import (
    extension_for_mime,
    file_extension,
    generate_design_filename,
    guess_mime,
)

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS: dict[AssetCategory, tuple[str, ...]] = {
    AssetCategory.FONT: (".ttf", ".otf", ".woff", ".woff2"),
    AssetCategory.IMAGE: (".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"),
}

DEFAULT_MAX_FILES = 5

DATA_URL_PATTERN = re.compile(r"^data:([A-Za-z0-9.+/-]+);base64,(.+)$", re.DOTALL)


def parse_data_url(data_url: object) -> tuple[str, bytes]:
    """Split a base64 data URL into its MIME type and decoded bytes.

    Args:
        data_url: Candidate ``data:<mime>;base64,<payload>`` string.

    Returns:
        Tuple of (mime_type, decoded_bytes).

    Raises:
        InvalidImageFormat: If the value is not a string, does not match the
            pattern, or carries a payload that is not valid base64.
    """
    if not isinstance(data_url, str) or not data_url:
        raise InvalidImageFormat("Invalid base64 data")

    match = DATA_URL_PATTERN.match(data_url)
    if not match:
        raise InvalidImageFormat("Invalid base64 image format")

    mime_type, payload = match.groups()
    try:
        data = base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageFormat(f"Invalid base64 payload: {e}") from e
    if not data:
        raise InvalidImageFormat("Invalid base64 payload: empty")
    return mime_type, data


class AssetIngestor:
    """Validates payloads and stores them through a ``BlobStore``.

    Attributes:
        blob_store: Destination store.
        max_file_size: Largest accepted upload in bytes.
        max_files: Most files accepted in one request.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        max_files: int = DEFAULT_MAX_FILES,
    ) -> None:
        self.blob_store = blob_store
        self.max_file_size = max_file_size
        self.max_files = max_files

    def check_file_count(self, count: int) -> None:
        """Reject requests carrying more than ``max_files`` files.

        Raises:
            TooManyFiles: If ``count`` exceeds the limit.
        """
        if count > self.max_files:
            raise TooManyFiles(self.max_files)

    def check_extension(self, category: AssetCategory, filename: str) -> None:
        """Reject filenames whose extension is not allowed for ``category``.

        Categories without a whitelist accept any extension.

        Raises:
            UnsupportedFileType: If the extension is not allowed.
        """
        allowed = ALLOWED_EXTENSIONS.get(category)
        if allowed is None:
            return
        if file_extension(filename) not in allowed:
            raise UnsupportedFileType(category.value, allowed)

    def check_size(self, size: int) -> None:
        """Reject payloads larger than ``max_file_size``.

        Raises:
            FileTooLarge: If ``size`` exceeds the limit.
        """
        if size > self.max_file_size:
            raise FileTooLarge(self.max_file_size)

    async def ingest_upload(
        self,
        category: AssetCategory,
        filename: str,
        data: bytes,
        content_type: str | None = None,
    ) -> AssetDescriptor:
        """Validate and store one uploaded file.

        Args:
            category: Field category the file was uploaded under.
            filename: Client filename.
            data: File content.
            content_type: Declared media type (guessed from the name if absent).

        Returns:
            Descriptor of the stored asset.

        Raises:
            UnsupportedFileType: Extension not allowed for the category.
            FileTooLarge: Payload exceeds the size limit.
            StorageFailure: If the write fails.
        """
        logger.info(f"File upload attempt: {category.value}, {filename}, {content_type}")
        self.check_extension(category, filename)
        self.check_size(len(data))

        try:
            stored = await self.blob_store.write(category, data, filename)
        except OSError as e:
            logger.error(f"Error saving upload {filename}: {e}")
            raise StorageFailure("Failed to save upload", str(e)) from e

        asset = AssetDescriptor(
            filename=stored.filename,
            path=stored.path,
            public_url=stored.public_url,
            mime_type=content_type or guess_mime(filename),
            size=len(data),
            category=category,
            original_name=filename,
        )
        logger.info(f"Stored upload {filename} as {asset.public_url} ({asset.size} bytes)")
        return asset

    async def ingest_data_url(
        self,
        data_url: str,
        category: AssetCategory = AssetCategory.RESULT,
    ) -> AssetDescriptor:
        """Decode and store an inline base64 data URL.

        Args:
            data_url: ``data:<mime>;base64,<payload>`` string.
            category: Target category (default results).

        Returns:
            Descriptor of the stored asset.

        Raises:
            InvalidImageFormat: Malformed data URL; nothing is written.
            ImageSaveFailed: The decoded bytes could not be written.
        """
        mime_type, data = parse_data_url(data_url)
        filename = generate_design_filename(extension_for_mime(mime_type))

        try:
            stored = await self.blob_store.write_named(category, filename, data)
        except OSError as e:
            logger.error(f"Error saving base64 image: {e}")
            raise ImageSaveFailed(str(e)) from e

        return AssetDescriptor(
            filename=stored.filename,
            path=stored.path,
            public_url=stored.public_url,
            mime_type=mime_type,
            size=len(data),
            category=category,
        )
