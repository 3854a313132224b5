"""Design lifecycle: the one place that touches both stores.

``DesignService`` keeps the record store and the blob store consistent:
a record is inserted only after its result image is on disk, and deleting
a record always attempts to delete the image it owns.

Examples:
    >>> service = DesignService(blob_store, ingestor, InMemoryRecordStore())
    >>> record = await service.save_design(DesignCreate(text="Hi", final_image=url))
    >>> deletion = await service.delete_design(record.id)
    >>> deletion.file_deleted
    True

Tests:
    - tests/unit/test_designs.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from editor_api.errors import IncompleteData, InvalidImageFormat
from editor_api.ingest import AssetIngestor
from editor_api.models import DesignRecord, ImageInfo
from editor_api.records import EvictionResult, RecordStore
from editor_api.schemas import DesignCreate
from editor_api.storage import AssetCategory, BlobRemoval, BlobStore

logger = logging.getLogger(__name__)

IMAGE_DATA_URL_PREFIX = "data:image/"


@dataclass(frozen=True)
class DesignDeletion:
    """Result of deleting a design.

    The record removal always succeeded; ``blob`` reports what happened to
    the owned result image (None when the record owned none).
    """

    design: DesignRecord
    blob: BlobRemoval | None

    @property
    def file_deleted(self) -> bool:
        return self.blob is not None and self.blob.removed


class DesignService:
    """Coordinates design creation, lookup, deletion and cleanup.

    Attributes:
        blob_store: On-disk asset store.
        ingestor: Validator/writer for inline images.
        records: Design record store.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        ingestor: AssetIngestor,
        records: RecordStore,
    ) -> None:
        self.blob_store = blob_store
        self.ingestor = ingestor
        self.records = records

    async def save_design(self, request: DesignCreate) -> DesignRecord:
        """Store the rendered image and create a design record.

        Validation runs before any disk write.

        Args:
            request: Incoming design fields.

        Returns:
            The stored design record.

        Raises:
            IncompleteData: ``text`` or ``final_image`` missing or empty.
            InvalidImageFormat: ``final_image`` is not an image data URL.
            ImageSaveFailed: The image could not be written.
        """
        if not request.text or not request.final_image:
            raise IncompleteData()
        if not request.final_image.startswith(IMAGE_DATA_URL_PREFIX):
            raise InvalidImageFormat()

        asset = await self.ingestor.ingest_data_url(request.final_image, AssetCategory.RESULT)

        fields = request.model_dump(exclude={"final_image"})
        fields["image_url"] = asset.public_url
        fields["image_info"] = ImageInfo(
            filename=asset.filename,
            size=asset.size,
            mime_type=asset.mime_type,
        )
        record = self.records.insert(fields)
        logger.info(f"Design saved successfully: {record.id}")
        return record

    def get_design(self, design_id: int) -> DesignRecord:
        """Look up a design.

        Raises:
            DesignNotFound: Unknown id.
        """
        return self.records.get(design_id)

    def list_designs(self) -> tuple[int, list[DesignRecord]]:
        """All designs in creation order."""
        return self.records.list()

    async def remove_result_image(self, record: DesignRecord) -> BlobRemoval | None:
        """Best-effort deletion of the image a design owns."""
        filename = record.result_filename
        if not filename:
            return None
        return await self.blob_store.remove(
            self.blob_store.path_for(AssetCategory.RESULT, filename)
        )

    async def delete_design(self, design_id: int) -> DesignDeletion:
        """Delete a design, then its result image.

        A failure to delete the image is logged and reported in the result;
        the record deletion stands.

        Raises:
            DesignNotFound: Unknown id; nothing changes.
        """
        record = self.records.delete(design_id)
        blob = await self.remove_result_image(record)
        if blob is not None and not blob.removed:
            logger.warning(
                f"Design {design_id} deleted but its image could not be removed: {blob.error}"
            )
        logger.info(f"Deleted design: {design_id}")
        return DesignDeletion(design=record, blob=blob)

    async def _evict_assets(self, record: DesignRecord) -> bool:
        blob = await self.remove_result_image(record)
        return blob is not None and blob.removed and not blob.missing

    async def cleanup(self, days: int) -> EvictionResult:
        """Evict designs older than ``days`` days along with their images."""
        return await self.records.evict_older_than(days, on_evict=self._evict_assets)
