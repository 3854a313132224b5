"""Unit tests for the design lifecycle service.

Tests for editor_api/designs.py - save, delete and cleanup keep the record
store and the blob store consistent.
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from editor_api.designs import DesignService
from editor_api.errors import DesignNotFound, ImageSaveFailed, IncompleteData, InvalidImageFormat
from editor_api.ingest import AssetIngestor
from editor_api.records import InMemoryRecordStore
from editor_api.schemas import DesignCreate
from editor_api.storage import AssetCategory, BlobStore
from editor_api.storage.service import BlobRemoval


def _result_files(blob_store: BlobStore) -> list[Path]:
    return sorted(blob_store.directory_for(AssetCategory.RESULT).iterdir())


def _result_path(blob_store: BlobStore, record) -> Path:
    return Path(blob_store.path_for(AssetCategory.RESULT, record.image_info.filename))


@pytest.mark.fast
class TestSaveDesign:
    """Tests for DesignService.save_design()."""

    @pytest.mark.asyncio
    async def test_saves_image_and_record(self, design_service, blob_store, png_data_url, png_bytes):
        record = await design_service.save_design(
            DesignCreate(text="Hello", font_size=64, final_image=png_data_url)
        )
        assert record.id == 1
        assert record.text == "Hello"
        assert record.font_size == 64
        assert record.font_color == "#ffffff"
        assert record.image_url == f"/storage/results/{record.image_info.filename}"
        assert record.image_info.mime_type == "image/png"
        assert record.image_info.size == len(png_bytes)
        assert _result_path(blob_store, record).read_bytes() == png_bytes

    @pytest.mark.asyncio
    async def test_accepts_camel_case_payload(self, design_service, png_data_url):
        request = DesignCreate.model_validate({
            "text": "Hi",
            "fontColor": "#000000",
            "textPosition": {"x": 5, "y": 6},
            "fontUrl": "/storage/fonts/Roboto-x.ttf",
            "canvasWidth": 1024,
            "finalImage": png_data_url,
        })
        record = await design_service.save_design(request)
        assert record.font_color == "#000000"
        assert (record.text_position.x, record.text_position.y) == (5, 6)
        assert record.font_url == "/storage/fonts/Roboto-x.ttf"
        assert record.canvas_width == 1024
        assert record.canvas_height == 400

    @pytest.mark.asyncio
    async def test_ids_strictly_increase(self, design_service, png_data_url):
        first = await design_service.save_design(DesignCreate(text="a", final_image=png_data_url))
        second = await design_service.save_design(DesignCreate(text="b", final_image=png_data_url))
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_identical_payloads_make_distinct_files(self, design_service, blob_store, png_data_url):
        first = await design_service.save_design(DesignCreate(text="a", final_image=png_data_url))
        second = await design_service.save_design(DesignCreate(text="a", final_image=png_data_url))
        assert first.id != second.id
        assert first.image_info.filename != second.image_info.filename
        assert len(_result_files(blob_store)) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text, image",
        [(None, "data:image/png;base64,AAAA"), ("", "data:image/png;base64,AAAA"), ("Hi", None), ("Hi", "")],
    )
    async def test_incomplete_data(self, design_service, blob_store, text, image):
        with pytest.raises(IncompleteData):
            await design_service.save_design(DesignCreate(text=text, final_image=image))
        assert _result_files(blob_store) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "image",
        [
            "not a data url",
            "data:text/plain;base64,aGVsbG8=",
            "data:image/png,iVBORw0KGgo=",
            "data:image/png;base64,",
            "data:image/png;base64,@@@@",
        ],
    )
    async def test_invalid_image_format_writes_nothing(self, design_service, blob_store, records, image):
        with pytest.raises(InvalidImageFormat):
            await design_service.save_design(DesignCreate(text="Hi", final_image=image))
        assert _result_files(blob_store) == []
        assert len(records) == 0

    @pytest.mark.asyncio
    async def test_failed_write_creates_no_record(self, blob_store, png_data_url):
        backend = AsyncMock()
        backend.write_file.side_effect = OSError("disk full")
        failing_store = BlobStore(config=blob_store.config, backend=backend)
        records = InMemoryRecordStore()
        service = DesignService(failing_store, AssetIngestor(failing_store), records)
        with pytest.raises(ImageSaveFailed):
            await service.save_design(DesignCreate(text="Hi", final_image=png_data_url))
        assert len(records) == 0


@pytest.mark.fast
class TestDeleteDesign:
    """Tests for DesignService.delete_design()."""

    @pytest.mark.asyncio
    async def test_removes_record_and_image(self, design_service, blob_store, png_data_url):
        record = await design_service.save_design(DesignCreate(text="Hi", final_image=png_data_url))
        filename = record.image_info.filename
        assert await blob_store.exists(AssetCategory.RESULT, filename)

        deletion = await design_service.delete_design(record.id)

        assert deletion.design is record
        assert deletion.file_deleted is True
        assert not await blob_store.exists(AssetCategory.RESULT, filename)
        assert design_service.list_designs() == (0, [])

    @pytest.mark.asyncio
    async def test_unknown_id(self, design_service, png_data_url):
        await design_service.save_design(DesignCreate(text="Hi", final_image=png_data_url))
        with pytest.raises(DesignNotFound):
            await design_service.delete_design(99)
        assert design_service.list_designs()[0] == 1

    @pytest.mark.asyncio
    async def test_blob_failure_does_not_fail_deletion(self, design_service, blob_store, png_data_url, monkeypatch):
        record = await design_service.save_design(DesignCreate(text="Hi", final_image=png_data_url))
        monkeypatch.setattr(
            blob_store,
            "remove",
            AsyncMock(return_value=BlobRemoval(path="x", removed=False, error="busy")),
        )

        deletion = await design_service.delete_design(record.id)

        assert deletion.file_deleted is False
        assert deletion.blob.error == "busy"
        with pytest.raises(DesignNotFound):
            design_service.get_design(record.id)

    @pytest.mark.asyncio
    async def test_missing_image_still_deletes(self, design_service, blob_store, png_data_url):
        record = await design_service.save_design(DesignCreate(text="Hi", final_image=png_data_url))
        _result_path(blob_store, record).unlink()
        deletion = await design_service.delete_design(record.id)
        assert deletion.blob.missing is True


@pytest.mark.fast
class TestCleanup:
    """Tests for DesignService.cleanup()."""

    @pytest.mark.asyncio
    async def test_zero_days_evicts_everything(self, design_service, blob_store, clock, png_data_url):
        for text in ("a", "b"):
            await design_service.save_design(DesignCreate(text=text, final_image=png_data_url))
        clock.advance(seconds=1)

        result = await design_service.cleanup(0)

        assert result.evicted_count == 2
        assert result.deleted_files == 2
        assert result.remaining == 0
        assert _result_files(blob_store) == []

    @pytest.mark.asyncio
    async def test_long_window_evicts_nothing(self, design_service, blob_store, clock, png_data_url):
        await design_service.save_design(DesignCreate(text="a", final_image=png_data_url))
        clock.advance(days=3)

        result = await design_service.cleanup(36500)

        assert result.evicted_count == 0
        assert result.remaining == 1
        assert len(_result_files(blob_store)) == 1

    @pytest.mark.asyncio
    async def test_blob_failures_do_not_abort(self, design_service, blob_store, clock, png_data_url, monkeypatch):
        for text in ("a", "b"):
            await design_service.save_design(DesignCreate(text=text, final_image=png_data_url))
        clock.advance(days=8)
        monkeypatch.setattr(blob_store, "remove", AsyncMock(side_effect=RuntimeError("boom")))

        result = await design_service.cleanup(7)

        assert result.evicted_count == 2
        assert result.deleted_files == 0
        assert result.remaining == 0
