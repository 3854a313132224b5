"""Domain models for the editor API.

This module defines the asset descriptor produced by ingestion and the
design record kept by the record store, together with the one function
that fills in design field defaults.

Examples:
    >>> from editor_api.models import apply_design_defaults
    >>> apply_design_defaults({"text": "Hello"})["font_size"]
    48

Tests:
    - tests/unit/test_models.py
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from editor_api.storage.config import AssetCategory

DEFAULT_FONT_SIZE = 48
DEFAULT_FONT_COLOR = "#ffffff"
DEFAULT_TEXT_POSITION = {"x": 50, "y": 50}
DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 400


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, as the editor client expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssetDescriptor(CamelModel):
    """Result of ingesting one binary payload.

    Attributes:
        filename: Generated, collision-resistant stored filename
        path: Absolute storage path
        public_url: Public reference under the static storage prefix
        mime_type: Declared media type
        size: Byte size
        category: Asset category the file was stored under
        original_name: Client filename for multipart uploads
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    path: str
    public_url: str
    mime_type: str
    size: int
    category: AssetCategory
    original_name: str | None = None


class TextPosition(CamelModel):
    """Text anchor on the canvas."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class ImageInfo(CamelModel):
    """Summary of the rendered result image a design owns."""

    model_config = ConfigDict(frozen=True)

    filename: str
    size: int
    mime_type: str


class DesignRecord(CamelModel):
    """A saved design.

    Records are immutable once created; ``updated_at`` equals
    ``created_at`` because no update operation exists.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    font_size: int = DEFAULT_FONT_SIZE
    font_color: str = DEFAULT_FONT_COLOR
    text_position: TextPosition = Field(
        default_factory=lambda: TextPosition(**DEFAULT_TEXT_POSITION)
    )
    font_url: str | None = None
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    image_url: str | None = None
    image_info: ImageInfo | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def result_filename(self) -> str | None:
        """Stored filename of the owned result image, if any."""
        return self.image_info.filename if self.image_info else None


def apply_design_defaults(fields: dict[str, Any]) -> dict[str, Any]:
    """Fill unset design fields with their defaults.

    A field is unset when it is absent or None. Keys are snake_case.

    Args:
        fields: Design fields supplied by the caller.

    Returns:
        A new dict with every optional field populated.
    """
    defaults: dict[str, Any] = {
        "font_size": DEFAULT_FONT_SIZE,
        "font_color": DEFAULT_FONT_COLOR,
        "text_position": dict(DEFAULT_TEXT_POSITION),
        "font_url": None,
        "canvas_width": DEFAULT_CANVAS_WIDTH,
        "canvas_height": DEFAULT_CANVAS_HEIGHT,
    }
    result = dict(fields)
    for key, value in defaults.items():
        if result.get(key) is None:
            result[key] = value
    return result
