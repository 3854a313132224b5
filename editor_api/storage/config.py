"""Storage configuration model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class AssetCategory(str, Enum):
    """Logical asset categories, each stored in its own subdirectory."""

    FONT = "font"
    IMAGE = "image"
    TEMP = "temp"
    UPLOAD = "upload"
    RESULT = "result"

    @property
    def directory(self) -> str:
        """Subdirectory name under the storage root."""
        return CATEGORY_DIRECTORIES[self]


CATEGORY_DIRECTORIES: dict[AssetCategory, str] = {
    AssetCategory.FONT: "fonts",
    AssetCategory.IMAGE: "images",
    AssetCategory.TEMP: "temp",
    AssetCategory.UPLOAD: "uploads",
    AssetCategory.RESULT: "results",
}


class StorageConfig(BaseModel):
    """Configuration for asset storage.

    Attributes:
        root: Root directory holding one subdirectory per category.
        public_prefix: URL prefix under which stored files are served.
    """

    root: str = Field(default="./storage", description="Asset storage root directory")
    public_prefix: str = Field(default="/storage", description="Public URL prefix")
