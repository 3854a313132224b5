"""Asset storage package for the editor API.

Provides category directories, collision-free naming and file I/O for
uploaded fonts and images and rendered design results.

Examples:
    >>> from editor_api.storage import BlobStore, StorageConfig
    >>> store = BlobStore(config=StorageConfig(root="./storage"))
    >>> stored = await store.write(AssetCategory.IMAGE, data, "photo.png")
"""

from editor_api.storage.config import AssetCategory, StorageConfig
from editor_api.storage.naming import (
    extension_for_mime,
    generate_design_filename,
    generate_upload_filename,
    sanitize_basename,
)
from editor_api.storage.service import BlobRemoval, BlobStore, StoredFile

__all__ = [
    "AssetCategory",
    "BlobRemoval",
    "BlobStore",
    "StorageConfig",
    "StoredFile",
    "extension_for_mime",
    "generate_design_filename",
    "generate_upload_filename",
    "sanitize_basename",
]
