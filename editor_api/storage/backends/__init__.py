"""Storage backends for asset I/O."""

from editor_api.storage.backends.base import StorageBackend
from editor_api.storage.backends.local import LocalStorageBackend

__all__ = ["StorageBackend", "LocalStorageBackend"]
