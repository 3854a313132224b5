"""Blob store: the on-disk side of asset storage.

Maps asset categories to subdirectories of the storage root, writes files
under collision-free names, removes them best-effort and derives the public
URL each stored file is served under.

Examples:
    >>> from editor_api.storage import BlobStore, StorageConfig, AssetCategory
    >>> store = BlobStore.from_config(StorageConfig(root="./storage"))
    >>> await store.ensure_directories()
    >>> stored = await store.write(AssetCategory.FONT, data, "Roboto.ttf")
    >>> stored.public_url
    '/storage/fonts/Roboto-1b4e28ba-2fa1-41d2-883f-0016d3cca427.ttf'
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from editor_api.storage.backends.base import StorageBackend
from editor_api.storage.backends.local import LocalStorageBackend
from editor_api.storage.config import AssetCategory, StorageConfig
from editor_api.storage.naming import generate_upload_filename

logger = logging.getLogger(__name__)

PROBE_FILENAME = "test-write.txt"


@dataclass(frozen=True)
class StoredFile:
    """A file written to the blob store."""

    filename: str
    path: str
    public_url: str


@dataclass(frozen=True)
class BlobRemoval:
    """Outcome of a best-effort file removal.

    Attributes:
        path: File that was targeted.
        removed: True if the file is gone (deleted now or already missing).
        missing: True if the file did not exist.
        error: I/O error message when removal failed.
    """

    path: str
    removed: bool
    missing: bool = False
    error: str | None = None


class BlobStore:
    """Category-aware file store rooted at one directory.

    Attributes:
        config: Storage configuration.
        backend: Storage backend for I/O.
        root: Absolute storage root.
    """

    def __init__(self, config: StorageConfig, backend: StorageBackend | None = None) -> None:
        self.config = config
        self.backend = backend or LocalStorageBackend()
        self.root = Path(config.root).resolve()

    @classmethod
    def from_config(cls, config: StorageConfig) -> "BlobStore":
        """Create a BlobStore backed by the local filesystem."""
        return cls(config=config, backend=LocalStorageBackend())

    def directory_for(self, category: AssetCategory) -> Path:
        """Directory holding files of ``category``."""
        return self.root / category.directory

    def path_for(self, category: AssetCategory, filename: str) -> str:
        """Absolute path of a stored file."""
        return str(self.directory_for(category) / Path(filename).name)

    def public_url(self, path: str | Path) -> str:
        """Public reference for a stored file, relative to the storage root.

        Always uses forward slashes.

        Raises:
            ValueError: If ``path`` is outside the storage root.
        """
        relative = Path(path).resolve().relative_to(self.root)
        return f"{self.config.public_prefix.rstrip('/')}/{relative.as_posix()}"

    async def ensure_directories(self) -> list[AssetCategory]:
        """Create every category directory.

        A directory that cannot be created is logged and skipped; the others
        are still attempted.

        Returns:
            Categories whose directory is ready.
        """
        ready: list[AssetCategory] = []
        for category in AssetCategory:
            directory = self.directory_for(category)
            try:
                await self.backend.ensure_directory(str(directory))
            except OSError as e:
                logger.error(f"Failed to create directory {directory}: {e}")
                continue
            logger.info(f"Directory ready: {directory}")
            ready.append(category)
        return ready

    async def check_writable(self) -> bool:
        """Probe whether the storage root accepts writes.

        Returns:
            True if a probe file could be written and removed.
        """
        probe = str(self.root / f".{uuid.uuid4().hex}-{PROBE_FILENAME}")
        try:
            await self.backend.write_file(probe, b"test-write-permission")
            await self.backend.delete_file(probe)
        except OSError as e:
            logger.error(f"Storage directory not writable: {e}")
            return False
        return True

    async def write(
        self,
        category: AssetCategory,
        data: bytes,
        suggested_name: str,
    ) -> StoredFile:
        """Write bytes under a fresh unique name derived from ``suggested_name``.

        Args:
            category: Target category.
            data: File content.
            suggested_name: Client filename; its base and extension are kept.

        Returns:
            The stored file.

        Raises:
            OSError: If the write fails.
        """
        return await self.write_named(category, generate_upload_filename(suggested_name), data)

    async def write_named(self, category: AssetCategory, filename: str, data: bytes) -> StoredFile:
        """Write bytes under an already generated unique name.

        Raises:
            FileExistsError: If ``filename`` is already taken.
            OSError: If the write fails.
        """
        path = self.path_for(category, filename)
        await self.backend.write_file(path, data)
        return StoredFile(filename=Path(path).name, path=path, public_url=self.public_url(path))

    async def read(self, category: AssetCategory, filename: str) -> bytes:
        """Read a stored file's content."""
        return await self.backend.read_file(self.path_for(category, filename))

    async def exists(self, category: AssetCategory, filename: str) -> bool:
        """Check whether a stored file exists."""
        return await self.backend.exists(self.path_for(category, filename))

    async def remove(self, path: str) -> BlobRemoval:
        """Delete a file, best-effort.

        A missing file counts as removed. Other I/O errors are logged and
        returned, never raised.
        """
        try:
            await self.backend.delete_file(path)
        except FileNotFoundError:
            return BlobRemoval(path=path, removed=True, missing=True)
        except OSError as e:
            logger.warning(f"Could not delete file {path}: {e}")
            return BlobRemoval(path=path, removed=False, error=str(e))
        logger.info(f"Deleted file: {path}")
        return BlobRemoval(path=path, removed=True)
