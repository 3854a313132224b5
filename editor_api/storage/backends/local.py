"""Local filesystem storage backend using pathlib."""

from __future__ import annotations

import asyncio
from pathlib import Path

from editor_api.storage.backends.base import StorageBackend


class LocalStorageBackend(StorageBackend):
    """Pathlib-based local filesystem storage backend.

    Blocking calls run in a worker thread so the event loop keeps serving
    other requests while a file is written.
    """

    async def write_file(self, path: str, data: bytes) -> None:
        """Write binary data to a new local file, refusing to overwrite."""
        await asyncio.to_thread(self._write_exclusive, Path(path), data)

    async def read_file(self, path: str) -> bytes:
        """Read a local file."""
        return await asyncio.to_thread(Path(path).read_bytes)

    async def delete_file(self, path: str) -> None:
        """Delete a local file."""
        await asyncio.to_thread(Path(path).unlink)

    async def ensure_directory(self, path: str) -> None:
        """Create a local directory tree."""
        await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)

    async def exists(self, path: str) -> bool:
        """Check if a local path exists."""
        return await asyncio.to_thread(Path(path).exists)

    @staticmethod
    def _write_exclusive(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("xb") as fh:
            fh.write(data)
