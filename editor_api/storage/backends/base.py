"""Abstract base class for storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Abstract storage backend for asset I/O.

    Implementations must handle writing new files without overwriting,
    reading and deleting files, creating directories and checking existence.
    """

    @abstractmethod
    async def write_file(self, path: str, data: bytes) -> None:
        """Write binary data to a new file.

        Args:
            path: Full file path.
            data: Binary data to write.

        Raises:
            FileExistsError: If a file already exists at ``path``.
        """

    @abstractmethod
    async def read_file(self, path: str) -> bytes:
        """Read a file's binary content.

        Args:
            path: Full file path.
        """

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        """Delete a single file.

        Args:
            path: File path to delete.

        Raises:
            FileNotFoundError: If nothing exists at ``path``.
        """

    @abstractmethod
    async def ensure_directory(self, path: str) -> None:
        """Create a directory and its parents if missing.

        Args:
            path: Directory path.
        """

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if the path exists.
        """
