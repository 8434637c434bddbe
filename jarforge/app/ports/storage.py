"""Storage port interface for filesystem operations."""

from pathlib import Path
from typing import Protocol


class StoragePort(Protocol):
    """Port interface for storage operations.

    Abstracts filesystem reads so resolution can be exercised without a
    real directory tree.

    Side effects: Reads files and directory listings (never writes).
    """

    def list_directory(self, directory: Path) -> list[Path]:
        """List the direct children of ``directory``.

        Args:
            directory: Directory path

        Returns:
            Child paths in no particular order

        Raises:
            OSError: If ``directory`` cannot be listed
        """
        ...

    def is_directory(self, path: Path) -> bool:
        """Return True when ``path`` is a directory."""
        ...

    def is_file(self, path: Path) -> bool:
        """Return True when ``path`` is a regular file."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read a whole file.

        Args:
            path: File path

        Returns:
            File contents
        """
        ...

    def modified_time(self, path: Path) -> float:
        """Return the last modification time of ``path`` in seconds since the epoch."""
        ...

    def compute_hash(self, path: Path) -> str:
        """Compute SHA-256 hash of file.

        Args:
            path: File path

        Returns:
            Hex-encoded SHA-256 hash
        """
        ...
