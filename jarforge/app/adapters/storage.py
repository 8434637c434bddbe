"""Filesystem-backed storage port implementation."""

from __future__ import annotations

import os
from pathlib import Path

from jarforge.app.ports import StoragePort
from jarforge.utils.hashing import compute_sha256_file


class FileSystemStorageAdapter(StoragePort):
    """Adapter that performs direct filesystem operations."""

    def list_directory(self, directory: Path) -> list[Path]:
        with os.scandir(directory) as entries:
            return [Path(entry.path) for entry in entries]

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def is_file(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def modified_time(self, path: Path) -> float:
        return Path(path).stat().st_mtime

    def compute_hash(self, path: Path) -> str:
        return compute_sha256_file(Path(path))
