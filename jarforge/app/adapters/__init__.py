"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .jar_writer import JarWriter
from .storage import FileSystemStorageAdapter

__all__ = [
    "FileSystemStorageAdapter",
    "JarWriter",
]
