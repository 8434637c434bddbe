"""Port interfaces for the jarforge application layer.

These protocol interfaces define contracts for adapters.
Build orchestration depends on these ports, never on concrete implementations.
"""

__all__ = [
    "DEFAULT_EXCLUDED_SUFFIXES",
    "ArchiveSummary",
    "ArchiveWriterPort",
    "StoragePort",
    "WriterOptions",
]

from jarforge.app.ports.archive import (
    DEFAULT_EXCLUDED_SUFFIXES,
    ArchiveSummary,
    ArchiveWriterPort,
    WriterOptions,
)
from jarforge.app.ports.storage import StoragePort
