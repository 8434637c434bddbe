"""Ports for serializing resolved entries into an archive."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, Field

if TYPE_CHECKING:  # pragma: no cover
    from jarforge.assembly.entries import EntrySet

DEFAULT_EXCLUDED_SUFFIXES: tuple[str, ...] = (".DSA", ".RSA")


@dataclass(frozen=True, slots=True)
class WriterOptions:
    """Policies an archive writer applies uniformly to every entry."""

    compress: bool = True
    normalize_timestamps: bool = True
    excluded_suffixes: tuple[str, ...] = DEFAULT_EXCLUDED_SUFFIXES

    def is_excluded(self, name: str) -> bool:
        """Return True for signature files that must not be repackaged."""
        return name.endswith(self.excluded_suffixes)


class ArchiveSummary(BaseModel):
    """What an archive writer put into (and left out of) the container."""

    output: Path
    written: list[str] = Field(default_factory=list, description="Entry names in archive order")
    skipped: list[str] = Field(default_factory=list, description="Entries dropped by policy")


class ArchiveWriterPort(Protocol):
    """Port interface for archive serialization.

    Side effects: Creates or replaces the output archive.
    """

    options: WriterOptions

    def write(self, output: Path, entries: EntrySet, manifest: bytes) -> ArchiveSummary:
        """Write ``manifest`` followed by ``entries`` (in name order) to ``output``.

        Args:
            output: Destination archive path
            entries: Resolved entries
            manifest: Serialized manifest, always written first

        Returns:
            ArchiveSummary describing the written archive
        """
        ...
