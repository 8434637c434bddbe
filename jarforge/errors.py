"""Exception hierarchy for archive builds."""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Base class for every failure that aborts a build."""


class ManifestError(BuildError):
    """Raised when a supplied manifest file is missing, unreadable or malformed."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class EntryReadError(BuildError):
    """Raised when an entry's source cannot be read while the archive is written."""

    def __init__(self, entry_name: str, source: Path, reason: str) -> None:
        super().__init__(f"Cannot read entry '{entry_name}' from {source}: {reason}")
        self.entry_name = entry_name
        self.source = source


class CompilerError(BuildError):
    """Raised when the external compiler is missing or exits unsuccessfully."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class InvocationError(BuildError):
    """Raised for malformed driver arguments."""


class ArchiveWriteError(BuildError):
    """Raised when the output archive itself cannot be written."""

    def __init__(self, output: Path, reason: str) -> None:
        super().__init__(f"Cannot write archive {output}: {reason}")
        self.output = output
