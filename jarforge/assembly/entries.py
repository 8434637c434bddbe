"""Input descriptors and canonical entry resolution.

Every input (loose file, directory tree, flattened file, nested archive)
expands into zero or more entries keyed by canonical name. Later registrations
for the same name silently replace earlier ones; emission order is always
lexicographic by name and never depends on registration order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from jarforge.assembly.names import join_entry_name, normalize_entry_name
from jarforge.utils.deterministic import canonical_order

if TYPE_CHECKING:  # pragma: no cover
    from jarforge.app.ports import StoragePort

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    """How an entry's source is treated when the archive is written."""

    SOURCE = "source"
    ARCHIVE = "archive"


class Entry(BaseModel):
    """One named unit of archive content."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Canonical, forward-slash separated entry name")
    source: Path = Field(..., description="Location the content is read from")
    kind: EntryKind = Field(default=EntryKind.SOURCE)


class SingleFile(BaseModel):
    """Register ``path`` under an explicit entry ``name``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["single_file"] = "single_file"
    name: str
    path: Path


class DirectoryTree(BaseModel):
    """Register every descendant of ``root`` under its root-relative name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["directory_tree"] = "directory_tree"
    root: Path
    prefix: str | None = None


class RootFlattenedFile(BaseModel):
    """Register ``path`` under its base name, discarding directories."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["root_flattened_file"] = "root_flattened_file"
    path: Path


class NestedArchive(BaseModel):
    """Embed an existing archive as a single opaque entry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["nested_archive"] = "nested_archive"
    path: Path


InputDescriptor = Annotated[
    SingleFile | DirectoryTree | RootFlattenedFile | NestedArchive,
    Field(discriminator="kind"),
]


class EntrySet:
    """Immutable, name-ordered snapshot of resolved entries."""

    __slots__ = ("_entries", "_by_name")

    def __init__(self, entries: Iterable[Entry]) -> None:
        by_name = {entry.name: entry for entry in entries}
        self._entries: tuple[Entry, ...] = tuple(entry for _, entry in canonical_order(by_name))
        self._by_name = by_name

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Entry | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]


class EntryResolver:
    """Accumulates input descriptors into a canonical entry mapping.

    Registration never raises: unreadable directories contribute nothing and
    missing files are only noticed when the archive writer reads them.
    """

    def __init__(self, storage: StoragePort | None = None) -> None:
        if storage is None:
            from jarforge.app.adapters.storage import FileSystemStorageAdapter

            storage = FileSystemStorageAdapter()
        self._storage = storage
        self._entries: dict[str, Entry] = {}

    def register(self, descriptor: InputDescriptor) -> None:
        """Expand ``descriptor`` into entries."""
        if isinstance(descriptor, SingleFile):
            self.add_entry(descriptor.name, descriptor.path)
        elif isinstance(descriptor, DirectoryTree):
            self.add_directory(descriptor.root, prefix=descriptor.prefix)
        elif isinstance(descriptor, RootFlattenedFile):
            self.add_root_entries([descriptor.path])
        elif isinstance(descriptor, NestedArchive):
            self.add_archive(descriptor.path)
        else:
            raise TypeError(f"Unsupported input descriptor: {descriptor!r}")

    def register_all(self, descriptors: Iterable[InputDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    def add_entry(self, name: str, path: Path) -> bool:
        """Register ``path`` under the normalized ``name``.

        Returns:
            True if the name was not registered before
        """
        return self._put(Entry(name=normalize_entry_name(name), source=Path(path)))

    def add_directory(self, root: Path, *, prefix: str | None = None) -> None:
        """Register all descendants of ``root``; directories become entries too."""
        prefix = normalize_entry_name(prefix).rstrip("/") if prefix else ""
        segments = [prefix] if prefix else []
        self._add_directory(Path(root), segments)

    def add_root_entries(self, paths: Iterable[Path]) -> None:
        """Register each path under its base name.

        ``some/long/path.foo`` becomes the entry ``path.foo``.
        """
        for path in paths:
            path = Path(path)
            self._put(Entry(name=path.name, source=path))

    def add_archive(self, path: Path) -> None:
        """Register an existing archive as one opaque entry keyed by its absolute path."""
        absolute = Path(path).absolute()
        self._put(
            Entry(
                name=normalize_entry_name(absolute.as_posix()),
                source=absolute,
                kind=EntryKind.ARCHIVE,
            )
        )

    def entries(self) -> EntrySet:
        """Return an immutable snapshot ordered by canonical name."""
        return EntrySet(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def _put(self, entry: Entry) -> bool:
        previous = self._entries.get(entry.name)
        self._entries[entry.name] = entry
        if previous is not None and previous.source != entry.source:
            logger.debug(
                "Entry %s now maps to %s (replacing %s)", entry.name, entry.source, previous.source
            )
        return previous is None

    def _add_directory(self, directory: Path, segments: list[str]) -> None:
        try:
            children = self._storage.list_directory(directory)
        except OSError as exc:
            logger.debug("Skipping unreadable directory %s: %s", directory, exc)
            return

        for child in children:
            child_segments = [*segments, child.name]
            self._put(Entry(name=join_entry_name(child_segments), source=child.absolute()))
            if self._storage.is_directory(child):
                self._add_directory(child, child_segments)
