"""Build service for one-shot archive assembly.

Wires manifest synthesis, entry resolution and archive serialization into a
single ``build`` call. The manifest is synthesized before anything touches
the output path, so a bad manifest never leaves a file behind.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from pydantic import BaseModel, Field

from jarforge.app.ports import (
    ArchiveWriterPort,
    StoragePort,
    WriterOptions,
)
from jarforge.assembly.entries import (
    DirectoryTree,
    EntryResolver,
    InputDescriptor,
    NestedArchive,
)
from jarforge.assembly.manifest import DEFAULT_CREATED_BY, build_manifest

logger = logging.getLogger(__name__)

WriterFactory = Callable[[WriterOptions], ArchiveWriterPort]


class BuildRequest(BaseModel):
    """Everything a single archive build needs."""

    output: Path = Field(..., description="Destination archive path")
    manifest_file: Path | None = Field(None, description="Base manifest to merge into")
    main_class: str | None = Field(None, description="Main-Class manifest value")
    compress: bool = Field(True, description="DEFLATE entries instead of storing them")
    normalize_timestamps: bool = Field(True, description="Stamp entries with the DOS epoch")
    inputs: list[InputDescriptor] = Field(default_factory=list)


class BuildResult(BaseModel):
    """Outcome of a successful build."""

    output: Path
    entries: list[str] = Field(..., description="Entry names in archive order")
    skipped: list[str] = Field(default_factory=list, description="Entries dropped by policy")
    sha256: str = Field(..., description="SHA-256 of the written archive")


class BuildService:
    """Orchestrates archive builds.

    Filesystem reads go through the storage port and the archive is written by
    whatever writer the factory produces for the request's policies.
    """

    def __init__(
        self,
        storage_port: StoragePort,
        writer_factory: WriterFactory,
        *,
        created_by: str = DEFAULT_CREATED_BY,
        writer_options: WriterOptions | None = None,
        archive_suffixes: tuple[str, ...] = (".jar",),
    ):
        """Initialize build service.

        Args:
            storage_port: Filesystem read port
            writer_factory: Creates an archive writer for a set of policies
            created_by: Default Created-By manifest value
            writer_options: Base writer policies; each request overrides
                compression and timestamp normalization
            archive_suffixes: Suffixes classified as nested archives
        """
        self.storage = storage_port
        self.writer_factory = writer_factory
        self.created_by = created_by
        self.writer_options = writer_options or WriterOptions()
        self.archive_suffixes = tuple(archive_suffixes)

    def build(self, request: BuildRequest) -> BuildResult:
        """Assemble ``request.inputs`` into ``request.output``.

        Raises:
            ManifestError: If the manifest file is missing or malformed
            EntryReadError: If an entry cannot be read while writing
            ArchiveWriteError: If the archive itself cannot be written
        """
        logger.info("Building %s from %d input(s)", request.output, len(request.inputs))

        manifest = build_manifest(
            request.manifest_file,
            request.main_class,
            created_by=self.created_by,
        )

        resolver = EntryResolver(self.storage)
        resolver.register_all(request.inputs)
        entries = resolver.entries()

        writer = self.writer_factory(
            dataclasses.replace(
                self.writer_options,
                compress=request.compress,
                normalize_timestamps=request.normalize_timestamps,
            )
        )
        summary = writer.write(request.output, entries, manifest)

        return BuildResult(
            output=summary.output,
            entries=summary.written,
            skipped=summary.skipped,
            sha256=self.storage.compute_hash(summary.output),
        )

    def build_roots(
        self,
        output: Path,
        roots: Iterable[Path],
        *,
        manifest_file: Path | None = None,
        main_class: str | None = None,
        compress: bool = True,
        normalize_timestamps: bool = True,
        extra_inputs: Iterable[InputDescriptor] = (),
    ) -> BuildResult:
        """Build from filesystem roots, classifying each one automatically."""
        inputs: list[InputDescriptor] = [self.classify_root(Path(root)) for root in roots]
        inputs.extend(extra_inputs)
        return self.build(
            BuildRequest(
                output=output,
                manifest_file=manifest_file,
                main_class=main_class,
                compress=compress,
                normalize_timestamps=normalize_timestamps,
                inputs=inputs,
            )
        )

    def classify_root(self, path: Path) -> InputDescriptor:
        """Return a nested archive for archive files, a directory tree otherwise."""
        if path.name.endswith(self.archive_suffixes) and self.storage.is_file(path):
            return NestedArchive(path=path)
        return DirectoryTree(root=path)
