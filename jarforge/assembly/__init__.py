"""Archive assembly domain: names, entries and manifests."""

from jarforge.assembly.entries import (
    DirectoryTree,
    Entry,
    EntryKind,
    EntryResolver,
    EntrySet,
    InputDescriptor,
    NestedArchive,
    RootFlattenedFile,
    SingleFile,
)
from jarforge.assembly.manifest import (
    MANIFEST_NAME,
    Manifest,
    ManifestSection,
    build_manifest,
    load_manifest,
    synthesize_manifest,
)
from jarforge.assembly.names import normalize_entry_name

__all__ = [
    "MANIFEST_NAME",
    "DirectoryTree",
    "Entry",
    "EntryKind",
    "EntryResolver",
    "EntrySet",
    "InputDescriptor",
    "Manifest",
    "ManifestSection",
    "NestedArchive",
    "RootFlattenedFile",
    "SingleFile",
    "build_manifest",
    "load_manifest",
    "normalize_entry_name",
    "synthesize_manifest",
]
