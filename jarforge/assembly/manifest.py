"""JAR manifest model, codec and synthesis.

The manifest is an immutable record: overrides never mutate it in place but
return a new record, so the final manifest is fixed before the archive writer
starts.

Wire format:
    - ``Header: value`` lines terminated by CRLF (LF and CR accepted on input)
    - lines longer than 72 bytes continue on lines starting with one space
    - the main section comes first, per-entry sections follow, each started
      by a ``Name`` header and separated by a blank line
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from jarforge.errors import ManifestError

MANIFEST_NAME = "META-INF/MANIFEST.MF"

MANIFEST_VERSION = "Manifest-Version"
CREATED_BY = "Created-By"
MAIN_CLASS = "Main-Class"
SECTION_NAME = "Name"

DEFAULT_MANIFEST_VERSION = "1.0"
DEFAULT_CREATED_BY = "jarforge"

MAX_LINE_BYTES = 72
MAX_HEADER_LENGTH = 70

_HEADER_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_LINE_SPLIT_RE = re.compile(r"\r\n|\n|\r")

Attributes = tuple[tuple[str, str], ...]


def _validate_header(header: str) -> None:
    if not header or len(header) > MAX_HEADER_LENGTH or not _HEADER_RE.match(header):
        raise ManifestError(f"Invalid manifest header name: {header!r}")


def _validate_value(header: str, value: str) -> None:
    if any(ch in value for ch in "\r\n\x00"):
        raise ManifestError(f"Manifest value for {header!r} contains a line break or NUL")


def _find(attributes: Attributes, header: str) -> int | None:
    wanted = header.lower()
    for index, (name, _) in enumerate(attributes):
        if name.lower() == wanted:
            return index
    return None


def _put(attributes: Attributes, header: str, value: str) -> Attributes:
    """Return ``attributes`` with ``header`` set, keeping an existing key's position."""
    _validate_header(header)
    _validate_value(header, value)
    index = _find(attributes, header)
    if index is None:
        return (*attributes, (header, value))
    existing_name = attributes[index][0]
    return (*attributes[:index], (existing_name, value), *attributes[index + 1 :])


def _encode_line(header: str, value: str) -> bytes:
    """Encode one header, wrapping at 72 bytes without splitting UTF-8 sequences."""
    raw = f"{header}: {value}".encode("utf-8")
    chunks: list[bytes] = []
    limit = MAX_LINE_BYTES
    while len(raw) > limit:
        cut = limit
        # 0b10xxxxxx marks a UTF-8 continuation byte
        while cut > 0 and (raw[cut] & 0xC0) == 0x80:
            cut -= 1
        chunks.append(raw[:cut])
        raw = raw[cut:]
        limit = MAX_LINE_BYTES - 1
    chunks.append(raw)
    return b"\r\n ".join(chunks) + b"\r\n"


class ManifestSection(BaseModel):
    """A per-entry manifest section."""

    model_config = ConfigDict(frozen=True)

    name: str
    attributes: Attributes = ()

    def get(self, header: str) -> str | None:
        index = _find(self.attributes, header)
        return None if index is None else self.attributes[index][1]


class Manifest(BaseModel):
    """Immutable JAR manifest: ordered main attributes plus per-entry sections."""

    model_config = ConfigDict(frozen=True)

    main_attributes: Attributes = ()
    sections: tuple[ManifestSection, ...] = ()

    def get(self, header: str) -> str | None:
        """Return the main-section value for ``header`` (case-insensitive)."""
        index = _find(self.main_attributes, header)
        return None if index is None else self.main_attributes[index][1]

    def __contains__(self, header: object) -> bool:
        return isinstance(header, str) and _find(self.main_attributes, header) is not None

    def with_attribute(self, header: str, value: str) -> Manifest:
        """Return a copy with ``header`` set, overwriting any existing value."""
        return self.model_copy(
            update={"main_attributes": _put(self.main_attributes, header, value)}
        )

    def with_default(self, header: str, value: str) -> Manifest:
        """Return a copy with ``header`` set only if it is absent."""
        if header in self:
            return self
        return self.with_attribute(header, value)

    def to_bytes(self) -> bytes:
        """Serialize to the JAR manifest wire form."""
        lines: list[bytes] = []
        version_index = _find(self.main_attributes, MANIFEST_VERSION)
        if version_index is not None:
            # canonical spelling regardless of the supplied casing
            lines.append(_encode_line(MANIFEST_VERSION, self.main_attributes[version_index][1]))
        for index, (header, value) in enumerate(self.main_attributes):
            if index != version_index:
                lines.append(_encode_line(header, value))
        lines.append(b"\r\n")

        for section in self.sections:
            lines.append(_encode_line(SECTION_NAME, section.name))
            for header, value in section.attributes:
                lines.append(_encode_line(header, value))
            lines.append(b"\r\n")
        return b"".join(lines)

    @classmethod
    def parse(cls, data: bytes) -> Manifest:
        """Parse manifest bytes.

        Raises:
            ManifestError: If the content is not valid UTF-8 or not a manifest
        """
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestError(f"Manifest is not valid UTF-8: {exc}") from exc

        # Each block is a list of [header, value] pairs; block 0 is the main section.
        blocks: list[list[list[str]]] = [[]]
        starting_block = False
        for lineno, line in enumerate(_LINE_SPLIT_RE.split(text), start=1):
            if not line:
                starting_block = True
                continue
            if starting_block and blocks[-1]:
                blocks.append([])
            starting_block = False
            current = blocks[-1]

            if line.startswith(" "):
                if not current:
                    raise ManifestError(f"Manifest line {lineno}: continuation without a header")
                current[-1][1] += line[1:]
                continue

            header, sep, value = line.partition(": ")
            if not sep:
                raise ManifestError(f"Manifest line {lineno}: invalid header field {line!r}")
            _validate_header(header)
            current.append([header, value])

        main: Attributes = ()
        for header, value in blocks[0]:
            main = _put(main, header, value)

        sections: list[ManifestSection] = []
        for block in blocks[1:]:
            attributes: Attributes = ()
            for header, value in block:
                attributes = _put(attributes, header, value)
            index = _find(attributes, SECTION_NAME)
            if index is None:
                raise ManifestError("Manifest section is missing a Name header")
            name = attributes[index][1]
            rest = attributes[:index] + attributes[index + 1 :]
            sections.append(ManifestSection(name=name, attributes=rest))

        return cls(main_attributes=main, sections=tuple(sections))


def load_manifest(path: Path) -> Manifest:
    """Read and parse the manifest file at ``path``.

    Raises:
        ManifestError: If the file cannot be read or parsed
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}", path=Path(path)) from exc
    try:
        return Manifest.parse(data)
    except ManifestError as exc:
        raise ManifestError(f"Malformed manifest {path}: {exc}", path=Path(path)) from exc


def synthesize_manifest(
    manifest_file: Path | None = None,
    main_class: str | None = None,
    *,
    created_by: str = DEFAULT_CREATED_BY,
) -> Manifest:
    """Build the final manifest record.

    Starts from ``manifest_file`` (or an empty record), then always sets the
    format version, sets the creator only if the caller did not, and sets the
    main class whenever one is given.
    """
    base = load_manifest(manifest_file) if manifest_file is not None else Manifest()
    manifest = base.with_attribute(MANIFEST_VERSION, DEFAULT_MANIFEST_VERSION)
    manifest = manifest.with_default(CREATED_BY, created_by)
    if main_class is not None:
        manifest = manifest.with_attribute(MAIN_CLASS, main_class)
    return manifest


def build_manifest(
    manifest_file: Path | None = None,
    main_class: str | None = None,
    *,
    created_by: str = DEFAULT_CREATED_BY,
) -> bytes:
    """Return the serialized manifest that becomes the archive's first entry."""
    return synthesize_manifest(manifest_file, main_class, created_by=created_by).to_bytes()
