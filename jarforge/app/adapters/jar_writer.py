"""ZIP-backed archive writer producing reproducible JAR files."""

from __future__ import annotations

import logging
import os
import tempfile
import time
from bisect import bisect_left
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile, ZipInfo

from jarforge.app.ports import ArchiveSummary, ArchiveWriterPort, StoragePort, WriterOptions
from jarforge.assembly.entries import Entry, EntryKind, EntrySet
from jarforge.assembly.manifest import MANIFEST_NAME
from jarforge.assembly.names import directory_marker
from jarforge.errors import ArchiveWriteError, EntryReadError
from jarforge.utils.deterministic import DOS_EPOCH, normalized_timestamp

logger = logging.getLogger(__name__)

# Fixed attributes: rw-r--r-- for files, rwxr-xr-x plus the MS-DOS directory bit
# for markers. ZipFile replaces a zero attribute with host permissions.
FILE_ATTR = 0o100644 << 16
DIRECTORY_ATTR = (0o40755 << 16) | 0x10

DateTime = tuple[int, int, int, int, int, int]


def _dos_time(timestamp: float) -> DateTime:
    local = time.localtime(timestamp)[:6]
    if local[0] < DOS_EPOCH[0]:
        return DOS_EPOCH
    return local  # type: ignore[return-value]


class JarWriter(ArchiveWriterPort):
    """Write the manifest and entries into a single ZIP container.

    The archive is assembled in a temporary file next to ``output`` and moved
    into place only once complete, so a failed build never leaves a partial
    archive at the destination.
    """

    def __init__(
        self,
        options: WriterOptions | None = None,
        storage: StoragePort | None = None,
    ) -> None:
        if storage is None:
            from jarforge.app.adapters.storage import FileSystemStorageAdapter

            storage = FileSystemStorageAdapter()
        self.options = options or WriterOptions()
        self.storage = storage

    def write(self, output: Path, entries: EntrySet, manifest: bytes) -> ArchiveSummary:
        destination = Path(output)
        summary = ArchiveSummary(output=destination)

        emitted = [entry for entry in entries if self._accepts(entry, summary)]
        occupied = sorted([MANIFEST_NAME, *(entry.name for entry in emitted)])

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(destination.parent),
                prefix=f".{destination.name}.",
                suffix=".tmp",
            )
        except OSError as exc:
            raise ArchiveWriteError(destination, str(exc)) from exc

        tmp_path: Path | None = Path(tmp_name)
        try:
            with os.fdopen(fd, "w+b") as handle:
                with ZipFile(handle, "w") as archive:
                    self._write_data(archive, MANIFEST_NAME, manifest, self._now())
                    summary.written.append(MANIFEST_NAME)
                    for entry in emitted:
                        name = self._write_entry(archive, entry, occupied)
                        if name is not None:
                            summary.written.append(name)
                handle.flush()
                os.fsync(handle.fileno())
            _apply_default_mode(tmp_name)
            os.replace(tmp_name, destination)
            tmp_path = None
        except OSError as exc:
            raise ArchiveWriteError(destination, str(exc)) from exc
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        logger.info(
            "Wrote %s (%d entries, %d skipped)",
            destination,
            len(summary.written),
            len(summary.skipped),
        )
        return summary

    def _accepts(self, entry: Entry, summary: ArchiveSummary) -> bool:
        if entry.name == MANIFEST_NAME:
            logger.debug("Skipping %s: the manifest is synthesized", entry.source)
            summary.skipped.append(entry.name)
            return False
        if self.options.is_excluded(entry.name):
            logger.debug("Skipping signature entry %s", entry.name)
            summary.skipped.append(entry.name)
            return False
        return True

    def _write_entry(self, archive: ZipFile, entry: Entry, occupied: list[str]) -> str | None:
        """Append one entry; returns the stored name, or None when nothing was stored."""
        source = entry.source
        try:
            if entry.kind is EntryKind.SOURCE and self.storage.is_directory(source):
                marker = directory_marker(entry.name)
                index = bisect_left(occupied, marker)
                if index < len(occupied) and occupied[index].startswith(marker):
                    # Children carry the directory implicitly.
                    return None
                self._write_directory(archive, marker, self.storage.modified_time(source))
                return marker

            mtime = self.storage.modified_time(source)
            data = self.storage.read_bytes(source)
        except OSError as exc:
            raise EntryReadError(entry.name, source, exc.strerror or str(exc)) from exc

        self._write_data(archive, entry.name, data, mtime)
        return entry.name

    def _info(self, name: str, mtime: float) -> ZipInfo:
        if self.options.normalize_timestamps:
            date_time = normalized_timestamp(name)
        else:
            date_time = _dos_time(mtime)
        info = ZipInfo(filename=name, date_time=date_time)
        info.create_system = 0
        info.external_attr = FILE_ATTR
        return info

    def _write_data(self, archive: ZipFile, name: str, data: bytes, mtime: float) -> None:
        info = self._info(name, mtime)
        info.compress_type = ZIP_DEFLATED if self.options.compress and data else ZIP_STORED
        archive.writestr(info, data)

    def _write_directory(self, archive: ZipFile, marker: str, mtime: float) -> None:
        info = self._info(marker, mtime)
        info.compress_type = ZIP_STORED
        info.external_attr = DIRECTORY_ATTR
        info.file_size = 0
        info.compress_size = 0
        info.CRC = 0
        archive.mkdir(info)

    def _now(self) -> float:
        return time.time()


def _apply_default_mode(path: str) -> None:
    """Give the finished archive the permissions a plain ``open`` would have."""
    umask = os.umask(0)
    os.umask(umask)
    os.chmod(path, 0o666 & ~umask)
