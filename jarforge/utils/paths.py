"""Path utilities for directory lifecycle operations."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def delete_tree(root: Path) -> None:
    """Recursively delete ``root``, removing the deepest paths first.

    Symlinks are unlinked, never followed. A missing ``root`` is a no-op.
    """
    if not os.path.lexists(root):
        return
    if root.is_symlink() or not root.is_dir():
        root.unlink()
        return

    paths: list[Path] = [root]
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        paths.extend(base / name for name in dirnames)
        paths.extend(base / name for name in filenames)

    for path in sorted(paths, key=lambda p: len(p.parts), reverse=True):
        if path.is_dir() and not path.is_symlink():
            path.rmdir()
        else:
            path.unlink()


@contextmanager
def scratch_directory(
    root: Path | None = None,
    prefix: str = "jarforge-",
) -> Iterator[Path]:
    """Provide a uniquely named scratch directory removed on every exit path.

    Args:
        root: Parent directory (defaults to the system temp directory)
        prefix: Name prefix for the created directory

    Yields:
        Path to the scratch directory
    """
    if root is not None:
        ensure_dir(root)
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=str(root) if root is not None else None))
    logger.debug("Created scratch directory %s", path)
    try:
        yield path
    finally:
        delete_tree(path)
        logger.debug("Removed scratch directory %s", path)
