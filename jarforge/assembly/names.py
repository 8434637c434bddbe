"""Canonical archive entry names."""

from __future__ import annotations

from collections.abc import Iterable

SEPARATOR = "/"


def _strip_one(name: str) -> str:
    if name.startswith("/"):
        return name[1:]
    if name.startswith("./"):
        return name[2:]
    return name


def normalize_entry_name(name: str) -> str:
    """Rewrite ``name`` into its canonical archive form.

    A leading ``/`` is dropped, otherwise a leading ``./`` is dropped. The
    rule is reapplied until the name is stable so that normalizing twice is
    the same as normalizing once (``"//a"`` and ``"/./a"`` both become
    ``"a"``). Nothing else is touched: no case folding and no Unicode
    normalization.

    Example:
        >>> normalize_entry_name("/a/b")
        'a/b'
        >>> normalize_entry_name("./a/b")
        'a/b'
    """
    stripped = _strip_one(name)
    while stripped != name:
        name = stripped
        stripped = _strip_one(name)
    return stripped


def join_entry_name(segments: Iterable[str]) -> str:
    """Join path segments with ``/`` regardless of the host separator."""
    return SEPARATOR.join(segments)


def directory_marker(name: str) -> str:
    """Return the directory marker form of ``name`` (always ends with ``/``)."""
    return name if name.endswith(SEPARATOR) else name + SEPARATOR
