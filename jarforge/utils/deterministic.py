"""Deterministic ordering and timestamp utilities for reproducible archives."""

from collections.abc import Mapping
from typing import TypeVar

T = TypeVar("T")

# ZIP stores local DOS time with 2-second resolution starting at 1980.
DOS_EPOCH: tuple[int, int, int, int, int, int] = (1980, 1, 1, 0, 0, 0)
MINIMUM_TIMESTAMP_INCREMENT_SECONDS = 2
CLASS_FILE_SUFFIX = ".class"


def normalized_timestamp(name: str) -> tuple[int, int, int, int, int, int]:
    """Return the fixed timestamp for entry ``name``.

    Class files are stamped one DOS tick after the epoch so they compare
    newer than any source file stamped at the epoch itself.

    Args:
        name: Canonical entry name

    Returns:
        ZIP ``date_time`` tuple
    """
    if name.endswith(CLASS_FILE_SUFFIX):
        year, month, day, hour, minute, second = DOS_EPOCH
        return (year, month, day, hour, minute, second + MINIMUM_TIMESTAMP_INCREMENT_SECONDS)
    return DOS_EPOCH


def canonical_order(entries: Mapping[str, T]) -> list[tuple[str, T]]:
    """Return ``entries`` as (name, value) pairs sorted by name.

    The result depends only on the set of keys, never on insertion order.
    """
    return sorted(entries.items(), key=lambda item: item[0])

