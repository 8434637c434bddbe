"""Utility modules for common operations."""

from jarforge.utils.deterministic import DOS_EPOCH, canonical_order, normalized_timestamp
from jarforge.utils.hashing import compute_sha256_file
from jarforge.utils.paths import delete_tree, ensure_dir, scratch_directory

__all__ = [
    "DOS_EPOCH",
    "canonical_order",
    "compute_sha256_file",
    "delete_tree",
    "ensure_dir",
    "normalized_timestamp",
    "scratch_directory",
]
