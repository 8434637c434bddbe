"""Tests for canonical entry name normalization."""

import pytest

from jarforge.assembly.names import directory_marker, join_entry_name, normalize_entry_name


def test_leading_slash_and_dot_slash_are_dropped() -> None:
    assert normalize_entry_name("/a/b") == "a/b"
    assert normalize_entry_name("./a/b") == "a/b"
    assert normalize_entry_name("a/b") == "a/b"


@pytest.mark.parametrize(
    "name",
    ["/a/b", "./a/b", "a/b", "//a", "/./a", ".//a", "", "/", "./", ".a", "a/./b", "../a"],
)
def test_normalize_is_idempotent(name: str) -> None:
    once = normalize_entry_name(name)
    assert normalize_entry_name(once) == once
    assert not once.startswith("/")
    assert not once.startswith("./")


def test_names_are_otherwise_verbatim() -> None:
    assert normalize_entry_name("Foo/BAR.class") == "Foo/BAR.class"
    assert normalize_entry_name("a/../b") == "a/../b"
    assert normalize_entry_name("café") == "café"


def test_join_always_uses_forward_slash() -> None:
    assert join_entry_name(["x", "y", "z.bin"]) == "x/y/z.bin"


def test_directory_marker_has_single_trailing_slash() -> None:
    assert directory_marker("sub") == "sub/"
    assert directory_marker("sub/") == "sub/"
