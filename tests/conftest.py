"""Pytest configuration and fixtures."""

import gc
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from jarforge.config import Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        # Force garbage collection to release any file handles
        gc.collect()
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def class_tree(temp_dir: Path) -> Path:
    """Create a compiler output tree: src/a.bin and src/sub/b.bin."""
    root = temp_dir / "src"
    (root / "sub").mkdir(parents=True)
    (root / "a.bin").write_bytes(b"alpha")
    (root / "sub" / "b.bin").write_bytes(b"bravo")
    return root


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated jarforge settings scoped to tests."""

    import jarforge.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    settings = config_module.Settings(
        scratch_root=temp_dir / "scratch",
        compiler_command=None,
    )

    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings
