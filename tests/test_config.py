"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from jarforge.app.ports import DEFAULT_EXCLUDED_SUFFIXES
from jarforge.config import Settings, get_settings, set_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JARFORGE_COMPILER_COMMAND", raising=False)

    settings = Settings()

    assert settings.compress is True
    assert settings.normalize_timestamps is True
    assert settings.created_by == "jarforge"
    assert settings.excluded_suffixes == DEFAULT_EXCLUDED_SUFFIXES
    assert settings.get_compiler_argv() is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    monkeypatch.setenv("JARFORGE_COMPRESS", "false")
    monkeypatch.setenv("JARFORGE_CREATED_BY", "ci")
    monkeypatch.setenv("JARFORGE_SCRATCH_ROOT", str(temp_dir))

    settings = Settings()

    assert settings.compress is False
    assert settings.created_by == "ci"
    assert settings.scratch_root == temp_dir


def test_compiler_argv_uses_shell_rules() -> None:
    settings = Settings(compiler_command='java -jar "my compiler.jar" -make')

    assert settings.get_compiler_argv() == ["java", "-jar", "my compiler.jar", "-make"]


def test_writer_options() -> None:
    settings = Settings(compress=False, normalize_timestamps=False, excluded_suffixes=(".SF",))

    options = settings.get_writer_options()

    assert options.compress is False
    assert options.normalize_timestamps is False
    assert options.is_excluded("META-INF/CERT.SF")
    assert not options.is_excluded("META-INF/CERT.RSA")


def test_override_settings_fixture(override_settings: Settings, temp_dir: Path) -> None:
    assert get_settings() is override_settings
    assert get_settings().scratch_root == temp_dir / "scratch"


def test_set_settings_replaces_global() -> None:
    import jarforge.config as config_module

    original = config_module._settings
    replacement = Settings(created_by="other")
    try:
        set_settings(replacement)
        assert get_settings() is replacement
    finally:
        config_module._settings = original
