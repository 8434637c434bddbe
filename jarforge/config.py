"""Configuration management with Pydantic settings."""

import shlex
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from jarforge.app.ports.archive import DEFAULT_EXCLUDED_SUFFIXES, WriterOptions
from jarforge.assembly.manifest import DEFAULT_CREATED_BY


class Settings(BaseSettings):
    """jarforge configuration settings.

    Precedence: CLI flag > environment variable > config file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="JARFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Archive policies
    compress: bool = Field(
        default=True,
        description="DEFLATE-compress entries (STORED when disabled)",
    )

    normalize_timestamps: bool = Field(
        default=True,
        description="Stamp every entry with the DOS epoch instead of its mtime",
    )

    created_by: str = Field(
        default=DEFAULT_CREATED_BY,
        min_length=1,
        description="Created-By manifest value used when the manifest has none",
    )

    excluded_suffixes: tuple[str, ...] = Field(
        default=DEFAULT_EXCLUDED_SUFFIXES,
        description="Entry name suffixes dropped as signature files",
    )

    archive_suffixes: tuple[str, ...] = Field(
        default=(".jar",),
        description="File suffixes treated as nested archives when classifying roots",
    )

    # Compile driver
    compiler_command: str | None = Field(
        default=None,
        description="External compiler command line (split with shell rules)",
    )

    scratch_root: Path | None = Field(
        default=None,
        description="Parent directory for compiler scratch output (defaults to system temp)",
    )

    scratch_prefix: str = Field(
        default="jarforge-",
        description="Name prefix for scratch directories",
    )

    def get_writer_options(self) -> WriterOptions:
        """Return the archive writer policies derived from these settings."""
        return WriterOptions(
            compress=self.compress,
            normalize_timestamps=self.normalize_timestamps,
            excluded_suffixes=tuple(self.excluded_suffixes),
        )

    def get_compiler_argv(self) -> list[str] | None:
        """Return the compiler command as an argument vector, if configured."""
        if not self.compiler_command:
            return None
        return shlex.split(self.compiler_command)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
