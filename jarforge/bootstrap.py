"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass

from jarforge.app import BuildService, CompileService
from jarforge.app.adapters import FileSystemStorageAdapter, JarWriter
from jarforge.app.ports import StoragePort
from jarforge.config import Settings, get_settings


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    storage_port: StoragePort
    build_service: BuildService
    compile_service: CompileService


def bootstrap_application(settings: Settings | None = None) -> ApplicationContainer:
    """Create the application container with default adapters."""

    active_settings = settings or get_settings()
    storage = FileSystemStorageAdapter()

    build_service = BuildService(
        storage,
        lambda options: JarWriter(options, storage),
        created_by=active_settings.created_by,
        writer_options=active_settings.get_writer_options(),
        archive_suffixes=tuple(active_settings.archive_suffixes),
    )
    compile_service = CompileService(
        build_service,
        compiler_argv=active_settings.get_compiler_argv(),
        scratch_root=active_settings.scratch_root,
        scratch_prefix=active_settings.scratch_prefix,
        compress=active_settings.compress,
        normalize_timestamps=active_settings.normalize_timestamps,
    )

    return ApplicationContainer(
        settings=active_settings,
        storage_port=storage,
        build_service=build_service,
        compile_service=compile_service,
    )
