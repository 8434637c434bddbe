"""jarforge - reproducible JAR assembly for compile pipelines.

Collects compiled outputs (loose files, directory trees, nested archives)
into a single deterministic archive with a synthesized manifest.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

__version__ = "0.1.0"
__author__ = "jarforge Contributors"

from jarforge.config import Settings, get_settings

if TYPE_CHECKING:  # pragma: no cover
    from jarforge.app.build_service import BuildResult
    from jarforge.assembly.entries import InputDescriptor


def build_jar(
    output: Path,
    inputs: Iterable[InputDescriptor],
    *,
    manifest_file: Path | None = None,
    main_class: str | None = None,
    compress: bool = True,
    normalize_timestamps: bool = True,
    settings: Settings | None = None,
) -> BuildResult:
    """Build ``output`` from ``inputs`` using the default adapters."""
    from jarforge.app.build_service import BuildRequest
    from jarforge.bootstrap import bootstrap_application

    container = bootstrap_application(settings)
    return container.build_service.build(
        BuildRequest(
            output=output,
            manifest_file=manifest_file,
            main_class=main_class,
            compress=compress,
            normalize_timestamps=normalize_timestamps,
            inputs=list(inputs),
        )
    )


__all__ = ["Settings", "build_jar", "get_settings", "__version__"]
