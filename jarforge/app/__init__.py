"""Application layer for jarforge.

This layer orchestrates builds. Source reads and archive writes are
delegated to adapters via port interfaces.
"""

__all__ = [
    "BuildRequest",
    "BuildResult",
    "BuildService",
    "CompileService",
]

from jarforge.app.build_service import BuildRequest, BuildResult, BuildService
from jarforge.app.compile_service import CompileService
