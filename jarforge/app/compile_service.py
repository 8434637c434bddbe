"""Compile-then-package driver.

Runs an external compiler into a private scratch directory and packages the
scratch tree as an archive. The scratch directory is removed on every exit
path, whether the compiler fails, the build fails, or the process is
interrupted.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any

from jarforge.app.build_service import BuildResult, BuildService
from jarforge.errors import CompilerError
from jarforge.utils.paths import scratch_directory

logger = logging.getLogger(__name__)

OUTPUT_DIR_FLAG = "-d"
CLASSPATH_FLAG = "-fp"
MAKE_FLAGS = ("-j", "-make")

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]


class CompileService:
    """Compile sources with an external command and package the output."""

    def __init__(
        self,
        build_service: BuildService,
        *,
        compiler_argv: Sequence[str] | None = None,
        scratch_root: Path | None = None,
        scratch_prefix: str = "jarforge-",
        compress: bool = True,
        normalize_timestamps: bool = True,
        runner: Runner = subprocess.run,
    ) -> None:
        self.build_service = build_service
        self.compiler_argv = list(compiler_argv) if compiler_argv else None
        self.scratch_root = scratch_root
        self.scratch_prefix = scratch_prefix
        self.compress = compress
        self.normalize_timestamps = normalize_timestamps
        self._runner = runner

    def compiler_command(
        self,
        scratch: Path,
        sources: Iterable[Path],
        *,
        classpath: str | None = None,
        compiler_argv: Sequence[str] | None = None,
    ) -> list[str]:
        """Return the full compiler invocation for ``sources``.

        Raises:
            CompilerError: If no compiler command is configured
        """
        argv = list(compiler_argv) if compiler_argv else self.compiler_argv
        if not argv:
            raise CompilerError(
                "No compiler configured. Set JARFORGE_COMPILER_COMMAND or pass --compiler."
            )
        command = [*argv, OUTPUT_DIR_FLAG, str(scratch)]
        if classpath:
            command.extend([CLASSPATH_FLAG, classpath])
        command.extend(MAKE_FLAGS)
        command.extend(str(source) for source in sources)
        return command

    def compile(
        self,
        output: Path,
        sources: Iterable[Path],
        *,
        classpath: str | None = None,
        main_class: str | None = None,
        compiler_argv: Sequence[str] | None = None,
    ) -> BuildResult:
        """Compile ``sources`` and package the compiler output into ``output``.

        Raises:
            CompilerError: If the compiler cannot be started or fails
            BuildError: If packaging the compiler output fails
        """
        source_list = [Path(source) for source in sources]
        with scratch_directory(self.scratch_root, self.scratch_prefix) as scratch:
            command = self.compiler_command(
                scratch,
                source_list,
                classpath=classpath,
                compiler_argv=compiler_argv,
            )
            logger.info("Running compiler: %s", shlex.join(command))
            try:
                completed = self._runner(command, check=False)
            except OSError as exc:
                raise CompilerError(f"Cannot run compiler '{command[0]}': {exc}") from exc

            if completed.returncode != 0:
                raise CompilerError(
                    f"Compiler exited with status {completed.returncode}",
                    returncode=completed.returncode,
                )
            logger.info("Compiled %d source(s); packaging %s", len(source_list), output)

            return self.build_service.build_roots(
                output,
                [scratch],
                main_class=main_class,
                compress=self.compress,
                normalize_timestamps=self.normalize_timestamps,
            )
