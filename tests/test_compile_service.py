"""Tests for the compile-then-package driver."""

from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path

import pytest

from jarforge.app.compile_service import (
    CLASSPATH_FLAG,
    MAKE_FLAGS,
    OUTPUT_DIR_FLAG,
    CompileService,
)
from jarforge.assembly.manifest import MANIFEST_NAME
from jarforge.bootstrap import bootstrap_application
from jarforge.config import Settings
from jarforge.errors import CompilerError


class FakeCompiler:
    """Records invocations and writes class files into the output directory."""

    def __init__(self, returncode: int = 0, outputs: dict[str, bytes] | None = None):
        self.returncode = returncode
        self.outputs = outputs if outputs is not None else {"pkg/Main.class": b"\xca\xfe\xba\xbe"}
        self.commands: list[list[str]] = []
        self.scratch: Path | None = None

    def __call__(self, command, check=False):
        self.commands.append(list(command))
        self.scratch = Path(command[command.index(OUTPUT_DIR_FLAG) + 1])
        for name, data in self.outputs.items():
            target = self.scratch / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        return subprocess.CompletedProcess(command, self.returncode)


def _service(
    temp_dir: Path, runner, compiler_argv=("fakec",), **settings_overrides
) -> CompileService:
    settings = Settings(scratch_root=temp_dir / "scratch", **settings_overrides)
    container = bootstrap_application(settings)
    return CompileService(
        container.build_service,
        compiler_argv=list(compiler_argv) if compiler_argv else None,
        scratch_root=temp_dir / "scratch",
        compress=settings.compress,
        normalize_timestamps=settings.normalize_timestamps,
        runner=runner,
    )


def test_compile_packages_compiler_output(temp_dir: Path) -> None:
    runner = FakeCompiler()
    service = _service(temp_dir, runner)
    output = temp_dir / "app.jar"

    result = service.compile(output, [Path("Main.fr")], main_class="pkg.Main")

    assert result.entries == [MANIFEST_NAME, "pkg/Main.class"]
    with zipfile.ZipFile(output) as zf:
        assert b"Main-Class: pkg.Main" in zf.read(MANIFEST_NAME)
        assert zf.getinfo("pkg/Main.class").date_time == (1980, 1, 1, 0, 0, 2)


def test_scratch_removed_after_success(temp_dir: Path) -> None:
    runner = FakeCompiler()
    service = _service(temp_dir, runner)

    service.compile(temp_dir / "app.jar", [Path("Main.fr")])

    assert runner.scratch is not None
    assert not runner.scratch.exists()
    assert list((temp_dir / "scratch").iterdir()) == []


def test_scratch_removed_after_compiler_failure(temp_dir: Path) -> None:
    runner = FakeCompiler(returncode=3)
    service = _service(temp_dir, runner)
    output = temp_dir / "app.jar"

    with pytest.raises(CompilerError) as exc_info:
        service.compile(output, [Path("Broken.fr")])

    assert exc_info.value.returncode == 3
    assert runner.scratch is not None
    assert not runner.scratch.exists()
    assert not output.exists()


def test_missing_compiler_binary(temp_dir: Path) -> None:
    def runner(command, check=False):
        raise FileNotFoundError(command[0])

    service = _service(temp_dir, runner)

    with pytest.raises(CompilerError, match="Cannot run compiler"):
        service.compile(temp_dir / "app.jar", [Path("Main.fr")])

    assert list((temp_dir / "scratch").iterdir()) == []


def test_no_compiler_configured(temp_dir: Path) -> None:
    service = _service(temp_dir, FakeCompiler(), compiler_argv=None)

    with pytest.raises(CompilerError, match="No compiler configured"):
        service.compile(temp_dir / "app.jar", [Path("Main.fr")])


def test_compiler_command_layout(temp_dir: Path) -> None:
    service = _service(temp_dir, FakeCompiler())
    scratch = temp_dir / "out"

    command = service.compiler_command(
        scratch,
        [Path("a.fr"), Path("b.fr")],
        classpath="lib/x.jar",
    )

    assert command == [
        "fakec",
        OUTPUT_DIR_FLAG,
        str(scratch),
        CLASSPATH_FLAG,
        "lib/x.jar",
        *MAKE_FLAGS,
        "a.fr",
        "b.fr",
    ]


def test_per_call_compiler_overrides_configured(temp_dir: Path) -> None:
    service = _service(temp_dir, FakeCompiler())

    command = service.compiler_command(temp_dir, [], compiler_argv=["other"])

    assert command == ["other", OUTPUT_DIR_FLAG, str(temp_dir), "-j", "-make"]


def test_compile_honours_archive_settings(temp_dir: Path) -> None:
    runner = FakeCompiler(outputs={"A.class": b"\xca\xfe" * 64})
    service = _service(temp_dir, runner, compress=False, normalize_timestamps=False)
    output = temp_dir / "app.jar"

    service.compile(output, [Path("A.fr")])

    with zipfile.ZipFile(output) as zf:
        info = zf.getinfo("A.class")
    assert info.compress_type == zipfile.ZIP_STORED
    assert info.date_time != (1980, 1, 1, 0, 0, 2)


def test_bootstrap_passes_archive_settings_to_compiler_driver(temp_dir: Path) -> None:
    container = bootstrap_application(
        Settings(scratch_root=temp_dir, compress=False, normalize_timestamps=False)
    )

    assert container.compile_service.compress is False
    assert container.compile_service.normalize_timestamps is False
