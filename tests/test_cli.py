"""CLI integration smoke tests."""

from __future__ import annotations

import json
import shlex
import sys
import zipfile
from datetime import datetime
from pathlib import Path

from typer.testing import CliRunner

from jarforge import __version__
from jarforge.assembly.manifest import MANIFEST_NAME
from jarforge.cli import app

runner = CliRunner()


def test_cli_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_cli_build_tree(class_tree: Path, temp_dir: Path, override_settings) -> None:
    """`jarforge build` packages a directory tree."""
    output = temp_dir / "app.jar"

    result = runner.invoke(app, ["build", str(output), str(class_tree), "--main-class", "App"])

    assert result.exit_code == 0, result.output
    assert "Built" in result.stdout
    assert "Entries: 3" in result.stdout
    with zipfile.ZipFile(output) as zf:
        assert zf.namelist() == [MANIFEST_NAME, "a.bin", "sub/b.bin"]


def test_cli_build_json(class_tree: Path, temp_dir: Path, override_settings) -> None:
    output = temp_dir / "app.jar"

    result = runner.invoke(app, ["build", str(output), str(class_tree), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["schema_id"] == "build_result"
    assert payload["schema_version"] == 1
    assert payload["producer"].startswith("jarforge-")
    datetime.fromisoformat(payload["produced_at"])
    assert payload["entries"] == [MANIFEST_NAME, "a.bin", "sub/b.bin"]
    assert len(payload["sha256"]) == 64


def test_cli_build_file_and_flatten(temp_dir: Path, override_settings) -> None:
    config = temp_dir / "app.properties"
    config.write_text("k=v")
    loose = temp_dir / "deep" / "README"
    loose.parent.mkdir()
    loose.write_text("read me")
    output = temp_dir / "app.jar"

    result = runner.invoke(
        app,
        [
            "build",
            str(output),
            "--file",
            f"conf/app.properties={config}",
            "--flatten",
            str(loose),
            "--no-compress",
        ],
    )

    assert result.exit_code == 0, result.output
    with zipfile.ZipFile(output) as zf:
        assert zf.read("conf/app.properties") == b"k=v"
        assert zf.read("README") == b"read me"
        assert all(info.compress_type == zipfile.ZIP_STORED for info in zf.infolist())


def test_cli_build_requires_output() -> None:
    result = runner.invoke(app, ["build"])

    assert result.exit_code == 2


def test_cli_build_rejects_bad_file_mapping(temp_dir: Path, override_settings) -> None:
    result = runner.invoke(app, ["build", str(temp_dir / "out.jar"), "--file", "no-separator"])

    assert result.exit_code == 2
    assert "NAME=PATH" in result.output
    assert not (temp_dir / "out.jar").exists()


def test_cli_build_bad_manifest(class_tree: Path, temp_dir: Path, override_settings) -> None:
    manifest = temp_dir / "MANIFEST.MF"
    manifest.write_text("garbage without separator\n")
    output = temp_dir / "app.jar"

    result = runner.invoke(app, ["build", str(output), str(class_tree), "-m", str(manifest)])

    assert result.exit_code == 1
    assert "MANIFEST.MF" in result.output
    assert not output.exists()


def test_cli_compile_without_compiler(temp_dir: Path, override_settings) -> None:
    result = runner.invoke(app, ["compile", str(temp_dir / "app.jar"), "Main.fr"])

    assert result.exit_code == 1
    assert "No compiler configured" in result.output


def test_cli_compile_missing_compiler_binary(temp_dir: Path, override_settings) -> None:
    result = runner.invoke(
        app,
        [
            "compile",
            str(temp_dir / "app.jar"),
            "Main.fr",
            "--compiler",
            str(temp_dir / "no-such-compiler"),
        ],
    )

    assert result.exit_code == 1
    assert "Cannot run compiler" in result.output


def test_cli_compile_with_script_compiler(temp_dir: Path, override_settings) -> None:
    script = temp_dir / "fakec.py"
    script.write_text(
        "import pathlib, sys\n"
        "out = pathlib.Path(sys.argv[sys.argv.index('-d') + 1])\n"
        "(out / 'pkg').mkdir(parents=True)\n"
        "(out / 'pkg' / 'Main.class').write_bytes(b'\\xca\\xfe')\n"
    )
    source = temp_dir / "Main.fr"
    source.write_text("module pkg.Main where")
    output = temp_dir / "app.jar"
    compiler = shlex.join([sys.executable, str(script)])

    result = runner.invoke(
        app,
        [
            "compile",
            str(output),
            str(source),
            "--compiler",
            compiler,
            "--main-class",
            "pkg.Main",
            "-fp",
            "lib/runtime.jar",
        ],
    )

    assert result.exit_code == 0, result.output
    with zipfile.ZipFile(output) as zf:
        assert zf.namelist() == [MANIFEST_NAME, "pkg/Main.class"]
        assert b"Main-Class: pkg.Main" in zf.read(MANIFEST_NAME)
    assert list((override_settings.scratch_root).iterdir()) == []
