"""jarforge CLI application with Typer."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from jarforge import __version__
from jarforge.app.build_service import BuildResult
from jarforge.assembly.entries import InputDescriptor, RootFlattenedFile, SingleFile
from jarforge.bootstrap import bootstrap_application
from jarforge.config import get_settings
from jarforge.errors import BuildError, InvocationError
from jarforge.utils.cli_output import json_response

app = typer.Typer(
    name="jarforge",
    help="Assemble compiled outputs into a reproducible JAR",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"jarforge version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_file_mappings(mappings: list[str]) -> list[InputDescriptor]:
    """Turn ``NAME=PATH`` pairs into single-file inputs."""
    descriptors: list[InputDescriptor] = []
    for mapping in mappings:
        name, sep, path = mapping.partition("=")
        if not sep or not name or not path:
            raise InvocationError(f"Expected NAME=PATH for --file, got {mapping!r}")
        descriptors.append(SingleFile(name=name, path=Path(path)))
    return descriptors


def _fail(exc: BuildError) -> typer.Exit:
    typer.secho(f"❌ {exc}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=2 if isinstance(exc, InvocationError) else 1)


def _report(result: BuildResult, json_output: bool) -> None:
    if json_output:
        typer.echo(
            json_response(
                "build_result",
                1,
                output=str(result.output),
                entries=result.entries,
                skipped=result.skipped,
                sha256=result.sha256,
            )
        )
        return

    typer.secho(f"✅ Built {result.output}", fg=typer.colors.GREEN)
    typer.echo(f"   Entries: {len(result.entries)}")
    if result.skipped:
        typer.echo(f"   Skipped: {', '.join(result.skipped)}")
    typer.echo(f"   SHA-256: {result.sha256}")


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug details to stderr"),
    ] = False,
) -> None:
    """jarforge - reproducible JAR assembly."""
    _configure_logging(verbose)


@app.command("build")
def build(
    output: Annotated[Path, typer.Argument(help="Archive to create")],
    roots: Annotated[
        list[Path] | None,
        typer.Argument(help="Directories to expand or archives to embed"),
    ] = None,
    manifest: Annotated[
        Path | None,
        typer.Option("--manifest", "-m", help="Manifest file to merge into the archive manifest"),
    ] = None,
    main_class: Annotated[
        str | None,
        typer.Option("--main-class", help="Main-Class manifest value"),
    ] = None,
    files: Annotated[
        list[str] | None,
        typer.Option("--file", help="Add a single file as NAME=PATH (repeatable)"),
    ] = None,
    flatten: Annotated[
        list[Path] | None,
        typer.Option("--flatten", help="Add a file at the archive root by base name (repeatable)"),
    ] = None,
    compress: Annotated[
        bool | None,
        typer.Option("--compress/--no-compress", help="DEFLATE entries (default from settings)"),
    ] = None,
    normalize: Annotated[
        bool | None,
        typer.Option(
            "--normalize/--no-normalize",
            help="Stamp entries with the DOS epoch (default from settings)",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Build an archive from directory trees and existing archives.

    Example:
        jarforge build app.jar build/classes
        jarforge build -m MANIFEST.MF --main-class App app.jar build/classes lib/dep.jar
    """
    settings = get_settings()
    container = bootstrap_application(settings)

    try:
        extra: list[InputDescriptor] = _parse_file_mappings(files or [])
        extra.extend(RootFlattenedFile(path=path) for path in flatten or [])
        result = container.build_service.build_roots(
            output,
            roots or [],
            manifest_file=manifest,
            main_class=main_class,
            compress=settings.compress if compress is None else compress,
            normalize_timestamps=settings.normalize_timestamps if normalize is None else normalize,
            extra_inputs=extra,
        )
    except BuildError as exc:
        raise _fail(exc) from exc

    _report(result, json_output)


@app.command("compile")
def compile_sources(
    output: Annotated[Path, typer.Argument(help="Archive to create")],
    sources: Annotated[list[Path], typer.Argument(help="Source files to compile")],
    classpath: Annotated[
        str | None,
        typer.Option("--classpath", "-fp", help="Classpath passed to the compiler"),
    ] = None,
    compiler: Annotated[
        str | None,
        typer.Option("--compiler", help="Compiler command line (overrides settings)"),
    ] = None,
    main_class: Annotated[
        str | None,
        typer.Option("--main-class", help="Main-Class manifest value"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Compile sources with the configured compiler and package the output.

    Example:
        JARFORGE_COMPILER_COMMAND="java -jar fregec.jar" jarforge compile app.jar src/*.fr
    """
    import shlex

    container = bootstrap_application(get_settings())

    try:
        result = container.compile_service.compile(
            output,
            sources,
            classpath=classpath,
            main_class=main_class,
            compiler_argv=shlex.split(compiler) if compiler else None,
        )
    except BuildError as exc:
        raise _fail(exc) from exc

    _report(result, json_output)


if __name__ == "__main__":
    app()
