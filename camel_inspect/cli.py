"""CLI entry point: camel-inspect.

Subcommands:
    camel-inspect inspect Route.java routes.yaml          # top-level dependencies
    camel-inspect inspect Route.java --all-dependencies   # resolve and copy the jars
    camel-inspect catalog -o catalog.yaml                 # generate the runtime catalog
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from camel_inspect.catalog import CatalogProvider
from camel_inspect.constants import ACCEPTED_DEPENDENCY_TYPES, DEFAULT_DEPENDENCIES_DIRECTORY, RUNTIME_PROVIDERS
from camel_inspect.core.logging import setup_logging
from camel_inspect.exceptions import BuildFailureError, InspectorError
from camel_inspect.models.dependency import DependencyIdentifier
from camel_inspect.models.source import SourceDocument
from camel_inspect.orchestrator import InspectOrchestrator
from camel_inspect.output import OUTPUT_FORMATS, format_dependencies
from camel_inspect.settings import InspectSettings


def _fail(error: Exception, verbose: bool = False) -> NoReturn:
    click.echo(f"Error: {error}", err=True)
    if verbose and isinstance(error, BuildFailureError) and error.diagnostics:
        click.echo(error.diagnostics, err=True)
    sys.exit(1)


def _load_settings(**overrides: object) -> InspectSettings:
    try:
        return InspectSettings.from_env().with_overrides(**overrides)
    except ValueError as e:
        _fail(e)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Camel K inspect: dependencies of integration sources."""
    setup_logging("DEBUG" if verbose else None)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command("inspect")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--all-dependencies",
    is_flag=True,
    help="Resolve transitive dependencies and copy them into the dependencies directory",
)
@click.option(
    "-d",
    "--dependency",
    "dependencies",
    multiple=True,
    help=f"Additional top-level dependency <type>:<name>, type one of {{{'|'.join(ACCEPTED_DEPENDENCY_TYPES)}}}",
)
@click.option(
    "--dependencies-directory",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help=f"Directory receiving the resolved artifacts (default ./{DEFAULT_DEPENDENCIES_DIRECTORY})",
)
@click.option("-o", "--output", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None, help="Output format")
@click.option("--runtime-version", default=None, help="Camel K runtime version")
@click.option("--runtime-provider", type=click.Choice(RUNTIME_PROVIDERS), default=None, help="Runtime provider")
@click.option("--local-repository", default=None, help="Local Maven repository")
@click.option("--maven-timeout", type=click.FloatRange(min=0, min_open=True), default=None, help="Seconds per Maven run")
@click.option("--catalog", "catalog_path", type=click.Path(exists=True, dir_okay=False), default=None, help="Pre-generated catalog YAML")
@click.pass_context
def inspect(
    ctx: click.Context,
    files: tuple[str, ...],
    all_dependencies: bool,
    dependencies: tuple[str, ...],
    dependencies_directory: str | None,
    output_format: str | None,
    runtime_version: str | None,
    runtime_provider: str | None,
    local_repository: str | None,
    maven_timeout: float | None,
    catalog_path: str | None,
) -> None:
    """Print the dependencies used by the integration FILES."""
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False

    # Reject bad identifiers before touching the filesystem
    for value in dependencies:
        try:
            DependencyIdentifier.parse(value)
        except InspectorError as e:
            _fail(e, verbose)

    settings = _load_settings(
        runtime_version=runtime_version,
        runtime_provider=runtime_provider,
        local_repository=local_repository,
        maven_timeout=maven_timeout,
        catalog_path=catalog_path,
    )

    target_dir: Path | None = None
    if all_dependencies:
        if dependencies_directory:
            target_dir = Path(dependencies_directory)
        else:
            target_dir = Path.cwd() / DEFAULT_DEPENDENCIES_DIRECTORY
            try:
                target_dir.mkdir(exist_ok=True)
            except OSError as e:
                _fail(e, verbose)

    try:
        documents = [SourceDocument.from_path(f) for f in files]
    except OSError as e:
        _fail(e, verbose)

    orchestrator = InspectOrchestrator(CatalogProvider(settings), settings)
    try:
        result = orchestrator.run(
            documents,
            extra_identifiers=dependencies,
            transitive=all_dependencies,
            target_dir=target_dir,
        )
    except InspectorError as e:
        _fail(e, verbose)

    if verbose:
        summary = orchestrator.progress.get_summary()
        for phase in summary["phases"]:
            timing = f" ({phase['duration']}s)" if phase["duration"] is not None else ""
            click.echo(f"  {phase['phase']}: {phase['status']}{timing}", err=True)

    # Copied paths are only listed on request
    if all_dependencies and output_format is None:
        return
    if result or output_format is not None:
        click.echo(format_dependencies(result, output_format))


@main.command("catalog")
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False), help="Catalog file to write")
@click.option("--runtime-version", default=None, help="Camel K runtime version")
@click.option("--runtime-provider", type=click.Choice(RUNTIME_PROVIDERS), default=None, help="Runtime provider")
@click.option("--local-repository", default=None, help="Local Maven repository")
@click.option("--maven-timeout", type=click.FloatRange(min=0, min_open=True), default=None, help="Seconds per Maven run")
@click.pass_context
def catalog(
    ctx: click.Context,
    output: str,
    runtime_version: str | None,
    runtime_provider: str | None,
    local_repository: str | None,
    maven_timeout: float | None,
) -> None:
    """Generate the runtime catalog and write it as YAML."""
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    settings = _load_settings(
        runtime_version=runtime_version,
        runtime_provider=runtime_provider,
        local_repository=local_repository,
        maven_timeout=maven_timeout,
    )
    try:
        cat = CatalogProvider(settings).get()
    except InspectorError as e:
        _fail(e, verbose)

    try:
        Path(output).write_text(cat.to_yaml(), encoding="utf-8")
    except OSError as e:
        _fail(e, verbose)
    click.echo(f"Catalog for runtime {cat.runtime_version} written to {output}")


if __name__ == "__main__":
    main()
