"""
bagforge CLI.

Command-line interface for verifying, inspecting and writing manifests
and for formatting tag fields.
"""

import logging
import os

import click

from bagforge import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", type=click.Path(), help="Path to settings YAML")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """bagforge: BagIt manifests and tag files."""
    from pathlib import Path

    import pydantic
    import yaml

    from bagforge.config import BagSettings
    from bagforge.logging_config import setup_logging

    setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    settings = BagSettings()
    if config_path:
        path = Path(config_path)
        if not path.exists():
            click.echo(f"Error: Config file not found: {config_path}", err=True)
            raise SystemExit(1)
        try:
            settings = BagSettings.load(path)
        except (yaml.YAMLError, pydantic.ValidationError) as e:
            click.echo(f"Error parsing config: {e}", err=True)
            raise SystemExit(1)

    ctx.obj = settings


@main.command()
@click.argument("manifest_path", type=click.Path())
@click.option("--workers", "-w", type=int, help="Hashing threads (overrides config)")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON fixity report")
@click.pass_obj
def verify(settings, manifest_path: str, workers: int | None, as_json: bool) -> None:
    """Verify files against a manifest."""
    from bagforge.core.manifest import FixityReport, Manifest

    outcome = Manifest.load(manifest_path)
    if outcome.manifest is None:
        click.echo(f"Error loading manifest: {manifest_path}", err=True)
        for error in outcome.errors:
            click.echo(f"  - {error}", err=True)
        raise SystemExit(1)

    manifest = outcome.manifest
    errors = outcome.errors + manifest.verify(workers=workers, settings=settings)
    report = FixityReport.build(
        manifest=manifest.name(),
        algorithm=manifest.algorithm,
        checked=len(manifest.entries),
        errors=errors,
    )

    if as_json:
        click.echo(report.to_json())
    else:
        click.echo(f"Manifest: {report.manifest}")
        click.echo(f"Algorithm: {report.algorithm}")
        click.echo(f"Checked: {report.checked}")
        for failure in report.failures:
            click.echo(f"  - {failure.message}", err=True)
        if report.ok:
            click.echo("✓ All checksums valid")

    if not report.ok:
        raise SystemExit(1)


@main.command()
@click.argument("manifest_path", type=click.Path())
def show(manifest_path: str) -> None:
    """Show the entries of a manifest."""
    from rich.console import Console
    from rich.table import Table

    from bagforge.core.manifest import Manifest

    outcome = Manifest.load(manifest_path)
    for error in outcome.errors:
        click.echo(f"  - {error}", err=True)
    if outcome.manifest is None:
        raise SystemExit(1)

    manifest = outcome.manifest
    table = Table(title=f"{manifest.name()} ({manifest.algorithm})")
    table.add_column("Path")
    table.add_column("Checksum")
    for path in sorted(manifest.entries):
        table.add_row(path, manifest.entries[path])

    Console().print(table)


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--algorithm", "-a", default="sha256", help="Hash algorithm")
@click.option("--write", "-o", "manifest_path", type=click.Path(), help="Write a manifest file here")
@click.pass_obj
def checksum(settings, files: tuple[str, ...], algorithm: str, manifest_path: str | None) -> None:
    """Print manifest lines for FILES, optionally writing a manifest."""
    from pathlib import Path

    from bagforge.core.errors import BagError
    from bagforge.core.manifest import Manifest, render_line
    from bagforge.hashing import default_registry, file_checksum

    registry = default_registry()
    try:
        if manifest_path:
            manifest = Manifest.for_path(manifest_path, algorithm, registry)
            base_dir = Path(manifest_path).parent
        else:
            manifest = Manifest.for_directory(".", algorithm, registry)
            base_dir = Path(".")
        factory = registry.lookup(algorithm)
    except BagError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    for file in files:
        rel_path = Path(os.path.relpath(file, base_dir)).as_posix()
        try:
            manifest.entries[rel_path] = file_checksum(file, factory, chunk_size=settings.chunk_size)
        except OSError as e:
            click.echo(f"Error reading {file}: {e}", err=True)
            raise SystemExit(1)

    if manifest_path:
        try:
            manifest.create(settings=settings)
        except BagError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        click.echo(f"Wrote {len(manifest.entries)} entries to {manifest.name()}")
    else:
        for path in sorted(manifest.entries):
            click.echo(render_line(manifest.entries[path], path), nl=False)


@main.command()
@click.argument("key")
@click.argument("value")
@click.pass_obj
def tag(settings, key: str, value: str) -> None:
    """Format a tag field KEY: VALUE with line wrapping."""
    from bagforge.core.field_format import format_field

    click.echo(
        format_field(
            key,
            value,
            width=settings.line_width,
            indent=settings.continuation_indent,
        )
    )


if __name__ == "__main__":
    main()
