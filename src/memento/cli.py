"""
memento CLI.

Commands:
- generate: Write holder classes for every host type in a metadata file
- inspect: Show retained fields and host classification without writing
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from memento.codegen.filer import SourceFiler
from memento.config import CONFIG_FILENAME, MementoConfig, load_config
from memento.core.classifier import classify
from memento.core.errors import MementoError
from memento.core.model import AccessLevel, ElementIndex, load_element_index
from memento.processor import MementoProcessor, group_by_host

app = typer.Typer(
    help="memento - generate retained-state holders for Android activities",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        from memento import __version__

        typer.echo(f"memento {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    log_level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_index(metadata: Path) -> ElementIndex:
    try:
        return load_element_index(metadata)
    except MementoError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _load_config(config_path: Path | None) -> MementoConfig:
    try:
        return load_config(config_path or Path.cwd() / CONFIG_FILENAME)
    except MementoError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """memento CLI main callback for global options."""
    _configure_logging(verbose)


@app.command(name="generate")
def generate_command(
    metadata: Path = typer.Argument(  # noqa: B008
        ...,
        help="JSON file describing host types and their fields",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (overrides memento.toml)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to memento.toml (default: ./memento.toml)",
    ),
) -> None:
    """
    Generate holder classes.

    Examples:
        memento generate hosts.json
        memento generate hosts.json -o build/generated/source/memento
    """
    config = _load_config(config_path)
    if output:
        config.output = str(output)

    index = _load_index(metadata)
    output_dir = config.get_output_path(Path.cwd())
    processor = MementoProcessor(index, SourceFiler(output_dir), config)

    try:
        result = processor.process()
    except MementoError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if result.empty:
        typer.echo("No retained fields found; nothing generated.")
        return

    for unit in result.units:
        typer.echo(f"  {unit.qualified_class_name} ({len(unit.fields)} fields) -> {unit.path}")
    typer.echo(
        typer.style(
            f"✓ Generated {len(result.units)} holder class(es)", fg=typer.colors.GREEN, bold=True
        )
    )


@app.command(name="inspect")
def inspect_command(
    metadata: Path = typer.Argument(  # noqa: B008
        ...,
        help="JSON file describing host types and their fields",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to memento.toml (default: ./memento.toml)",
    ),
) -> None:
    """Show host types with retained fields and how each is classified."""
    config = _load_config(config_path)
    index = _load_index(metadata)
    groups = group_by_host(index.elements_annotated_with(config.retain_annotation))

    if not groups:
        console.print("[dim]No retained fields found.[/dim]")
        return

    table = Table(title="Retained state")
    table.add_column("Host", style="cyan")
    table.add_column("Base")
    table.add_column("Fields")

    for host_name, fields in groups.items():
        try:
            base = classify(index.get(host_name), index.supertype_of).value
        except MementoError as e:
            base = f"[red]{e}[/red]"
        names = ", ".join(
            f"[red]{f.name} (private)[/red]" if f.access_level is AccessLevel.PRIVATE else f.name
            for f in fields
        )
        table.add_row(host_name, base, names)

    console.print(table)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
