"""Main CLI application entry point."""

import sys
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.markup import escape

from .commands import (
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    validate_command,
    kinds_command,
    config_command,
)

app = typer.Typer(
    name="dddcheck",
    help="dddcheck - zero-value construction checks for Go domain objects",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Results on stdout, progress and errors on stderr
console = Console()
err_console = Console(stderr=True)


@app.command(name="validate")
def validate(
    path: Optional[Path] = typer.Argument(
        None,
        help="Root of the Go tree to validate (defaults to the enclosing go.mod directory)",
    ),
    kind: Optional[list[str]] = typer.Option(
        None,
        "--kind", "-k",
        help="Marker kind to check (can specify multiple; default: all)",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--output", "-o",
        help="Output format: console, json, sarif",
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output-file",
        help="Write results to a file instead of stdout",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        max=64,
        help="Worker threads for per-file analysis",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config", "-c",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="List types and constructors, log at DEBUG, show technical error details",
    ),
):
    """
    Validate zero-value constructions of marked domain types.

    Finds structs tagged with a marker (ValueObject, Entity, ...), their
    New* constructors, and every empty composite literal built outside
    them. Exits 1 when violations are found, 2 on failure.
    """
    validate_command(
        path=path,
        kinds=kind,
        output_format=output_format,
        output_file=output_file,
        workers=workers,
        config_path=config,
        verbose=verbose,
        console=console,
        err_console=err_console,
    )


@app.command(name="kinds")
def kinds(
    config: Optional[str] = typer.Option(
        None,
        "--config", "-c",
        help="Path to configuration file",
    ),
):
    """
    List configured marker kinds.

    Shows built-in kinds together with kinds declared in configuration.
    """
    kinds_command(config_path=config, console=console, err_console=err_console)


@app.command(name="config")
def config_cmd(
    init: bool = typer.Option(
        False,
        "--init",
        help="Create default configuration file",
    ),
    path: Optional[str] = typer.Option(
        None,
        "--path",
        help="Configuration file path",
    ),
    show: bool = typer.Option(
        False,
        "--show",
        help="Show current configuration",
    ),
):
    """
    Manage configuration.

    Create or view configuration files.
    """
    config_command(
        init=init,
        path=path,
        show=show,
        console=console,
        err_console=err_console,
    )


def main():
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        err_console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
