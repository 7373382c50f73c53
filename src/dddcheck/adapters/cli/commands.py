"""CLI command implementations."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...application.commands.validate_markers import ValidateMarkersCommand
from ...domain.services.project_root_finder import find_project_root
from ...infrastructure.config.config_loader import ConfigLoader
from ...infrastructure.di.container import DIContainer
from ...infrastructure.presentation.error_presenter import ErrorPresenter
from ..formatters.formatter_factory import FormatterFactory


EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_FAILURE = 2
EXIT_INTERRUPTED = 130


def validate_command(
    path: Optional[Path],
    kinds: Optional[list[str]],
    output_format: Optional[str],
    output_file: Optional[Path],
    workers: Optional[int],
    config_path: Optional[str],
    verbose: bool,
    console: Console,
    err_console: Console,
):
    """
    Execute validate command.

    Formatted results go to stdout (or output_file); progress and errors
    go to stderr so JSON and SARIF output stay machine-readable.

    Args:
        path: Root of the tree to validate (project root when None)
        kinds: Marker kinds to check (all configured kinds when empty)
        output_format: Output format
        output_file: Output file
        workers: Worker threads
        config_path: Config file path
        verbose: Verbose output
        console: Rich console for results
        err_console: Rich console for progress and errors

    Raises:
        SystemExit: 1 when violations were found, 2 on failure
    """
    try:
        container = DIContainer.create(config_path, verbose=verbose)
        config = container.config

        if path is None:
            path = find_project_root(Path.cwd(), config.scan.project_marker)

        markers = container.marker_registry.select(kinds or [])
        output_format = output_format or config.output.default_format
        formatter = FormatterFactory.create(
            output_format,
            use_color=config.output.color and sys.stdout.isatty() and output_file is None,
            verbose=verbose or config.output.verbose,
        )

        if output_format == "console" and output_file is None:
            console.print(Panel.fit(
                "[bold]dddcheck Zero-Value Validation[/bold]",
                border_style="blue"
            ))

        command = ValidateMarkersCommand(
            root_path=Path(path),
            markers=markers,
            max_workers=workers or config.scan.max_workers,
        )

        with err_console.status(f"Validating {len(markers)} marker kind(s)..."):
            run = container.validate_handler.handle(command)

        output = formatter.format_run(run)

        if output_file:
            output_file.write_text(output, encoding="utf-8")
            err_console.print(f"[green]Results saved to: {escape(str(output_file))}[/green]")
        else:
            typer.echo(output)

    except KeyboardInterrupt as e:
        err_console.print(ErrorPresenter.present(e, verbose=verbose), markup=False, highlight=False)
        raise SystemExit(EXIT_INTERRUPTED)

    except Exception as e:
        err_console.print(ErrorPresenter.present(e, verbose=verbose), markup=False, highlight=False)
        raise SystemExit(EXIT_FAILURE)

    if run.has_violations:
        raise SystemExit(EXIT_VIOLATIONS)


def kinds_command(config_path: Optional[str], console: Console, err_console: Console):
    """
    Execute kinds command.

    Args:
        config_path: Config file path
        console: Rich console
        err_console: Rich console for errors
    """
    try:
        container = DIContainer.create(config_path)
    except Exception as e:
        err_console.print(ErrorPresenter.present(e), markup=False, highlight=False)
        raise SystemExit(EXIT_FAILURE)

    table = Table(title="Marker Kinds")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Marker", style="bold")
    table.add_column("Field")
    table.add_column("Package")

    for marker in container.marker_registry.get_all_markers():
        table.add_row(
            marker.kind,
            marker.type_name,
            escape(marker.field_name),
            escape(marker.package_path),
        )

    console.print(table)


def config_command(
    init: bool,
    path: Optional[str],
    show: bool,
    console: Console,
    err_console: Console,
):
    """
    Execute config command.

    Args:
        init: Create default config
        path: Config file path
        show: Show current config
        console: Rich console
        err_console: Rich console for errors
    """
    console.print(Panel.fit(
        "[bold]dddcheck Configuration[/bold]",
        border_style="blue"
    ))

    try:
        if init:
            config_path = ConfigLoader.create_default_config(path)
            console.print(f"\n[green]Configuration file created: {escape(str(config_path))}[/green]")

        elif show:
            config = ConfigLoader.load(path)
            console.print("\n[bold]Current Configuration:[/bold]")
            console.print(config.to_yaml(), markup=False, highlight=False)

        else:
            config_info = ConfigLoader.get_config_info()

            console.print("\n[bold]Configuration Files:[/bold]")
            if config_info["existing_configs"]:
                for cfg in config_info["existing_configs"]:
                    console.print(f"  [green]{escape(cfg)}[/green]")
            else:
                console.print("  No configuration files found")

            console.print("\n[bold]Environment Overrides:[/bold]")
            if config_info["env_overrides"]:
                for env_var in config_info["env_overrides"]:
                    console.print(f"  {escape(env_var)}")
            else:
                console.print("  None")

            console.print("\n[bold]Default Locations:[/bold]")
            for default_path in config_info["default_paths"]:
                console.print(f"  {escape(default_path)}")

    except Exception as e:
        err_console.print(ErrorPresenter.present(e), markup=False, highlight=False)
        raise SystemExit(EXIT_FAILURE)
