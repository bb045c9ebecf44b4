"""Command-line interface for structdoc."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from structdoc.config import ConfigurationError, load_config
from structdoc.linter import lint_paths
from structdoc.rules.registry import registry
from structdoc.types import Severity

app = typer.Typer(
    name="structdoc",
    help="Lint Swift function doc comments for a structured summary and parameter list",
    add_completion=False,
)

ConfigOpt = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Configuration file (YAML or JSON)"),
]


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command(name="lint")
def lint_cmd(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Swift files or directories to lint"),
    ],
    config: ConfigOpt = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (console, json, xcode)"),
    ] = "console",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file path"),
    ] = None,
    min_severity: Annotated[
        Optional[str],
        typer.Option("--min-severity", "-s", help="Minimum severity to report (warning, error)"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 1 if violations are found"),
    ] = False,
    jobs: Annotated[
        int,
        typer.Option("--jobs", "-j", min=1, help="Number of files linted in parallel"),
    ] = 1,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug output"),
    ] = False,
) -> None:
    """Lint doc comments in Swift files."""
    _configure_logging(verbose, debug)

    missing = [p for p in paths if not p.exists()]
    if missing:
        typer.echo(f"Error: Path not found: {missing[0]}", err=True)
        raise typer.Exit(1)

    if format not in ("console", "json", "xcode"):
        typer.echo(f"Error: Unknown format: {format}", err=True)
        raise typer.Exit(2)

    try:
        configuration = load_config(config)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    try:
        threshold = Severity(min_severity.lower()) if min_severity else None
    except ValueError:
        typer.echo(f"Error: Unknown severity: {min_severity}", err=True)
        raise typer.Exit(2)

    report = lint_paths(paths, configuration, jobs=jobs)
    if threshold is not None:
        report = report.filter_by_severity(threshold)

    if format == "console":
        report.print()
    else:
        result = report.to_json() if format == "json" else report.to_xcode()
        if output:
            output.write_text(result + "\n")
            typer.echo(f"Report written to {output}")
        elif result:
            typer.echo(result)

    if strict and report.has_violations:
        raise typer.Exit(1)


@app.command(name="rules")
def rules_cmd(config: ConfigOpt = None) -> None:
    """List available rules and their effective configuration."""
    try:
        configuration = load_config(config)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    for identifier, rule_cls in registry:
        description = rule_cls.description
        typer.echo(f"{identifier} ({description.kind.value})")
        typer.echo(f"  {description.name}: {description.description}")
        typer.echo(f"  {configuration.console_description}")


def main() -> None:
    """Entry point for the structdoc command."""
    app()


if __name__ == "__main__":
    main()
