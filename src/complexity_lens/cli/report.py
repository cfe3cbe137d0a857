"""Report and export CLI commands: write results to disk."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import ComplexityLensError
from ..formatters import ExportFormat
from ..logging_config import setup_logging
from . import app
from ._common import analyze_file, build_pipeline, console, resolve_config

_THEMES = ("auto", "light", "dark")


def _check_theme(theme: Optional[str]) -> Optional[str]:
    if theme is not None and theme not in _THEMES:
        raise typer.BadParameter(f"Theme must be one of: {', '.join(_THEMES)}")
    return theme


def _write(
    path: Path,
    language: Optional[str],
    fmt: ExportFormat,
    output: Optional[Path],
    config: Optional[Path],
    theme: Optional[str],
    verbose: bool,
) -> None:
    logger = setup_logging(verbose=verbose)
    try:
        settings = resolve_config(config=config, verbose=verbose, theme=theme)
        pipeline = build_pipeline(settings)
        result = analyze_file(pipeline, path, language)
        written = asyncio.run(pipeline.export_report(fmt, output))
        for warning in result.warnings:
            console.print(f"[yellow]Warning:[/yellow] {warning}")
        console.print(f"\nReport saved to: [bold green]{written}[/bold green]")

    except typer.Exit:
        raise

    except ComplexityLensError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@app.command()
def report(
    path: Path = typer.Argument(
        ..., help="Source file to analyze", exists=True, file_okay=True, dir_okay=False
    ),
    output: Path = typer.Option(
        Path("complexity-report.html"),
        "--output",
        "-o",
        help="Output HTML file path",
        dir_okay=False,
    ),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Language identifier (default: from extension)"
    ),
    theme: Optional[str] = typer.Option(
        None,
        "--theme",
        "-t",
        help="Colour theme: auto, light, dark",
        callback=_check_theme,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Generate a self-contained HTML complexity report.

    The report carries the summary, warnings, distribution and comparison
    charts and per-function details, and opens in any browser.

    [bold cyan]Examples:[/bold cyan]

      complexity-lens report sort.py

      complexity-lens report sort.py --output sort.html --theme dark
    """
    _write(path, language, ExportFormat.STYLED_DOCUMENT, output, config, theme, verbose)


@app.command()
def export(
    path: Path = typer.Argument(
        ..., help="Source file to analyze", exists=True, file_okay=True, dir_okay=False
    ),
    fmt: str = typer.Option(
        "json",
        "--format",
        "-f",
        help="Export format: json (default), html, markdown, csv",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: complexity-report-<timestamp>.<ext>)",
        dir_okay=False,
    ),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Language identifier (default: from extension)"
    ),
    theme: Optional[str] = typer.Option(
        None,
        "--theme",
        "-t",
        help="Colour theme for html exports: auto, light, dark",
        callback=_check_theme,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Analyze a file and export the result.

    [bold cyan]Examples:[/bold cyan]

      complexity-lens export sort.py --format csv

      complexity-lens export sort.py -f markdown -o sort.md
    """
    try:
        export_format = ExportFormat.parse(fmt)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
    _write(path, language, export_format, output, config, theme, verbose)
