"""Analyze CLI command: classify one source file and print the result."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import ComplexityLensError
from ..formatters import ExportFormat, RichFormatter, export
from ..logging_config import setup_logging
from . import app
from ._common import analyze_file, build_pipeline, console, resolve_config


@app.command()
def analyze(
    path: Path = typer.Argument(
        ...,
        help="Source file to analyze",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Language identifier (default: detect from the file extension)",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default), json, markdown, csv, html",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result to this file instead of the terminal",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
):
    """
    Classify the algorithmic complexity of every function in a file.

    Engine problems never fail the command: the result falls back to
    O(n) and the warnings explain what went wrong.

    [bold cyan]Examples:[/bold cyan]

      complexity-lens analyze sort.py

      complexity-lens analyze lib.rs --format json

      complexity-lens analyze main.c --format csv --output main.csv
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        export_format = None if fmt == "rich" else ExportFormat.parse(fmt)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet)
        pipeline = build_pipeline(settings)
        result = analyze_file(pipeline, path, language)

        if output is not None:
            written = asyncio.run(
                pipeline.export_report(export_format or ExportFormat.STRUCTURED_DATA, output)
            )
            console.print(f"Result saved to: [bold green]{written}[/bold green]")
        elif export_format is None:
            RichFormatter(console).render(result)
        else:
            typer.echo(export(result, export_format, theme=settings.theme))

    except typer.Exit:
        raise

    except ComplexityLensError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
