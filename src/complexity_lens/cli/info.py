"""Engine information commands: supported languages and binding diagnostics."""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.table import Table

from ..engine import EngineAdapter
from ..exceptions import ComplexityLensError, EngineUnavailable
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config


async def _probe(adapter: EngineAdapter) -> None:
    try:
        await adapter.initialize()
    except EngineUnavailable:
        # Reported through diagnostics / default language list.
        return


async def _languages(adapter: EngineAdapter) -> List[str]:
    await _probe(adapter)
    return await adapter.supported_languages()


async def _diagnostics(adapter: EngineAdapter) -> Dict[str, Any]:
    await _probe(adapter)
    return adapter.diagnostics()


def _adapter(config: Optional[Path], verbose: bool) -> EngineAdapter:
    try:
        return EngineAdapter(resolve_config(config=config, verbose=verbose, quiet=not verbose))
    except ComplexityLensError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@app.command()
def languages(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (TOML)", exists=True, dir_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """List the languages the analysis engine supports."""
    setup_logging(verbose=verbose, quiet=not verbose)
    adapter = _adapter(config, verbose)
    for lang in asyncio.run(_languages(adapter)):
        console.print(lang)


@app.command()
def diagnostics(
    as_json: bool = typer.Option(False, "--json", help="Print diagnostics as JSON"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (TOML)", exists=True, dir_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Show how the analysis engine was bound, or why it could not be.
    """
    setup_logging(verbose=verbose, quiet=not verbose)
    adapter = _adapter(config, verbose)
    info = asyncio.run(_diagnostics(adapter))

    if as_json:
        typer.echo(json.dumps(info, indent=2))
        return

    table = Table(title="Engine Diagnostics", show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in info.items():
        if isinstance(value, list):
            value = "\n".join(str(v) for v in value) or "-"
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)
