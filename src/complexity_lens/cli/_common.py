"""Shared CLI helpers."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import AnalyzerConfig, load_config
from ..engine import EngineAdapter
from ..languages import detect_language
from ..logging_config import configure_logging
from ..models import AnalysisResult
from ..pipeline import ComplexityPipeline

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
    theme: Optional[str] = None,
) -> AnalyzerConfig:
    """Build configuration from CLI options and apply its log verbosity."""
    settings = load_config(config_file=config, verbose=verbose, quiet=quiet, theme=theme)
    configure_logging(settings)
    return settings


def resolve_language(path: Path, language: Optional[str]) -> str:
    """Explicit ``--language`` wins; otherwise detect from the file extension."""
    if language:
        return language.lower()
    detected = detect_language(path)
    if detected is None:
        console.print(
            f"[red]Error:[/red] Cannot detect the language of {path}; pass --language"
        )
        raise typer.Exit(1)
    return detected


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {path}: {e}")
        raise typer.Exit(1)


def build_pipeline(settings: AnalyzerConfig) -> ComplexityPipeline:
    # Each command binds the engine itself, never through the process-wide adapter.
    return ComplexityPipeline(settings, adapter=EngineAdapter(settings))


def analyze_file(
    pipeline: ComplexityPipeline, path: Path, language: Optional[str]
) -> AnalysisResult:
    lang = resolve_language(path, language)
    text = read_source(path)
    return asyncio.run(pipeline.analyze_document(text, lang, source_name=path.name))
