"""Rich terminal formatter for complexity results."""

import io
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..models import AnalysisResult, format_percent, mean_confidence
from ..taxonomy import ComplexityLabel, color, confidence_band, description
from .base import BaseFormatter

_BAND_STYLES = {
    "favorable": "green",
    "cautionary": "yellow",
    "unfavorable": "red",
}


def _label_markup(label: ComplexityLabel) -> str:
    return f"[bold {color(label)}]{escape(label.value)}[/bold {color(label)}]"


def _confidence_markup(value: float) -> str:
    style = _BAND_STYLES[confidence_band(value)]
    return f"[{style}]{format_percent(value)}[/{style}]"


class RichFormatter(BaseFormatter):
    """Summary panel, warnings and a per-function table."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def render(self, result: AnalysisResult) -> None:
        self._print(self.console, result)

    def format(self, result: AnalysisResult) -> str:
        recorder = Console(file=io.StringIO(), record=True, width=120)
        self._print(recorder, result)
        return recorder.export_text()

    # -- private helpers --

    def _print(self, console: Console, result: AnalysisResult) -> None:
        source = f"[bold]{escape(result.source_name)}[/bold]  |  " if result.source_name else ""
        summary_text = (
            f"{source}Language: [cyan]{escape(result.language)}[/cyan]  |  "
            f"Overall: {_label_markup(result.overall)}  |  "
            f"Functions: [yellow]{result.function_count}[/yellow]  |  "
            f"Avg confidence: {_confidence_markup(mean_confidence(result.functions))}"
        )
        console.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))
        console.print(f"[dim]{escape(description(result.overall))}[/dim]")
        console.print()

        if result.warnings:
            console.print("[bold]Warnings:[/bold]")
            for warning in result.warnings:
                console.print(f"  [yellow]![/yellow] {escape(warning)}")
            console.print()

        if not result.functions:
            return

        table = Table(title="Function Complexity", expand=True)
        table.add_column("Function", style="bold", ratio=2)
        table.add_column("Complexity", justify="center")
        table.add_column("Confidence", justify="right")
        table.add_column("Lines", justify="right", style="dim")
        table.add_column("Details", ratio=3)
        for func in result.functions:
            table.add_row(
                escape(func.name),
                _label_markup(func.label),
                _confidence_markup(func.confidence),
                f"{func.line_start}-{func.line_end}",
                escape("; ".join(func.evidence)),
            )
        console.print(table)
        console.print()
