"""Export formatters for complexity results."""

from typing import Union

from ..models import AnalysisResult
from .base import BaseFormatter, ExportFormat
from .csv_formatter import CsvFormatter
from .html_formatter import HtmlFormatter
from .json_formatter import JsonFormatter
from .markdown_formatter import MarkdownFormatter
from .rich_formatter import RichFormatter

_FORMATTERS = {
    ExportFormat.STRUCTURED_DATA: JsonFormatter,
    ExportFormat.STYLED_DOCUMENT: HtmlFormatter,
    ExportFormat.TABULAR_TEXT: MarkdownFormatter,
    ExportFormat.DELIMITED_ROWS: CsvFormatter,
}


def get_formatter(fmt: Union[ExportFormat, str], theme: str = "auto") -> BaseFormatter:
    """Get a formatter instance for an export format.

    Args:
        fmt: An ExportFormat, or one of "json", "html", "markdown", "csv"
        theme: Colour theme, used by the HTML formatter only

    Returns:
        Formatter instance

    Raises:
        ValueError: If fmt is not recognized
    """
    fmt = ExportFormat.parse(fmt)
    cls = _FORMATTERS[fmt]
    if cls is HtmlFormatter:
        return HtmlFormatter(theme=theme)
    return cls()


def export(result: AnalysisResult, fmt: Union[ExportFormat, str], theme: str = "auto") -> str:
    """Render ``result`` in ``fmt``. Depends on nothing but the result itself."""
    return get_formatter(fmt, theme=theme).format(result)


__all__ = [
    "BaseFormatter",
    "ExportFormat",
    "CsvFormatter",
    "HtmlFormatter",
    "JsonFormatter",
    "MarkdownFormatter",
    "RichFormatter",
    "export",
    "get_formatter",
]
