"""Standalone HTML formatter with inline SVG charts."""

from ..models import AnalysisResult
from ..visualization.html import render_document
from ..visualization.model import build_report_model
from .base import BaseFormatter
from .markdown_formatter import TITLE


class HtmlFormatter(BaseFormatter):
    """Render the result as a self-contained, styled HTML document.

    The theme changes colours only; every section and value is the same
    as in the interactive report.
    """

    def __init__(self, theme: str = "auto") -> None:
        self.theme = theme

    def format(self, result: AnalysisResult) -> str:
        return render_document(build_report_model(result), theme=self.theme, title=TITLE)
