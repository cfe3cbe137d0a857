"""Base formatter interface and the export format variants."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Union

from ..models import AnalysisResult


class ExportFormat(Enum):
    """Export formats, valued by the name used on the command line."""

    STRUCTURED_DATA = "json"
    STYLED_DOCUMENT = "html"
    TABULAR_TEXT = "markdown"
    DELIMITED_ROWS = "csv"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @classmethod
    def parse(cls, value: Union["ExportFormat", str]) -> "ExportFormat":
        """Accept a member, its value, its file extension or its member name."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.extension, member.name.lower()):
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown export format: {value!r}. Choose from: {choices}")


_EXTENSIONS = {
    ExportFormat.STRUCTURED_DATA: "json",
    ExportFormat.STYLED_DOCUMENT: "html",
    ExportFormat.TABULAR_TEXT: "md",
    ExportFormat.DELIMITED_ROWS: "csv",
}


class BaseFormatter(ABC):
    """Abstract base class for result formatters."""

    def render(self, result: AnalysisResult) -> None:
        """Print the formatted result to stdout."""
        print(self.format(result))

    @abstractmethod
    def format(self, result: AnalysisResult) -> str:
        """Return formatted string representation of the result."""
