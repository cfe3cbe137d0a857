"""CSV formatter: one row per function."""

import csv
import io

from ..models import AnalysisResult
from ..taxonomy import description
from .base import BaseFormatter

HEADER = ("Function", "Complexity", "Confidence", "LineStart", "LineEnd", "Description")


class CsvFormatter(BaseFormatter):
    """Render functions as comma-separated rows.

    Text columns are always quoted, numeric columns never are. The header
    row is written bare.
    """

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result), end="")

    def format(self, result: AnalysisResult) -> str:
        output = io.StringIO()
        output.write(",".join(HEADER) + "\n")
        writer = csv.writer(output, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
        for func in result.functions:
            writer.writerow([
                func.name,
                func.label.value,
                func.confidence,
                func.line_start,
                func.line_end,
                description(func.label),
            ])
        return output.getvalue()
