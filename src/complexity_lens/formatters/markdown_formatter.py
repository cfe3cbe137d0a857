"""Markdown formatter: distribution table plus one section per function."""

from typing import List

from ..models import AnalysisResult, format_percent
from ..visualization.model import build_report_model
from .base import BaseFormatter

TITLE = "Algorithm Complexity Analysis Report"


class MarkdownFormatter(BaseFormatter):
    """Render the result as a Markdown document."""

    def format(self, result: AnalysisResult) -> str:
        model = build_report_model(result)
        summary = model.summary

        lines: List[str] = [
            f"# {TITLE}",
            "",
            f"**Generated:** {result.produced_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
            f"**Language:** {result.language}",
        ]
        if result.source_name:
            lines.append(f"**File:** {result.source_name}")

        lines += [
            "",
            "## Summary",
            "",
            f"- **Overall Complexity:** {summary.overall.value}",
            f"- **Description:** {summary.overall_description}",
            f"- **Functions Analyzed:** {summary.function_count}",
            f"- **Average Confidence:** {format_percent(summary.mean_confidence)}",
            "",
        ]

        if model.warnings:
            lines += ["## ⚠️ Warnings", ""]
            lines += [f"- {warning}" for warning in model.warnings]
            lines.append("")

        if model.distribution:
            lines += [
                "## Complexity Distribution",
                "",
                "| Complexity | Count | Percentage |",
                "|------------|-------|------------|",
            ]
            lines += [
                f"| {entry.label.value} | {entry.count} | {entry.percentage:.1f}% |"
                for entry in model.distribution
            ]
            lines.append("")

        if model.details:
            lines += ["## Function Analysis", ""]
            for detail in model.details:
                lines += [
                    f"### `{detail.name}`",
                    "",
                    f"- **Complexity:** {detail.label.value}",
                    f"- **Confidence:** {format_percent(detail.confidence)}",
                    f"- **Lines:** {detail.line_start}-{detail.line_end}",
                    f"- **Description:** {detail.description}",
                    "",
                ]
                if detail.evidence:
                    lines.append("**Analysis Details:**")
                    lines += [f"- {item}" for item in detail.evidence]
                    lines.append("")

        return "\n".join(lines)
