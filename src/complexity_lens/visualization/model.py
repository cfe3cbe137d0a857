"""Structured report document derived from an AnalysisResult.

Both the interactive report view and the styled HTML export render this
model, so the two never disagree on counts, orders, colours or bands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import AnalysisResult, mean_confidence
from ..taxonomy import (
    ORDERED_LABELS,
    ComplexityLabel,
    color,
    confidence_band,
    confidence_color,
    description,
    order,
)


@dataclass(frozen=True)
class SummarySection:
    overall: ComplexityLabel
    overall_color: str
    overall_description: str
    function_count: int
    mean_confidence: float


@dataclass(frozen=True)
class DistributionEntry:
    label: ComplexityLabel
    count: int
    percentage: float
    color: str


@dataclass(frozen=True)
class ComparisonEntry:
    name: str
    label: ComplexityLabel
    order: int
    color: str


@dataclass(frozen=True)
class FunctionDetail:
    name: str
    label: ComplexityLabel
    color: str
    description: str
    confidence: float
    confidence_band: str
    confidence_color: str
    line_start: int
    line_end: int
    evidence: tuple[str, ...]

    @property
    def confidence_width(self) -> float:
        """Bar width in percent of the full track."""
        return round(self.confidence * 100, 1)


@dataclass(frozen=True)
class ReportModel:
    result: AnalysisResult
    summary: SummarySection
    warnings: tuple[str, ...]
    distribution: tuple[DistributionEntry, ...]
    comparison: tuple[ComparisonEntry, ...]
    details: tuple[FunctionDetail, ...]

    @property
    def has_functions(self) -> bool:
        return bool(self.details)

    def to_dict(self) -> dict[str, Any]:
        """Chart-ready data, embedded verbatim in rendered documents."""
        return {
            "summary": {
                "overall": self.summary.overall.value,
                "color": self.summary.overall_color,
                "description": self.summary.overall_description,
                "functionCount": self.summary.function_count,
                "meanConfidence": self.summary.mean_confidence,
            },
            "warnings": list(self.warnings),
            "distribution": [
                {
                    "label": d.label.value,
                    "count": d.count,
                    "percentage": d.percentage,
                    "color": d.color,
                }
                for d in self.distribution
            ],
            "comparison": [
                {"name": c.name, "label": c.label.value, "order": c.order, "color": c.color}
                for c in self.comparison
            ],
            "result": self.result.to_dict(),
        }


def build_distribution(result: AnalysisResult) -> tuple[DistributionEntry, ...]:
    """Per-label counts, cheapest label first; labels with no functions are omitted."""
    counts = result.distribution()
    total = result.function_count
    return tuple(
        DistributionEntry(
            label=label,
            count=counts[label],
            percentage=round(counts[label] / total * 100, 1),
            color=color(label),
        )
        for label in ORDERED_LABELS
        if label in counts
    )


def build_report_model(result: AnalysisResult) -> ReportModel:
    summary = SummarySection(
        overall=result.overall,
        overall_color=color(result.overall),
        overall_description=description(result.overall),
        function_count=result.function_count,
        mean_confidence=mean_confidence(result.functions),
    )
    comparison = tuple(
        ComparisonEntry(f.name, f.label, order(f.label), color(f.label)) for f in result.functions
    )
    details = tuple(
        FunctionDetail(
            name=f.name,
            label=f.label,
            color=color(f.label),
            description=description(f.label),
            confidence=f.confidence,
            confidence_band=confidence_band(f.confidence),
            confidence_color=confidence_color(f.confidence),
            line_start=f.line_start,
            line_end=f.line_end,
            evidence=f.evidence,
        )
        for f in result.functions
    )
    return ReportModel(
        result=result,
        summary=summary,
        warnings=result.warnings,
        distribution=build_distribution(result),
        comparison=comparison,
        details=details,
    )
