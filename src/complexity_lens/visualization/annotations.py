"""Inline annotations: complexity markers laid over a source view.

The host editor is reached through :class:`MarkerSurface`. Functions are
grouped into one batch per complexity label, and one extra batch anchors the
overall label at the top of the document. Rendering a new result first
clears every batch this renderer applied to the surface before.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..models import AnalysisResult, FunctionComplexity, format_percent, mean_confidence
from ..taxonomy import ComplexityLabel, color, description

OVERALL_KEY = "overall"


@dataclass(frozen=True)
class Marker:
    """One decorated range; lines are 1-based and inclusive."""

    line_start: int
    line_end: int
    hover: str


@dataclass(frozen=True)
class MarkerBatch:
    """Markers that share a complexity label and therefore a style."""

    key: str
    label: ComplexityLabel
    color: str
    markers: tuple[Marker, ...]

    @property
    def inline_text(self) -> str:
        return f" {self.label.value}"


class MarkerSurface(Protocol):
    """What the renderer needs from a host source view."""

    @property
    def line_count(self) -> int: ...

    def apply(self, batch: MarkerBatch) -> None: ...

    def clear(self, key: str) -> None: ...


def batch_key(label: ComplexityLabel) -> str:
    return label.name.lower()


def function_hover(func: FunctionComplexity) -> str:
    lines = [
        f"### Function: `{func.name}`",
        "",
        f'**Complexity:** <span style="color: {color(func.label)}; font-weight: bold;">'
        f"{func.label.value}</span>",
        "",
        f"**Description:** {description(func.label)}",
        "",
        f"**Confidence:** {format_percent(func.confidence)}",
        "",
        f"**Lines:** {func.line_start} - {func.line_end}",
        "",
    ]
    if func.evidence:
        lines.append("**Analysis Details:**")
        lines.extend(f"- {detail}" for detail in func.evidence)
    return "\n".join(lines)


def overall_hover(result: AnalysisResult) -> str:
    lines = [
        "### Overall File Complexity",
        "",
        f'**Complexity:** <span style="color: {color(result.overall)}; font-weight: bold;">'
        f"{result.overall.value}</span>",
        "",
        f"**Description:** {description(result.overall)}",
        "",
        f"**Language:** {result.language}",
        "",
        f"**Functions Analyzed:** {result.function_count}",
        "",
    ]
    if result.warnings:
        lines.append("**Warnings:**")
        lines.extend(f"- ⚠️ {warning}" for warning in result.warnings)
        lines.append("")
    lines.append(f"**Average Confidence:** {format_percent(mean_confidence(result.functions))}")
    return "\n".join(lines)


def build_batches(result: AnalysisResult, line_count: int) -> list[MarkerBatch]:
    """Marker batches for a result against a document of ``line_count`` lines.

    Ranges are clamped to the document. A function starting past the last
    line is skipped.
    """
    if line_count < 1:
        return []

    grouped: dict[ComplexityLabel, list[Marker]] = {}
    for func in result.functions:
        if func.line_start > line_count:
            continue
        marker = Marker(
            line_start=func.line_start,
            line_end=min(func.line_end, line_count),
            hover=function_hover(func),
        )
        grouped.setdefault(func.label, []).append(marker)

    batches = [
        MarkerBatch(batch_key(label), label, color(label), tuple(markers))
        for label, markers in grouped.items()
    ]
    batches.append(
        MarkerBatch(
            OVERALL_KEY,
            result.overall,
            color(result.overall),
            (Marker(1, 1, overall_hover(result)),),
        )
    )
    return batches


class AnnotationRenderer:
    """Applies marker batches and remembers them so a refresh leaves nothing stale."""

    def __init__(self) -> None:
        # id(surface) -> (surface, applied batch keys), released by clear()
        self._applied: dict[int, tuple[MarkerSurface, list[str]]] = {}

    def render(self, surface: MarkerSurface, result: AnalysisResult) -> list[MarkerBatch]:
        self.clear(surface)
        batches = build_batches(result, surface.line_count)
        for batch in batches:
            surface.apply(batch)
        self._applied[id(surface)] = (surface, [batch.key for batch in batches])
        return batches

    def clear(self, surface: MarkerSurface) -> None:
        _, keys = self._applied.pop(id(surface), (surface, []))
        for key in keys:
            surface.clear(key)

    def dispose(self) -> None:
        for surface, _ in list(self._applied.values()):
            self.clear(surface)
