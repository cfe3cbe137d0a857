"""Canonical data model for complexity findings.

``AnalysisResult`` is the only shape the renderers and exporters ever see.
Its dictionary form uses the camelCase interchange names (``lineStart``,
``producedAt``, ``sourceName``); those names are the export contract and are
shared by every serializer in the package.
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from .taxonomy import DEFAULT_LABEL, ComplexityLabel, parse_label

FALLBACK_WARNING = "Using fallback analysis"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FunctionComplexity:
    """Complexity finding for a single function.

    Lines are 1-based and inclusive.
    """

    name: str
    label: ComplexityLabel
    confidence: float
    evidence: tuple[str, ...] = ()
    line_start: int = 1
    line_end: int = 1

    def __post_init__(self) -> None:
        if self.line_start < 1:
            raise ValueError("line_start must be at least 1")
        if self.line_end < self.line_start:
            raise ValueError("line_end must not precede line_start")
        # Lists handed in by callers are frozen into tuples
        if not isinstance(self.evidence, tuple):
            object.__setattr__(self, "evidence", tuple(self.evidence))

    @property
    def line_count(self) -> int:
        return self.line_end - self.line_start + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label.value,
            "confidence": self.confidence,
            "evidence": list(self.evidence),
            "lineStart": self.line_start,
            "lineEnd": self.line_end,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FunctionComplexity":
        label = parse_label(d.get("label"))
        if label is None:
            raise ValueError(f"Unknown complexity label: {d.get('label')!r}")
        return cls(
            name=d["name"],
            label=label,
            confidence=float(d.get("confidence", 0.0)),
            evidence=tuple(d.get("evidence", ())),
            line_start=int(d["lineStart"]),
            line_end=int(d["lineEnd"]),
        )


@dataclass(frozen=True)
class AnalysisResult:
    """Normalized outcome of one analysis call.

    ``functions`` keeps the engine's order, which is also the display order.
    Instances are immutable; a newer analysis supersedes rather than mutates.
    """

    overall: ComplexityLabel
    functions: tuple[FunctionComplexity, ...]
    language: str
    warnings: tuple[str, ...] = ()
    produced_at: datetime = field(default_factory=utc_now)
    source_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.functions, tuple):
            object.__setattr__(self, "functions", tuple(self.functions))
        if not isinstance(self.warnings, tuple):
            object.__setattr__(self, "warnings", tuple(self.warnings or ()))

    @classmethod
    def degraded(
        cls,
        language: str,
        *causes: str,
        source_name: Optional[str] = None,
    ) -> "AnalysisResult":
        """A structurally normal result carrying explanations instead of findings."""
        return cls(
            overall=DEFAULT_LABEL,
            functions=(),
            language=language,
            warnings=tuple(causes) + (FALLBACK_WARNING,),
            source_name=source_name,
        )

    @property
    def function_count(self) -> int:
        return len(self.functions)

    @property
    def is_degraded(self) -> bool:
        return not self.functions and FALLBACK_WARNING in self.warnings

    def with_source(self, source_name: Optional[str]) -> "AnalysisResult":
        return replace(self, source_name=source_name)

    def distribution(self) -> Dict[ComplexityLabel, int]:
        """Function counts per label, in first-seen order."""
        counts: Dict[ComplexityLabel, int] = {}
        for func in self.functions:
            counts[func.label] = counts.get(func.label, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "overall": self.overall.value,
            "functions": [f.to_dict() for f in self.functions],
            "language": self.language,
            "warnings": list(self.warnings),
            "producedAt": self.produced_at.isoformat(),
        }
        if self.source_name is not None:
            data["sourceName"] = self.source_name
        return data

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnalysisResult":
        overall = parse_label(d.get("overall"))
        if overall is None:
            raise ValueError(f"Unknown complexity label: {d.get('overall')!r}")
        return cls(
            overall=overall,
            functions=tuple(FunctionComplexity.from_dict(f) for f in d.get("functions", [])),
            language=d["language"],
            warnings=tuple(d.get("warnings", [])),
            produced_at=datetime.fromisoformat(d["producedAt"]),
            source_name=d.get("sourceName"),
        )


def mean_confidence(functions: Sequence[FunctionComplexity]) -> float:
    """Arithmetic mean of function confidences; ``0.0`` for no functions.

    ``statistics.mean`` sums exactly, so ``[0.9, 0.7, 0.5]`` gives ``0.7``.
    """
    if not functions:
        return 0.0
    return float(statistics.mean(f.confidence for f in functions))


def format_percent(value: float) -> str:
    """Confidence as a one-decimal percentage (``0.853`` -> ``"85.3%"``)."""
    return f"{value * 100:.1f}%"


def clamp_confidence(value: float) -> float:
    return min(1.0, max(0.0, value))
