"""Complexity taxonomy: the single source of truth for label order, colour and wording.

Every renderer and exporter looks labels up here, so the nine classes stay
consistent across the inline annotations, the report view and all export
formats.

Lookups are total: anything that is not one of the nine labels (an unknown
string, ``None``) resolves to the linear class's order and description and to
:data:`NEUTRAL_COLOR`.

Example:
    >>> order(ComplexityLabel.QUADRATIC)
    4
    >>> color("O(n!)")
    '#000000'
    >>> description(None)
    'Linear time complexity (estimated)'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ComplexityLabel(Enum):
    """The nine asymptotic classes, declared from cheapest to most severe."""

    CONSTANT = "O(1)"
    LOGARITHMIC = "O(log n)"
    LINEAR = "O(n)"
    LINEARITHMIC = "O(n log n)"
    QUADRATIC = "O(n²)"
    CUBIC = "O(n³)"
    POLYNOMIAL = "O(n^k)"
    EXPONENTIAL = "O(2ⁿ)"
    FACTORIAL = "O(n!)"

    @property
    def order(self) -> int:
        return _INFO[self].order

    def __lt__(self, other: "ComplexityLabel") -> bool:
        if not isinstance(other, ComplexityLabel):
            return NotImplemented
        return self.order < other.order

    def __le__(self, other: "ComplexityLabel") -> bool:
        if not isinstance(other, ComplexityLabel):
            return NotImplemented
        return self.order <= other.order

    def __gt__(self, other: "ComplexityLabel") -> bool:
        if not isinstance(other, ComplexityLabel):
            return NotImplemented
        return self.order > other.order

    def __ge__(self, other: "ComplexityLabel") -> bool:
        if not isinstance(other, ComplexityLabel):
            return NotImplemented
        return self.order >= other.order

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LabelInfo:
    order: int
    color: str
    description: str


_INFO: dict[ComplexityLabel, LabelInfo] = {
    ComplexityLabel.CONSTANT: LabelInfo(0, "#28a745", "Constant time - excellent performance"),
    ComplexityLabel.LOGARITHMIC: LabelInfo(1, "#20c997", "Logarithmic time - very good performance"),
    ComplexityLabel.LINEAR: LabelInfo(2, "#ffc107", "Linear time - good performance"),
    ComplexityLabel.LINEARITHMIC: LabelInfo(
        3, "#fd7e14", "Linearithmic time - acceptable performance"
    ),
    ComplexityLabel.QUADRATIC: LabelInfo(
        4, "#dc3545", "Quadratic time - poor performance for large inputs"
    ),
    ComplexityLabel.CUBIC: LabelInfo(5, "#6f42c1", "Cubic time - very poor performance"),
    ComplexityLabel.POLYNOMIAL: LabelInfo(
        6, "#e83e8c", "Polynomial time - extremely poor performance"
    ),
    ComplexityLabel.EXPONENTIAL: LabelInfo(
        7, "#343a40", "Exponential time - unacceptable for large inputs"
    ),
    ComplexityLabel.FACTORIAL: LabelInfo(
        8, "#000000", "Factorial time - only suitable for tiny inputs"
    ),
}

# Conservative class used for degraded results and unknown labels.
DEFAULT_LABEL = ComplexityLabel.LINEAR
NEUTRAL_COLOR = "#6c757d"
UNKNOWN_DESCRIPTION = "Linear time complexity (estimated)"

# Ordered from cheapest to most severe; index == order.
ORDERED_LABELS: tuple[ComplexityLabel, ...] = tuple(
    sorted(ComplexityLabel, key=lambda label: _INFO[label].order)
)

# ASCII spellings engines commonly emit for the superscript forms.
_ALIASES: dict[str, ComplexityLabel] = {
    "O(n^2)": ComplexityLabel.QUADRATIC,
    "O(n**2)": ComplexityLabel.QUADRATIC,
    "O(n^3)": ComplexityLabel.CUBIC,
    "O(n**3)": ComplexityLabel.CUBIC,
    "O(2^n)": ComplexityLabel.EXPONENTIAL,
    "O(2**n)": ComplexityLabel.EXPONENTIAL,
    "O(logn)": ComplexityLabel.LOGARITHMIC,
    "O(nlogn)": ComplexityLabel.LINEARITHMIC,
}

LabelLike = Union[ComplexityLabel, str, None]


def parse_label(value: object) -> Optional[ComplexityLabel]:
    """Resolve an engine label string to a :class:`ComplexityLabel`.

    Accepts the canonical notation (``"O(n²)"``), the ASCII aliases above and
    the enum member names (``"quadratic"``). Returns ``None`` for anything
    else; never raises.
    """
    if isinstance(value, ComplexityLabel):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return ComplexityLabel(text)
    except ValueError:
        pass
    alias = _ALIASES.get(text.replace(" ", ""))
    if alias is not None:
        return alias
    return ComplexityLabel.__members__.get(text.upper())


def order(label: LabelLike) -> int:
    """Severity index in ``0..8``; unknown labels rank as linear."""
    resolved = parse_label(label)
    return _INFO[resolved or DEFAULT_LABEL].order


def color(label: LabelLike) -> str:
    """Stable hex colour; unknown labels get :data:`NEUTRAL_COLOR`."""
    resolved = parse_label(label)
    if resolved is None:
        return NEUTRAL_COLOR
    return _INFO[resolved].color


def description(label: LabelLike) -> str:
    """Human-readable performance characterisation."""
    resolved = parse_label(label)
    if resolved is None:
        return UNKNOWN_DESCRIPTION
    return _INFO[resolved].description


# Confidence banding shared by the report view and the styled export.
CONFIDENCE_HIGH = 0.8
CONFIDENCE_MEDIUM = 0.6
CONFIDENCE_COLORS = {
    "favorable": "#28a745",
    "cautionary": "#ffc107",
    "unfavorable": "#dc3545",
}


def confidence_band(confidence: float) -> str:
    if confidence > CONFIDENCE_HIGH:
        return "favorable"
    elif confidence > CONFIDENCE_MEDIUM:
        return "cautionary"
    else:
        return "unfavorable"


def confidence_color(confidence: float) -> str:
    return CONFIDENCE_COLORS[confidence_band(confidence)]
