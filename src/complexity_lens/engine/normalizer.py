"""Normalize raw engine responses into canonical results.

The engine contract allows ``overall``, ``functions`` and ``warnings`` to be
absent (defaults apply). Everything else that does not match the contract is
a :class:`MalformedEngineOutput`.

Function entries are accepted with either the contract names (``name``,
``lineStart``) or the engine's native ones (``function``, ``line_start``).
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any, Optional

from ..exceptions import MalformedEngineOutput
from ..models import AnalysisResult, FunctionComplexity, clamp_confidence, utc_now
from ..taxonomy import DEFAULT_LABEL, ComplexityLabel, parse_label

_RESPONSE_FIELDS = ("overall", "functions", "warnings")


def normalize_response(
    raw: Any, language: str, source_name: Optional[str] = None
) -> AnalysisResult:
    """Build an AnalysisResult from an engine response.

    Raises:
        MalformedEngineOutput: If the response violates the engine contract
    """
    payload = _as_mapping(_decode(raw))

    warnings = _string_list(payload.get("warnings"), "warnings")
    overall = _label(payload.get("overall"), "overall", warnings)

    functions_raw = payload.get("functions")
    if functions_raw is None:
        functions_raw = []
    if not isinstance(functions_raw, (list, tuple)):
        raise MalformedEngineOutput(
            f"'functions' must be a list, got {type(functions_raw).__name__}"
        )

    functions = [
        _function(index, entry, warnings) for index, entry in enumerate(functions_raw)
    ]

    return AnalysisResult(
        overall=overall,
        functions=tuple(functions),
        language=language,
        warnings=tuple(warnings),
        produced_at=utc_now(),
        source_name=source_name,
    )


def _decode(raw: Any) -> Any:
    if raw is None:
        raise MalformedEngineOutput("engine returned no response")
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError as e:
            raise MalformedEngineOutput(f"response is not valid JSON ({e})")
    return raw


def _as_mapping(raw: Any) -> Mapping:
    if isinstance(raw, Mapping):
        return raw
    # Binding layers may hand back plain result objects
    if any(hasattr(raw, name) for name in _RESPONSE_FIELDS):
        return {name: getattr(raw, name) for name in _RESPONSE_FIELDS if hasattr(raw, name)}
    raise MalformedEngineOutput(f"expected an object, got {type(raw).__name__}")


def _get(entry: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in entry and entry[key] is not None:
            return entry[key]
    return None


def _string_list(value: Any, where: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise MalformedEngineOutput(f"'{where}' must be a list of strings")
    for item in value:
        if not isinstance(item, str):
            raise MalformedEngineOutput(f"'{where}' contains a non-string entry: {item!r}")
    return list(value)


def _label(value: Any, where: str, warnings: list[str]) -> ComplexityLabel:
    if value is None:
        return DEFAULT_LABEL
    if not isinstance(value, str):
        raise MalformedEngineOutput(f"'{where}' must be a complexity label string")
    label = parse_label(value)
    if label is None:
        warnings.append(
            f"Unrecognized complexity '{value}' for {where}; reported as {DEFAULT_LABEL.value}"
        )
        return DEFAULT_LABEL
    return label


def _line(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedEngineOutput(f"{where} must be an integer line number")
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedEngineOutput(f"{where} must be an integer line number")
        value = int(value)
    return max(1, value)


def _function(index: int, entry: Any, warnings: list[str]) -> FunctionComplexity:
    where = f"functions[{index}]"
    if not isinstance(entry, Mapping):
        raise MalformedEngineOutput(f"{where} is not an object")

    name = _get(entry, "name", "function")
    if not isinstance(name, str) or not name:
        raise MalformedEngineOutput(f"{where} has no function name")

    complexity = _get(entry, "complexity", "label")
    if complexity is None:
        raise MalformedEngineOutput(f"{where} ({name}) has no complexity")
    label = _label(complexity, f"function '{name}'", warnings)

    confidence = _get(entry, "confidence")
    if confidence is None:
        confidence = 0.0
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise MalformedEngineOutput(f"{where} ({name}) confidence must be a number")
    try:
        confidence = float(confidence)
    except OverflowError:
        raise MalformedEngineOutput(f"{where} ({name}) confidence is out of range")
    confidence = 0.0 if math.isnan(confidence) else clamp_confidence(confidence)

    evidence = _string_list(_get(entry, "details", "evidence"), f"{where}.details")

    line_start_raw = _get(entry, "lineStart", "line_start")
    if line_start_raw is None:
        raise MalformedEngineOutput(f"{where} ({name}) has no start line")
    line_start = _line(line_start_raw, f"{where}.lineStart")
    line_end_raw = _get(entry, "lineEnd", "line_end")
    line_end = line_start if line_end_raw is None else _line(line_end_raw, f"{where}.lineEnd")

    return FunctionComplexity(
        name=name,
        label=label,
        confidence=confidence,
        evidence=tuple(evidence),
        line_start=line_start,
        line_end=max(line_start, line_end),
    )
