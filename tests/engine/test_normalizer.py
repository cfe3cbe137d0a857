"""Tests for engine response normalization."""

import json
from types import SimpleNamespace

import pytest

from complexity_lens.engine import normalize_response
from complexity_lens.exceptions import MalformedEngineOutput
from complexity_lens.taxonomy import ComplexityLabel


class TestWellFormed:
    def test_contract_response(self, engine_response):
        result = normalize_response(engine_response, "python", "sort.py")
        assert result.overall is ComplexityLabel.QUADRATIC
        assert [f.name for f in result.functions] == ["linear_scan", "pairwise"]
        assert result.functions[1].evidence == ("Nested loops",)
        assert result.functions[1].line_start == 6
        assert result.language == "python"
        assert result.source_name == "sort.py"

    def test_json_string_and_bytes(self, engine_response):
        text = json.dumps(engine_response)
        assert normalize_response(text, "go").function_count == 2
        assert normalize_response(text.encode("utf-8"), "go").function_count == 2

    def test_object_response(self):
        raw = SimpleNamespace(overall="O(1)", functions=[], warnings=["shallow"])
        result = normalize_response(raw, "c")
        assert result.overall is ComplexityLabel.CONSTANT
        assert result.warnings == ("shallow",)

    def test_absent_fields_use_defaults(self):
        result = normalize_response({}, "java")
        assert result.overall is ComplexityLabel.LINEAR
        assert result.functions == ()
        assert result.warnings == ()

    def test_native_field_names(self):
        raw = {
            "functions": [
                {"function": "walk", "label": "O(log n)", "confidence": 1, "line_start": 3}
            ]
        }
        func = normalize_response(raw, "rust").functions[0]
        assert func.name == "walk"
        assert func.label is ComplexityLabel.LOGARITHMIC
        assert (func.line_start, func.line_end) == (3, 3)
        assert func.evidence == ()


class TestCoercion:
    def test_unknown_label_becomes_linear_with_warning(self):
        raw = {"overall": "O(n^7)", "functions": []}
        result = normalize_response(raw, "python")
        assert result.overall is ComplexityLabel.LINEAR
        assert "O(n^7)" in result.warnings[0]

    def test_confidence_clamped(self):
        raw = {
            "functions": [
                {"name": "a", "complexity": "O(1)", "confidence": 1.7, "lineStart": 1},
                {"name": "b", "complexity": "O(1)", "confidence": -2, "lineStart": 2},
                {"name": "c", "complexity": "O(1)", "confidence": float("nan"), "lineStart": 3},
            ]
        }
        confidences = [f.confidence for f in normalize_response(raw, "go").functions]
        assert confidences == [1.0, 0.0, 0.0]

    def test_inverted_lines_fixed(self):
        raw = {
            "functions": [
                {"name": "a", "complexity": "O(1)", "confidence": 0.5, "lineStart": 0, "lineEnd": -4},
                {"name": "b", "complexity": "O(1)", "confidence": 0.5, "lineStart": 9, "lineEnd": 2},
            ]
        }
        a, b = normalize_response(raw, "go").functions
        assert (a.line_start, a.line_end) == (1, 1)
        assert (b.line_start, b.line_end) == (9, 9)


class TestMalformed:
    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "not json",
            [1, 2, 3],
            {"functions": "many"},
            {"warnings": "oops"},
            {"warnings": [1]},
            {"overall": 3},
            {"functions": [42]},
            {"functions": [{"complexity": "O(1)", "lineStart": 1}]},
            {"functions": [{"name": "f", "lineStart": 1}]},
            {"functions": [{"name": "f", "complexity": "O(1)"}]},
            {"functions": [{"name": "f", "complexity": "O(1)", "lineStart": "one"}]},
            {"functions": [{"name": "f", "complexity": "O(1)", "lineStart": 1, "confidence": "hi"}]},
            {"functions": [{"name": "f", "complexity": "O(1)", "lineStart": 1, "details": "x"}]},
        ],
    )
    def test_contract_violations(self, raw):
        with pytest.raises(MalformedEngineOutput):
            normalize_response(raw, "python")
