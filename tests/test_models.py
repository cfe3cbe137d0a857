"""Tests for the canonical data model."""

import json
from datetime import timezone

import pytest

from complexity_lens.models import (
    FALLBACK_WARNING,
    AnalysisResult,
    FunctionComplexity,
    format_percent,
    mean_confidence,
)
from complexity_lens.taxonomy import ComplexityLabel


class TestFunctionComplexity:
    def test_evidence_is_frozen_to_tuple(self, make_function):
        func = make_function(evidence=["a", "b"])
        assert func.evidence == ("a", "b")

    def test_line_validation(self):
        with pytest.raises(ValueError):
            FunctionComplexity("f", ComplexityLabel.LINEAR, 0.5, (), 0, 1)
        with pytest.raises(ValueError):
            FunctionComplexity("f", ComplexityLabel.LINEAR, 0.5, (), 5, 4)

    def test_line_count(self, make_function):
        assert make_function(line_start=3, line_end=7).line_count == 5

    def test_dict_uses_interchange_names(self, make_function):
        data = make_function(line_start=2, line_end=9).to_dict()
        assert list(data) == ["name", "label", "confidence", "evidence", "lineStart", "lineEnd"]
        assert data["label"] == "O(n)"


class TestAnalysisResult:
    def test_to_dict_fields(self, sample_result):
        data = sample_result.to_dict()
        assert list(data) == [
            "overall",
            "functions",
            "language",
            "warnings",
            "producedAt",
            "sourceName",
        ]
        assert data["overall"] == "O(n²)"
        assert data["producedAt"] == "2026-03-14T09:26:53+00:00"

    def test_source_name_omitted_when_absent(self, sample_result):
        data = sample_result.with_source(None).to_dict()
        assert "sourceName" not in data

    def test_from_dict_round_trip(self, sample_result):
        restored = AnalysisResult.from_dict(json.loads(json.dumps(sample_result.to_dict())))
        assert restored == sample_result
        assert restored.produced_at.tzinfo is not None

    def test_from_dict_rejects_unknown_label(self, sample_result):
        data = sample_result.to_dict()
        data["overall"] = "O(wat)"
        with pytest.raises(ValueError, match="Unknown complexity label"):
            AnalysisResult.from_dict(data)

    def test_distribution_counts(self, sample_result, make_function):
        result = AnalysisResult(
            overall=ComplexityLabel.QUADRATIC,
            functions=sample_result.functions + (make_function("again"),),
            language="python",
        )
        assert result.distribution() == {
            ComplexityLabel.LINEAR: 2,
            ComplexityLabel.QUADRATIC: 1,
        }

    def test_default_timestamp_is_utc(self):
        result = AnalysisResult(ComplexityLabel.CONSTANT, (), "go")
        assert result.produced_at.tzinfo == timezone.utc


class TestDegraded:
    def test_degraded_shape(self):
        result = AnalysisResult.degraded("rust", "Analysis error: boom", source_name="lib.rs")
        assert result.overall is ComplexityLabel.LINEAR
        assert result.functions == ()
        assert result.warnings == ("Analysis error: boom", FALLBACK_WARNING)
        assert result.source_name == "lib.rs"
        assert result.is_degraded

    def test_normal_result_is_not_degraded(self, sample_result):
        assert not sample_result.is_degraded


class TestMeanConfidence:
    def test_empty_is_zero(self):
        assert mean_confidence([]) == 0

    def test_exact_mean(self, make_function):
        functions = [make_function(confidence=c) for c in (0.9, 0.7, 0.5)]
        assert mean_confidence(functions) == 0.7

    def test_single_function(self, make_function):
        assert mean_confidence([make_function(confidence=0.42)]) == 0.42

    def test_format_percent(self):
        assert format_percent(0.853) == "85.3%"
        assert format_percent(0) == "0.0%"
