"""Shared test fixtures for Complexity Lens tests."""

import asyncio
import os
from datetime import datetime, timezone

import pytest

from complexity_lens.config import AnalyzerConfig
from complexity_lens.engine import (
    AnalysisCapability,
    BindingFailure,
    BindingStrategy,
    EngineAdapter,
    reset_engine_adapter,
)
from complexity_lens.models import AnalysisResult, FunctionComplexity
from complexity_lens.taxonomy import ComplexityLabel

FIXED_TIME = datetime(2026, 3, 14, 9, 26, 53, tzinfo=timezone.utc)


class FakeEngine:
    """In-process engine double that records every call."""

    def __init__(self, response=None, error=None, delay=0.0):
        self.response = response if response is not None else {}
        self.error = error
        self.delay = delay
        self.calls = []

    async def analyze(self, code, language):
        self.calls.append((code, language))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def call_count(self):
        return len(self.calls)


class FakeStrategy(BindingStrategy):
    """Strategy double returning a fixed outcome after an optional pause."""

    def __init__(self, name, outcome, delay=0.0):
        self.name = name
        self.outcome = outcome
        self.delay = delay
        self.bind_calls = 0

    async def bind(self):
        self.bind_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Keep user config files and COMPLEXITY_LENS_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("COMPLEXITY_LENS_"):
            monkeypatch.delenv(key)
    yield
    reset_engine_adapter()


@pytest.fixture
def make_function():
    def _make(
        name="process",
        label=ComplexityLabel.LINEAR,
        confidence=0.9,
        evidence=("Single loop over input",),
        line_start=1,
        line_end=3,
    ):
        return FunctionComplexity(
            name=name,
            label=label,
            confidence=confidence,
            evidence=evidence,
            line_start=line_start,
            line_end=line_end,
        )

    return _make


@pytest.fixture
def sample_result(make_function):
    """Two functions, one linear and one quadratic."""
    return AnalysisResult(
        overall=ComplexityLabel.QUADRATIC,
        functions=(
            make_function("linear_scan", ComplexityLabel.LINEAR, 0.9, ("Single loop",), 1, 4),
            make_function(
                "pairwise",
                ComplexityLabel.QUADRATIC,
                0.7,
                ("Nested loops over the input", "Inner loop depends on outer index"),
                6,
                12,
            ),
        ),
        language="python",
        warnings=(),
        produced_at=FIXED_TIME,
        source_name="sort.py",
    )


@pytest.fixture
def engine_response():
    """A well-formed response in the engine's contract shape."""
    return {
        "overall": "O(n²)",
        "functions": [
            {
                "name": "linear_scan",
                "complexity": "O(n)",
                "confidence": 0.9,
                "details": ["Single loop"],
                "lineStart": 1,
                "lineEnd": 4,
            },
            {
                "name": "pairwise",
                "complexity": "O(n²)",
                "confidence": 0.7,
                "details": ["Nested loops"],
                "lineStart": 6,
                "lineEnd": 12,
            },
        ],
        "warnings": [],
    }


@pytest.fixture
def fake_engine(engine_response):
    return FakeEngine(engine_response)


@pytest.fixture
def capability_for():
    def _capability(engine, strategy="fake"):
        return AnalysisCapability(
            strategy=strategy,
            source=f"{strategy}.analyze",
            analyze=engine.analyze,
            entry_points=("analyze",),
        )

    return _capability


@pytest.fixture
def strategy_factory():
    def _factory(name, outcome, delay=0.0):
        return FakeStrategy(name, outcome, delay)

    return _factory


@pytest.fixture
def failing_strategy():
    return FakeStrategy("broken", BindingFailure("broken", "engine missing"))


@pytest.fixture
def small_config():
    return AnalyzerConfig(max_file_size=1000, engine_timeout_seconds=0.5)


@pytest.fixture
def adapter_for(small_config, capability_for):
    """Build an adapter bound to an in-process engine double."""

    def _adapter(engine, config=None):
        strategy = FakeStrategy("fake", capability_for(engine))
        return EngineAdapter(config or small_config, strategies=[strategy])

    return _adapter
