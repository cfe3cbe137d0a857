"""Tests for the engine adapter."""

import asyncio

import pytest

from complexity_lens.config import AnalyzerConfig
from complexity_lens.engine import (
    BindingState,
    EngineAdapter,
    get_engine_adapter,
    reset_engine_adapter,
)
from complexity_lens.languages import DEFAULT_SUPPORTED_LANGUAGES
from complexity_lens.models import FALLBACK_WARNING
from complexity_lens.taxonomy import ComplexityLabel


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_successful_analysis(self, adapter_for, fake_engine):
        adapter = adapter_for(fake_engine)
        result = await adapter.analyze("def f(): pass", "python", "f.py")

        assert fake_engine.calls == [("def f(): pass", "python")]
        assert result.overall is ComplexityLabel.QUADRATIC
        assert result.function_count == 2
        assert result.source_name == "f.py"
        assert not result.is_degraded
        assert adapter.state is BindingState.READY

    @pytest.mark.asyncio
    async def test_empty_input_degrades_without_engine_call(self, adapter_for, fake_engine):
        adapter = adapter_for(fake_engine)
        result = await adapter.analyze("", "any")

        assert result.functions == ()
        assert result.overall is ComplexityLabel.LINEAR
        assert any("empty input" in w for w in result.warnings)
        assert result.warnings[-1] == FALLBACK_WARNING
        assert fake_engine.call_count == 0

    @pytest.mark.asyncio
    async def test_whitespace_only_is_empty(self, adapter_for, fake_engine):
        result = await adapter_for(fake_engine).analyze("   \n\t", "python")
        assert any("empty input" in w for w in result.warnings)
        assert fake_engine.call_count == 0

    @pytest.mark.asyncio
    async def test_too_large_never_reaches_engine(self, adapter_for, fake_engine):
        adapter = adapter_for(fake_engine, AnalyzerConfig(max_file_size=10))
        code = "x = 1\n" * 5

        result = await adapter.analyze(code, "python")

        assert result.functions == ()
        assert result.overall is ComplexityLabel.LINEAR
        assert "30 > 10" in result.warnings[0]
        assert fake_engine.call_count == 0
        assert adapter.state is BindingState.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_size_limit_is_inclusive(self, adapter_for, fake_engine):
        adapter = adapter_for(fake_engine, AnalyzerConfig(max_file_size=5))
        result = await adapter.analyze("x = 1", "python")
        assert fake_engine.call_count == 1
        assert not result.is_degraded

    @pytest.mark.asyncio
    async def test_engine_exception_degrades(self, adapter_for, fake_engine):
        fake_engine.error = RuntimeError("stack overflow in engine")
        result = await adapter_for(fake_engine).analyze("loop()", "javascript")

        assert result.is_degraded
        assert result.language == "javascript"
        assert result.warnings == (
            "Analysis error: stack overflow in engine",
            FALLBACK_WARNING,
        )

    @pytest.mark.asyncio
    async def test_engine_timeout_degrades(self, adapter_for, fake_engine):
        fake_engine.delay = 1.0
        config = AnalyzerConfig(engine_timeout_seconds=0.05)
        result = await adapter_for(fake_engine, config).analyze("spin()", "go")

        assert result.is_degraded
        assert "did not respond within 0.05s" in result.warnings[0]

    @pytest.mark.asyncio
    async def test_malformed_output_degrades(self, adapter_for, fake_engine):
        fake_engine.response = {"functions": "not a list"}
        result = await adapter_for(fake_engine).analyze("f()", "python")

        assert result.is_degraded
        assert result.warnings[0].startswith("Malformed engine output")

    @pytest.mark.asyncio
    async def test_out_of_range_confidence_degrades(self, adapter_for, fake_engine):
        huge = "1" + "0" * 400
        fake_engine.response = (
            '{"functions": [{"name": "f", "complexity": "O(n)", '
            f'"confidence": {huge}, "lineStart": 1}}]}}'
        )
        result = await adapter_for(fake_engine).analyze("f()", "python")

        assert result.is_degraded
        assert "confidence is out of range" in result.warnings[0]

    @pytest.mark.asyncio
    async def test_deeply_nested_response_degrades(self, adapter_for, fake_engine):
        fake_engine.response = "[" * 100_000 + "]" * 100_000
        result = await adapter_for(fake_engine).analyze("f()", "python")

        assert result.is_degraded
        assert result.warnings[-1] == FALLBACK_WARNING

    @pytest.mark.asyncio
    async def test_response_object_raising_on_access_degrades(self, adapter_for, fake_engine):
        class Response:
            @property
            def overall(self):
                raise RuntimeError("engine state lost")

        fake_engine.response = Response()
        result = await adapter_for(fake_engine).analyze("f()", "python")

        assert result.is_degraded
        assert "engine state lost" in result.warnings[0]

    @pytest.mark.asyncio
    async def test_unavailable_engine_degrades(self, failing_strategy, small_config):
        adapter = EngineAdapter(small_config, strategies=[failing_strategy])
        result = await adapter.analyze("f()", "python", "f.py")

        assert result.is_degraded
        assert result.source_name == "f.py"
        assert "Analysis engine unavailable" in result.warnings[0]
        assert adapter.state is BindingState.FAILED

    @pytest.mark.asyncio
    async def test_concurrent_analyses_bind_once(
        self, strategy_factory, capability_for, fake_engine, small_config
    ):
        strategy = strategy_factory("slow", capability_for(fake_engine), delay=0.05)
        adapter = EngineAdapter(small_config, strategies=[strategy])

        results = await asyncio.gather(*(adapter.analyze(f"f{i}()", "python") for i in range(8)))

        assert strategy.bind_calls == 1
        assert fake_engine.call_count == 8
        assert all(r.function_count == 2 for r in results)

    @pytest.mark.asyncio
    async def test_sync_engine_runs_off_loop(self, strategy_factory, small_config):
        from complexity_lens.engine import AnalysisCapability

        def analyze(code, language):
            return '{"overall": "O(n!)"}'

        capability = AnalysisCapability("sync", "sync.analyze", analyze)
        adapter = EngineAdapter(small_config, strategies=[strategy_factory("sync", capability)])
        result = await adapter.analyze("permute()", "python")
        assert result.overall is ComplexityLabel.FACTORIAL


class TestSupportedLanguages:
    @pytest.mark.asyncio
    async def test_defaults_before_binding(self, adapter_for, fake_engine):
        languages = await adapter_for(fake_engine).supported_languages()
        assert languages == list(DEFAULT_SUPPORTED_LANGUAGES)

    @pytest.mark.asyncio
    async def test_engine_reported_languages(self, strategy_factory, small_config, fake_engine):
        from complexity_lens.engine import AnalysisCapability

        capability = AnalysisCapability(
            "fake", "fake.analyze", fake_engine.analyze, list_languages=lambda: ["python", "zig"]
        )
        adapter = EngineAdapter(small_config, strategies=[strategy_factory("fake", capability)])
        await adapter.initialize()
        assert await adapter.supported_languages() == ["python", "zig"]

    @pytest.mark.asyncio
    async def test_failing_language_query_falls_back(
        self, strategy_factory, small_config, fake_engine
    ):
        from complexity_lens.engine import AnalysisCapability

        def broken():
            raise RuntimeError("no list")

        capability = AnalysisCapability("fake", "fake.analyze", fake_engine.analyze, broken)
        adapter = EngineAdapter(small_config, strategies=[strategy_factory("fake", capability)])
        await adapter.initialize()
        assert await adapter.supported_languages() == list(DEFAULT_SUPPORTED_LANGUAGES)


class TestDiagnostics:
    @pytest.mark.asyncio
    async def test_after_failure(self, failing_strategy, small_config):
        adapter = EngineAdapter(small_config, strategies=[failing_strategy])
        await adapter.analyze("f()", "python")
        info = adapter.diagnostics()
        assert info["state"] == "failed"
        assert info["initialized"] is False
        assert info["attempts"] == 1
        assert info["strategies"] == ["broken"]
        assert info["bound_strategy"] is None
        assert info["failures"] == ["broken: engine missing"]

    @pytest.mark.asyncio
    async def test_after_success(self, adapter_for, fake_engine):
        adapter = adapter_for(fake_engine)
        await adapter.initialize()
        info = adapter.diagnostics()
        assert info["state"] == "ready"
        assert info["bound_strategy"] == "fake"
        assert info["source"] == "fake.analyze"
        assert info["available_functions"] == ["analyze"]


class TestProcessWideAdapter:
    def test_singleton(self):
        first = get_engine_adapter()
        assert get_engine_adapter() is first
        reset_engine_adapter()
        assert get_engine_adapter() is not first

    def test_same_config_reuses_adapter(self):
        first = get_engine_adapter(AnalyzerConfig())
        assert get_engine_adapter(AnalyzerConfig()) is first
        assert get_engine_adapter() is first

    def test_different_limits_share_binding(self):
        first = get_engine_adapter(AnalyzerConfig())
        small = get_engine_adapter(AnalyzerConfig(max_file_size=10, engine_timeout_seconds=2))

        assert small is not first
        assert small.config.max_file_size == 10
        assert small.config.engine_timeout_seconds == 2
        assert small.binding is first.binding

    def test_different_engine_gets_own_binding(self):
        first = get_engine_adapter(AnalyzerConfig())
        other = get_engine_adapter(AnalyzerConfig(engine_module="other_engine"))

        assert other.binding is not first.binding
        assert other.config.engine_module == "other_engine"

    @pytest.mark.asyncio
    async def test_later_config_limit_is_enforced(self):
        get_engine_adapter(AnalyzerConfig())
        small = get_engine_adapter(AnalyzerConfig(max_file_size=10))

        result = await small.analyze("x = 1\n" * 5, "python")

        assert result.is_degraded
        assert "Code too large (30 > 10 chars)" in result.warnings[0]
        assert small.state is BindingState.UNINITIALIZED
