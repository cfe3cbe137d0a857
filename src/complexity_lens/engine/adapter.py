"""Engine adapter: the only way the rest of the package talks to the engine.

``analyze`` always returns an :class:`AnalysisResult`. Empty or oversized
input, an unreachable engine, a failing or slow engine call and a malformed
response all come back as degraded results whose warnings explain the cause.

Example:
    >>> adapter = EngineAdapter(load_config())
    >>> result = await adapter.analyze(source, "python")
    >>> result.overall
    <ComplexityLabel.LINEAR: 'O(n)'>
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence

from ..config import DEFAULT_CONFIG, AnalyzerConfig
from ..exceptions import (
    EmptyInput,
    EngineError,
    EngineInvocationError,
    InputError,
    InputTooLarge,
    MalformedEngineOutput,
)
from ..languages import DEFAULT_SUPPORTED_LANGUAGES
from ..logging_config import get_logger
from ..models import AnalysisResult
from .binding import BindingState, EngineBinding
from .normalizer import normalize_response
from .strategies import AnalysisCapability, BindingStrategy, default_strategies

logger = get_logger(__name__)


class EngineAdapter:
    """Owns the engine binding and turns every engine outcome into a result."""

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        strategies: Optional[Sequence[BindingStrategy]] = None,
        binding: Optional[EngineBinding] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        if binding is None:
            if strategies is None:
                strategies = default_strategies(self.config)
            binding = EngineBinding(strategies)
        self.binding = binding

    @property
    def state(self) -> BindingState:
        return self.binding.state

    async def initialize(self) -> AnalysisCapability:
        """Bind the engine if it is not bound yet.

        Idempotent; a failed attempt is retried on the next call.

        Raises:
            EngineUnavailable: If no strategy produced a capability
        """
        return await self.binding.ensure_ready()

    async def analyze(
        self, code: str, language: str, source_name: Optional[str] = None
    ) -> AnalysisResult:
        """Analyse source text. Never raises; failures come back as degraded results."""
        try:
            return await self._analyze(code, language, source_name)
        except (InputError, EngineError) as e:
            logger.warning("Using fallback analysis for %s code: %s", language, e.message)
            return AnalysisResult.degraded(language, e.message, source_name=source_name)
        except Exception as e:
            logger.exception("Unexpected failure analyzing %s code", language)
            cause = f"Analysis failed: {str(e) or type(e).__name__}"
            return AnalysisResult.degraded(language, cause, source_name=source_name)

    async def _analyze(
        self, code: str, language: str, source_name: Optional[str]
    ) -> AnalysisResult:
        if not code or not code.strip():
            raise EmptyInput()
        if len(code) > self.config.max_file_size:
            raise InputTooLarge(len(code), self.config.max_file_size)

        capability = await self.initialize()

        logger.debug("Analyzing %s code (%d characters)", language, len(code))
        raw = await self._invoke(capability, code, language)

        try:
            result = normalize_response(raw, language, source_name)
        except MalformedEngineOutput:
            raise
        except Exception as e:
            raise MalformedEngineOutput(str(e) or type(e).__name__) from e

        logger.debug(
            "Analysis completed: overall=%s, %d functions, %d warnings",
            result.overall.value,
            result.function_count,
            len(result.warnings),
        )
        return result

    async def _invoke(self, capability: AnalysisCapability, code: str, language: str) -> Any:
        timeout = self.config.engine_timeout_seconds
        try:
            return await asyncio.wait_for(capability.invoke(code, language), timeout=timeout)
        except asyncio.TimeoutError:
            raise EngineInvocationError(f"engine did not respond within {timeout:g}s")
        except Exception as e:
            raise EngineInvocationError(str(e) or type(e).__name__) from e

    async def supported_languages(self) -> list[str]:
        """Languages the bound engine reports, or the default list."""
        defaults = list(DEFAULT_SUPPORTED_LANGUAGES)
        capability = self.binding.capability
        if self.state is not BindingState.READY or capability is None:
            return defaults
        try:
            languages = await asyncio.wait_for(
                capability.languages(), timeout=self.config.engine_timeout_seconds
            )
        except Exception as e:
            logger.error("Failed to get supported languages: %s", e)
            return defaults
        if not isinstance(languages, (list, tuple)) or not all(
            isinstance(lang, str) for lang in languages
        ):
            return defaults
        return list(languages)

    def diagnostics(self) -> dict[str, Any]:
        """Snapshot of the binding for troubleshooting."""
        capability = self.binding.capability
        return {
            "state": self.state.value,
            "initialized": self.state is BindingState.READY,
            "attempts": self.binding.attempts,
            "strategies": [s.name for s in self.binding.strategies],
            "bound_strategy": capability.strategy if capability else None,
            "source": capability.source if capability else None,
            "available_functions": list(capability.entry_points) if capability else [],
            "failures": [str(f) for f in self.binding.failures],
        }


# Process-wide adapter; the engine binding is shared by every caller.
_default_adapter: Optional[EngineAdapter] = None


def get_engine_adapter(config: Optional[AnalyzerConfig] = None) -> EngineAdapter:
    """Return an adapter for ``config`` backed by the process-wide binding.

    The first call creates the process-wide adapter. A later call with a
    different configuration gets an adapter applying that configuration's
    limits and timeout, sharing the binding when both name the same engine.
    """
    global _default_adapter
    if _default_adapter is None:
        _default_adapter = EngineAdapter(config)
        return _default_adapter
    if config is None or config == _default_adapter.config:
        return _default_adapter
    if _same_engine(config, _default_adapter.config):
        return EngineAdapter(config, binding=_default_adapter.binding)
    return EngineAdapter(config)


def _same_engine(a: AnalyzerConfig, b: AnalyzerConfig) -> bool:
    return a.engine_module == b.engine_module and a.engine_command == b.engine_command


def reset_engine_adapter() -> None:
    global _default_adapter
    if _default_adapter is not None:
        _default_adapter.binding.reset()
    _default_adapter = None
