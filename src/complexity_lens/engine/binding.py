"""Engine binding lifecycle.

States::

    UNINITIALIZED -> INITIALIZING -> READY
                                  -> FAILED -> INITIALIZING (next call retries)

At most one initialization runs at a time. Callers arriving while it is in
flight await the same task instead of starting their own.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional, Sequence

from ..exceptions import EngineUnavailable
from ..logging_config import get_logger
from .strategies import AnalysisCapability, BindingFailure, BindingStrategy

logger = get_logger(__name__)


class BindingState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class EngineBinding:
    """The live connection to the engine, owned by one EngineAdapter."""

    def __init__(self, strategies: Sequence[BindingStrategy]) -> None:
        self._strategies = list(strategies)
        self._inflight: Optional[asyncio.Task] = None
        self.state = BindingState.UNINITIALIZED
        self.capability: Optional[AnalysisCapability] = None
        self.failures: list[BindingFailure] = []
        self.attempts = 0

    @property
    def strategies(self) -> list[BindingStrategy]:
        return list(self._strategies)

    async def ensure_ready(self) -> AnalysisCapability:
        """Return the bound capability, initializing if needed.

        Raises:
            EngineUnavailable: If every strategy failed on this attempt
        """
        if self.state is BindingState.READY and self.capability is not None:
            return self.capability
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._initialize())
        # Shielded so one cancelled caller does not abort the shared attempt
        return await asyncio.shield(self._inflight)

    async def _initialize(self) -> AnalysisCapability:
        self.state = BindingState.INITIALIZING
        self.attempts += 1
        failures: list[BindingFailure] = []
        try:
            for strategy in self._strategies:
                logger.debug("Trying engine binding strategy '%s'", strategy.name)
                try:
                    outcome = await strategy.bind()
                except Exception as e:
                    outcome = BindingFailure(strategy.name, f"{type(e).__name__}: {e}")

                if isinstance(outcome, AnalysisCapability):
                    self.capability = outcome
                    self.failures = failures
                    self.state = BindingState.READY
                    logger.info(
                        "Engine bound via '%s' (%s)", outcome.strategy, outcome.source
                    )
                    return outcome

                logger.debug("Binding strategy failed: %s", outcome)
                failures.append(outcome)

            self.capability = None
            self.failures = failures
            self.state = BindingState.FAILED
            logger.error(
                "All engine binding strategies failed: %s",
                "; ".join(str(f) for f in failures) or "none configured",
            )
            raise EngineUnavailable([str(f) for f in failures])
        finally:
            if self._inflight is asyncio.current_task():
                self._inflight = None

    def reset(self) -> None:
        """Drop the capability; the next call binds from scratch."""
        if self._inflight is not None:
            self._inflight.cancel()
            self._inflight = None
        self.capability = None
        self.failures = []
        self.state = BindingState.UNINITIALIZED
