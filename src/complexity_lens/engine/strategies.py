"""Binding strategies for the external complexity inference engine.

The engine is opaque: it may ship as an importable module exposing its entry
points directly, as a module that needs a bootstrap call first, or only as an
executable. Each way of reaching it is one :class:`BindingStrategy`; the
binding tries them in a fixed order and keeps the first capability it gets.

A strategy never raises for an unusable engine. It returns either an
:class:`AnalysisCapability` or a :class:`BindingFailure` describing why it
could not bind.
"""

from __future__ import annotations

import asyncio
import importlib
import inspect
import json
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

from ..logging_config import get_logger

if TYPE_CHECKING:
    from ..config import AnalyzerConfig

logger = get_logger(__name__)

# Entry point names tried in order on a bound module or object.
ANALYZE_ENTRY_POINTS = ("analyze_complexity", "analyzeComplexity")
LANGUAGE_ENTRY_POINTS = ("get_supported_languages", "getSupportedLanguages")
BOOTSTRAP_ENTRY_POINTS = ("init", "default", "init_sync", "initSync")


@dataclass(frozen=True)
class AnalysisCapability:
    """A callable analysis entry point obtained from the engine.

    Attributes:
        strategy: Name of the strategy that produced this capability
        source: Where the entry point lives (``module.function`` or a path)
        analyze: ``analyze(code, language) -> raw response``
        list_languages: Optional ``() -> list of language ids``
        entry_points: Names of the callables discovered on the engine
    """

    strategy: str
    source: str
    analyze: Callable[[str, str], Any]
    list_languages: Optional[Callable[[], Any]] = None
    entry_points: tuple[str, ...] = ()

    async def invoke(self, code: str, language: str) -> Any:
        """Run the entry point without blocking the event loop."""
        if inspect.iscoroutinefunction(self.analyze):
            return await self.analyze(code, language)
        result = await asyncio.to_thread(self.analyze, code, language)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def languages(self) -> Any:
        if self.list_languages is None:
            return None
        if inspect.iscoroutinefunction(self.list_languages):
            return await self.list_languages()
        return await asyncio.to_thread(self.list_languages)


@dataclass(frozen=True)
class BindingFailure:
    """Why a strategy could not produce a capability."""

    strategy: str
    reason: str

    def __str__(self) -> str:
        return f"{self.strategy}: {self.reason}"


BindingOutcome = Union[AnalysisCapability, BindingFailure]


class BindingStrategy(ABC):
    """One way of reaching the engine."""

    name: str = "strategy"

    @abstractmethod
    async def bind(self) -> BindingOutcome:
        """Try to obtain an analysis capability."""


def _import_engine_module(module_name: str) -> ModuleType:
    # A module deployed after a failed attempt must be visible to the retry
    importlib.invalidate_caches()
    return importlib.import_module(module_name)


def _lookup(target: Any, names: Sequence[str]) -> Optional[tuple[str, Callable]]:
    for name in names:
        candidate = getattr(target, name, None)
        if callable(candidate):
            return name, candidate
    return None


def _public_callables(target: Any) -> tuple[str, ...]:
    return tuple(
        sorted(
            name
            for name in dir(target)
            if not name.startswith("_") and callable(getattr(target, name, None))
        )
    )


def _capability_from(target: Any, strategy: str, source_prefix: str) -> BindingOutcome:
    found = _lookup(target, ANALYZE_ENTRY_POINTS)
    if found is None:
        return BindingFailure(
            strategy,
            f"no analysis entry point ({', '.join(ANALYZE_ENTRY_POINTS)}) on {source_prefix}",
        )
    name, analyze = found
    languages = _lookup(target, LANGUAGE_ENTRY_POINTS)
    return AnalysisCapability(
        strategy=strategy,
        source=f"{source_prefix}.{name}",
        analyze=analyze,
        list_languages=languages[1] if languages else None,
        entry_points=_public_callables(target),
    )


class DirectExportStrategy(BindingStrategy):
    """Bind the engine module's analysis function by name."""

    name = "direct"

    def __init__(self, module_name: str):
        self.module_name = module_name

    async def bind(self) -> BindingOutcome:
        try:
            module = await asyncio.to_thread(_import_engine_module, self.module_name)
        except ImportError as e:
            return BindingFailure(self.name, f"cannot import {self.module_name}: {e}")
        return _capability_from(module, self.name, self.module_name)


class InitializerStrategy(BindingStrategy):
    """Run the engine module's bootstrap entry point, then bind its result.

    The bootstrap may be synchronous or awaitable. When it returns an object
    the analysis entry point is looked up there first, then on the module.
    """

    name = "initializer"

    def __init__(self, module_name: str, bootstrap_names: Sequence[str] = BOOTSTRAP_ENTRY_POINTS):
        self.module_name = module_name
        self.bootstrap_names = tuple(bootstrap_names)

    async def bind(self) -> BindingOutcome:
        try:
            module = await asyncio.to_thread(_import_engine_module, self.module_name)
        except ImportError as e:
            return BindingFailure(self.name, f"cannot import {self.module_name}: {e}")

        bootstrap = _lookup(module, self.bootstrap_names)
        if bootstrap is None:
            return BindingFailure(
                self.name,
                f"no initializer ({', '.join(self.bootstrap_names)}) on {self.module_name}",
            )
        boot_name, boot = bootstrap
        logger.debug("Bootstrapping engine via %s.%s()", self.module_name, boot_name)
        try:
            if inspect.iscoroutinefunction(boot):
                initialized = await boot()
            else:
                initialized = await asyncio.to_thread(boot)
                if inspect.isawaitable(initialized):
                    initialized = await initialized
        except Exception as e:
            return BindingFailure(self.name, f"{self.module_name}.{boot_name}() failed: {e}")

        if initialized is not None and not isinstance(initialized, (bool, int)):
            outcome = _capability_from(initialized, self.name, f"{self.module_name}.{boot_name}()")
            if isinstance(outcome, AnalysisCapability):
                return outcome
        return _capability_from(module, self.name, self.module_name)


class SubprocessStrategy(BindingStrategy):
    """Last resort: drive an engine executable over stdin/stdout.

    Protocol: ``<command> --language <id>`` reads source text on stdin and
    writes the JSON response to stdout; ``<command> --list-languages``
    prints a JSON array of language identifiers.
    """

    name = "subprocess"

    def __init__(self, command: str, timeout_seconds: float = 30.0):
        self.command = command
        self.timeout_seconds = timeout_seconds

    def _resolve(self) -> Optional[str]:
        found = shutil.which(self.command)
        if found:
            return found
        path = Path(self.command)
        if path.is_file() and os.access(path, os.X_OK):
            return str(path)
        return None

    async def bind(self) -> BindingOutcome:
        executable = self._resolve()
        if executable is None:
            return BindingFailure(self.name, f"engine executable not found: {self.command}")

        def analyze(code: str, language: str) -> str:
            return self._run(executable, ["--language", language], stdin=code)

        def list_languages() -> Any:
            return json.loads(self._run(executable, ["--list-languages"]))

        return AnalysisCapability(
            strategy=self.name,
            source=executable,
            analyze=analyze,
            list_languages=list_languages,
            entry_points=("--language", "--list-languages"),
        )

    def _run(self, executable: str, args: list[str], stdin: Optional[str] = None) -> str:
        result = subprocess.run(
            [executable, *args],
            input=stdin,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=self.timeout_seconds,
        )
        if result.returncode != 0:
            stderr = result.stderr.strip() or "no error output"
            raise RuntimeError(f"engine exited with status {result.returncode}: {stderr}")
        return result.stdout


def default_strategies(config: "AnalyzerConfig") -> list[BindingStrategy]:
    """Strategies in priority order for a configuration."""
    strategies: list[BindingStrategy] = []
    if config.engine_module:
        strategies.append(DirectExportStrategy(config.engine_module))
        strategies.append(InitializerStrategy(config.engine_module))
    if config.engine_command:
        strategies.append(
            SubprocessStrategy(config.engine_command, timeout_seconds=config.engine_timeout_seconds)
        )
    return strategies
