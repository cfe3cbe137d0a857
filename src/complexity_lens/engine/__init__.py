"""Engine adapter and binding strategies."""

from .adapter import EngineAdapter, get_engine_adapter, reset_engine_adapter
from .binding import BindingState, EngineBinding
from .normalizer import normalize_response
from .strategies import (
    AnalysisCapability,
    BindingFailure,
    BindingStrategy,
    DirectExportStrategy,
    InitializerStrategy,
    SubprocessStrategy,
    default_strategies,
)

__all__ = [
    "EngineAdapter",
    "get_engine_adapter",
    "reset_engine_adapter",
    "BindingState",
    "EngineBinding",
    "normalize_response",
    "AnalysisCapability",
    "BindingFailure",
    "BindingStrategy",
    "DirectExportStrategy",
    "InitializerStrategy",
    "SubprocessStrategy",
    "default_strategies",
]
