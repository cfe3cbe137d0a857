"""Exception hierarchy for Complexity Lens."""

from .base import ComplexityLensError
from .config import ConfigurationError, InvalidConfigError
from .engine import (
    EmptyInput,
    EngineError,
    EngineInvocationError,
    EngineUnavailable,
    InputError,
    InputTooLarge,
    MalformedEngineOutput,
)
from .export import ExportWriteError, NoAnalysisResultError

__all__ = [
    "ComplexityLensError",
    "EngineError",
    "EngineUnavailable",
    "EngineInvocationError",
    "MalformedEngineOutput",
    "InputError",
    "EmptyInput",
    "InputTooLarge",
    "ExportWriteError",
    "NoAnalysisResultError",
    "ConfigurationError",
    "InvalidConfigError",
]
