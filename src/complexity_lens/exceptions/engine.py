"""Engine and input errors.

None of these leave :meth:`EngineAdapter.analyze`; the adapter turns each
one into a degraded result whose warnings carry the message.
"""

from typing import Sequence

from .base import ComplexityLensError


class EngineError(ComplexityLensError):
    """Base class for inference engine failures."""

    code = "CL100"


class EngineUnavailable(EngineError):
    """Raised when no binding strategy produced a usable entry point."""

    code = "CL101"

    def __init__(self, failures: Sequence[str]):
        reasons = "; ".join(failures) if failures else "no binding strategies configured"
        super().__init__(f"Analysis engine unavailable: {reasons}")
        self.failures = list(failures)


class EngineInvocationError(EngineError):
    """Raised when a bound entry point fails or times out."""

    code = "CL102"

    def __init__(self, cause: str):
        super().__init__(f"Analysis error: {cause}")
        self.cause = cause


class MalformedEngineOutput(EngineError):
    """Raised when an engine response is missing required structure."""

    code = "CL103"

    def __init__(self, reason: str):
        super().__init__(f"Malformed engine output: {reason}")
        self.reason = reason


class InputError(ComplexityLensError):
    """Base class for source text rejected before reaching the engine."""

    code = "CL200"


class EmptyInput(InputError):
    code = "CL201"

    def __init__(self) -> None:
        super().__init__("No code provided for analysis (empty input)")


class InputTooLarge(InputError):
    code = "CL202"

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Code too large ({size} > {limit} chars)",
            details={"size": str(size), "max_file_size": str(limit)},
        )
        self.size = size
        self.limit = limit
