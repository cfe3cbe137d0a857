"""Base exception for Complexity Lens."""

from typing import Dict, Optional


class ComplexityLensError(Exception):
    """Base exception for all Complexity Lens errors.

    ``code`` is a stable identifier for log filtering:
        CL1xx - Engine errors
        CL2xx - Input errors
        CL3xx - Export errors
        CL4xx - Configuration and session errors
    """

    code = "CL000"

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message
