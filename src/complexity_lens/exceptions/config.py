"""Configuration exceptions."""

from typing import Any

from .base import ComplexityLensError


class ConfigurationError(ComplexityLensError):
    """Raised when configuration cannot be loaded or is invalid."""

    code = "CL400"


class InvalidConfigError(ConfigurationError):
    """Raised when a single configuration value is invalid."""

    code = "CL402"

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
