"""Configuration loading and management for Complexity Lens.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalyzerConfig)
    2. Global config (~/.complexity-lens.toml)
    3. Project config (./complexity-lens.toml)
    4. Explicit config file
    5. Environment variables (COMPLEXITY_LENS_* prefix)
    6. Overrides (passed as kwargs)

Example:
    >>> config = load_config(max_file_size=5000)
    >>> config.max_file_size
    5000
    >>> config.theme
    'auto'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .languages import DEFAULT_SUPPORTED_LANGUAGES

Theme = Literal["auto", "light", "dark"]
Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "COMPLEXITY_LENS_"
_THEMES = ("auto", "light", "dark")
_VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class AnalyzerConfig:
    """Settings consumed by the analysis pipeline.

    Attributes:
        Input limits:
            max_file_size: Maximum source size in characters sent to the engine

        Presentation:
            show_inline_annotations: Apply inline markers after a document analysis
            theme: Colour scheme for the report view and styled export
            auto_analyze: Analyse supported documents as soon as they are opened

        Engine binding:
            engine_module: Importable module exposing the analysis entry points
            engine_command: Executable used by the subprocess fallback binding
            engine_timeout_seconds: Upper bound on a single engine call

        Languages:
            supported_languages: Language identifiers offered for auto-analysis

        Output control:
            verbosity: Logging verbosity level
    """

    # Input limits
    max_file_size: int = 100_000

    # Presentation
    show_inline_annotations: bool = True
    theme: Theme = "auto"
    auto_analyze: bool = False

    # Engine binding
    engine_module: str = "big_o_analyser"
    engine_command: str = "big-o-analyser"
    engine_timeout_seconds: float = 30.0

    # Languages
    supported_languages: list[str] = field(
        default_factory=lambda: list(DEFAULT_SUPPORTED_LANGUAGES)
    )

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_file_size < 1:
            raise ValueError("max_file_size must be at least 1")
        if self.engine_timeout_seconds <= 0:
            raise ValueError("engine_timeout_seconds must be positive")
        if self.theme not in _THEMES:
            raise ValueError(f"theme must be one of {', '.join(_THEMES)}")
        if self.verbosity not in _VERBOSITIES:
            raise ValueError(f"verbosity must be one of {', '.join(_VERBOSITIES)}")
        if not self.engine_module and not self.engine_command:
            raise ValueError("at least one of engine_module or engine_command is required")


# Default configuration (singleton)
DEFAULT_CONFIG = AnalyzerConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalyzerConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalyzerConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".complexity-lens.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "complexity-lens.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalyzerConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COMPLEXITY_LENS_* environment variables.

    List-valued fields accept a comma-separated string, e.g.
    ``COMPLEXITY_LENS_SUPPORTED_LANGUAGES=python,rust``.
    """
    type_hints = get_type_hints(AnalyzerConfig)

    result: dict[str, Any] = {}

    for field_name in AnalyzerConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    # Bool: accept true/false/1/0/yes/no
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Theme)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Accepts either top-level keys or a ``[complexity-lens]`` table.
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        data = tomllib.load(f)
    section = data.get("complexity-lens")
    if isinstance(section, dict):
        return section
    return data
