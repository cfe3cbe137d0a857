"""Language identifiers understood by the analysis engine.

Identifiers follow the editor convention (``cpp`` rather than ``c++``).
"""

from pathlib import Path
from typing import Optional

# Used when the bound engine cannot report its own list.
DEFAULT_SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "javascript",
    "typescript",
    "python",
    "java",
    "c",
    "cpp",
    "rust",
    "go",
)

EXTENSIONS: dict[str, str] = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".pyi": "python",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hh": "cpp",
    ".rs": "rust",
    ".go": "go",
}


def detect_language(path: Path) -> Optional[str]:
    """Language identifier for a file path, or None for unknown extensions."""
    return EXTENSIONS.get(path.suffix.lower())


def is_supported_language(language: str, supported: Optional[list[str]] = None) -> bool:
    languages = supported if supported is not None else DEFAULT_SUPPORTED_LANGUAGES
    return language.lower() in languages
