"""
Complexity Lens - Algorithmic Complexity Reports for Source Code

Asks an external inference engine for the Big-O class of every function in a
source file, and turns its answer into inline annotations, an interactive
HTML report and exports (JSON, HTML, Markdown, CSV).
"""

__version__ = "0.3.0"

from .config import AnalyzerConfig, load_config
from .engine import EngineAdapter
from .formatters import ExportFormat, export
from .models import AnalysisResult, FunctionComplexity, mean_confidence
from .pipeline import ComplexityPipeline
from .session import AnalysisSession
from .taxonomy import ComplexityLabel

__all__ = [
    "ComplexityPipeline",  # Editor-facing entry point
    "EngineAdapter",
    "AnalysisSession",
    "AnalysisResult",
    "FunctionComplexity",
    "ComplexityLabel",
    "ExportFormat",
    "export",
    "mean_confidence",
    "AnalyzerConfig",
    "load_config",
]
