"""Export and session errors surfaced to the caller."""

from pathlib import Path
from typing import Union

from .base import ComplexityLensError


class ExportWriteError(ComplexityLensError):
    """Raised when an export cannot be written to its destination.

    Unlike engine failures this always propagates: the user chose the
    destination and has to be told the write failed.
    """

    code = "CL301"

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(
            f"Export failed: cannot write {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = Path(path)
        self.reason = reason


class NoAnalysisResultError(ComplexityLensError):
    """Raised when an export is requested before any analysis has run."""

    code = "CL401"

    def __init__(self) -> None:
        super().__init__("No analysis results to export")
