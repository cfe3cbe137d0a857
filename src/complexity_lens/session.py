"""Analysis session: holds the most recent result for the report and exports.

The session keeps exactly one current result. Each update overwrites it
unconditionally, so when analyses race the last one to finish wins.
Listeners are called synchronously with the new result after every update.
"""

from __future__ import annotations

from typing import Callable, Optional

from .logging_config import get_logger
from .models import AnalysisResult

logger = get_logger(__name__)

ResultListener = Callable[[AnalysisResult], None]


class AnalysisSession:
    """Latest canonical result plus the consumers that follow it."""

    def __init__(self) -> None:
        self._current: Optional[AnalysisResult] = None
        self._listeners: list[ResultListener] = []

    @property
    def current(self) -> Optional[AnalysisResult]:
        return self._current

    @property
    def has_result(self) -> bool:
        return self._current is not None

    def update(self, result: AnalysisResult, source_name: Optional[str] = None) -> AnalysisResult:
        """Replace the current result, tagging it with ``source_name`` if given."""
        if source_name is not None:
            result = result.with_source(source_name)
        self._current = result
        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception:
                logger.exception("Session listener failed")
        return result

    def clear(self) -> None:
        self._current = None

    def add_listener(self, listener: ResultListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ResultListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass
