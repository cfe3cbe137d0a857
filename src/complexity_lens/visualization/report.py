"""Interactive complexity report.

:class:`ReportView` follows an :class:`~complexity_lens.session.AnalysisSession`
and re-renders its document in place whenever a new result lands or the host
asks for a refresh. Hosts keep a single reference to the view and read
:attr:`ReportView.html` after each change notification.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from ..logging_config import get_logger
from ..models import AnalysisResult
from ..session import AnalysisSession
from .html import render_document, render_empty_document
from .model import ReportModel, build_report_model

logger = get_logger(__name__)

REPORT_TITLE = "Algorithm Complexity Analysis"

ExportHandler = Callable[[], Union[None, Awaitable[Any]]]
ViewListener = Callable[[str], None]

_ACTIONS = """<div class="actions">
  <button class="btn btn-primary" data-command="refresh">Refresh</button>
  <button class="btn" data-command="export">Export Report</button>
</div>"""

_EMPTY_ACTIONS = '<button class="btn btn-primary" data-command="refresh">Refresh</button>'

# Buttons post {"command": ...} to the embedding host.
_MESSAGE_SCRIPT = """<script>
(function () {
  document.querySelectorAll("[data-command]").forEach(function (button) {
    button.addEventListener("click", function () {
      window.parent.postMessage({ command: button.dataset.command }, "*");
    });
  });
})();
</script>"""


def render_report(result: AnalysisResult, theme: str = "auto") -> str:
    """Interactive report document for ``result``."""
    return render_document(
        build_report_model(result),
        theme=theme,
        title=REPORT_TITLE,
        actions=_ACTIONS,
        script=_MESSAGE_SCRIPT,
    )


def render_empty_state(theme: str = "auto") -> str:
    """Placeholder shown before any analysis has run."""
    return render_empty_document(theme=theme, actions=_EMPTY_ACTIONS, script=_MESSAGE_SCRIPT)


class ReportView:
    """A live report bound to an analysis session."""

    def __init__(
        self,
        session: AnalysisSession,
        theme: str = "auto",
        export_handler: Optional[ExportHandler] = None,
    ) -> None:
        self._session = session
        self._theme = theme
        self._export_handler = export_handler
        self._listeners: list[ViewListener] = []
        self._model: Optional[ReportModel] = None
        self._html = ""
        self._disposed = False
        session.add_listener(self._on_result)
        self.refresh()

    @property
    def model(self) -> Optional[ReportModel]:
        """Model behind the current document, ``None`` in the empty state."""
        return self._model

    @property
    def html(self) -> str:
        return self._html

    @property
    def is_empty(self) -> bool:
        return self._model is None

    @property
    def theme(self) -> str:
        return self._theme

    @theme.setter
    def theme(self, value: str) -> None:
        self._theme = value
        self.refresh()

    def refresh(self) -> str:
        """Re-render from the session's current result and notify listeners."""
        result = self._session.current
        if result is None:
            self._model = None
            self._html = render_empty_state(self._theme)
        else:
            self._model = build_report_model(result)
            self._html = render_document(
                self._model,
                theme=self._theme,
                title=REPORT_TITLE,
                actions=_ACTIONS,
                script=_MESSAGE_SCRIPT,
            )
        for listener in list(self._listeners):
            try:
                listener(self._html)
            except Exception:
                logger.exception("Report view listener failed")
        return self._html

    def add_listener(self, listener: ViewListener) -> None:
        self._listeners.append(listener)

    async def handle_message(self, message: Mapping[str, Any]) -> bool:
        """Dispatch a message posted by the rendered document.

        Returns True when the command was handled.
        """
        command = message.get("command")
        if command == "refresh":
            self.refresh()
            return True
        if command == "export":
            if self._export_handler is None:
                logger.warning("Export requested but no export handler is registered")
                return False
            outcome = self._export_handler()
            if inspect.isawaitable(outcome):
                await outcome
            return True
        logger.debug("Ignoring unknown report command: %r", command)
        return False

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._session.remove_listener(self._on_result)
        self._listeners.clear()

    def _on_result(self, result: AnalysisResult) -> None:
        self.refresh()
