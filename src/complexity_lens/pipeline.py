"""Editor-facing commands tying the adapter, session and renderers together.

Example:
    >>> pipeline = ComplexityPipeline(load_config())
    >>> result = await pipeline.analyze_document(text, "python", "sort.py", surface=view)
    >>> await pipeline.export_report("csv", "sort-complexity.csv")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_CONFIG, AnalyzerConfig
from .engine import EngineAdapter, get_engine_adapter
from .exceptions import NoAnalysisResultError
from .exporter import default_export_filename, export_to_file
from .formatters import ExportFormat
from .languages import is_supported_language
from .logging_config import get_logger
from .models import AnalysisResult
from .session import AnalysisSession
from .visualization import AnnotationRenderer, MarkerSurface, ReportView

logger = get_logger(__name__)

SELECTION_SOURCE_NAME = "Selected Code"


class ComplexityPipeline:
    """Analyse source, keep the latest result, and feed annotations, report and exports."""

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        adapter: Optional[EngineAdapter] = None,
        session: Optional[AnalysisSession] = None,
        annotations: Optional[AnnotationRenderer] = None,
        export_dir: Optional[Path] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.adapter = adapter or get_engine_adapter(self.config)
        self.session = session or AnalysisSession()
        self.annotations = annotations or AnnotationRenderer()
        self.export_dir = Path(export_dir) if export_dir is not None else Path.cwd()
        self.view_export_format = ExportFormat.STRUCTURED_DATA
        self._report_view: Optional[ReportView] = None

    @property
    def current(self) -> Optional[AnalysisResult]:
        return self.session.current

    async def analyze_document(
        self,
        text: str,
        language: str,
        source_name: Optional[str] = None,
        surface: Optional[MarkerSurface] = None,
    ) -> AnalysisResult:
        """Analyse a whole document and annotate ``surface`` when annotations are on."""
        result = await self.adapter.analyze(text, language, source_name)
        result = self.session.update(result)
        if surface is not None and self.config.show_inline_annotations:
            self.annotations.render(surface, result)
        return result

    async def analyze_selection(self, text: str, language: str) -> AnalysisResult:
        """Analyse a fragment. Updates the report; never annotates."""
        result = await self.adapter.analyze(text, language, SELECTION_SOURCE_NAME)
        return self.session.update(result)

    async def on_document_opened(
        self,
        text: str,
        language: str,
        source_name: Optional[str] = None,
        surface: Optional[MarkerSurface] = None,
    ) -> Optional[AnalysisResult]:
        """Auto-analyse a freshly opened document if configured to."""
        if not self.config.auto_analyze:
            return None
        if not is_supported_language(language, self.config.supported_languages):
            logger.debug("Skipping auto-analysis of unsupported language %s", language)
            return None
        return await self.analyze_document(text, language, source_name, surface)

    def clear_annotations(self, surface: MarkerSurface) -> None:
        self.annotations.clear(surface)

    @property
    def report_view(self) -> ReportView:
        """The interactive report, created on first access."""
        if self._report_view is None:
            self._report_view = ReportView(
                self.session, theme=self.config.theme, export_handler=self._export_from_view
            )
        return self._report_view

    def show_report(self) -> str:
        return self.report_view.refresh()

    async def export_report(
        self,
        fmt: Union[ExportFormat, str],
        destination: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Export the current result.

        Raises:
            NoAnalysisResultError: If nothing has been analysed yet
            ExportWriteError: If the destination cannot be written
        """
        result = self.session.current
        if result is None:
            raise NoAnalysisResultError()
        fmt = ExportFormat.parse(fmt)
        if destination is None:
            destination = self.export_dir / default_export_filename(fmt)
        return await export_to_file(result, fmt, destination, theme=self.config.theme)

    async def _export_from_view(self) -> Path:
        return await self.export_report(self.view_export_format)

    def dispose(self) -> None:
        self.annotations.dispose()
        if self._report_view is not None:
            self._report_view.dispose()
            self._report_view = None
