"""Writing exports to disk."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import Optional, Union

from .exceptions import ExportWriteError
from .formatters import ExportFormat, export
from .logging_config import get_logger
from .models import AnalysisResult

logger = get_logger(__name__)


def default_export_filename(fmt: Union[ExportFormat, str], now_ms: Optional[int] = None) -> str:
    """``complexity-report-<epoch-ms>.<ext>``"""
    fmt = ExportFormat.parse(fmt)
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"complexity-report-{now_ms}.{fmt.extension}"


def _write_text(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


async def export_to_file(
    result: AnalysisResult,
    fmt: Union[ExportFormat, str],
    path: Union[str, Path],
    theme: str = "auto",
) -> Path:
    """Render ``result`` and write it to ``path``.

    Rendering happens before the destination is opened, so a formatting
    problem never leaves a truncated file behind.

    Raises:
        ExportWriteError: If the destination cannot be written
    """
    text = export(result, fmt, theme=theme)
    destination = Path(path)
    try:
        await asyncio.to_thread(_write_text, destination, text)
    except OSError as e:
        logger.error("Export to %s failed: %s", destination, e)
        raise ExportWriteError(destination, e.strerror or str(e)) from e
    logger.info("Report exported to %s", destination)
    return destination
