"""Visualization layer: inline annotations and the interactive HTML report."""

from .annotations import (
    OVERALL_KEY,
    AnnotationRenderer,
    Marker,
    MarkerBatch,
    MarkerSurface,
    build_batches,
)
from .model import ReportModel, build_report_model
from .report import ReportView, render_empty_state, render_report

__all__ = [
    "OVERALL_KEY",
    "AnnotationRenderer",
    "Marker",
    "MarkerBatch",
    "MarkerSurface",
    "build_batches",
    "ReportModel",
    "build_report_model",
    "ReportView",
    "render_empty_state",
    "render_report",
]
