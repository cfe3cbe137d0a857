"""HTML building blocks for the report view and the styled export.

Charts are drawn as inline SVG at render time and the report data is
embedded as a JSON blob, so a document has zero external dependencies: no
CDN, no chart library download, nothing fetched when it is opened.
"""

from __future__ import annotations

import json
import math
from html import escape
from typing import Sequence

from ..taxonomy import ORDERED_LABELS
from .model import ComparisonEntry, DistributionEntry, FunctionDetail, ReportModel, SummarySection

_PALETTES = {
    "light": {
        "bg": "#ffffff",
        "text": "#333333",
        "border": "#e1e4e8",
        "card": "#f6f8fa",
        "track": "#e9ecef",
    },
    "dark": {
        "bg": "#1e1e1e",
        "text": "#cccccc",
        "border": "#3c3c3c",
        "card": "#252526",
        "track": "#3c3c3c",
    },
}


def _vars(palette: dict[str, str]) -> str:
    return (
        f"--bg-color: {palette['bg']}; --text-color: {palette['text']}; "
        f"--border-color: {palette['border']}; --card-bg: {palette['card']}; "
        f"--track-color: {palette['track']};"
    )


def theme_css(theme: str) -> str:
    """CSS custom properties for a theme; ``auto`` follows the viewer's preference."""
    if theme == "dark":
        return f":root {{ {_vars(_PALETTES['dark'])} }}"
    css = f":root {{ {_vars(_PALETTES['light'])} }}"
    if theme == "auto":
        css += (
            "\n@media (prefers-color-scheme: dark) {{ :root {{ {dark} }} }}".format(
                dark=_vars(_PALETTES["dark"])
            )
        )
    return css


BASE_CSS = """
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; background: var(--bg-color); color: var(--text-color); margin: 0 auto; padding: 16px; max-width: 1200px; line-height: 1.6; }
.header { border-bottom: 1px solid var(--border-color); padding-bottom: 16px; margin-bottom: 24px; }
.header h1 { margin: 0; font-size: 24px; font-weight: 600; }
.meta { margin-top: 8px; font-size: 14px; opacity: 0.8; }
.summary-cards { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 16px; margin-bottom: 24px; }
.summary-card { background: var(--card-bg); border: 1px solid var(--border-color); border-radius: 8px; padding: 16px; text-align: center; }
.summary-card h3 { margin: 0 0 8px 0; font-size: 18px; font-weight: 600; }
.summary-card .value { font-size: 24px; font-weight: 700; margin: 8px 0; }
.summary-card .description { font-size: 12px; opacity: 0.7; }
.complexity-badge { display: inline-block; padding: 4px 12px; border-radius: 16px; font-size: 14px; font-weight: 600; color: #fff; margin: 4px 2px; }
.chart-container, .functions-list { background: var(--card-bg); border: 1px solid var(--border-color); border-radius: 8px; padding: 16px; margin-bottom: 24px; }
.chart-container h3, .functions-list h3 { margin: 0 0 16px 0; font-size: 18px; font-weight: 600; }
.chart-container svg text { fill: var(--text-color); font-size: 12px; }
.legend { display: flex; flex-wrap: wrap; gap: 12px; font-size: 13px; margin-top: 8px; }
.legend-swatch { display: inline-block; width: 12px; height: 12px; border-radius: 2px; margin-right: 4px; vertical-align: middle; }
.function-item { border-bottom: 1px solid var(--border-color); padding: 16px 0; }
.function-item:last-child { border-bottom: none; }
.function-header { display: flex; justify-content: space-between; align-items: center; margin-bottom: 8px; }
.function-name { font-size: 16px; font-weight: 600; font-family: "Monaco", "Menlo", "Ubuntu Mono", monospace; }
.function-location { font-size: 12px; opacity: 0.6; }
.detail-item { font-size: 14px; margin: 4px 0; padding-left: 16px; position: relative; }
.detail-item:before { content: "\\2022"; position: absolute; left: 0; opacity: 0.5; }
.confidence-indicator { display: inline-block; width: 60px; height: 8px; background: var(--track-color); border-radius: 4px; margin-left: 8px; vertical-align: middle; }
.confidence-bar { height: 100%; border-radius: 4px; }
.warnings { background: #fff3cd; border: 1px solid #ffeaa7; border-radius: 8px; padding: 16px; margin-bottom: 24px; color: #856404; }
.warnings h3 { margin: 0 0 8px 0; font-size: 16px; }
.actions { display: flex; gap: 8px; margin-top: 24px; }
.btn { padding: 8px 16px; border: 1px solid var(--border-color); border-radius: 4px; background: var(--card-bg); color: var(--text-color); cursor: pointer; font-size: 14px; }
.btn-primary { background: #007acc; color: #fff; border-color: #007acc; }
.empty-state { max-width: 400px; margin: 48px auto; text-align: center; }
.empty-state .icon { font-size: 64px; margin-bottom: 16px; opacity: 0.5; }
"""


def render_header(model: ReportModel, title: str) -> str:
    result = model.result
    parts = []
    if result.source_name:
        parts.append(f"File: {escape(result.source_name)}")
    parts.append(f"Language: {escape(result.language)}")
    parts.append(f"Analyzed: {result.produced_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}")
    return (
        f'<div class="header"><h1>{escape(title)}</h1>'
        f'<div class="meta">{" &bull; ".join(parts)}</div></div>'
    )


def render_badge(label_value: str, badge_color: str) -> str:
    return (
        f'<span class="complexity-badge" style="background-color: {badge_color}">'
        f"{escape(label_value)}</span>"
    )


def render_summary(summary: SummarySection) -> str:
    return f"""<div class="summary-cards">
  <div class="summary-card">
    <h3>Overall Complexity</h3>
    <div class="value">{render_badge(summary.overall.value, summary.overall_color)}</div>
    <div class="description">{escape(summary.overall_description)}</div>
  </div>
  <div class="summary-card">
    <h3>Functions Analyzed</h3>
    <div class="value">{summary.function_count}</div>
    <div class="description">Total functions found in code</div>
  </div>
  <div class="summary-card">
    <h3>Average Confidence</h3>
    <div class="value">{summary.mean_confidence * 100:.1f}%</div>
    <div class="description">Analysis confidence level</div>
  </div>
</div>"""


def render_warnings(warnings: Sequence[str]) -> str:
    if not warnings:
        return ""
    items = "".join(f'<div class="warning-item">&bull; {escape(w)}</div>' for w in warnings)
    return f'<div class="warnings"><h3>⚠️ Warnings</h3>{items}</div>'


def render_distribution_chart(entries: Sequence[DistributionEntry], size: int = 220) -> str:
    """Donut chart of function counts per label."""
    cx = cy = size / 2
    radius = size * 0.35
    width = size * 0.18
    circumference = 2 * math.pi * radius
    total = sum(e.count for e in entries) or 1

    slices = []
    offset = 0.0
    for entry in entries:
        length = circumference * entry.count / total
        slices.append(
            f'<circle cx="{cx:g}" cy="{cy:g}" r="{radius:.2f}" fill="none" '
            f'stroke="{entry.color}" stroke-width="{width:.2f}" '
            f'stroke-dasharray="{length:.2f} {circumference - length:.2f}" '
            f'stroke-dashoffset="{-offset:.2f}" transform="rotate(-90 {cx:g} {cy:g})">'
            f"<title>{escape(entry.label.value)}: {entry.count}</title></circle>"
        )
        offset += length

    legend = "".join(
        f'<span><span class="legend-swatch" style="background: {e.color}"></span>'
        f"{escape(e.label.value)} ({e.count}, {e.percentage:.1f}%)</span>"
        for e in entries
    )
    return (
        f'<svg id="complexityChart" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}" role="img">{"".join(slices)}</svg>'
        f'<div class="legend">{legend}</div>'
    )


def render_comparison_chart(entries: Sequence[ComparisonEntry], height: int = 260) -> str:
    """Bar chart of each function's label order, axis ticked with label names."""
    axis_width = 80
    bar_slot = 56
    plot_height = height - 70
    top = 10
    width = axis_width + bar_slot * max(len(entries), 1) + 10
    steps = len(ORDERED_LABELS)

    ticks = []
    for index, label in enumerate(ORDERED_LABELS):
        y = top + plot_height - plot_height * (index + 1) / steps
        ticks.append(
            f'<text x="{axis_width - 8}" y="{y + 4:.1f}" text-anchor="end">'
            f"{escape(label.value)}</text>"
            f'<line x1="{axis_width}" x2="{width}" y1="{y:.1f}" y2="{y:.1f}" '
            f'stroke="var(--border-color)" stroke-width="0.5"/>'
        )

    bars = []
    for index, entry in enumerate(entries):
        bar_height = plot_height * (entry.order + 1) / steps
        x = axis_width + index * bar_slot + 8
        y = top + plot_height - bar_height
        bars.append(
            f'<rect x="{x}" y="{y:.1f}" width="{bar_slot - 16}" height="{bar_height:.1f}" '
            f'fill="{entry.color}" data-order="{entry.order}">'
            f"<title>{escape(entry.name)}: {escape(entry.label.value)}</title></rect>"
            f'<text x="{x + (bar_slot - 16) / 2:.1f}" y="{top + plot_height + 14}" '
            f'text-anchor="end" transform="rotate(-45 {x + (bar_slot - 16) / 2:.1f} '
            f'{top + plot_height + 14})">{escape(entry.name)}</text>'
        )

    return (
        f'<svg id="functionChart" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" role="img">{"".join(ticks)}{"".join(bars)}</svg>'
    )


def render_charts(model: ReportModel) -> str:
    if not model.has_functions:
        return ""
    return (
        '<div class="chart-container"><h3>Complexity Distribution</h3>'
        f"{render_distribution_chart(model.distribution)}</div>"
        '<div class="chart-container"><h3>Function Complexity Comparison</h3>'
        f"{render_comparison_chart(model.comparison)}</div>"
    )


def render_function_item(detail: FunctionDetail) -> str:
    evidence = "".join(f'<div class="detail-item">{escape(e)}</div>' for e in detail.evidence)
    return f"""<div class="function-item">
  <div class="function-header">
    <div>
      <div class="function-name">{escape(detail.name)}</div>
      <div class="function-location">Lines {detail.line_start}-{detail.line_end}</div>
    </div>
    <div>
      {render_badge(detail.label.value, detail.color)}
      <div class="confidence-indicator" title="{detail.confidence_band}">
        <div class="confidence-bar" style="width: {detail.confidence_width:g}%; background-color: {detail.confidence_color}"></div>
      </div>
      <small>{detail.confidence * 100:.1f}%</small>
    </div>
  </div>
  <div class="function-details">{evidence}</div>
</div>"""


def render_details(details: Sequence[FunctionDetail]) -> str:
    if not details:
        return '<div class="functions-list"><h3>No functions found</h3></div>'
    items = "".join(render_function_item(d) for d in details)
    return f'<div class="functions-list"><h3>Function Analysis Details</h3>{items}</div>'


def render_data_script(model: ReportModel) -> str:
    # "</" would end the script element early
    data_json = json.dumps(model.to_dict(), ensure_ascii=False).replace("</", "<\\/")
    return f'<script type="application/json" id="analysis-data">{data_json}</script>'


def render_document(
    model: ReportModel,
    theme: str = "auto",
    title: str = "Algorithm Complexity Analysis",
    actions: str = "",
    script: str = "",
) -> str:
    """A complete, self-contained HTML document for a report model."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{escape(title)}</title>
<style>
{theme_css(theme)}
{BASE_CSS}
</style>
</head>
<body>
{render_header(model, title)}
{render_summary(model.summary)}
{render_warnings(model.warnings)}
{render_charts(model)}
{render_details(model.details)}
{actions}
{render_data_script(model)}
{script}
</body>
</html>"""


def render_empty_document(theme: str = "auto", actions: str = "", script: str = "") -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Algorithm Complexity Analyzer</title>
<style>
{theme_css(theme)}
{BASE_CSS}
</style>
</head>
<body>
<div class="empty-state">
  <div class="icon">📊</div>
  <h2>No Analysis Results</h2>
  <p>Select some code or open a file and run the complexity analyzer to see detailed results here.</p>
  {actions}
</div>
{script}
</body>
</html>"""
