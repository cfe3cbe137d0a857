"""Tests for the command line interface."""

import json
import sys
import types

import pytest
from typer.testing import CliRunner

from complexity_lens.cli import app

runner = CliRunner()

ENGINE_RESPONSE = {
    "overall": "O(n²)",
    "functions": [
        {
            "name": "pairwise",
            "complexity": "O(n²)",
            "confidence": 0.75,
            "details": ["Nested loops"],
            "lineStart": 1,
            "lineEnd": 3,
        }
    ],
    "warnings": [],
}


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "pairs.py"
    path.write_text(
        "def pairwise(xs):\n    return [(a, b) for a in xs for b in xs]\n\n", encoding="utf-8"
    )
    return path


@pytest.fixture
def fake_engine_module(monkeypatch):
    module = types.ModuleType("fake_cli_engine")
    module.analyze_complexity = lambda code, language: ENGINE_RESPONSE
    module.get_supported_languages = lambda: ["python", "zig"]
    monkeypatch.setitem(sys.modules, "fake_cli_engine", module)
    monkeypatch.setenv("COMPLEXITY_LENS_ENGINE_MODULE", "fake_cli_engine")
    return module


@pytest.fixture
def no_engine(monkeypatch):
    monkeypatch.setenv("COMPLEXITY_LENS_ENGINE_MODULE", "no_such_engine_module_xyz")
    monkeypatch.setenv("COMPLEXITY_LENS_ENGINE_COMMAND", "no-such-engine-binary-xyz")


class TestAnalyzeCommand:
    def test_rich_output(self, source_file, fake_engine_module):
        result = runner.invoke(app, ["analyze", str(source_file)])
        assert result.exit_code == 0, result.output
        assert "pairwise" in result.output
        assert "O(n²)" in result.output

    def test_json_output(self, source_file, fake_engine_module):
        result = runner.invoke(app, ["analyze", str(source_file), "--format", "json", "--quiet"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["overall"] == "O(n²)"
        assert data["sourceName"] == "pairs.py"
        assert data["language"] == "python"

    def test_engine_unavailable_still_succeeds(self, source_file, no_engine):
        result = runner.invoke(app, ["analyze", str(source_file), "-f", "json", "-q"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["overall"] == "O(n)"
        assert data["warnings"][-1] == "Using fallback analysis"
        assert "Analysis engine unavailable" in data["warnings"][0]

    def test_output_file(self, source_file, fake_engine_module, tmp_path):
        out = tmp_path / "pairs.csv"
        result = runner.invoke(
            app, ["analyze", str(source_file), "-f", "csv", "-o", str(out), "-q"]
        )
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8").startswith("Function,Complexity")

    def test_unknown_extension_requires_language(self, tmp_path, fake_engine_module):
        path = tmp_path / "script.xyz"
        path.write_text("x", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "--language" in result.output

    def test_explicit_language(self, tmp_path, fake_engine_module):
        path = tmp_path / "script.xyz"
        path.write_text("x", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path), "-l", "Python", "-f", "json", "-q"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["language"] == "python"

    def test_unknown_format(self, source_file, fake_engine_module):
        result = runner.invoke(app, ["analyze", str(source_file), "--format", "yaml"])
        assert result.exit_code == 2

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.py")])
        assert result.exit_code != 0


class TestReportAndExportCommands:
    def test_report_writes_html(self, source_file, fake_engine_module, tmp_path):
        out = tmp_path / "report.html"
        result = runner.invoke(app, ["report", str(source_file), "-o", str(out), "-t", "dark"])
        assert result.exit_code == 0, result.output
        html = out.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert "pairwise" in html

    def test_report_rejects_bad_theme(self, source_file, fake_engine_module):
        result = runner.invoke(app, ["report", str(source_file), "--theme", "neon"])
        assert result.exit_code != 0

    def test_export_default_name(self, source_file, fake_engine_module, tmp_path):
        result = runner.invoke(app, ["export", str(source_file), "--format", "markdown"])
        assert result.exit_code == 0, result.output
        written = list(tmp_path.glob("complexity-report-*.md"))
        assert len(written) == 1
        assert "### `pairwise`" in written[0].read_text(encoding="utf-8")

    def test_export_write_failure(self, source_file, fake_engine_module, tmp_path):
        out = tmp_path / "missing-dir" / "r.json"
        result = runner.invoke(app, ["export", str(source_file), "-o", str(out)])
        assert result.exit_code == 1
        assert "Export failed" in result.output


class TestInfoCommands:
    def test_languages_from_engine(self, fake_engine_module):
        result = runner.invoke(app, ["languages"])
        assert result.exit_code == 0, result.output
        assert result.stdout.split() == ["python", "zig"]

    def test_languages_fallback(self, no_engine):
        result = runner.invoke(app, ["languages"])
        assert result.exit_code == 0, result.output
        assert "rust" in result.stdout.split()

    def test_diagnostics_json(self, no_engine):
        result = runner.invoke(app, ["diagnostics", "--json"])
        assert result.exit_code == 0, result.output
        info = json.loads(result.stdout)
        assert info["state"] == "failed"
        assert info["strategies"] == ["direct", "initializer", "subprocess"]
        assert len(info["failures"]) == 3

    def test_diagnostics_table(self, fake_engine_module):
        result = runner.invoke(app, ["diagnostics"])
        assert result.exit_code == 0, result.output
        assert "ready" in result.output
        assert "direct" in result.output
