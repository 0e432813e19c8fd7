"""
Tests for the command-line entry point.
"""

import json

import pytest

from main import build_parser, cli
from test_utils import dedent


CATALOG = [
    {"id": "fetch", "name": "fetch", "baseline": "high"},
    {"id": "eyedropper", "name": "EyeDropper", "baseline": False},
]


@pytest.fixture
def safe_project(project):
    return project(
        {
            "catalog.json": json.dumps(CATALOG),
            "app.js": 'fetch("/api");\n',
        }
    )


@pytest.fixture
def unsafe_project(project):
    return project(
        {
            "catalog.json": json.dumps(CATALOG),
            "app.js": dedent(
                """
                const picker = new EyeDropper();
                fetch("/api");
                """
            ),
        }
    )


def _args(root, *extra):
    return [str(root), "--catalog", str(root / "catalog.json"), *extra]


def _read_outputs(path):
    """Parse a GITHUB_OUTPUT file into {name: value}."""
    outputs = {}
    lines = path.read_text(encoding="utf-8").splitlines()
    i = 0
    while i < len(lines):
        name, delimiter = lines[i].split("<<", 1)
        end = lines.index(delimiter, i + 1)
        outputs[name] = "\n".join(lines[i + 1 : end])
        i = end + 1
    return outputs


class TestExitCodes:
    def test_safe_project_passes(self, safe_project, capsys):
        assert cli(_args(safe_project)) == 0
        assert "- fetch (fetch)" in capsys.readouterr().out

    def test_unsafe_project_fails(self, unsafe_project):
        assert cli(_args(unsafe_project)) == 1

    def test_report_only(self, unsafe_project):
        assert cli(_args(unsafe_project, "--no-fail-on-limited")) == 0

    def test_report_only_from_action_input(self, unsafe_project, monkeypatch):
        monkeypatch.setenv("INPUT_FAIL-ON-LIMITED", "false")
        assert cli(_args(unsafe_project)) == 0

    def test_critical_feature_fails(self, safe_project):
        assert cli(_args(safe_project, "--critical", "fetch")) == 1

    def test_strict_mode_parse_error(self, safe_project):
        (safe_project / "broken.css").write_text("a { color: red;\n", encoding="utf-8")
        assert cli(_args(safe_project)) == 0
        assert cli(_args(safe_project, "--strict")) == 2

    def test_invalid_jobs(self, safe_project):
        assert cli(_args(safe_project, "--jobs", "0")) == 2


class TestOutputs:
    def test_github_outputs(self, unsafe_project, tmp_path_factory, monkeypatch):
        output = tmp_path_factory.mktemp("runner") / "output.txt"
        monkeypatch.setenv("GITHUB_OUTPUT", str(output))
        cli(_args(unsafe_project, "--critical", "fetch"))

        outputs = _read_outputs(output)
        assert outputs["ok"] == "false"
        details = json.loads(outputs["details"])
        assert [d["id"] for d in details] == ["eyedropper", "fetch"]
        assert [d["id"] for d in json.loads(outputs["critical-detected"])] == ["fetch"]

    def test_json_output(self, unsafe_project, capsys):
        cli(_args(unsafe_project, "-o", "json"))
        data = json.loads(capsys.readouterr().out)
        assert data["ok"] is False
        assert data["details"][0]["files"] == ["app.js"]

    def test_output_file(self, safe_project, tmp_path_factory):
        report = tmp_path_factory.mktemp("reports") / "report.txt"
        cli(_args(safe_project, "-O", str(report)))
        assert "- fetch (fetch)" in report.read_text(encoding="utf-8")


class TestDebugCommands:
    def test_list_features(self, safe_project, capsys):
        assert cli(_args(safe_project, "--list-features")) == 0
        out = capsys.readouterr().out
        assert "Catalog (2 features)" in out
        assert "eyedropper" in out

    def test_check_parser(self, safe_project, capsys):
        assert cli(_args(safe_project, "--check-parser")) == 0
        (safe_project / "broken.js").write_text("function (\n", encoding="utf-8")
        assert cli(_args(safe_project, "--check-parser")) == 1

    def test_dump_ast(self, safe_project, capsys):
        assert cli(_args(safe_project, "--dump-ast")) == 0
        out = capsys.readouterr().out
        assert "=== AST for app.js (script) ===" in out
        assert "program" in out


def test_fail_on_limited_flags_are_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--fail-on-limited", "--no-fail-on-limited"])
