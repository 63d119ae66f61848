"""
Tests for the CLI and the HTTP service, with the analyzer replaced by fakes.
"""

import json

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

import backend
from redoscope import invoker
from redoscope.cli import main

from conftest import FakeAnalyzer, SAFE_PAYLOAD, VULNERABLE_PAYLOAD


def by_source(source, flags):
    payload = VULNERABLE_PAYLOAD if "(a|a)" in source else SAFE_PAYLOAD
    return FakeAnalyzer(payload=dict(payload))(source, flags)


@pytest.fixture
def fake_default_analyzer(monkeypatch):
    monkeypatch.setattr(invoker, "_default_analyzer", lambda options: by_source)


@pytest.fixture
def pattern_dir(tmp_path, monkeypatch):
    (tmp_path / "safe.regex").write_text("^(pineapple|pizza)$", encoding="utf-8")
    (tmp_path / "bad.regex").write_text("^(a|a)*$", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestCli:

    def test_markdown_summary(self, fake_default_analyzer, pattern_dir):
        summary = pattern_dir / "summary.md"
        result = CliRunner().invoke(main, ["*.regex", "--summary-file", str(summary)])

        assert result.exit_code == 0, result.output
        assert "| safe.regex | :white_check_mark: Safe regular expression. |" in result.output
        assert "### bad.regex" in result.output
        assert summary.read_text(encoding="utf-8").startswith("## ReDOS Test Results")

    def test_json_output(self, fake_default_analyzer, pattern_dir):
        result = CliRunner().invoke(main, ["*.regex", "--json"], env={"GITHUB_STEP_SUMMARY": ""})

        assert result.exit_code == 0, result.output
        reports = json.loads(result.output)
        assert [r["label"] for r in reports] == ["bad.regex", "safe.regex"]
        assert reports[0]["outcome"]["diagnostics"]["risk"] == "medium"

    def test_fail_on_vulnerable(self, fake_default_analyzer, pattern_dir):
        result = CliRunner().invoke(
            main, ["*.regex", "--fail-on-vulnerable"], env={"GITHUB_STEP_SUMMARY": ""},
        )
        assert result.exit_code == 2

    def test_unexpected_error_exits_with_1(self, monkeypatch, pattern_dir):
        def explode(pattern, root=None):
            raise OSError("disk on fire")

        monkeypatch.setattr("redoscope.cli.discover_patterns", explode)
        result = CliRunner().invoke(main, ["*.regex"], env={"GITHUB_STEP_SUMMARY": ""})
        assert result.exit_code == 1


class TestBackend:

    @pytest.fixture
    def client(self, fake_default_analyzer):
        with TestClient(backend.app) as client:
            yield client

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_analyze_safe(self, client):
        response = client.post("/analyze", json={"pattern": "^(pineapple|pizza)$", "label": "fruit"})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["report"]["label"] == "fruit"
        assert data["report"]["status"] == "safe"
        assert "details" not in data["report"]

    def test_analyze_vulnerable(self, client):
        response = client.post("/analyze", json={"pattern": "^(a|a)*$"})
        report = response.json()["report"]
        assert report["status"] == "vulnerable"
        assert report["details"]["body"] == 'Hotspots detected: "^(**a**|**a**)*$"'

    def test_batch(self, client):
        response = client.post("/analyze/batch", json={"patterns": [
            {"pattern": "^(a|a)*$", "label": "one"},
            {"pattern": "abc", "label": "two"},
        ]})
        reports = response.json()["reports"]
        assert [(r["label"], r["status"]) for r in reports] == [("one", "vulnerable"), ("two", "safe")]

    def test_empty_pattern_is_rejected(self, client):
        response = client.post("/analyze", json={"pattern": ""})
        assert response.status_code == 422
        assert response.json() == {"success": False, "error": "Invalid request format"}
