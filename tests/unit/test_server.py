"""Unit tests for the directory summary MCP tools."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from servers.dir_summary import server
from tools.dir_summary import collect_dir as collect_module
from tools.tool_control import reload_disabled_tools

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def reset_disabled_tools():
    reload_disabled_tools("")
    yield
    reload_disabled_tools("")


class TestSummarizeDirectory:
    """Tests for the summarize_directory tool."""

    def test_returns_summary_json(self, project_dir: Path) -> None:
        """Test the JSON summary of a directory."""
        data = json.loads(server.summarize_directory(str(project_dir)))
        assert data["path"] == str(project_dir)
        assert data["notable_files"]["has_git"] is True
        assert data["language_hints"] == {"md": 1, "toml": 1}
        assert "skipped" not in data

    def test_compact_output(self, project_dir: Path) -> None:
        """Test pretty=False."""
        assert "\n" not in server.summarize_directory(str(project_dir), pretty=False)

    def test_error_payload(self, tmp_path: Path) -> None:
        """Test that failures come back as JSON, not exceptions."""
        missing = str(tmp_path / "missing")
        data = json.loads(server.summarize_directory(missing))
        assert data["path"] == missing
        assert "Cannot read directory" in data["error"]

    def test_skip_unreadable_reports_skipped(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that skipped entries are listed in tolerant mode."""
        (tmp_path / "ok.txt").write_text("ok", encoding="utf-8")
        real_scandir = collect_module.os.scandir

        class BrokenEntry:
            name = "broken"
            path = str(tmp_path / "broken")

            def stat(self, follow_symlinks=True):
                raise PermissionError(13, "Permission denied")

        class Listing:
            def __init__(self, path):
                self._inner = real_scandir(path)

            def __enter__(self):
                return iter(list(self._inner) + [BrokenEntry()])

            def __exit__(self, *exc):
                self._inner.close()
                return False

        monkeypatch.setattr(collect_module.os, "scandir", Listing)

        data = json.loads(server.summarize_directory(str(tmp_path), skip_unreadable=True))
        assert data["counts"]["total"] == 1
        assert data["skipped"] == [{"name": "broken", "reason": "Permission denied"}]

    def test_disabled(self, project_dir: Path) -> None:
        """Test the disabled-tool response."""
        reload_disabled_tools("dir_summary:*")
        data = json.loads(server.summarize_directory(str(project_dir)))
        assert data["disabled"] is True


class TestAssessDirectory:
    """Tests for the assess_directory tool."""

    def test_returns_assessment(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the assessment text with a stubbed model call."""

        async def fake_assess(summary, focus, detail=False):
            return f"{focus.value}:{summary.counts.total}:{detail}"

        monkeypatch.setattr(server, "assess_summary", fake_assess)
        result = asyncio.run(server.assess_directory(str(project_dir), focus="Structure", detail=True))
        assert result == "structure:4:True"

    def test_bad_focus(self, project_dir: Path) -> None:
        """Test that an unknown focus is reported as JSON."""
        data = json.loads(asyncio.run(server.assess_directory(str(project_dir), focus="speed")))
        assert "Unknown focus" in data["error"]

    def test_missing_api_key(self, project_dir: Path) -> None:
        """Test that configuration errors are reported as JSON."""
        data = json.loads(asyncio.run(server.assess_directory(str(project_dir))))
        assert "OPENAI_API_KEY" in data["error"]

    def test_disabled(self, project_dir: Path) -> None:
        """Test disabling a single tool."""
        reload_disabled_tools("dir_summary:assess_directory")
        data = json.loads(asyncio.run(server.assess_directory(str(project_dir))))
        assert data["tool"] == "assess_directory"
