"""Tests for logging setup and the CLI's --log-format passthrough."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from click.testing import CliRunner

from agentseed.cli import main
from agentseed.core.logging import setup_logging


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("AGENTSEED_LOG_LEVEL", raising=False)
    monkeypatch.delenv("AGENTSEED_LOG_FORMAT", raising=False)


class TestSetupLogging:
    def test_json_lines_on_stderr(self, capsys):
        setup_logging(log_format="json")
        structlog.get_logger("agentseed.test").info("demo.event", count=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "demo.event"
        assert record["count"] == 3
        assert record["level"] == "info"
        assert record["logger"] == "agentseed.test"

    def test_verbose_enables_debug(self):
        setup_logging(verbose=True)

        assert logging.getLogger("agentseed").getEffectiveLevel() == logging.DEBUG

    def test_default_level_is_info(self):
        setup_logging()

        assert logging.getLogger("agentseed").getEffectiveLevel() == logging.INFO
        assert logging.getLogger("LiteLLM").getEffectiveLevel() == logging.WARNING

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv("AGENTSEED_LOG_LEVEL", "error")
        monkeypatch.setenv("AGENTSEED_LOG_FORMAT", "json")
        setup_logging(verbose=True)
        log = structlog.get_logger("agentseed.test")
        log.warning("dropped")
        log.error("kept")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["kept"]


class TestLogFormatOption:
    def test_analyze_json_logs(self, make_repo):
        root = make_repo({"main.py": ""})
        result = CliRunner().invoke(main, ["analyze", str(root), "-v", "--log-format", "json"])

        assert result.exit_code == 0, result.output
        assert '"event": "analyzer.done"' in result.output

    def test_rejects_unknown_format(self, make_repo):
        root = make_repo({"main.py": ""})
        result = CliRunner().invoke(main, ["analyze", str(root), "--log-format", "xml"])

        assert result.exit_code == 2
