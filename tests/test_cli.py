"""Tests for the command line."""

import tempfile
from pathlib import Path

from click.testing import CliRunner

from dive.chat import session as session_module
from dive.cli import cli
from dive.models import ChatResponse


def _setup(tmpdir):
    root = Path(tmpdir)
    vault = root / "vault"
    vault.mkdir()
    (vault / "Project Alpha.md").write_text("Alpha milestones")
    (vault / "Project Beta.md").write_text("Beta milestones")
    cfg_file = root / "config.yaml"
    cfg_file.write_text(f"vault_path: {vault}\nstate_path: {root / 'state.json'}\n")
    return cfg_file


def test_models_lists_ids():
    result = CliRunner().invoke(cli, ["models"])
    assert result.exit_code == 0
    assert "sonar-pro" in result.output


def test_suggest():
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg_file = _setup(tmpdir)
        result = CliRunner().invoke(cli, ["--config", str(cfg_file), "suggest", "alpha"])
        assert result.exit_code == 0
        assert "Project Alpha" in result.output
        assert "Project Beta" not in result.output


def test_resolve_without_date():
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg_file = _setup(tmpdir)
        result = CliRunner().invoke(cli, ["--config", str(cfg_file), "resolve", "summarize @`Project Alpha`"])
        assert result.exit_code == 0
        assert "Date: -" in result.output
        assert "exact" in result.output


def test_history_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg_file = _setup(tmpdir)
        result = CliRunner().invoke(cli, ["--config", str(cfg_file), "history"])
        assert result.exit_code == 0
        assert "No conversation yet" in result.output


class RecordingClient:
    model_label = "Fake"
    sent = []

    def __init__(self, config):
        pass

    def send(self, system_prompt, turns):
        RecordingClient.sent.append(turns[-1].content)
        return ChatResponse(content="Looks good.")


def test_ask_with_file_sends_that_note(monkeypatch):
    RecordingClient.sent = []
    monkeypatch.setattr(session_module, "ChatClient", RecordingClient)
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg_file = _setup(tmpdir)
        result = CliRunner().invoke(cli, ["--config", str(cfg_file), "ask", "compare this", "--file", "project beta"])

        assert result.exit_code == 0
        assert "Looks good." in result.output
        assert RecordingClient.sent[0].startswith("File: Project Beta\n```\nBeta milestones\n```")
