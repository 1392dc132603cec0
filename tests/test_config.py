"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import pytest

from dive.config import DEFAULT_CONFIG, load_config


def test_file_overrides_defaults(monkeypatch):
    monkeypatch.delenv("PERPLEXITY_API_KEY", raising=False)
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg_file = Path(tmpdir) / "config.yaml"
        cfg_file.write_text(f"vault_path: {tmpdir}/notes\nmodel: sonar-pro\nmax_context_messages: 6\n")

        cfg = load_config(cfg_file)

        assert cfg["model"] == "sonar-pro"
        assert cfg["max_context_messages"] == 6
        assert cfg["vault_path"] == str((Path(tmpdir) / "notes").resolve())
        assert cfg["max_input_length"] == DEFAULT_CONFIG["max_input_length"]
        assert "perplexity_api_key" not in cfg


def test_env_api_keys(monkeypatch):
    monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-env")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg_file = Path(tmpdir) / "config.yaml"
        cfg_file.write_text("custom_prompt: Be brief.\n")
        cfg = load_config(cfg_file)
    assert cfg["perplexity_api_key"] == "pplx-env"
    assert cfg["claude_api_key"] == "sk-env"


def test_unknown_model_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg_file = Path(tmpdir) / "config.yaml"
        cfg_file.write_text("model: not-a-model\n")
        with pytest.raises(ValueError):
            load_config(cfg_file)
