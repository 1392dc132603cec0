"""Configuration management for Dive."""

import os
from pathlib import Path
from typing import Any

import yaml

from .chat.models import Model


DEFAULT_CONFIG = {
    "vault_path": "~/.dive/vault",
    "state_path": "~/.dive/state.json",
    "provider": "perplexity",
    "model": Model.SONAR.value,
    "claude_model": "claude-sonnet-4-20250514",
    "custom_prompt": "",
    "include_current_file": False,
    "max_context_messages": 4,
    "max_input_length": 4000,
    "request_timeout": 60,
}

PROVIDERS = ("perplexity", "claude")


def _find_config_file() -> Path | None:
    """Look for config.yaml in standard locations."""
    candidates = [
        Path.cwd() / "config" / "config.yaml",
        Path.cwd() / "config.yaml",
        Path.home() / ".dive" / "config.yaml",
    ]
    for p in candidates:
        if p.exists():
            return p
    return None


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration, merging defaults with file and env vars."""
    cfg = dict(DEFAULT_CONFIG)

    path = Path(config_path) if config_path else _find_config_file()
    if path and path.exists():
        with open(path) as f:
            file_cfg = yaml.safe_load(f) or {}
        _deep_merge(cfg, file_cfg)

    # Env overrides
    if api_key := os.environ.get("PERPLEXITY_API_KEY"):
        cfg["perplexity_api_key"] = api_key
    if api_key := os.environ.get("ANTHROPIC_API_KEY"):
        cfg["claude_api_key"] = api_key

    # Expand paths
    for key in ("vault_path", "state_path"):
        cfg[key] = str(Path(cfg[key]).expanduser().resolve())

    validate_config(cfg)
    return cfg


def validate_config(cfg: dict[str, Any]) -> None:
    """Reject providers and model ids we don't know how to talk to."""
    if cfg.get("provider") not in PROVIDERS:
        raise ValueError(f"Unknown provider: {cfg.get('provider')}. Use one of: {', '.join(PROVIDERS)}")
    if cfg["provider"] == "perplexity":
        # Raises ValueError for ids outside the supported set
        Model.parse(cfg.get("model", ""))


def _deep_merge(base: dict, override: dict) -> None:
    """Merge override into base in-place."""
    for k, v in override.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
