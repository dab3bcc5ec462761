"""Session settings and logging bootstrapping."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_settings(root: Path) -> dict[str, Any]:
    """Load ``config/default.yaml`` with ``config/local.yaml`` layered on top."""
    config_dir = root / "config"
    default_cfg = load_yaml(config_dir / "default.yaml")
    local_cfg = load_yaml(config_dir / "local.yaml")
    return merge_dicts(default_cfg, local_cfg)


def session_settings(settings: dict[str, Any]) -> dict[str, Any]:
    """Session section with built-in fallbacks for missing keys."""
    session = settings.get("session", {})
    return {
        "screen_width": float(session.get("screen_width", 1920)),
        "screen_height": float(session.get("screen_height", 1080)),
        "bar_height": float(session.get("bar_height", 32)),
        "id_source": str(session.get("id_source", "counter")),
        "config_path": str(session.get("config_path", "/home/user/.config/HackerLand.hk")),
        "clock_interval": float(session.get("clock_interval", 1.0)),
    }


def configure_logging(level: str | int = "WARNING") -> None:
    """Install a root handler; safe to call more than once."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
