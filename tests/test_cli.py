"""CLI smoke tests."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from hkconfig.schema import DEFAULT_CONFIG_TEXT
from ui.cli.cli import app

runner = CliRunner()


def test_keys_prints_snapshot() -> None:
    result = runner.invoke(app, ["keys", "alt+enter", "alt+enter"])

    assert result.exit_code == 0, result.output
    snapshot = json.loads(result.stdout)
    assert len(snapshot["windows"]) == 2
    assert snapshot["windows"][0]["rect"]["width"] == snapshot["windows"][1]["rect"]["width"]


def test_keys_rejects_bad_chord() -> None:
    result = runner.invoke(app, ["keys", "ctrl+q"])

    assert result.exit_code == 2


def test_layout_command() -> None:
    result = runner.invoke(app, ["layout", "3", "--width", "1000", "--height", "600", "--gap", "10", "--padding", "20"])

    assert result.exit_code == 0, result.output
    rects = json.loads(result.stdout)
    assert rects[0] == {"x": 20.0, "y": 20.0, "width": 475.0, "height": 560.0}


def test_config_default_and_show(tmp_path: Path) -> None:
    result = runner.invoke(app, ["config", "default"])
    assert result.stdout == DEFAULT_CONFIG_TEXT

    hk = tmp_path / "custom.hk"
    hk.write_text("[theme]\n-> gap_size => 4\n", encoding="utf-8")
    shown = runner.invoke(app, ["config", "show", "--file", str(hk)])
    assert shown.exit_code == 0, shown.output
    assert json.loads(shown.stdout)["theme"]["gap_size"] == 4


def test_session_loop() -> None:
    result = runner.invoke(app, ["session"], input=":alt+enter\nwhoami\nquit\n")

    assert result.exit_code == 0, result.output
    assert "root@hackerland" in result.stdout
    assert "bye" in result.stdout
