"""Typer command handlers."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from core.bootstrap import configure_logging, load_effective_settings
from core.orchestrator import DesktopSession, Orchestrator
from hkconfig.parser import ConfigParseError, parse
from hkconfig.schema import DEFAULT_CONFIG_TEXT, HKConfig
from wm.layout_engine import LayoutMode, Rect, compute_layout
from world_model.world_state import snapshot_desktop


def _runtime(root: Path | None = None) -> DesktopSession:
    return Orchestrator(root=root).build()


def setup_logging(level: str | None = None) -> None:
    """Configure logging from the flag, else from the session settings."""
    if level is None:
        settings = load_effective_settings(Orchestrator().root)
        level = str(settings.get("logging", {}).get("level", "WARNING"))
    configure_logging(level)


def replay_keys(chords: list[str]) -> None:
    """Feed chords to a new session and print what would be rendered."""
    session = _runtime()
    try:
        session.press(*chords)
    except ValueError as exc:
        typer.echo(f"Invalid chord: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    typer.echo(json.dumps(snapshot_desktop(session), indent=2))


def interactive_session() -> None:
    """Run interactive session loop."""
    session = _runtime()
    session.start_clock()
    typer.echo("HackerLand session. ':alt+enter' sends a chord, 'quit' leaves.")
    try:
        while True:
            line = typer.prompt("hl", default="", show_default=False)
            if line.strip().lower() in {"quit", "logout"}:
                typer.echo("bye")
                break
            if line.startswith(":"):
                try:
                    session.press(*line[1:].split())
                except ValueError as exc:
                    typer.echo(f"Invalid chord: {exc}")
                    continue
                _render(session)
                continue
            output = session.run_command(line)
            if output is None and session.window_manager.active_id not in session.shells:
                typer.echo("(no active terminal; press :alt+enter)")
            elif output:
                typer.echo(output)
    finally:
        session.stop_clock()


def _render(session: DesktopSession) -> None:
    snapshot = snapshot_desktop(session)
    typer.echo(snapshot["bar"])
    if not snapshot["windows"]:
        typer.echo("  (empty workspace)")
    for window in snapshot["windows"]:
        marker = "*" if window["active"] else " "
        rect = window["rect"]
        typer.echo(
            f" {marker} {window['id']:<8} {window['title']:<16} "
            f"{rect['x']:.0f},{rect['y']:.0f} {rect['width']:.0f}x{rect['height']:.0f}"
        )
    if snapshot["launcher_open"]:
        entries = ", ".join(entry.name for entry in session.launcher.results())
        typer.echo(f"  launcher [{session.launcher.query}]: {entries}")


def show_layout(count: int, mode: str, width: float, height: float, gap: float, padding: float) -> None:
    """Print rectangles for anonymous windows."""
    try:
        layout_mode = LayoutMode(mode)
    except ValueError as exc:
        typer.echo(f"Unknown layout mode: {mode}", err=True)
        raise typer.Exit(code=2) from exc
    rects = compute_layout(layout_mode, list(range(count)), Rect(0, 0, width, height), gap, padding)
    typer.echo(json.dumps([rect.as_dict() for rect in rects], indent=2))


def config_show(file: str | None = None) -> None:
    """Show the effective .hk configuration."""
    if file is None:
        config: HKConfig = _runtime().config
    else:
        path = Path(file)
        if not path.exists():
            typer.echo(f"No such file: {path}", err=True)
            raise typer.Exit(code=1)
        try:
            config = parse(path.read_bytes())
        except ConfigParseError as exc:
            typer.echo(f"Could not parse {path}: {exc}", err=True)
            raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(config.model_dump(), indent=2))


def config_default() -> None:
    typer.echo(DEFAULT_CONFIG_TEXT, nl=False)
