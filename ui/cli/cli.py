"""CLI entrypoint for the HackerLand desktop simulator."""

from __future__ import annotations

import typer

from ui.cli import commands

app = typer.Typer(help="HackerLand tiling desktop simulator")
config_app = typer.Typer(help="Configuration commands")


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(None, "--log-level", help="Python logging level"),
) -> None:
    commands.setup_logging(log_level)


@app.command("keys")
def keys_cmd(
    chords: list[str] = typer.Argument(..., help="Chords such as alt+enter alt+q alt+2"),
) -> None:
    """Replay chords into a fresh session and print the desktop snapshot."""
    commands.replay_keys(chords)


@app.command("session")
def session_cmd() -> None:
    """Interactive session."""
    commands.interactive_session()


@app.command("layout")
def layout_cmd(
    count: int = typer.Argument(..., min=0, help="Number of windows"),
    mode: str = typer.Option("master_stack", "--mode", help="master_stack, monocle or grid"),
    width: float = typer.Option(1920, "--width"),
    height: float = typer.Option(1080, "--height"),
    gap: float = typer.Option(12, "--gap"),
    padding: float = typer.Option(24, "--padding"),
) -> None:
    """Print window rectangles for COUNT windows."""
    commands.show_layout(count=count, mode=mode, width=width, height=height, gap=gap, padding=padding)


@config_app.command("show")
def config_show_cmd(
    file: str | None = typer.Option(None, "--file", help="Parse this .hk file instead"),
) -> None:
    """Show effective configuration."""
    commands.config_show(file=file)


@config_app.command("default")
def config_default_cmd() -> None:
    """Print the default configuration as .hk text."""
    commands.config_default()


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
