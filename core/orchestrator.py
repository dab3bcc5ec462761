"""Top-level session orchestrator."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from apps.filesystem import VirtualFileSystem
from apps.launcher import Launcher
from apps.shell import SimulatedShell
from apps.status_bar import ClockTicker, StatusBar
from core.bootstrap import load_effective_settings, session_settings
from core.event_bus import WINDOW_CLOSED, WINDOW_SPAWNED, EventBus
from hkconfig.loader import load_config
from hkconfig.schema import HKConfig, Section
from wm.id_source import IdSource, build_id_source
from wm.input_router import InputRouter, KeyEvent
from wm.layout_engine import Rect
from wm.window_manager import WindowManager
from world_model.desktop_state import Window, WindowKind

logger = logging.getLogger("hl.session")


@dataclass
class DesktopSession:
    """Holds initialized desktop components for one run."""

    settings: dict[str, Any]
    config: HKConfig
    fs: VirtualFileSystem
    event_bus: EventBus
    window_manager: WindowManager
    launcher: Launcher
    router: InputRouter
    status_bar: StatusBar
    clock: ClockTicker
    shell_factory: Callable[[], SimulatedShell] = SimulatedShell
    shells: dict[str, SimulatedShell] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.event_bus.subscribe(WINDOW_SPAWNED, self._on_spawned)
        self.event_bus.subscribe(WINDOW_CLOSED, self._on_closed)

    def _on_spawned(self, payload: dict[str, Any]) -> None:
        if payload["kind"] == WindowKind.TERMINAL.value:
            self.shells[payload["id"]] = self.shell_factory()

    def _on_closed(self, payload: dict[str, Any]) -> None:
        self.shells.pop(payload["id"], None)

    @property
    def gap(self) -> float:
        return self.config.numeric(Section.THEME, "gap_size", 0.0)

    @property
    def padding(self) -> float:
        return self.config.numeric(Section.THEME, "outer_padding", 0.0)

    def region(self) -> Rect:
        """Screen area below the bar available to tiled windows."""
        bar = self.settings["bar_height"]
        return Rect(
            0.0,
            bar,
            self.settings["screen_width"],
            max(0.0, self.settings["screen_height"] - bar),
        )

    def geometry(self) -> list[tuple[Window, Rect]]:
        return self.window_manager.arrange(self.region(), self.gap, self.padding)

    def press(self, *chords: KeyEvent | str) -> int:
        return self.router.feed(chords)

    def run_command(self, line: str) -> str | None:
        """Send a line to the active terminal's shell."""
        window_id = self.window_manager.active_id
        shell = self.shells.get(window_id) if window_id else None
        if shell is None:
            logger.warning("No active terminal to run %r", line)
            return None
        return shell.execute(line)

    def start_clock(self) -> None:
        self.clock.start()

    def stop_clock(self) -> None:
        self.clock.stop()


class Orchestrator:
    """Creates and wires session components."""

    def __init__(
        self,
        root: Path | None = None,
        fs: VirtualFileSystem | None = None,
        id_source: IdSource | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self.fs = fs
        self.id_source = id_source
        self.now = now

    def build(self, overrides: dict[str, Any] | None = None) -> DesktopSession:
        settings = session_settings(load_effective_settings(self.root))
        settings.update(overrides or {})

        fs = self.fs or VirtualFileSystem()
        config = load_config(fs, settings["config_path"])

        event_bus = EventBus()
        window_manager = WindowManager(
            id_source=self.id_source or build_id_source(settings["id_source"]),
            event_bus=event_bus,
        )
        launcher = Launcher(on_launch=window_manager.spawn_window)
        router = InputRouter(window_manager=window_manager, launcher=launcher)
        status_bar = StatusBar(config, now=self.now)
        now = self.now

        return DesktopSession(
            settings=settings,
            config=config,
            fs=fs,
            event_bus=event_bus,
            window_manager=window_manager,
            launcher=launcher,
            router=router,
            status_bar=status_bar,
            clock=ClockTicker(status_bar, interval=settings["clock_interval"]),
            shell_factory=lambda: SimulatedShell(now=now),
        )


def boot(chords: Iterable[str] = (), **kwargs: Any) -> DesktopSession:
    """Build a session and replay ``chords`` into it."""
    session = Orchestrator(**kwargs).build()
    session.press(*chords)
    return session
