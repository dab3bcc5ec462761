"""Top status bar: workspaces, static telemetry and a 1 Hz clock."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime

from hkconfig.schema import HKConfig
from world_model.desktop_state import WORKSPACE_COUNT

BAR_TITLE = "USER @ HACKEROS :: ~/.config/HackerLand.hk"
STATIC_TELEMETRY = {"cpu": "12%", "mem": "2.1G"}


class StatusBar:
    """Renders the bar; holds no window-manager state of its own."""

    def __init__(self, config: HKConfig, now: Callable[[], datetime] = datetime.now) -> None:
        self.config = config
        self._now = now
        self.clock_text = ""
        self.refresh()

    def refresh(self) -> str:
        self.clock_text = self._now().strftime("%H:%M")
        return self.clock_text

    @staticmethod
    def workspace_indicators(active_workspace: int) -> list[bool]:
        return [ws == active_workspace for ws in range(1, WORKSPACE_COUNT + 1)]

    def render(self, active_workspace: int) -> str:
        dots = " ".join(
            f"[{index}]" if active else str(index)
            for index, active in enumerate(self.workspace_indicators(active_workspace), start=1)
        )
        telemetry = "  ".join(f"{key} {value}" for key, value in STATIC_TELEMETRY.items())
        return f"HackerLand {dots} | {BAR_TITLE} | {telemetry} | {self.clock_text}"


class ClockTicker:
    """Calls ``StatusBar.refresh`` on a background timer."""

    def __init__(self, bar: StatusBar, interval: float = 1.0) -> None:
        self.bar = bar
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="hl-clock", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.bar.refresh()
