"""Maps key chords to window-manager and launcher commands."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from apps.launcher import Launcher
from wm.window_manager import WindowManager
from world_model.desktop_state import WORKSPACE_COUNT, WindowKind

logger = logging.getLogger("hl.input")

MASTER_RATIO_STEP = 0.05

_KEY_ALIASES = {
    "return": "enter",
    "esc": "escape",
    "up": "arrowup",
    "down": "arrowdown",
    "bksp": "backspace",
}

# Launcher keys keep the casing the launcher expects.
_LAUNCHER_KEYS = {
    "arrowup": "ArrowUp",
    "arrowdown": "ArrowDown",
    "enter": "Enter",
    "escape": "Escape",
    "backspace": "Backspace",
    "space": " ",
}


@dataclass(frozen=True)
class KeyEvent:
    """A single key press with its modifiers."""

    key: str
    alt: bool = False
    shift: bool = False


def parse_chord(chord: str) -> KeyEvent:
    """Parse ``alt+shift+1`` style text into a KeyEvent."""
    parts = [part.strip() for part in chord.split("+")]
    if len(parts) > 1 and parts[-1] == "" and parts[-2] == "":
        # "alt++" means the plus key itself
        parts = parts[:-2] + ["+"]
    if not parts or not parts[-1]:
        raise ValueError(f"Empty chord: {chord!r}")
    *modifiers, key = parts
    mods = {m.lower() for m in modifiers}
    unknown = mods - {"alt", "shift"}
    if unknown:
        raise ValueError(f"Unsupported modifier(s) in {chord!r}: {', '.join(sorted(unknown))}")
    if len(key) > 1:
        key = _KEY_ALIASES.get(key.lower(), key.lower())
    return KeyEvent(key=key, alt="alt" in mods, shift="shift" in mods)


class InputRouter:
    """Single input channel: events are handled one at a time, in order."""

    def __init__(self, window_manager: WindowManager, launcher: Launcher) -> None:
        self.wm = window_manager
        self.launcher = launcher
        self._bindings: dict[tuple[str, bool], Callable[[], object]] = {
            ("enter", False): lambda: self.wm.spawn_window(WindowKind.TERMINAL),
            ("q", False): self.wm.close_active_window,
            ("d", False): self.launcher.open,
            ("j", False): self.wm.focus_next,
            ("k", False): self.wm.focus_prev,
            ("space", False): self.wm.cycle_layout,
            ("h", False): lambda: self.wm.adjust_master_ratio(-MASTER_RATIO_STEP),
            ("l", False): lambda: self.wm.adjust_master_ratio(MASTER_RATIO_STEP),
        }
        for workspace in range(1, WORKSPACE_COUNT + 1):
            self._bindings[(str(workspace), False)] = self._switcher(workspace)
            self._bindings[(str(workspace), True)] = self._mover(workspace)

    def _switcher(self, workspace: int) -> Callable[[], object]:
        return lambda: self.wm.set_active_workspace(workspace)

    def _mover(self, workspace: int) -> Callable[[], object]:
        return lambda: self.wm.move_active_to_workspace(workspace)

    def dispatch(self, event: KeyEvent) -> bool:
        """Handle one event. Returns False when nothing was bound to it."""
        if event.alt:
            action = self._bindings.get((event.key.lower(), event.shift))
            if action is None:
                logger.debug("Unbound chord: %s", event)
                return False
            logger.debug("Chord %s", event)
            action()
            return True

        if self.launcher.is_open:
            key = _LAUNCHER_KEYS.get(event.key.lower(), event.key)
            return self.launcher.handle_key(key)
        return False

    def feed(self, events: Iterable[KeyEvent | str]) -> int:
        """Dispatch events in arrival order; returns how many were handled."""
        handled = 0
        for event in events:
            if isinstance(event, str):
                event = parse_chord(event)
            if self.dispatch(event):
                handled += 1
        return handled
