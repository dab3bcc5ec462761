"""Window manager: window lifecycle, focus tracking and workspaces."""

from __future__ import annotations

import logging
from typing import Any

from core.event_bus import (
    FOCUS_CHANGED,
    LAYOUT_CHANGED,
    WINDOW_CLOSED,
    WINDOW_MOVED,
    WINDOW_SPAWNED,
    WORKSPACE_CHANGED,
    EventBus,
)
from wm.id_source import CounterIdSource, IdSource
from wm.layout_engine import LayoutMode, Rect, compute_layout
from world_model.desktop_state import (
    WORKSPACE_COUNT,
    DesktopState,
    Window,
    WindowKind,
    title_for,
)

MIN_MASTER_RATIO = 0.1
MAX_MASTER_RATIO = 0.9
_MAX_ID_ATTEMPTS = 32


class WindowManager:
    """Owns the window list and is the only writer of desktop state.

    Renderers read ``windows``, ``active_id`` and ``arrange()``; they change
    state only through the public operations below.
    """

    def __init__(
        self,
        id_source: IdSource | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.logger = logging.getLogger("hl.window_manager")
        self.id_source = id_source or CounterIdSource()
        self.event_bus = event_bus or EventBus()
        self._state = DesktopState()
        self._issued_ids: set[str] = set()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def windows(self) -> tuple[Window, ...]:
        return tuple(self._state.windows)

    @property
    def active_id(self) -> str | None:
        return self._state.active_id

    @property
    def active_window(self) -> Window | None:
        return self._find(self._state.active_id)

    @property
    def active_workspace(self) -> int:
        return self._state.active_workspace

    @property
    def layout_mode(self) -> LayoutMode:
        return self._state.layout_mode

    @property
    def master_ratio(self) -> float:
        return self._state.master_ratio

    def get_window(self, window_id: str) -> Window | None:
        return self._find(window_id)

    def workspace_of(self, window_id: str) -> int | None:
        return self._state.workspace_of.get(window_id)

    def workspace_windows(self, workspace: int) -> list[Window]:
        """Windows assigned to ``workspace``, in stacking order."""
        return [w for w in self._state.windows if self._state.workspace_of[w.id] == workspace]

    def visible_windows(self) -> list[Window]:
        return self.workspace_windows(self._state.active_workspace)

    def state_snapshot(self) -> dict[str, Any]:
        state = self._state
        return {
            "windows": [
                {
                    "id": w.id,
                    "title": w.title,
                    "kind": w.kind.value,
                    "workspace": state.workspace_of[w.id],
                }
                for w in state.windows
            ],
            "active_id": state.active_id,
            "active_workspace": state.active_workspace,
            "layout_mode": state.layout_mode.value,
            "master_ratio": state.master_ratio,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def spawn_window(self, kind: WindowKind | str) -> Window:
        """Create a window of ``kind`` on the active workspace and focus it."""
        kind = WindowKind(kind)
        window = Window(id=self._fresh_id(), title=title_for(kind), kind=kind)
        self._state.windows.append(window)
        self._state.workspace_of[window.id] = self._state.active_workspace
        self.logger.debug(
            "Spawned %s window %s on workspace %d",
            kind.value,
            window.id,
            self._state.active_workspace,
        )
        self.event_bus.emit(
            WINDOW_SPAWNED,
            {"id": window.id, "kind": kind.value, "workspace": self._state.active_workspace},
        )
        self._set_active(window.id)
        return window

    def close_window(self, window_id: str) -> bool:
        """Remove a window; closing an unknown id is a no-op."""
        window = self._find(window_id)
        if window is None:
            return False
        self._state.windows.remove(window)
        workspace = self._state.workspace_of.pop(window_id)
        self.logger.debug("Closed window %s", window_id)
        self.event_bus.emit(
            WINDOW_CLOSED,
            {"id": window_id, "kind": window.kind.value, "workspace": workspace},
        )
        if self._state.active_id == window_id:
            self._set_active(self._fallback_focus())
        return True

    def close_active_window(self) -> bool:
        if self._state.active_id is None:
            return False
        return self.close_window(self._state.active_id)

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def focus_window(self, window_id: str) -> bool:
        """Focus a window, switching to its workspace when it is hidden."""
        if self._find(window_id) is None:
            return False
        workspace = self._state.workspace_of[window_id]
        if workspace != self._state.active_workspace:
            self._switch_workspace(workspace, focus=window_id)
        else:
            self._set_active(window_id)
        return True

    def focus_next(self) -> bool:
        return self._cycle_focus(1)

    def focus_prev(self) -> bool:
        return self._cycle_focus(-1)

    def _cycle_focus(self, step: int) -> bool:
        visible = self.visible_windows()
        if not visible:
            return False
        ids = [w.id for w in visible]
        if self._state.active_id in ids:
            index = (ids.index(self._state.active_id) + step) % len(ids)
        else:
            index = 0 if step > 0 else len(ids) - 1
        self._set_active(ids[index])
        return True

    # ------------------------------------------------------------------
    # Workspaces
    # ------------------------------------------------------------------

    def set_active_workspace(self, workspace: int) -> bool:
        """Switch workspaces; out-of-range values are rejected."""
        if not self._valid_workspace(workspace):
            self.logger.warning("Rejected workspace %r (expected 1..%d)", workspace, WORKSPACE_COUNT)
            return False
        if workspace == self._state.active_workspace:
            return True
        self._switch_workspace(workspace, focus=None)
        return True

    def move_window_to_workspace(self, window_id: str, workspace: int) -> bool:
        if not self._valid_workspace(workspace):
            self.logger.warning("Rejected move to workspace %r", workspace)
            return False
        if self._find(window_id) is None:
            return False
        previous = self._state.workspace_of[window_id]
        if previous == workspace:
            return True
        self._state.workspace_of[window_id] = workspace
        self.logger.debug("Moved window %s from workspace %d to %d", window_id, previous, workspace)
        self.event_bus.emit(
            WINDOW_MOVED, {"id": window_id, "from": previous, "to": workspace}
        )
        if self._state.active_id == window_id and workspace != self._state.active_workspace:
            self._set_active(self._fallback_focus())
        return True

    def move_active_to_workspace(self, workspace: int) -> bool:
        if self._state.active_id is None:
            return False
        return self.move_window_to_workspace(self._state.active_id, workspace)

    def _switch_workspace(self, workspace: int, focus: str | None) -> None:
        previous = self._state.active_workspace
        self._state.active_workspace = workspace
        self.logger.debug("Workspace %d -> %d", previous, workspace)
        self.event_bus.emit(WORKSPACE_CHANGED, {"from": previous, "to": workspace})
        self._set_active(focus if focus is not None else self._fallback_focus())

    @staticmethod
    def _valid_workspace(workspace: object) -> bool:
        return (
            isinstance(workspace, int)
            and not isinstance(workspace, bool)
            and 1 <= workspace <= WORKSPACE_COUNT
        )

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def cycle_layout(self) -> LayoutMode:
        self._state.layout_mode = self._state.layout_mode.next()
        self.event_bus.emit(LAYOUT_CHANGED, {"mode": self._state.layout_mode.value})
        return self._state.layout_mode

    def adjust_master_ratio(self, delta: float) -> float:
        ratio = min(MAX_MASTER_RATIO, max(MIN_MASTER_RATIO, self._state.master_ratio + delta))
        ratio = round(ratio, 4)
        if ratio != self._state.master_ratio:
            self._state.master_ratio = ratio
            self.event_bus.emit(LAYOUT_CHANGED, {"master_ratio": ratio})
        return ratio

    def arrange(self, region: Rect, gap: float, padding: float) -> list[tuple[Window, Rect]]:
        """Geometry for the visible windows, in stacking order."""
        visible = self.visible_windows()
        rects = compute_layout(
            self._state.layout_mode,
            visible,
            region,
            gap,
            padding,
            self._state.master_ratio,
        )
        return list(zip(visible, rects))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find(self, window_id: str | None) -> Window | None:
        if window_id is None:
            return None
        for window in self._state.windows:
            if window.id == window_id:
                return window
        return None

    def _fresh_id(self) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self.id_source.next_id()
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate
            self.logger.warning("Id source repeated id %s; retrying", candidate)
        raise RuntimeError("Id source failed to produce a fresh window id.")

    def _fallback_focus(self) -> str | None:
        visible = self.visible_windows()
        return visible[-1].id if visible else None

    def _set_active(self, window_id: str | None) -> None:
        previous = self._state.active_id
        self._state.active_id = window_id
        if previous != window_id:
            self.event_bus.emit(FOCUS_CHANGED, {"from": previous, "to": window_id})
