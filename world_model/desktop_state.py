"""Desktop state schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from wm.layout_engine import LayoutMode

WORKSPACE_COUNT = 5
DEFAULT_MASTER_RATIO = 0.5


class WindowKind(str, Enum):
    """Launchable application kinds."""

    TERMINAL = "terminal"
    BROWSER = "browser"
    SETTINGS = "settings"
    WELCOME = "welcome"


_TITLES = {
    WindowKind.TERMINAL: "~/user/projects",
}


def title_for(kind: WindowKind) -> str:
    """Return the fixed display title for a window kind."""
    return _TITLES.get(kind, kind.value)


@dataclass(frozen=True)
class Window:
    """One application window. Identity never changes after creation."""

    id: str
    title: str
    kind: WindowKind


@dataclass
class DesktopState:
    """Ground truth owned by the window manager."""

    windows: list[Window] = field(default_factory=list)
    active_id: str | None = None
    active_workspace: int = 1
    workspace_of: dict[str, int] = field(default_factory=dict)
    layout_mode: LayoutMode = LayoutMode.MASTER_STACK
    master_ratio: float = DEFAULT_MASTER_RATIO
