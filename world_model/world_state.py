"""Read-only desktop snapshots for renderers and the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.orchestrator import DesktopSession


def snapshot_desktop(session: DesktopSession) -> dict[str, Any]:
    """Build a plain-data view of what should be on screen."""
    wm = session.window_manager
    visible = [
        {
            "id": window.id,
            "title": window.title,
            "kind": window.kind.value,
            "active": window.id == wm.active_id,
            "rect": rect.as_dict(),
        }
        for window, rect in session.geometry()
    ]
    return {
        "active_workspace": wm.active_workspace,
        "active_id": wm.active_id,
        "layout_mode": wm.layout_mode.value,
        "windows": visible,
        "hidden_windows": len(wm.windows) - len(visible),
        "launcher_open": session.launcher.is_open,
        "bar": session.status_bar.render(wm.active_workspace),
    }
