"""Application launcher: a filtered catalog with keyboard selection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from world_model.desktop_state import WindowKind

logger = logging.getLogger("hl.launcher")

LaunchCallback = Callable[[WindowKind], Any]


@dataclass(frozen=True)
class LauncherEntry:
    """One launchable catalog item."""

    id: str
    name: str
    kind: WindowKind
    description: str


DEFAULT_CATALOG: tuple[LauncherEntry, ...] = (
    LauncherEntry("term", "Terminal", WindowKind.TERMINAL, "System Command Line"),
    LauncherEntry("browser", "Firefox", WindowKind.BROWSER, "Web Browser"),
    LauncherEntry("files", "Thunar", WindowKind.TERMINAL, "File Manager"),
    LauncherEntry("settings", "Settings", WindowKind.SETTINGS, "System Configuration"),
)


class Launcher:
    """Query-filtered catalog; confirming launches the selection and closes."""

    def __init__(
        self,
        on_launch: LaunchCallback,
        catalog: tuple[LauncherEntry, ...] = DEFAULT_CATALOG,
    ) -> None:
        self.on_launch = on_launch
        self.catalog = catalog
        self.is_open = False
        self.query = ""
        self.selected_index = 0

    def open(self) -> None:
        self.is_open = True
        self.query = ""
        self.selected_index = 0

    def close(self) -> None:
        self.is_open = False

    def results(self) -> list[LauncherEntry]:
        """Entries whose name contains the query, ignoring case."""
        needle = self.query.lower()
        return [entry for entry in self.catalog if needle in entry.name.lower()]

    def set_query(self, query: str) -> None:
        self.query = query
        count = len(self.results())
        self.selected_index = min(self.selected_index, max(count - 1, 0))

    def type_text(self, text: str) -> None:
        self.set_query(self.query + text)

    def backspace(self) -> None:
        self.set_query(self.query[:-1])

    def move_selection(self, step: int) -> None:
        count = len(self.results())
        if count == 0:
            return
        self.selected_index = (self.selected_index + step) % count

    def selected(self) -> LauncherEntry | None:
        results = self.results()
        if 0 <= self.selected_index < len(results):
            return results[self.selected_index]
        return None

    def confirm(self) -> WindowKind | None:
        """Launch the selected entry, if any, and close the launcher."""
        entry = self.selected()
        if entry is None:
            return None
        logger.debug("Launching %s (%s)", entry.name, entry.kind.value)
        self.on_launch(entry.kind)
        self.close()
        return entry.kind

    def handle_key(self, key: str) -> bool:
        """Apply one unmodified key press. Returns False for keys it ignores."""
        if not self.is_open:
            return False
        if key == "ArrowDown":
            self.move_selection(1)
        elif key == "ArrowUp":
            self.move_selection(-1)
        elif key == "Enter":
            self.confirm()
        elif key == "Escape":
            self.close()
        elif key == "Backspace":
            self.backspace()
        elif len(key) == 1 and key.isprintable():
            self.type_text(key)
        else:
            return False
        return True
