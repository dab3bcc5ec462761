"""In-memory file tree backing the simulated desktop."""

from __future__ import annotations

import copy
from typing import Union

FileTree = dict[str, Union[str, "FileTree"]]

CONFIG_PATH = "/home/user/.config/HackerLand.hk"

USER_CONFIG_TEXT = """! HackerLand Configuration File
! Location: ~/.config/HackerLand.hk

[metadata]
-> name => HackerLand Defaults
-> version => 1.0

[theme]
-> border_active => #d946ef
-> border_inactive => #1e293b
-> blur_strength => 20px
-> gap_size => 16
-> outer_padding => 32
-> active_opacity => 1
-> inactive_opacity => 0.8
-> accent_color => #d946ef
-> bar_bg => #020617cc

[wallpaper]
-> url => https://images.unsplash.com/photo-1620641788421-7a1c342ea42e?q=80&w=1974&auto=format&fit=crop
-> overlay_opacity => 0.3

[animation]
-> duration => 0.4
-> stiffness => 120

[general]
-> font_family => JetBrains Mono
"""

DEFAULT_TREE: FileTree = {
    "home": {
        "user": {
            ".config": {"HackerLand.hk": USER_CONFIG_TEXT},
            "documents": {
                "manifesto.txt": "Information wants to be free.",
                "todo.txt": "- Build new kernel\n- Hack the planet",
            },
            "projects": {},
            "downloads": {},
        }
    },
    "etc": {"motd": "Have a lot of fun..."},
}


def split_path(path: str) -> list[str]:
    return [part for part in path.split("/") if part]


class VirtualFileSystem:
    """Read-only view over a nested dict of directories and text files."""

    def __init__(self, tree: FileTree | None = None) -> None:
        self._tree: FileTree = copy.deepcopy(DEFAULT_TREE if tree is None else tree)

    def _node(self, path: str) -> str | FileTree | None:
        node: str | FileTree = self._tree
        for part in split_path(path):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def read_file(self, path: str) -> str | None:
        """Return file text, or None for missing paths and directories."""
        node = self._node(path)
        return node if isinstance(node, str) else None

    def list_dir(self, path: str = "/") -> list[str]:
        node = self._node(path)
        if not isinstance(node, dict):
            return []
        return sorted(node)

    def exists(self, path: str) -> bool:
        return self._node(path) is not None
