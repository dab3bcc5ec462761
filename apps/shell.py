"""Simulated shell shown inside terminal windows (no real execution)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

STARTUP_MESSAGE = "\n".join(
    [
        "HackerOS v1.0.0 (tty1)",
        " Kernel: 6.8.9-hacker-hardened",
        "",
        " Welcome to Hackerland.",
        " > Press Alt+Enter to open a Terminal",
        " > Press Alt+Q to close the active window",
        " > Press Alt+D to open Application Launcher",
        " > Press Alt+1...5 to switch workspaces",
        "",
    ]
)

PROMPT = "➜  ~ "

HELP_TEXT = "Available commands: help, clear, neofetch, whoami, ls, date, exit"
LS_TEXT = "Desktop  Documents  Downloads  Music  Pictures  Videos"

_NEOFETCH = r"""
       /\        OS: HackerOS x86_64
      /  \       Host: Hackerland VM
     / /\ \      Kernel: 6.8.9-hardened
    / /  \ \     Uptime: {uptime} mins
   / /    \ \    Shell: zsh 5.9
  / /      \ \   DE: Hackerland (Web)
  \/        \/   Memory: 640KB / 64GB
"""


class SimulatedShell:
    """Static command table with a scrollback buffer."""

    def __init__(self, now: Callable[[], datetime] = datetime.now) -> None:
        self._now = now
        self.started_at = now()
        self.scrollback: list[str] = STARTUP_MESSAGE.split("\n")

    def execute(self, line: str) -> str | None:
        """Run one input line; returns the output, or None for ``clear``."""
        trimmed = line.strip()
        command = trimmed.split(" ")[0].lower()

        if command == "clear":
            self.scrollback = []
            return None
        if command == "help":
            output = HELP_TEXT
        elif command == "whoami":
            output = "root@hackerland"
        elif command == "ls":
            output = LS_TEXT
        elif command == "date":
            output = self._now().strftime("%a %b %d %Y %H:%M:%S")
        elif command == "neofetch":
            uptime = int((self._now() - self.started_at).total_seconds() // 60)
            output = _NEOFETCH.format(uptime=uptime)
        elif command == "exit":
            output = "Cannot exit init process."
        elif command == "":
            output = ""
        else:
            output = f"zsh: command not found: {command}"

        self.scrollback.extend([f"{PROMPT}{line}", output])
        return output
