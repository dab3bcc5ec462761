"""Tiling layout algorithms.

Every function here is pure: it maps an ordered window sequence plus spacing
parameters to one rectangle per window, in input order. The master of the
master/stack layout is always index 0.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class LayoutMode(str, Enum):
    """Available tiling layouts, in cycling order."""

    MASTER_STACK = "master_stack"
    MONOCLE = "monocle"
    GRID = "grid"

    def next(self) -> LayoutMode:
        modes = list(LayoutMode)
        return modes[(modes.index(self) + 1) % len(modes)]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen coordinates."""

    x: float
    y: float
    width: float
    height: float

    def inset(self, amount: float) -> Rect:
        return Rect(
            self.x + amount,
            self.y + amount,
            max(0.0, self.width - 2 * amount),
            max(0.0, self.height - 2 * amount),
        )

    def as_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def master_stack(
    windows: Sequence[Any],
    region: Rect,
    gap: float,
    padding: float,
    master_ratio: float = 0.5,
) -> list[Rect]:
    """Master on the left, remaining windows stacked on the right."""
    count = len(windows)
    if count == 0:
        return []
    usable = region.inset(padding)
    if count == 1:
        return [usable]

    master_w = max(0.0, (usable.width - gap) * master_ratio)
    stack_x = usable.x + master_w + gap
    stack_w = max(0.0, usable.width - master_w - gap)
    stack_n = count - 1
    stack_h = max(0.0, (usable.height - gap * (stack_n - 1)) / stack_n)

    rects = [Rect(usable.x, usable.y, master_w, usable.height)]
    for index in range(stack_n):
        rects.append(Rect(stack_x, usable.y + index * (stack_h + gap), stack_w, stack_h))
    return rects


def monocle(
    windows: Sequence[Any],
    region: Rect,
    gap: float,
    padding: float,
    master_ratio: float = 0.5,
) -> list[Rect]:
    """Every window fills the padded region."""
    _ = gap, master_ratio
    usable = region.inset(padding)
    return [usable for _window in windows]


def grid(
    windows: Sequence[Any],
    region: Rect,
    gap: float,
    padding: float,
    master_ratio: float = 0.5,
) -> list[Rect]:
    """Near-square grid of equal cells, filled row by row."""
    _ = master_ratio
    count = len(windows)
    if count == 0:
        return []
    usable = region.inset(padding)
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    cell_w = max(0.0, (usable.width - gap * (cols - 1)) / cols)
    cell_h = max(0.0, (usable.height - gap * (rows - 1)) / rows)
    return [
        Rect(
            usable.x + (index % cols) * (cell_w + gap),
            usable.y + (index // cols) * (cell_h + gap),
            cell_w,
            cell_h,
        )
        for index in range(count)
    ]


_LAYOUTS = {
    LayoutMode.MASTER_STACK: master_stack,
    LayoutMode.MONOCLE: monocle,
    LayoutMode.GRID: grid,
}


def compute_layout(
    mode: LayoutMode,
    windows: Sequence[Any],
    region: Rect,
    gap: float,
    padding: float,
    master_ratio: float = 0.5,
) -> list[Rect]:
    """Dispatch to the layout function for ``mode``."""
    return _LAYOUTS[LayoutMode(mode)](windows, region, gap, padding, master_ratio)
