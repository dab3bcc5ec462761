"""Typed HackerLand configuration and its defaults."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict

# A leaf keeps whatever type its text spelled: numeric text is a number.
Scalar = Union[int, float, str]

DEFAULT_WALLPAPER_URL = (
    "https://images.unsplash.com/photo-1550684848-fac1c5b4e853"
    "?q=80&w=2070&auto=format&fit=crop"
)


class Section(str, Enum):
    """The four configuration sections the desktop understands."""

    THEME = "theme"
    WALLPAPER = "wallpaper"
    ANIMATION = "animation"
    GENERAL = "general"


class _FrozenSection(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ThemeConfig(_FrozenSection):
    """Window chrome and spacing."""

    border_active: Scalar = "#06b6d4"
    border_inactive: Scalar = "#334155"
    blur_strength: Scalar = "16px"
    gap_size: Scalar = 12
    outer_padding: Scalar = 24
    active_opacity: Scalar = 1
    inactive_opacity: Scalar = 0.85
    accent_color: Scalar = "#06b6d4"
    bar_bg: Scalar = "#0f172acc"


class WallpaperConfig(_FrozenSection):
    url: Scalar = DEFAULT_WALLPAPER_URL
    overlay_opacity: Scalar = 0.4


class AnimationConfig(_FrozenSection):
    duration: Scalar = 0.3
    stiffness: Scalar = 100


class GeneralConfig(_FrozenSection):
    font_family: Scalar = "JetBrains Mono"


class HKConfig(_FrozenSection):
    """Complete desktop configuration."""

    theme: ThemeConfig = ThemeConfig()
    wallpaper: WallpaperConfig = WallpaperConfig()
    animation: AnimationConfig = AnimationConfig()
    general: GeneralConfig = GeneralConfig()

    def numeric(self, section: Section, key: str, fallback: float) -> float:
        """Read a leaf as a number, using ``fallback`` when it was written as text."""
        value = getattr(getattr(self, section.value), key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return fallback


DEFAULT_CONFIG = HKConfig()

DEFAULT_CONFIG_TEXT = f"""! HackerLand Configuration File
! Location: ~/.config/HackerLand.hk

[theme]
-> border_active => #06b6d4
-> border_inactive => #334155
-> blur_strength => 16px
-> gap_size => 12
-> outer_padding => 24
-> active_opacity => 1
-> inactive_opacity => 0.85
-> accent_color => #06b6d4
-> bar_bg => #0f172acc

[wallpaper]
-> url => {DEFAULT_WALLPAPER_URL}
-> overlay_opacity => 0.4

[animation]
-> duration => 0.3
-> stiffness => 100

[general]
-> font_family => JetBrains Mono
"""


def render_config(config: HKConfig) -> str:
    """Serialize a configuration back into DSL text."""
    lines = ["! HackerLand Configuration File", ""]
    for section in Section:
        lines.append(f"[{section.value}]")
        for key, value in getattr(config, section.value).model_dump().items():
            lines.append(f"-> {key} => {value}")
        lines.append("")
    return "\n".join(lines)
