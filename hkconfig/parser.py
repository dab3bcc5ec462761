"""Parser for the HackerLand ``.hk`` configuration language.

The format is line oriented::

    ! comment
    [theme]
    -> gap_size => 16
    -> accent_color => #d946ef

Assignments before any section header are dropped, and so are unknown
sections and unknown keys. Values that spell a decimal number become numbers;
everything else is kept verbatim as a string.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from hkconfig.schema import DEFAULT_CONFIG, HKConfig, Scalar, Section

logger = logging.getLogger("hl.config")

_SECTION_RE = re.compile(r"^\[(.*)\]$")
_ASSIGN_RE = re.compile(r"^->\s+(.*?)\s+=>\s+(.*)$")
_INT_RE = re.compile(r"^[+-]?\d+$")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

Overrides = dict[str, dict[str, Scalar]]


class ConfigParseError(ValueError):
    """Raised when the input cannot be read as text at all."""


def coerce_value(raw: str) -> Scalar:
    """Turn numeric text into a number, leave anything else untouched."""
    if _INT_RE.match(raw):
        return int(raw)
    if _NUMBER_RE.match(raw):
        return float(raw)
    return raw


def _as_text(source: object) -> str:
    if isinstance(source, str):
        return source
    if isinstance(source, (bytes, bytearray)):
        try:
            return bytes(source).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigParseError(f"Config is not valid UTF-8: {exc}") from exc
    raise ConfigParseError(f"Config must be text, got {type(source).__name__}")


def parse_overrides(source: str | bytes) -> Overrides:
    """Collect every assignment in ``source``, grouped by lowercased section."""
    text = _as_text(source)
    overrides: Overrides = {}
    current = ""

    for line_no, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("!"):
            continue

        section_match = _SECTION_RE.match(stripped)
        if section_match:
            current = section_match.group(1).lower()
            continue

        assign_match = _ASSIGN_RE.match(stripped)
        if assign_match is None:
            logger.debug("Ignoring line %d: %r", line_no, stripped)
            continue
        if not current:
            logger.debug("Ignoring assignment outside a section on line %d", line_no)
            continue

        key = assign_match.group(1).strip()
        value = coerce_value(assign_match.group(2).strip())
        overrides.setdefault(current, {})[key] = value

    return overrides


def _known_keys(config: HKConfig, section: Section) -> set[str]:
    return set(type(getattr(config, section.value)).model_fields)


def merge_config(base: HKConfig, overrides: Mapping[str, Mapping[str, Scalar]]) -> HKConfig:
    """Return a copy of ``base`` with the recognized ``overrides`` applied."""
    updates: dict[str, object] = {}
    for name, values in overrides.items():
        if name == Section.THEME.value:
            section = Section.THEME
        elif name == Section.WALLPAPER.value:
            section = Section.WALLPAPER
        elif name == Section.ANIMATION.value:
            section = Section.ANIMATION
        elif name == Section.GENERAL.value:
            section = Section.GENERAL
        else:
            logger.debug("Dropping unknown section [%s]", name)
            continue

        known = _known_keys(base, section)
        accepted = {key: value for key, value in values.items() if key in known}
        for key in sorted(set(values) - known):
            logger.debug("Dropping unknown key %s.%s", name, key)
        if accepted:
            current = getattr(base, section.value)
            updates[section.value] = current.model_copy(update=accepted)

    return base.model_copy(update=updates)


def parse(source: str | bytes) -> HKConfig:
    """Parse ``.hk`` text into a configuration merged over the defaults."""
    return merge_config(DEFAULT_CONFIG, parse_overrides(source))
