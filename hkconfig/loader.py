"""Fail-soft loading of the user's ``.hk`` file at session start."""

from __future__ import annotations

import logging

from apps.filesystem import CONFIG_PATH, VirtualFileSystem
from hkconfig.parser import ConfigParseError, parse
from hkconfig.schema import DEFAULT_CONFIG, HKConfig

logger = logging.getLogger("hl.config")


def load_config(fs: VirtualFileSystem, path: str = CONFIG_PATH) -> HKConfig:
    """Read and parse the configuration, falling back to the defaults."""
    content = fs.read_file(path)
    if content is None:
        logger.info("No config at %s; using defaults.", path)
        return DEFAULT_CONFIG
    try:
        config = parse(content)
    except ConfigParseError as exc:
        logger.error("Failed to parse config %s: %s", path, exc)
        return DEFAULT_CONFIG
    logger.info("Loaded config from %s", path)
    return config
