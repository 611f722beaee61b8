"""Load timeline configuration from YAML."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import yaml

from event_timeline.models import TimelineConfig

logger = logging.getLogger(__name__)


def load_timeline_config(yaml_path: str, overrides: Optional[Mapping[str, Any]] = None) -> TimelineConfig:
    """Load a ``TimelineConfig`` from a YAML file.

    Options may sit under a top-level ``timeline:`` key or at the top level.
    Unreadable or malformed files fall back to the defaults; invalid option
    values still raise ``ValueError``.

    Args:
        yaml_path: Path to the YAML file
        overrides: Options applied on top of the file contents
    """
    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load timeline config from %s: %s", yaml_path, e)
        cfg = {}

    if not isinstance(cfg, Mapping):
        logger.warning("Ignoring timeline config %s: expected a mapping, got %s", yaml_path, type(cfg).__name__)
        cfg = {}

    options = cfg.get("timeline", cfg)
    if not isinstance(options, Mapping):
        logger.warning("Ignoring 'timeline' section in %s: expected a mapping", yaml_path)
        options = {}

    merged = dict(options)
    if overrides:
        merged.update(overrides)
    return TimelineConfig.from_dict(merged)
