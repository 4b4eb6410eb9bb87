"""
Logging configuration.

Handlers and formatters come from the packaged `config/logging.yaml`; the level comes
from `Settings.app.log_level` (env: `NEARBITE_LOG_LEVEL`).
"""

from __future__ import annotations

import copy
import logging.config

from nearbite.config.settings import Settings, get_logging_config, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the YAML logging config at the level configured for this process."""
    settings = settings or get_settings()
    level = settings.app.log_level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level '{settings.app.log_level}'")

    # The cached YAML dict is shared; never mutate it in place.
    config = copy.deepcopy(get_logging_config())
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        handler["level"] = level

    logging.config.dictConfig(config)
