"""
Restaurant catalog loader.

The catalog is a local JSON file (default: `data/catalogs/restaurants.json`) holding
either `{"restaurants": [...]}` or a bare list. We validate it into frozen Pydantic
models and hand it out as a tuple, so every request shares the same read-only data.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from functools import lru_cache
from pathlib import Path

from pydantic import TypeAdapter

from nearbite.config.settings import get_settings
from nearbite.core.env import resolve_data_path
from nearbite.domain.models import Restaurant

logger = logging.getLogger(__name__)

_RESTAURANTS_ADAPTER = TypeAdapter(list[Restaurant])


def load_restaurants(path: str | Path) -> tuple[Restaurant, ...]:
    """Load and validate a restaurant catalog JSON file."""
    resolved = resolve_data_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("restaurants", [])
    restaurants = _RESTAURANTS_ADAPTER.validate_python(payload)

    counts = Counter(r.id for r in restaurants)
    dup = sorted(i for i, n in counts.items() if n > 1)
    if dup:
        raise ValueError(f"Duplicate restaurant ids in {resolved}: {', '.join(dup)}")

    logger.info("Loaded %d restaurants from %s", len(restaurants), resolved)
    return tuple(restaurants)


@lru_cache
def get_catalog() -> tuple[Restaurant, ...]:
    """Load the configured catalog once per process."""
    return load_restaurants(get_settings().catalog.path)
