# src/nearbite/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/nearbite/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `NEARBITE_LOG_LEVEL`, `NEARBITE_CATALOG_PATH`)
- an external YAML file via `NEARBITE_CONFIG_PATH`

Design rule:
- The known-places table, default location and result cap live in YAML, not in
  business logic. The resolver and search service receive them at construction.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from nearbite.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `nearbite.config`."""
    text = resources.files("nearbite.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "Nearbite"
    log_level: str = "INFO"


class CatalogSettings(BaseModel):
    path: str = "data/catalogs/restaurants.json"


class SearchSettings(BaseModel):
    result_cap: int = Field(5, ge=0)


class KnownPlace(BaseModel):
    """One row of the free-text lookup table (name and aliases map to a point)."""

    name: str
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    aliases: list[str] = Field(default_factory=list)


class DefaultLocation(BaseModel):
    label: str = "Default location (San Francisco)"
    lat: float = Field(37.7749, ge=-90, le=90)
    lon: float = Field(-122.4194, ge=-180, le=180)


class LocationSettings(BaseModel):
    default: DefaultLocation = Field(default_factory=DefaultLocation)
    # Order matters: the first place whose name/alias appears in the query wins.
    known_places: list[KnownPlace] = Field(default_factory=list)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    location: LocationSettings = Field(default_factory=LocationSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("NEARBITE_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    catalog_path = os.getenv("NEARBITE_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("NEARBITE_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
