"""
Path + `.env` helpers.

The catalog path in settings is usually relative (`data/catalogs/restaurants.json`).
It resolves against the source checkout that holds the `data/` directory, so uvicorn,
pytest and the CLI find the same file regardless of the working directory. An
installed copy without a checkout resolves against the working directory instead.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# src/nearbite/core/env.py -> repository root
_CHECKOUT_ROOT = Path(__file__).resolve().parents[3]


def get_data_root() -> Path:
    """Directory that relative data paths are resolved against."""
    if (_CHECKOUT_ROOT / "data").is_dir():
        return _CHECKOUT_ROOT
    return Path.cwd().resolve()


@lru_cache
def load_dotenv_if_present() -> str | None:
    """Load the nearest `.env` (searching up from the working directory) once.

    Never overrides variables already set in the process environment.
    """
    path = find_dotenv(usecwd=True)
    if not path:
        return None
    load_dotenv(dotenv_path=path, override=False)
    return path


def resolve_data_path(path: str | Path) -> Path:
    """Resolve a possibly-relative data path (absolute paths pass through)."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (get_data_root() / p).resolve()
