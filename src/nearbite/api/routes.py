"""
API routes.

Endpoints:
- GET  `/api/restaurants`: nearest restaurants for `address=` or `lat=&lng=` (optional filters).
- POST `/api/restaurants`: nearest restaurants for `{latitude, longitude, filters?}`.
- GET  `/api/health`: liveness + catalog size.

The restaurant routes are also served without the `/api` prefix.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Callable

from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse

from nearbite.catalog.loader import get_catalog
from nearbite.config.settings import get_settings
from nearbite.core.errors import SearchError
from nearbite.domain.models import SearchResult
from nearbite.search.service import SearchService, build_search_service

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR_BODY = {"error": "Internal server error", "code": "INTERNAL_ERROR"}


@lru_cache
def _service() -> SearchService:
    return build_search_service(get_settings(), get_catalog())


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "code": code})


def _run(label: str, fn: Callable[[], SearchResult]) -> dict[str, Any] | JSONResponse:
    try:
        return fn().as_payload()
    except SearchError as e:
        return error_response(400, e.message, e.code)
    except Exception:
        logger.exception("Error in %s", label)
        return JSONResponse(status_code=500, content=dict(INTERNAL_ERROR_BODY))


@router.get("/api/restaurants")
@router.get("/restaurants", include_in_schema=False)
def get_restaurants(
    address: str | None = None,
    lat: str | None = None,
    lng: str | None = None,
    cuisine: str | None = None,
    min_rating: str | None = Query(default=None, alias="minRating"),
    price_range: str | None = Query(default=None, alias="priceRange"),
) -> Any:
    """Return the nearest restaurants to an address, explicit coordinates or the default point."""
    filters = {"cuisine": cuisine, "minRating": min_rating, "priceRange": price_range}
    return _run(
        "GET /api/restaurants",
        lambda: _service().search_by_params(address=address, lat=lat, lng=lng, filters=filters),
    )


@router.post("/api/restaurants")
@router.post("/restaurants", include_in_schema=False)
def post_restaurants(payload: Any = Body(default=None)) -> Any:
    """Return the nearest restaurants to explicit coordinates, with optional filters."""
    return _run("POST /api/restaurants", lambda: _service().search_by_body(payload))


@router.get("/api/health")
def get_health() -> Any:
    """Liveness probe; also confirms the catalog loaded."""
    try:
        size = len(_service().catalog)
    except Exception:
        logger.exception("Catalog unavailable")
        return JSONResponse(status_code=500, content=dict(INTERNAL_ERROR_BODY))
    return {"status": "ok", "restaurants": size}
