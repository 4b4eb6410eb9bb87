from __future__ import annotations

# This module is the "orchestrator" for one search request.
# It wires together:
# - raw request input (query-string params or a JSON body)
# - location resolution (coordinates / known place / default)
# - filtering + distance ranking over the shared catalog
# - the SearchResult payload returned to API and CLI
#
# The service holds no per-request state, so one instance is shared by all requests.

import logging
import time
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from nearbite.config.settings import Settings
from nearbite.core.errors import InvalidCoordinate, InvalidFilter, MissingRequiredField, SearchError
from nearbite.domain.models import FilterSpec, LocationQuery, Restaurant, SearchLocation, SearchResult
from nearbite.location.resolver import LocationResolver
from nearbite.search.ranker import rank

logger = logging.getLogger(__name__)

RESULT_CAP = 5


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_coordinate_param(value: str, name: str) -> float:
    try:
        return float(value.strip())
    except ValueError as e:
        raise InvalidCoordinate(f"Invalid coordinates provided: {name} is not a number") from e


def build_filter_spec(raw: Mapping[str, Any] | None) -> FilterSpec | None:
    """Map a `filters` object (JSON body or query params) to a FilterSpec."""
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise InvalidFilter("filters must be an object")
    present = {k: v for k, v in raw.items() if not _blank(v)}
    try:
        spec = FilterSpec.model_validate(present)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidFilter(f"Invalid filters: {fields}") from e
    return None if spec.is_empty() else spec


class SearchService:
    """Resolve a location, rank the catalog around it and return the nearest entries."""

    def __init__(
        self,
        catalog: Sequence[Restaurant],
        resolver: LocationResolver,
        *,
        result_cap: int = RESULT_CAP,
    ):
        if result_cap < 0:
            raise ValueError("result_cap must be >= 0")
        self._catalog = tuple(catalog)
        self._resolver = resolver
        self._result_cap = int(result_cap)

    @property
    def catalog(self) -> tuple[Restaurant, ...]:
        return self._catalog

    @property
    def result_cap(self) -> int:
        return self._result_cap

    def search(self, query: LocationQuery | None, filters: FilterSpec | None = None) -> SearchResult:
        """Run one search. Raises `SearchError` subclasses for invalid input."""
        t0 = time.monotonic()
        # Coordinates are validated here, before any distance is computed.
        resolved = self._resolver.resolve(query)
        results = rank(resolved.point, self._catalog, filters, self._result_cap)
        logger.debug(
            "Search source=%s point=(%.5f, %.5f) filters=%s results=%d in %dms",
            resolved.source,
            resolved.point.lat,
            resolved.point.lon,
            filters.model_dump(exclude_none=True) if filters else None,
            len(results),
            int((time.monotonic() - t0) * 1000),
        )
        return SearchResult(
            restaurants=results,
            search_location=SearchLocation(
                latitude=resolved.point.lat,
                longitude=resolved.point.lon,
                address=resolved.label,
                source=resolved.source,
            ),
        )

    def search_by_params(
        self,
        *,
        address: str | None = None,
        lat: str | None = None,
        lng: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> SearchResult:
        """Query-string request shape: `address=...` or `lat=...&lng=...`."""
        has_lat = not _blank(lat)
        has_lng = not _blank(lng)
        if has_lat != has_lng:
            raise MissingRequiredField("Both lat and lng are required when either is given")

        if has_lat and has_lng:
            query = LocationQuery(
                latitude=_parse_coordinate_param(lat, "lat"),
                longitude=_parse_coordinate_param(lng, "lng"),
            )
        else:
            query = LocationQuery(address=address)
        return self.search(query, build_filter_spec(filters))

    def search_by_body(self, payload: Any) -> SearchResult:
        """JSON body request shape: `{latitude, longitude, filters?}`."""
        if not isinstance(payload, Mapping):
            raise SearchError("Request body must be a JSON object")
        latitude = payload.get("latitude")
        longitude = payload.get("longitude")
        # Zero is a valid coordinate; only absent/null counts as missing.
        if latitude is None or longitude is None:
            raise MissingRequiredField("Latitude and longitude are required")
        spec = build_filter_spec(payload.get("filters"))
        return self.search(LocationQuery(latitude=latitude, longitude=longitude), spec)


def build_search_service(settings: Settings, catalog: Sequence[Restaurant]) -> SearchService:
    """Build a service from settings (resolver table, result cap) and a loaded catalog."""
    return SearchService(
        catalog,
        LocationResolver(settings.location),
        result_cap=settings.search.result_cap,
    )
