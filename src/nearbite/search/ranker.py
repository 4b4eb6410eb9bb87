from __future__ import annotations

from typing import Sequence

from nearbite.core.geo import GeoPoint, haversine_km
from nearbite.domain.models import FilterSpec, RankedRestaurant, Restaurant
from nearbite.search.filters import matches


def rank(
    origin: GeoPoint,
    catalog: Sequence[Restaurant],
    spec: FilterSpec | None,
    cap: int,
) -> list[RankedRestaurant]:
    """Return the `cap` nearest restaurants passing `spec`, nearest first.

    `list.sort` is stable, so equal distances keep catalog order. The catalog is
    only read; a fresh list is built per call.
    """
    if cap < 0:
        raise ValueError("cap must be >= 0")

    candidates = [
        RankedRestaurant(restaurant=r, distance=haversine_km(origin, r.location))
        for r in catalog
        if matches(r, spec)
    ]
    candidates.sort(key=lambda item: item.distance)
    return candidates[:cap]
