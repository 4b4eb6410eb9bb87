# src/nearbite/search/filters.py
"""
Attribute filters (candidate filtering before ranking).

A missing `FilterSpec` keeps every restaurant. Otherwise each present sub-filter must
hold (logical AND); absent sub-filters are vacuously true.
"""

from __future__ import annotations

from nearbite.domain.models import FilterSpec, Restaurant


def matches(restaurant: Restaurant, spec: FilterSpec | None) -> bool:
    """Return True if `restaurant` passes every filter present in `spec`."""
    if spec is None:
        return True
    # Exact (case-insensitive) equality, not substring: "Thai" must not match "Thai Fusion".
    if spec.cuisine is not None and restaurant.cuisine.casefold() != spec.cuisine.casefold():
        return False
    if spec.min_rating is not None and restaurant.rating < spec.min_rating:
        return False
    if spec.price_range is not None and restaurant.price_range != spec.price_range:
        return False
    return True
