"""
Nearbite CLI entrypoint.

This CLI is intended for quick local demos and debugging without the HTTP API.
It delegates all search logic to `nearbite.search.service.SearchService`.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from nearbite.catalog.loader import get_catalog
from nearbite.config.settings import get_settings
from nearbite.core.errors import SearchError
from nearbite.core.logging import configure_logging
from nearbite.search.service import build_search_service


def _cmd_search(args: argparse.Namespace) -> int:
    """Handle the `search` subcommand."""
    service = build_search_service(get_settings(), get_catalog())
    filters = {"cuisine": args.cuisine, "minRating": args.min_rating, "priceRange": args.price_range}

    try:
        result = service.search_by_params(address=args.address, lat=args.lat, lng=args.lng, filters=filters)
    except SearchError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.as_payload(), ensure_ascii=False, indent=2))
        return 0

    loc = result.search_location
    print(f"Search location: {loc.address} ({loc.latitude:.4f}, {loc.longitude:.4f}) [{loc.source}]")
    if not result.restaurants:
        print("No restaurants matched.")
        return 0
    for i, item in enumerate(result.restaurants, start=1):
        r = item.restaurant
        print(f"{i:>2}. {r.name} ({r.cuisine}, {r.price_range}, {r.rating:.1f})  {item.distance:.2f} km")
        print(f"    {r.address}  {r.opening_hours}-{r.closing_hours}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the Nearbite CLI."""
    parser = argparse.ArgumentParser(prog="nearbite")
    sub = parser.add_subparsers(dest="command", required=True)

    s = sub.add_parser("search", help="Find the nearest restaurants to an address or coordinates.")
    s.add_argument("--address", type=str, default=None, help="Free-text place, e.g. 'Mission District'")
    s.add_argument("--lat", type=str, default=None)
    s.add_argument("--lng", type=str, default=None)
    s.add_argument("--cuisine", type=str, default=None)
    s.add_argument("--min-rating", dest="min_rating", type=str, default=None, help="0..5, inclusive")
    s.add_argument("--price-range", dest="price_range", choices=["$", "$$", "$$$", "$$$$"], default=None)
    s.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    s.set_defaults(func=_cmd_search)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m nearbite.cli`."""
    configure_logging(get_settings())
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
