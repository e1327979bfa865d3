"""Command line search against the Yelp v2 API.

Credentials are read from the environment (see ``common.config.YelpConfig``):
    yelp-search --term "thai food" --location "San Francisco" --limit 5
    yelp-search --ll 37.77,-122.42 --radius 2000 --dry-run
"""

import argparse
import asyncio
from collections.abc import Callable, Sequence
import sys

from common.config import YelpConfig, setup_logging
from yelpquery.client import YelpClient
from yelpquery.exceptions import YelpError
from yelpquery.models import Businesses
from yelpquery.options import (
    CATEGORY_SHORT_NAMES,
    Bounds,
    Categories,
    Coordinates,
    Deals,
    Limit,
    Location,
    LocationWithHint,
    Offset,
    Radius,
    SearchOption,
    Sort,
    SortMode,
    Terms,
    apply_options,
)


SORT_CHOICES = {
    "best-matched": SortMode.BEST_MATCHED,
    "distance": SortMode.DISTANCE,
    "highest-rated": SortMode.HIGHEST_RATED,
}
CATEGORY_CHOICES = {name: code for code, name in CATEGORY_SHORT_NAMES.items()}


def _float_list(count: int) -> Callable[[str], tuple[float, ...]]:
    def parse(value: str) -> tuple[float, ...]:
        parts = value.split(",")
        if len(parts) != count:
            raise argparse.ArgumentTypeError(f"expected {count} comma-separated numbers, got {value!r}")
        try:
            return tuple(float(part) for part in parts)
        except ValueError as e:
            raise argparse.ArgumentTypeError(f"invalid number in {value!r}") from e

    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yelp-search",
        description="Search businesses with the Yelp v2 API.",
        epilog="Reads credentials from YELP_CONSUMER_KEY, YELP_CONSUMER_SECRET, YELP_TOKEN and YELP_TOKEN_SECRET.",
    )
    parser.add_argument("--term", action="append", metavar="TERM", help="Search term (repeatable)")
    parser.add_argument("--location", metavar="NAME", help="Location name, e.g. 'San Francisco'")
    parser.add_argument("--ll", type=_float_list(2), metavar="LAT,LON", help="Coordinates, or a hint for --location")
    parser.add_argument("--bounds", type=_float_list(4), metavar="SW_LAT,SW_LON,NE_LAT,NE_LON", help="Bounding box")
    parser.add_argument("--limit", type=int, help="Number of businesses to return (0-20)")
    parser.add_argument("--offset", type=int, help="Number of businesses to skip")
    parser.add_argument("--sort", choices=sorted(SORT_CHOICES), help="Result ordering")
    parser.add_argument("--category", action="append", choices=sorted(CATEGORY_CHOICES), help="Category filter (repeatable)")
    parser.add_argument("--radius", type=int, metavar="METERS", help="Search radius in meters (max 40000)")
    parser.add_argument("--deals", action="store_true", help="Only businesses offering deals")
    parser.add_argument("--dry-run", action="store_true", help="Print the signed request URL instead of searching")
    parser.add_argument("--log-level", default=None, help="Logging level (defaults to LOG_LEVEL or INFO)")
    return parser


def build_options(args: argparse.Namespace) -> list[SearchOption]:
    """Translate parsed arguments into search options."""
    options: list[SearchOption] = []

    if args.location and args.ll:
        options.append(LocationWithHint(args.location, *args.ll))
    elif args.location:
        options.append(Location(args.location))
    elif args.ll:
        options.append(Coordinates(*args.ll))
    if args.bounds:
        options.append(Bounds(*args.bounds))

    if args.term:
        options.append(Terms(args.term))
    if args.limit is not None:
        options.append(Limit(args.limit))
    if args.offset is not None:
        options.append(Offset(args.offset))
    if args.sort:
        options.append(Sort(SORT_CHOICES[args.sort]))
    if args.category:
        options.append(Categories([CATEGORY_CHOICES[name] for name in args.category]))
    if args.radius is not None:
        options.append(Radius(args.radius))
    if args.deals:
        options.append(Deals(True))

    return options


def print_businesses(result: Businesses) -> None:
    print(f"Found {result.total} businesses, showing {len(result.businesses)}")
    for business in result.businesses:
        city = business.location.city if business.location else ""
        rating = f"{business.rating:.1f}" if business.rating is not None else "-"
        print(f"  {rating}  {business.name}  {city}".rstrip())


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the yelp-search CLI tool."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging("yelp-search", level=args.log_level)

    try:
        config = YelpConfig.from_env()
        client = YelpClient.from_config(config)
        query = apply_options(build_options(args))

        if args.dry_run:
            print(client.signed_url(query))
            return

        result = asyncio.run(client.search_query(query))
    except (YelpError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    print_businesses(result)


if __name__ == "__main__":
    main()
