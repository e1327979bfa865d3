"""Typed Yelp search options.

Each option validates its payload, formats it into wire form and appends it to
a ``SearchQuery``. Options belong to a category that may only be set once per
query; the four location options (``Location``, ``Coordinates``,
``LocationWithHint`` and ``Bounds``) all share the location category.

A failing ``apply`` leaves the query exactly as it was: every check runs
before the first element is appended.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Any, ClassVar

from yelpquery.exceptions import InvalidValueError
from yelpquery.query import OptionCategory, SearchQuery


MAX_LIMIT = 20
MAX_RADIUS_METERS = 40000


class SortMode(IntEnum):
    """Result ordering supported by the search endpoint."""

    BEST_MATCHED = 0
    DISTANCE = 1
    HIGHEST_RATED = 2


class BusinessCategory(IntEnum):
    """Business categories accepted by the category filter."""

    ACTIVE = 0
    ARTS_ENTERTAINMENT = 1
    AUTOMOTIVE = 2
    BEAUTY_SPAS = 3
    GOLF = 4
    NIGHTLIFE = 5
    BARS = 6
    RESTAURANTS = 7

    @property
    def short_name(self) -> str:
        return CATEGORY_SHORT_NAMES[self]


CATEGORY_SHORT_NAMES: dict[BusinessCategory, str] = {
    BusinessCategory.ACTIVE: "active",
    BusinessCategory.ARTS_ENTERTAINMENT: "arts",
    BusinessCategory.AUTOMOTIVE: "auto",
    BusinessCategory.BEAUTY_SPAS: "beautysvc",
    BusinessCategory.GOLF: "golf",
    BusinessCategory.NIGHTLIFE: "nightlife",
    BusinessCategory.BARS: "bars",
    BusinessCategory.RESTAURANTS: "restaurants",
}


def format_coordinate(value: float) -> str:
    """Format a coordinate as the shortest decimal that round-trips, without exponent.

    Integral values drop the fractional part: ``52.0`` becomes ``"52"``.
    """
    return format(Decimal(repr(float(value))).normalize(), "f")


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _valid_lat_lon(latitude: Any, longitude: Any) -> bool:
    if not (_is_number(latitude) and _is_number(longitude)):
        return False
    # Comparisons with NaN are always False, so NaN fails here as well
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def _check_lat_lon(category: OptionCategory, latitude: Any, longitude: Any, label: str = "") -> None:
    if not _valid_lat_lon(latitude, longitude):
        prefix = f"{label} " if label else ""
        raise InvalidValueError(category.value, f"Invalid {prefix}latitude and/or longitude: {latitude}, {longitude}")


def _check_int(category: OptionCategory, value: Any, minimum: int, maximum: int | None = None) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidValueError(category.value, f"Expected an integer, got {value!r}")
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f"{minimum}..{maximum}" if maximum is not None else f">= {minimum}"
        raise InvalidValueError(category.value, f"Invalid {category.value}: {value} (allowed {bounds})")
    return value


def _check_name(category: OptionCategory, name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidValueError(category.value, "Location name must be a non-empty string")
    return name.replace(" ", "+")


class _SearchOption:
    """Shared apply protocol: claim the category, validate, append, mark."""

    category: ClassVar[OptionCategory]

    def apply(self, query: SearchQuery) -> None:
        """Validate this option and append its elements to ``query``.

        Raises:
            DuplicateOptionError: If the option's category is already set
            InvalidValueError: If the payload is outside its allowed range
        """
        query.claim(self.category)
        elements = self.query_elements()
        for name, value in elements:
            query.append(name, value)
        query.mark_applied(self.category)

    def query_elements(self) -> list[tuple[str, str]]:
        """Return the validated ``(name, value)`` pairs for this option."""
        raise NotImplementedError


@dataclass(frozen=True)
class Location(_SearchOption):
    """A location given by name, e.g. ``"San Francisco"``."""

    name: str

    category: ClassVar[OptionCategory] = OptionCategory.LOCATION

    def query_elements(self) -> list[tuple[str, str]]:
        return [("location", _check_name(self.category, self.name))]


@dataclass(frozen=True)
class Coordinates(_SearchOption):
    """A location given by latitude and longitude."""

    latitude: float
    longitude: float

    category: ClassVar[OptionCategory] = OptionCategory.LOCATION

    def query_elements(self) -> list[tuple[str, str]]:
        _check_lat_lon(self.category, self.latitude, self.longitude)
        return [("ll", f"{format_coordinate(self.latitude)},{format_coordinate(self.longitude)}")]


@dataclass(frozen=True)
class LocationWithHint(_SearchOption):
    """A location name with coordinates used to disambiguate it."""

    name: str
    latitude: float
    longitude: float

    category: ClassVar[OptionCategory] = OptionCategory.LOCATION

    def query_elements(self) -> list[tuple[str, str]]:
        location = _check_name(self.category, self.name)
        _check_lat_lon(self.category, self.latitude, self.longitude)
        return [
            ("location", location),
            ("cll", f"{format_coordinate(self.latitude)},{format_coordinate(self.longitude)}"),
        ]


@dataclass(frozen=True)
class Bounds(_SearchOption):
    """A bounding box given by its south-west and north-east corners."""

    sw_latitude: float
    sw_longitude: float
    ne_latitude: float
    ne_longitude: float

    category: ClassVar[OptionCategory] = OptionCategory.LOCATION

    def query_elements(self) -> list[tuple[str, str]]:
        _check_lat_lon(self.category, self.sw_latitude, self.sw_longitude, "southwest")
        _check_lat_lon(self.category, self.ne_latitude, self.ne_longitude, "northeast")
        south_west = f"{format_coordinate(self.sw_latitude)},{format_coordinate(self.sw_longitude)}"
        north_east = f"{format_coordinate(self.ne_latitude)},{format_coordinate(self.ne_longitude)}"
        return [("bounds", f"{south_west}|{north_east}")]


@dataclass(frozen=True)
class Terms(_SearchOption):
    """Search terms, e.g. ``["food", "thai curry"]``."""

    terms: Sequence[str]

    category: ClassVar[OptionCategory] = OptionCategory.TERM

    def query_elements(self) -> list[tuple[str, str]]:
        if isinstance(self.terms, str | bytes) or not all(isinstance(term, str) for term in self.terms):
            raise InvalidValueError(self.category.value, "Search terms must be a list of strings")
        if not self.terms:
            raise InvalidValueError(self.category.value, "No search terms are specified")
        return [("term", ",".join(term.replace(" ", "+") for term in self.terms))]


@dataclass(frozen=True)
class Limit(_SearchOption):
    """Maximum number of businesses to return (0 to 20)."""

    value: int

    category: ClassVar[OptionCategory] = OptionCategory.LIMIT

    def query_elements(self) -> list[tuple[str, str]]:
        return [("limit", str(_check_int(self.category, self.value, 0, MAX_LIMIT)))]


@dataclass(frozen=True)
class Offset(_SearchOption):
    """Number of businesses to skip, used with ``Limit`` for paging."""

    value: int

    category: ClassVar[OptionCategory] = OptionCategory.OFFSET

    def query_elements(self) -> list[tuple[str, str]]:
        return [("offset", str(_check_int(self.category, self.value, 0)))]


@dataclass(frozen=True)
class Sort(_SearchOption):
    """Ordering of the returned businesses."""

    mode: SortMode | int

    category: ClassVar[OptionCategory] = OptionCategory.SORT

    def query_elements(self) -> list[tuple[str, str]]:
        if not isinstance(self.mode, int) or isinstance(self.mode, bool):
            raise InvalidValueError(self.category.value, f"Invalid sorting method: {self.mode!r}")
        try:
            mode = SortMode(self.mode)
        except ValueError as e:
            raise InvalidValueError(self.category.value, f"Invalid sorting method: {self.mode!r}") from e
        return [("sort", str(int(mode)))]


@dataclass(frozen=True)
class Categories(_SearchOption):
    """Only return businesses in one of the given categories."""

    categories: Sequence[BusinessCategory | int]

    category: ClassVar[OptionCategory] = OptionCategory.CATEGORY_FILTER

    def query_elements(self) -> list[tuple[str, str]]:
        if not self.categories:
            raise InvalidValueError(self.category.value, "No search categories are specified")

        names = []
        for code in self.categories:
            if not isinstance(code, int) or isinstance(code, bool) or code not in CATEGORY_SHORT_NAMES:
                raise InvalidValueError(self.category.value, f"Invalid search category: {code!r}")
            names.append(BusinessCategory(code).short_name)
        return [("category_filter", ",".join(names))]


@dataclass(frozen=True)
class Radius(_SearchOption):
    """Search radius in meters (at most 40000)."""

    meters: int

    category: ClassVar[OptionCategory] = OptionCategory.RADIUS

    def query_elements(self) -> list[tuple[str, str]]:
        return [("radius_filter", str(_check_int(self.category, self.meters, 0, MAX_RADIUS_METERS)))]


@dataclass(frozen=True)
class Deals(_SearchOption):
    """Only return businesses offering deals when enabled."""

    enabled: bool = True

    category: ClassVar[OptionCategory] = OptionCategory.DEALS

    def query_elements(self) -> list[tuple[str, str]]:
        return [("deals_filter", "true" if self.enabled else "false")]


SearchOption = Location | Coordinates | LocationWithHint | Bounds | Terms | Limit | Offset | Sort | Categories | Radius | Deals


def apply_options(options: Iterable[SearchOption], query: SearchQuery | None = None) -> SearchQuery:
    """Apply ``options`` in order to ``query`` (a new one by default) and return it."""
    target = query if query is not None else SearchQuery()
    for option in options:
        option.apply(target)
    return target
