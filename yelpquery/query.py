"""Ordered search query container with option conflict tracking."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from yelpquery.exceptions import DuplicateOptionError


class OptionCategory(str, Enum):
    """Search option categories that may each be set once per query."""

    TERM = "term"
    LIMIT = "limit"
    OFFSET = "offset"
    SORT = "sort"
    CATEGORY_FILTER = "category_filter"
    RADIUS = "radius_filter"
    DEALS = "deals_filter"
    LOCATION = "location"


@dataclass(frozen=True)
class QueryElement:
    """A single name/value pair, value already in wire form."""

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


class SearchQuery:
    """An ordered list of query elements plus the set of applied option categories.

    Elements keep insertion order until ``sort`` is called. The applied
    categories are only touched by search options; ``append`` alone never
    sets them, so a query can also be built by hand.
    """

    def __init__(self, elements: list[QueryElement] | None = None) -> None:
        self._elements: list[QueryElement] = list(elements or [])
        self._applied: set[OptionCategory] = set()

    def append(self, name: str, value: str) -> None:
        """Add an element at the end of the query."""
        self._elements.append(QueryElement(name, value))

    def sort(self) -> None:
        """Order the elements by name."""
        self._elements.sort(key=lambda element: element.name)

    def serialize(self) -> str:
        """Join the elements as ``name=value`` pairs separated by ``&``."""
        return "&".join(str(element) for element in self._elements)

    def copy(self) -> "SearchQuery":
        """Return an independent copy of the elements and applied categories."""
        duplicate = SearchQuery(self._elements)
        duplicate._applied = set(self._applied)
        return duplicate

    @property
    def elements(self) -> tuple[QueryElement, ...]:
        return tuple(self._elements)

    def is_applied(self, category: OptionCategory) -> bool:
        return category in self._applied

    def claim(self, category: OptionCategory) -> None:
        """Raise if ``category`` has already been set on this query."""
        if category in self._applied:
            raise DuplicateOptionError(category.value, f"Attempting to set {category.value} a second time")

    def mark_applied(self, category: OptionCategory) -> None:
        self.claim(category)
        self._applied.add(category)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[QueryElement]:
        return iter(self._elements)

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"SearchQuery({self.serialize()!r})"
