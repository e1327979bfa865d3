"""Signed query building and search client for the Yelp v2 API."""

from yelpquery.client import YelpClient
from yelpquery.encoding import NonceSource, percent_encode
from yelpquery.exceptions import (
    DuplicateOptionError,
    InvalidValueError,
    SearchOptionError,
    SignerConfigurationError,
    YelpAPIError,
    YelpError,
    YelpHTTPError,
    YelpResponseError,
)
from yelpquery.models import Business, BusinessLocation, BusinessRegion, Businesses, Coordinates as ResponseCoordinates, parse_search_response
from yelpquery.oauth import OAuthCredentials, Signer
from yelpquery.options import (
    Bounds,
    BusinessCategory,
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
from yelpquery.query import OptionCategory, QueryElement, SearchQuery


__version__ = "0.1.0"

__all__ = [
    "Bounds",
    "Business",
    "BusinessCategory",
    "BusinessLocation",
    "BusinessRegion",
    "Businesses",
    "Categories",
    "Coordinates",
    "Deals",
    "DuplicateOptionError",
    "InvalidValueError",
    "Limit",
    "Location",
    "LocationWithHint",
    "NonceSource",
    "OAuthCredentials",
    "Offset",
    "OptionCategory",
    "QueryElement",
    "Radius",
    "ResponseCoordinates",
    "SearchOption",
    "SearchOptionError",
    "SearchQuery",
    "SignerConfigurationError",
    "Signer",
    "Sort",
    "SortMode",
    "Terms",
    "YelpAPIError",
    "YelpClient",
    "YelpError",
    "YelpHTTPError",
    "YelpResponseError",
    "apply_options",
    "parse_search_response",
    "percent_encode",
]
