"""Pydantic models for Yelp v2 search responses.

Absent fields take zero values; only a field of the wrong type is an error.
"""

from typing import Any

import orjson
from pydantic import AliasChoices, BaseModel, Field, ValidationError

from yelpquery.exceptions import YelpAPIError, YelpResponseError


class Coordinates(BaseModel):
    """A latitude/longitude pair, also used for region spans (``*_delta`` keys)."""

    latitude: float = Field(default=0.0, validation_alias=AliasChoices("latitude", "latitude_delta"))
    longitude: float = Field(default=0.0, validation_alias=AliasChoices("longitude", "longitude_delta"))


class BusinessLocation(BaseModel):
    """Postal location of a business."""

    address: list[str] = Field(default_factory=list)
    city: str = ""
    coordinate: Coordinates | None = None
    country_code: str = ""
    display_address: list[str] = Field(default_factory=list)
    postal_code: str = ""
    state_code: str = ""


class Business(BaseModel):
    """A business returned by a search."""

    name: str = ""
    display_phone: str = ""
    phone: str = ""
    distance: float | None = None
    is_closed: bool = False
    rating: float | None = None
    location: BusinessLocation | None = None


class BusinessRegion(BaseModel):
    """Center of the searched region and its span."""

    center: Coordinates = Field(default_factory=Coordinates)
    span: Coordinates = Field(default_factory=Coordinates)


class Businesses(BaseModel):
    """Search result: the businesses found, the region searched and the total match count."""

    businesses: list[Business] = Field(default_factory=list)
    region: BusinessRegion | None = None
    total: int = 0


def parse_search_response(body: bytes | str) -> Businesses:
    """Decode a search response body.

    Raises:
        YelpAPIError: If Yelp answered with an ``error`` object
        YelpResponseError: If the body is not a valid search result
    """
    try:
        payload: Any = orjson.loads(body)
    except orjson.JSONDecodeError as e:
        raise YelpResponseError(f"Yelp response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise YelpResponseError(f"Expected a JSON object from Yelp, got {type(payload).__name__}")

    error = payload.get("error")
    if error is not None:
        if not isinstance(error, dict):
            raise YelpResponseError(f"Malformed error object in Yelp response: {error!r}")
        raise YelpAPIError.from_payload(error)

    try:
        return Businesses.model_validate(payload)
    except ValidationError as e:
        raise YelpResponseError(f"Unexpected Yelp response structure: {e}") from e
