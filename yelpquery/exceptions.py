"""Exception types raised while building, signing and sending Yelp search requests."""

from typing import Any


class YelpError(Exception):
    """Base class for every error raised by yelpquery."""


class SearchOptionError(YelpError, ValueError):
    """Raised when a search option cannot be applied to a query.

    Attributes:
        category: Name of the option category that rejected the option
        reason: Human-readable explanation
    """

    def __init__(self, category: str, reason: str) -> None:
        self.category = category
        self.reason = reason
        super().__init__(f"{category}: {reason}")


class DuplicateOptionError(SearchOptionError):
    """Raised when an option category has already been set on a query."""


class InvalidValueError(SearchOptionError):
    """Raised when an option payload fails its domain constraint."""


class SignerConfigurationError(YelpError, ValueError):
    """Raised when a signer is constructed without usable credentials."""


class YelpHTTPError(YelpError):
    """Raised when the HTTP request to the Yelp API fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class YelpResponseError(YelpError):
    """Raised when the Yelp API response body cannot be decoded."""


class YelpAPIError(YelpResponseError):
    """Raised when the Yelp API answers with an error payload."""

    def __init__(self, text: str, error_id: str, description: str = "") -> None:
        self.text = text
        self.error_id = error_id
        self.description = description
        message = f"Yelp API error {error_id}: {text}"
        if description:
            message = f"{message} ({description})"
        super().__init__(message)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "YelpAPIError":
        """Build the error from the ``error`` object of a Yelp response."""
        return cls(
            text=str(payload.get("text", "")),
            error_id=str(payload.get("id", "")),
            description=str(payload.get("description", "")),
        )
