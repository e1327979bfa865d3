"""Shared pytest fixtures and configuration."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import orjson
import pytest

from yelpquery.encoding import NonceSource
from yelpquery.oauth import OAuthCredentials


TEST_URL = "http://api.yelp.com/v2/search"
FIXED_NONCE = "abcdefghijklmnopqrstuvwxyzABCD"
FIXED_TIMESTAMP = 1_400_000_000


class FixedNonceSource(NonceSource):
    """Nonce source that always returns the same nonce."""

    def __init__(self, nonce: str = FIXED_NONCE) -> None:
        super().__init__(seed=0)
        self.nonce = nonce

    def next(self, length: int) -> str:
        return self.nonce[:length]


@pytest.fixture
def credentials() -> OAuthCredentials:
    """Test OAuth credentials."""
    return OAuthCredentials(
        consumer_key="ckey",
        consumer_secret="csecret",  # noqa: S106
        token="tok",  # noqa: S106
        token_secret="tsecret",  # noqa: S106
    )


@pytest.fixture
def fixed_nonce_source() -> FixedNonceSource:
    return FixedNonceSource()


@pytest.fixture
def fixed_clock() -> Any:
    return lambda: float(FIXED_TIMESTAMP)


@pytest.fixture
def sample_search_response() -> dict[str, Any]:
    """Sample Yelp search response payload."""
    return {
        "businesses": [
            {
                "name": "Thai Curry House",
                "display_phone": "+1-415-555-0100",
                "phone": "4155550100",
                "distance": 312.5,
                "is_closed": False,
                "rating": 4.5,
                "location": {
                    "address": ["1 Market St"],
                    "city": "San Francisco",
                    "coordinate": {"latitude": 37.7749, "longitude": -122.4194},
                    "country_code": "US",
                    "display_address": ["1 Market St", "San Francisco, CA 94105"],
                    "postal_code": "94105",
                    "state_code": "CA",
                },
            },
        ],
        "region": {
            "center": {"latitude": 37.7749, "longitude": -122.4194},
            "span": {"latitude_delta": 0.02, "longitude_delta": 0.03},
        },
        "total": 42,
    }


@pytest.fixture
def sample_error_response() -> dict[str, Any]:
    """Sample Yelp error payload."""
    return {
        "error": {
            "text": "One or more parameters are invalid in request",
            "id": "INVALID_PARAMETER",
            "description": "limit",
        }
    }


def make_mock_httpx_client(status_code: int, payload: Any) -> tuple[AsyncMock, MagicMock]:
    """Build a mock httpx.AsyncClient whose ``get`` returns the given response."""
    body = payload if isinstance(payload, bytes) else orjson.dumps(payload)

    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.content = body
    mock_response.text = body.decode("utf-8", errors="replace")

    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client.get = AsyncMock(return_value=mock_response)

    return mock_client, mock_response


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set up test environment variables."""
    test_env = {
        "YELP_CONSUMER_KEY": "ckey",
        "YELP_CONSUMER_SECRET": "csecret",
        "YELP_TOKEN": "tok",
        "YELP_TOKEN_SECRET": "tsecret",
    }

    for key, value in test_env.items():
        monkeypatch.setenv(key, value)
    for key in ("YELP_SEARCH_URL", "YELP_REQUEST_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
