"""Tests for yelpquery/client.py."""

from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from common.config import YelpConfig
from tests.conftest import FIXED_NONCE, TEST_URL, FixedNonceSource, make_mock_httpx_client
from yelpquery.client import YelpClient
from yelpquery.exceptions import DuplicateOptionError, InvalidValueError, SignerConfigurationError, YelpAPIError, YelpHTTPError, YelpResponseError
from yelpquery.options import Bounds, Coordinates, Limit, Location, Terms, apply_options
from yelpquery.query import SearchQuery


@pytest.fixture
def client(fixed_nonce_source: FixedNonceSource, fixed_clock: Any) -> YelpClient:
    return YelpClient(
        TEST_URL,
        "ckey",
        "csecret",  # noqa: S106
        "tok",  # noqa: S106
        "tsecret",  # noqa: S106
        nonce_source=fixed_nonce_source,
        clock=fixed_clock,
    )


class TestYelpClientConstruction:
    """Tests for YelpClient construction."""

    def test_missing_credentials_fail_immediately(self) -> None:
        with pytest.raises(SignerConfigurationError, match="token_secret"):
            YelpClient(TEST_URL, "ckey", "csecret", "tok", "")  # noqa: S106

    def test_from_config(self) -> None:
        config = YelpConfig(
            consumer_key="ckey",
            consumer_secret="csecret",  # noqa: S106
            token="tok",  # noqa: S106
            token_secret="tsecret",  # noqa: S106
            search_url="https://example.com/v2/search",
            request_timeout=5.0,
        )
        client = YelpClient.from_config(config)

        assert client.url == "https://example.com/v2/search"
        assert client.timeout == 5.0


class TestSignedUrl:
    """Tests for YelpClient.signed_url."""

    def test_url_layout(self, client: YelpClient) -> None:
        query = apply_options([Terms(["bar"]), Location("Delft")])
        url = client.signed_url(query)

        base, _, query_string = url.partition("?")
        assert base == TEST_URL
        assert query_string.startswith("location=Delft&oauth_consumer_key=ckey&")
        assert f"oauth_nonce={FIXED_NONCE}" in query_string
        assert "&term=bar&oauth_signature=" in query_string

    def test_original_query_untouched(self, client: YelpClient) -> None:
        query = apply_options([Terms(["bar"]), Location("Delft")])
        client.signed_url(query)
        client.signed_url(query)

        assert query.serialize() == "term=bar&location=Delft"

    def test_manual_query(self, client: YelpClient) -> None:
        query = SearchQuery()
        query.append("term", "food")
        assert "&term=food&oauth_signature=" in client.signed_url(query)


class TestSearchQuery:
    """Tests for YelpClient.search_query."""

    @pytest.mark.asyncio
    async def test_success_returns_businesses(self, client: YelpClient, sample_search_response: dict[str, Any]) -> None:
        mock_client, _ = make_mock_httpx_client(200, sample_search_response)

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client):
            result = await client.search_query(apply_options([Terms(["thai"])]))

        assert result.total == 42
        assert result.businesses[0].name == "Thai Curry House"

    @pytest.mark.asyncio
    async def test_requests_signed_url(self, client: YelpClient, sample_search_response: dict[str, Any]) -> None:
        mock_client, _ = make_mock_httpx_client(200, sample_search_response)
        query = apply_options([Terms(["thai"])])

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client):
            await client.search_query(query)

        mock_client.get.assert_awaited_once_with(client.signed_url(query))

    @pytest.mark.asyncio
    async def test_error_payload_raises_api_error(self, client: YelpClient, sample_error_response: dict[str, Any]) -> None:
        mock_client, _ = make_mock_httpx_client(400, sample_error_response)

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client), pytest.raises(YelpAPIError, match="INVALID_PARAMETER"):
            await client.search_query(SearchQuery())

    @pytest.mark.asyncio
    async def test_error_payload_with_200_raises_api_error(self, client: YelpClient, sample_error_response: dict[str, Any]) -> None:
        mock_client, _ = make_mock_httpx_client(200, sample_error_response)

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client), pytest.raises(YelpAPIError):
            await client.search_query(SearchQuery())

    @pytest.mark.asyncio
    async def test_bare_error_status_raises_http_error(self, client: YelpClient) -> None:
        mock_client, _ = make_mock_httpx_client(503, b"Service Unavailable")

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client), pytest.raises(YelpHTTPError, match="503") as exc_info:
            await client.search_query(SearchQuery())

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_failure_raises_http_error(self, client: YelpClient) -> None:
        mock_client, _ = make_mock_httpx_client(200, {})
        mock_client.get = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

        with (
            patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client),
            pytest.raises(YelpHTTPError, match="Failed to perform HTTP request"),
        ):
            await client.search_query(SearchQuery())

    @pytest.mark.asyncio
    async def test_undecodable_body_raises_response_error(self, client: YelpClient) -> None:
        mock_client, _ = make_mock_httpx_client(200, b"not json")

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client), pytest.raises(YelpResponseError):
            await client.search_query(SearchQuery())


class TestSearchOptions:
    """Tests for YelpClient.search_options."""

    @pytest.mark.asyncio
    async def test_applies_options(self, client: YelpClient, sample_search_response: dict[str, Any]) -> None:
        mock_client, _ = make_mock_httpx_client(200, sample_search_response)

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client):
            result = await client.search_options(Terms(["thai"]), Location("San Francisco"), Limit(5))

        assert result.total == 42
        requested_url = mock_client.get.await_args.args[0]
        assert "limit=5&location=San+Francisco&oauth_consumer_key=ckey" in requested_url

    @pytest.mark.asyncio
    async def test_duplicate_location_is_not_sent(self, client: YelpClient) -> None:
        mock_client, _ = make_mock_httpx_client(200, {})

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client), pytest.raises(DuplicateOptionError):
            await client.search_options(Coordinates(0, 0), Bounds(0, 0, 1, 1))

        mock_client.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_limit_is_not_sent(self, client: YelpClient) -> None:
        mock_client, _ = make_mock_httpx_client(200, {})

        with patch("yelpquery.client.httpx.AsyncClient", return_value=mock_client), pytest.raises(InvalidValueError):
            await client.search_options(Limit(25))

        mock_client.get.assert_not_awaited()
