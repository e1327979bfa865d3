"""Async client for the Yelp v2 search API.

Queries can be built two ways:

1. By hand, appending elements to a ``SearchQuery`` and calling
   ``search_query``. Nothing checks the element names or values.
2. From typed options passed to ``search_options``. Each option is validated
   and no option category can be given twice.

Either way the caller's query is copied before the OAuth parameters are
added, so it can be reused for further searches.
"""

from collections.abc import Callable
import time

import httpx
import structlog

from common.config import DEFAULT_REQUEST_TIMEOUT, YelpConfig
from yelpquery.encoding import NonceSource
from yelpquery.exceptions import YelpAPIError, YelpError, YelpHTTPError, YelpResponseError
from yelpquery.models import Businesses, parse_search_response
from yelpquery.oauth import OAuthCredentials, Signer
from yelpquery.options import SearchOption, apply_options
from yelpquery.query import SearchQuery


logger = structlog.get_logger(__name__)


def _error_for_status(response: httpx.Response) -> YelpError:
    """Prefer the error Yelp reports in the body over the bare status code."""
    try:
        parse_search_response(response.content)
    except YelpAPIError as e:
        return e
    except YelpResponseError:
        pass
    return YelpHTTPError(f"Yelp search failed: HTTP {response.status_code}", status_code=response.status_code)


class YelpClient:
    """Signs and sends search requests with one set of Yelp credentials."""

    def __init__(
        self,
        url: str,
        consumer_key: str,
        consumer_secret: str,
        token: str,
        token_secret: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        nonce_source: NonceSource | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.url = url
        self.timeout = timeout
        credentials = OAuthCredentials(consumer_key, consumer_secret, token, token_secret)
        self._signer = Signer(credentials, nonce_source=nonce_source, clock=clock)

    @classmethod
    def from_config(cls, config: YelpConfig) -> "YelpClient":
        """Create a client from a loaded ``YelpConfig``."""
        return cls(
            url=config.search_url,
            consumer_key=config.consumer_key,
            consumer_secret=config.consumer_secret,
            token=config.token,
            token_secret=config.token_secret,
            timeout=config.request_timeout,
        )

    def signed_url(self, query: SearchQuery) -> str:
        """Return the full signed request URL for a copy of ``query``."""
        signed = query.copy()
        self._signer.sign("GET", self.url, signed)
        return f"{self.url}?{signed.serialize()}"

    async def search_query(self, query: SearchQuery) -> Businesses:
        """Search with a manually built query.

        Raises:
            YelpHTTPError: If the request fails or Yelp answers with a bare error status
            YelpAPIError: If Yelp answers with an error payload
            YelpResponseError: If the body cannot be decoded
        """
        request_url = self.signed_url(query)
        logger.info("🔍 Searching Yelp", url=self.url, parameters=len(query))

        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout, connect=10.0)) as client:
                response = await client.get(request_url)
        except httpx.HTTPError as e:
            logger.error("❌ Yelp request failed", url=self.url, error=str(e))
            raise YelpHTTPError(f"Failed to perform HTTP request: {e}") from e

        if response.status_code != 200:
            logger.debug("Yelp API error body", status=response.status_code, body=response.text)
            raise _error_for_status(response)

        businesses = parse_search_response(response.content)
        logger.info("✅ Yelp search completed", returned=len(businesses.businesses), total=businesses.total)
        return businesses

    async def search_options(self, *options: SearchOption) -> Businesses:
        """Search with typed options.

        Raises:
            DuplicateOptionError: If two options share a category
            InvalidValueError: If an option payload is out of range
        """
        return await self.search_query(apply_options(options))
