"""OAuth 1.0a (HMAC-SHA1) signing of Yelp search queries.

Yelp v2 authenticates each request with query parameters rather than an
Authorization header:

1. ``oauth_consumer_key``, ``oauth_nonce``, ``oauth_signature_method``,
   ``oauth_timestamp`` and ``oauth_token`` are appended to the query
2. The query is sorted by parameter name
3. The signature base string ``METHOD&enc(url)&enc(query)`` is signed with
   HMAC-SHA1 keyed by ``enc(consumer_secret)&enc(token_secret)``
4. The percent-encoded base64 digest is appended last as ``oauth_signature``
"""

from base64 import b64encode
from collections.abc import Callable
from dataclasses import dataclass
import hashlib
import hmac
import time

import structlog

from yelpquery.encoding import NonceSource, percent_encode
from yelpquery.exceptions import SignerConfigurationError
from yelpquery.query import SearchQuery


logger = structlog.get_logger(__name__)

SIGNATURE_METHOD = "HMAC-SHA1"
NONCE_LENGTH = 30


@dataclass(frozen=True)
class OAuthCredentials:
    """The four strings Yelp issues for API access."""

    consumer_key: str
    consumer_secret: str
    token: str
    token_secret: str

    def __repr__(self) -> str:
        return f"OAuthCredentials(consumer_key={self.consumer_key!r}, token={self.token!r})"

    def validate(self) -> None:
        """Raise SignerConfigurationError if any credential is missing."""
        missing = [name for name, value in vars(self).items() if not isinstance(value, str) or not value]
        if missing:
            raise SignerConfigurationError(f"Missing OAuth credentials: {', '.join(missing)}")

    @property
    def hash_key(self) -> bytes:
        """HMAC key: encoded consumer secret and token secret joined by ``&``."""
        return f"{percent_encode(self.consumer_secret)}&{percent_encode(self.token_secret)}".encode("ascii")


class Signer:
    """Signs search queries with a fixed set of OAuth credentials.

    The HMAC key is derived once at construction. Nonces come from
    ``nonce_source`` and timestamps from ``clock``; both can be replaced to
    make signatures reproducible.
    """

    def __init__(
        self,
        credentials: OAuthCredentials,
        nonce_source: NonceSource | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        credentials.validate()
        self.consumer_key = credentials.consumer_key
        self.token = credentials.token
        self._hash_key = credentials.hash_key
        self._nonce_source = nonce_source or NonceSource()
        self._clock = clock

    def sign(self, method: str, url: str, query: SearchQuery) -> None:
        """Add the OAuth parameters and signature to ``query`` in place.

        Args:
            method: HTTP method, e.g. ``GET``
            url: Request URL without query string
            query: Query to sign; it is sorted and extended
        """
        query.append("oauth_consumer_key", self.consumer_key)
        query.append("oauth_nonce", self._nonce_source.next(NONCE_LENGTH))
        query.append("oauth_signature_method", SIGNATURE_METHOD)
        query.append("oauth_timestamp", str(int(self._clock())))
        query.append("oauth_token", self.token)
        query.sort()

        # The signature is not part of the signed parameters and always goes last
        query.append("oauth_signature", self.signature(method, url, query))
        logger.debug("🔏 Signed Yelp query", method=method, url=url, parameters=len(query))

    def signature(self, method: str, url: str, query: SearchQuery) -> str:
        """Compute the percent-encoded signature of an already populated query."""
        base_string = "&".join([method, percent_encode(url), percent_encode(query.serialize())])
        digest = hmac.new(self._hash_key, base_string.encode("utf-8"), hashlib.sha1).digest()
        return percent_encode(b64encode(digest).decode("ascii"))
