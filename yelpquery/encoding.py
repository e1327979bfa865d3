"""Percent-encoding and nonce generation for Yelp OAuth 1.0a requests."""

import random
import string
import threading
import time
import urllib.parse


NONCE_CHARACTERS = string.ascii_lowercase + string.ascii_uppercase + string.digits

# Yelp rejects the RFC 3986 form %2C and expects the comma escaped twice
ENCODED_COMMA = "%252C"


def percent_encode(source: str | bytes) -> str:
    """Percent-encode a value the way the Yelp v2 API expects.

    RFC 3986 escaping (letters, digits and ``-._~`` pass through, uppercase
    ``%XX`` for everything else, text as UTF-8) with the comma escaped twice.

    Args:
        source: Text or raw bytes to encode

    Returns:
        Encoded ASCII string
    """
    return urllib.parse.quote(source, safe="").replace("%2C", ENCODED_COMMA)


class NonceSource:
    """Generates alphanumeric nonces from its own seeded random generator.

    Each source is seeded once from the clock (or an explicit seed) and
    serializes access to its generator, so a single source can be shared by
    signing calls running on different threads.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(time.time_ns() if seed is None else seed)  # noqa: S311  # nosec B311
        self._lock = threading.Lock()

    def next(self, length: int) -> str:
        """Return ``length`` characters drawn uniformly from ``a-zA-Z0-9``."""
        if length < 0:
            raise ValueError(f"Nonce length must not be negative: {length}")
        with self._lock:
            return "".join(self._random.choices(NONCE_CHARACTERS, k=length))
