"""Common utilities and configuration for yelpquery."""

from common.config import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SEARCH_URL,
    YelpConfig,
    get_config,
    get_secret,
    setup_logging,
)


__all__ = [
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_SEARCH_URL",
    "YelpConfig",
    "get_config",
    "get_secret",
    "setup_logging",
]
