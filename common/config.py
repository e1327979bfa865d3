"""Configuration management for the yelpquery client."""

import logging
from dataclasses import dataclass
from os import getenv
from pathlib import Path

import structlog


logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "http://api.yelp.com/v2/search"
DEFAULT_REQUEST_TIMEOUT = 30.0


def get_secret(name: str, default: str | None = None) -> str | None:
    """Read a secret from ``<NAME>_FILE`` (Docker runtime secrets) or ``<NAME>``.

    Args:
        name: Environment variable name
        default: Value returned when neither variable is set

    Returns:
        The secret with surrounding whitespace stripped, or ``default``

    Raises:
        ValueError: If ``<NAME>_FILE`` is set but the file cannot be read
    """
    secret_file = getenv(f"{name}_FILE")
    if secret_file:
        try:
            return Path(secret_file).read_text().strip()
        except OSError as e:
            raise ValueError(f"Cannot read secret file for {name}: {secret_file}") from e

    return getenv(name, default)


@dataclass(frozen=True)
class YelpConfig:
    """Credentials and endpoint for the Yelp search API."""

    consumer_key: str
    consumer_secret: str
    token: str
    token_secret: str
    search_url: str = DEFAULT_SEARCH_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __repr__(self) -> str:
        return f"YelpConfig(search_url={self.search_url!r}, consumer_key={self.consumer_key!r}, request_timeout={self.request_timeout})"

    @classmethod
    def from_env(cls) -> "YelpConfig":
        """Create configuration from environment variables."""
        consumer_key = get_secret("YELP_CONSUMER_KEY")
        consumer_secret = get_secret("YELP_CONSUMER_SECRET")
        token = get_secret("YELP_TOKEN")
        token_secret = get_secret("YELP_TOKEN_SECRET")

        missing_vars = []
        if not consumer_key:
            missing_vars.append("YELP_CONSUMER_KEY")
        if not consumer_secret:
            missing_vars.append("YELP_CONSUMER_SECRET")
        if not token:
            missing_vars.append("YELP_TOKEN")
        if not token_secret:
            missing_vars.append("YELP_TOKEN_SECRET")

        if missing_vars:
            raise ValueError(f"Missing required environment variables: {', '.join(missing_vars)}")

        search_url = getenv("YELP_SEARCH_URL") or DEFAULT_SEARCH_URL

        request_timeout = DEFAULT_REQUEST_TIMEOUT
        timeout_env = getenv("YELP_REQUEST_TIMEOUT")
        if timeout_env:
            try:
                request_timeout = float(timeout_env)
                if request_timeout <= 0:
                    logger.warning(f"⚠️ Invalid YELP_REQUEST_TIMEOUT value: {timeout_env}. Using default of {DEFAULT_REQUEST_TIMEOUT} seconds.")
                    request_timeout = DEFAULT_REQUEST_TIMEOUT
            except ValueError:
                logger.warning(f"⚠️ Invalid YELP_REQUEST_TIMEOUT value: {timeout_env}. Using default of {DEFAULT_REQUEST_TIMEOUT} seconds.")
                request_timeout = DEFAULT_REQUEST_TIMEOUT

        return cls(
            consumer_key=consumer_key,  # type: ignore
            consumer_secret=consumer_secret,  # type: ignore
            token=token,  # type: ignore
            token_secret=token_secret,  # type: ignore
            search_url=search_url,
            request_timeout=request_timeout,
        )


def setup_logging(
    service_name: str,
    level: str | None = None,
    log_file: Path | None = None,
) -> None:
    """Set up logging configuration.

    The level comes from ``level``, then ``LOG_LEVEL``, then defaults to INFO.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        # Create parent directory if it doesn't exist
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    log_level = level or getenv("LOG_LEVEL") or "INFO"

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=f"%(asctime)s - {service_name} - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    # Request URLs carry OAuth signatures; keep transport logs quiet
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # Route structlog events through the stdlib handlers configured above
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logger.info(f"✅ Logging configured for {service_name}")


def get_config() -> YelpConfig:
    """Get Yelp configuration from the environment."""
    return YelpConfig.from_env()
