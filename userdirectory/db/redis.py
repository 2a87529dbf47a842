"""Redis connection backing the preference store.

The service keeps all persisted preferences in one hash
(``settings.preferences_key``), so a single small pool per process serves
every request.
"""

from functools import lru_cache
from urllib.parse import urlsplit, urlunsplit

import redis

from userdirectory.core.config import get_settings
from userdirectory.core.logging import get_logger, log_event

logger = get_logger(__name__)


def redact_url(url: str) -> str:
    """Drop the password from a Redis URL before it is logged."""
    parts = urlsplit(url)
    if not parts.password:
        return url
    netloc = f"***@{parts.hostname}"
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit(parts._replace(netloc=netloc))


@lru_cache(maxsize=1)
def get_redis_pool() -> redis.ConnectionPool:
    """Connection pool for the preference store."""
    settings = get_settings()
    return redis.ConnectionPool.from_url(
        settings.redis_url,
        decode_responses=True,
        max_connections=settings.redis_max_connections,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
    )


@lru_cache(maxsize=1)
def get_redis_client() -> redis.Redis:
    """Client for the preference store, checked with a ping on creation."""
    settings = get_settings()
    client = redis.Redis(connection_pool=get_redis_pool())

    try:
        client.ping()
    except redis.RedisError as e:
        log_event(
            logger,
            "error",
            "preference_store_unreachable",
            url=redact_url(settings.redis_url),
            error=str(e),
        )
        raise

    log_event(
        logger,
        "info",
        "preference_store_connected",
        url=redact_url(settings.redis_url),
        key=settings.preferences_key,
    )
    return client


def store_reachable() -> bool:
    """True when the preference store answers a ping."""
    try:
        return bool(get_redis_client().ping())
    except redis.RedisError as e:
        log_event(logger, "warning", "preference_store_ping_failed", error=str(e))
        return False


def close_redis_connection() -> None:
    """Disconnect the pool if one was opened."""
    if not get_redis_pool.cache_info().currsize:
        return

    try:
        get_redis_pool().disconnect()
    except redis.RedisError as e:
        log_event(logger, "error", "preference_store_close_failed", error=str(e))
    finally:
        get_redis_pool.cache_clear()
        get_redis_client.cache_clear()

    log_event(logger, "info", "preference_store_closed")
