"""Preference store connection package."""

from .redis import (close_redis_connection, get_redis_client, get_redis_pool,
                    store_reachable)

__all__ = [
    "get_redis_client",
    "get_redis_pool",
    "close_redis_connection",
    "store_reachable",
]
