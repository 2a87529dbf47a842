"""Repositories package for data access layer."""

from .config_store import ConfigStore, RedisConfigStore
from .redis_base import RedisRepository
from .user_source import PaginatedUserSource

__all__ = [
    "ConfigStore",
    "RedisConfigStore",
    "RedisRepository",
    "PaginatedUserSource",
]
