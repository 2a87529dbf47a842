"""Base repository with common Redis hash operations."""

from typing import Dict, Mapping, Optional

from redis import Redis
from redis.exceptions import RedisError

from userdirectory.core.logging import get_logger

logger = get_logger(__name__)


class RedisRepository:
    """Base repository wrapping one Redis hash."""

    def __init__(self, redis_client: Redis, key: str):
        self.redis = redis_client
        self.key = key

    def hget(self, field: str) -> Optional[str]:
        """Get one hash field."""
        try:
            return self.redis.hget(self.key, field)
        except RedisError as e:
            logger.error(f"Error reading {self.key}:{field}: {e}")
            raise

    def hgetall(self) -> Dict[str, str]:
        """Get every field of the hash."""
        try:
            return self.redis.hgetall(self.key)
        except RedisError as e:
            logger.error(f"Error reading {self.key}: {e}")
            raise

    def hset_many(self, values: Mapping[str, str]) -> None:
        """Write several hash fields in one round trip."""
        if not values:
            return
        try:
            self.redis.hset(self.key, mapping=dict(values))
        except RedisError as e:
            logger.error(f"Error writing {self.key}: {e}")
            raise

    def delete(self) -> None:
        """Drop the whole hash."""
        try:
            self.redis.delete(self.key)
        except RedisError as e:
            logger.error(f"Error deleting {self.key}: {e}")
            raise

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False
