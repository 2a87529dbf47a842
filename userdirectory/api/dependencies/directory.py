"""Dependency providers wiring the directory services together."""

from functools import lru_cache
from typing import Optional

from userdirectory.core.config import settings
from userdirectory.db.redis import get_redis_client
from userdirectory.repositories.config_store import ConfigStore, RedisConfigStore
from userdirectory.repositories.user_source import PaginatedUserSource
from userdirectory.services.generator import generate_users
from userdirectory.services.pagination import PaginationController
from userdirectory.services.theme import ThemeService

_controller: Optional[PaginationController] = None


def get_config_store() -> ConfigStore:
    """Preference store on the shared Redis client."""
    return RedisConfigStore(get_redis_client(), key=settings.preferences_key)


@lru_cache(maxsize=1)
def get_user_source() -> PaginatedUserSource:
    """Session-wide simulated backend; the dataset is generated once."""
    return PaginatedUserSource(
        generate_users(settings.dataset_size),
        latency=settings.latency_range,
        failure_rate=settings.failure_rate,
    )


def get_controller() -> PaginationController:
    """Get or create the controller singleton."""
    global _controller
    if _controller is None:
        _controller = PaginationController(
            get_user_source(),
            get_config_store(),
            default_page_size=settings.default_page_size,
            max_page_size=settings.max_page_size,
        )
    return _controller


def reset_controller() -> None:
    """Drop the controller singleton so the next call rebuilds it."""
    global _controller
    _controller = None


def get_theme_service() -> ThemeService:
    return ThemeService(get_config_store())
