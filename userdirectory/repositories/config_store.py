"""Persisted preference store.

Preferences are kept as flat string values under fixed keys. ``ConfigStore``
is the port the controller and theme service depend on; ``RedisConfigStore``
keeps every key in a single Redis hash so that clearing the store is one
delete.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Mapping, Optional, Type, TypeVar

from redis import Redis

from userdirectory.core.logging import get_logger, log_event
from userdirectory.models.query import (DirectoryPreferences, DisplayMode,
                                        FilterKind, QueryConfig, SearchScope,
                                        SortDirection, SortKey)
from userdirectory.repositories.redis_base import RedisRepository

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)

KEY_PAGE_SIZE = "u_per_page"
KEY_SEARCH_TEXT = "u_query"
KEY_SORT_KEY = "u_sortBy"
KEY_SORT_DIRECTION = "u_sortDir"
KEY_FILTER_KIND = "u_filterType"
KEY_FILTER_VALUE = "u_filterValue"
KEY_DISPLAY_MODE = "u_view"
KEY_COMPACT = "u_compact"
KEY_SEARCH_SCOPE = "u_searchScope"
KEY_SORT_FALLBACK = "u_sortFallback"
KEY_DARK_MODE = "u_dark"

# Field-name spellings written by older clients
_LEGACY_SORT_KEYS = {"": "none", "first_name": "firstName"}


def _parse_enum(enum_cls: Type[E], key: str, raw: Optional[str], default: E) -> E:
    if raw is None:
        return default
    raw = _LEGACY_SORT_KEYS.get(raw, raw) if enum_cls is SortKey else raw
    try:
        return enum_cls(raw)
    except ValueError:
        log_event(logger, "warning", "invalid_preference", key=key, value=raw)
        return default


def _parse_page_size(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        log_event(logger, "warning", "invalid_preference", key=KEY_PAGE_SIZE, value=raw)
        return default
    return value


def parse_bool(raw: Optional[str], default: bool = False) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() == "true"


def format_bool(value: bool) -> str:
    return "true" if value else "false"


class ConfigStore(ABC):
    """Key-value port for UI preferences."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a single value."""

    @abstractmethod
    def get_all(self) -> Dict[str, str]:
        """Return every stored key."""

    @abstractmethod
    def set_many(self, values: Mapping[str, str]) -> None:
        """Store several values at once."""

    @abstractmethod
    def clear(self) -> None:
        """Forget every stored key."""

    def load(self, default_page_size: int = 6) -> DirectoryPreferences:
        """Build preferences from stored values, falling back to defaults."""
        raw = self.get_all()
        query_defaults = QueryConfig()

        query = QueryConfig(
            search_text=raw.get(KEY_SEARCH_TEXT, ""),
            sort_key=_parse_enum(SortKey, KEY_SORT_KEY, raw.get(KEY_SORT_KEY), query_defaults.sort_key),
            sort_direction=_parse_enum(
                SortDirection, KEY_SORT_DIRECTION, raw.get(KEY_SORT_DIRECTION), query_defaults.sort_direction
            ),
            filter_kind=_parse_enum(
                FilterKind, KEY_FILTER_KIND, raw.get(KEY_FILTER_KIND), query_defaults.filter_kind
            ),
            filter_value=raw.get(KEY_FILTER_VALUE, ""),
            search_scope=_parse_enum(
                SearchScope, KEY_SEARCH_SCOPE, raw.get(KEY_SEARCH_SCOPE), query_defaults.search_scope
            ),
            sort_fallback=_parse_enum(
                SortKey, KEY_SORT_FALLBACK, raw.get(KEY_SORT_FALLBACK), query_defaults.sort_fallback
            ),
        )

        return DirectoryPreferences(
            page_size=_parse_page_size(raw.get(KEY_PAGE_SIZE), default_page_size),
            query=query,
            display_mode=_parse_enum(
                DisplayMode, KEY_DISPLAY_MODE, raw.get(KEY_DISPLAY_MODE), DisplayMode.TABLE
            ),
            compact=parse_bool(raw.get(KEY_COMPACT)),
        )

    def persist(self, preferences: DirectoryPreferences) -> None:
        """Write every preference back to the store."""
        query = preferences.query
        self.set_many(
            {
                KEY_PAGE_SIZE: str(preferences.page_size),
                KEY_SEARCH_TEXT: query.search_text,
                KEY_SORT_KEY: query.sort_key.value,
                KEY_SORT_DIRECTION: query.sort_direction.value,
                KEY_FILTER_KIND: query.filter_kind.value,
                KEY_FILTER_VALUE: query.filter_value,
                KEY_SEARCH_SCOPE: query.search_scope.value,
                KEY_SORT_FALLBACK: query.sort_fallback.value,
                KEY_DISPLAY_MODE: preferences.display_mode.value,
                KEY_COMPACT: format_bool(preferences.compact),
            }
        )
        log_event(logger, "debug", "preferences_persisted", page_size=preferences.page_size)


class RedisConfigStore(RedisRepository, ConfigStore):
    """Config store backed by a single Redis hash."""

    def __init__(self, redis_client: Redis, key: str = "userdirectory:preferences"):
        super().__init__(redis_client, key)

    def get(self, key: str) -> Optional[str]:
        return self.hget(key)

    def set(self, key: str, value: str) -> None:
        self.hset_many({key: value})

    def get_all(self) -> Dict[str, str]:
        return self.hgetall()

    def set_many(self, values: Mapping[str, str]) -> None:
        self.hset_many(values)

    def clear(self) -> None:
        self.delete()
        logger.info(f"Cleared preferences at {self.key}")
