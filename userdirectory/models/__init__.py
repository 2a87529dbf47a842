"""Domain models package."""

from .query import (DirectoryPreferences, DisplayMode, FilterKind, QueryConfig,
                    SearchScope, SortDirection, SortKey)
from .user import Page, User

__all__ = [
    "User",
    "Page",
    "QueryConfig",
    "DirectoryPreferences",
    "SortKey",
    "SortDirection",
    "FilterKind",
    "SearchScope",
    "DisplayMode",
]
