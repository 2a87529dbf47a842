"""Search, filter and sort pipeline over a list of users.

The stages always run in the same order: free-text search, then the
structured filter, then a stable sort. Every stage is total; a malformed
filter value simply matches nothing.
"""

from typing import Iterable, List

from userdirectory.models.query import FilterKind, QueryConfig, SortDirection
from userdirectory.models.user import User


def _fold(value) -> str:
    return (value or "").casefold()


def matches_search(user: User, text: str) -> bool:
    """Check a case-folded needle against full name and email."""
    name = _fold(f"{user.first_name} {user.last_name}")
    return text in name or text in _fold(user.email)


def matches_filter(user: User, kind: FilterKind, value: str) -> bool:
    """Check a user against a structured filter rule."""
    value = value.strip()
    if kind is FilterKind.NONE or not value:
        return True

    if kind is FilterKind.DOMAIN:
        return _fold(user.email).endswith("@" + value.casefold())
    if kind is FilterKind.FIRST_LETTER:
        return _fold(user.first_name).startswith(value[0].casefold())

    return True


def apply_query(base_list: Iterable[User], config: QueryConfig) -> List[User]:
    """Return the filtered, sorted view of ``base_list`` for ``config``."""
    out = list(base_list)

    text = config.search_text.strip().casefold()
    if text:
        out = [u for u in out if matches_search(u, text)]

    out = [u for u in out if matches_filter(u, config.filter_kind, config.filter_value)]

    field = config.effective_sort_key.field_name
    # list.sort keeps ties in input order, reversed or not
    out.sort(
        key=lambda u: _fold(getattr(u, field, "")),
        reverse=config.sort_direction is SortDirection.DESC,
    )
    return out
