"""Pagination controller bridging user actions to the data source.

The controller owns the current page, page size and query preferences. Every
preference change is written through the injected ``ConfigStore``. Fetches
are tagged with a monotonically increasing request token; a response whose
token is no longer the latest is dropped, so a superseded navigation can
never overwrite a newer one. ``fetch_all_pages`` keeps its own counter and
never invalidates a page load.
"""

from enum import Enum
from typing import List, Optional

from userdirectory.core.exceptions import (DirectoryError,
                                           InvalidArgumentError, NotFoundError)
from userdirectory.core.logging import get_logger, log_event
from userdirectory.models.query import (DirectoryPreferences, DisplayMode,
                                        FilterKind, QueryConfig, SearchScope,
                                        SortDirection, SortKey)
from userdirectory.models.user import Page, User
from userdirectory.repositories.config_store import ConfigStore
from userdirectory.repositories.user_source import PaginatedUserSource
from userdirectory.services.query import apply_query
from userdirectory.utils.pagination import clamp_page

logger = get_logger(__name__)

STATUS_FETCHING = "Fetching users…"
STATUS_LOADED = "Loaded"
STATUS_FETCH_FAILED = "Failed to fetch users"
STATUS_FETCHING_ALL = "Fetching all pages…"
STATUS_ALL_LOADED = "All pages loaded"
STATUS_FETCH_ALL_FAILED = "Error fetching all pages"
STATUS_NOT_FOUND = "User not found"


class ControllerState(str, Enum):
    """Controller lifecycle state."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class PaginationController:
    """Drives navigation and query preferences for the directory view."""

    def __init__(
        self,
        source: PaginatedUserSource,
        store: ConfigStore,
        default_page_size: int = 6,
        max_page_size: int = 100,
    ):
        self._source = source
        self._store = store
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

        self.preferences: DirectoryPreferences = store.load(default_page_size)
        if self.preferences.page_size > max_page_size:
            self.preferences = self.preferences.model_copy(update={"page_size": default_page_size})

        self.page_number = 1
        self.total_pages = source.total_pages(self.preferences.page_size)
        self.current_page: Optional[Page] = None
        self.state = ControllerState.IDLE
        self.status = ""
        self.last_error: Optional[DirectoryError] = None
        self._request_token = 0
        self._fetch_all_token = 0
        self._navigation_in_flight: Optional[int] = None
        self._fetch_all_in_flight: Optional[int] = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def page_size(self) -> int:
        return self.preferences.page_size

    @property
    def config(self) -> QueryConfig:
        return self.preferences.query

    @property
    def request_token(self) -> int:
        return self._request_token

    def get_display_list(self) -> List[User]:
        """Run the query over the page or the whole dataset, per search scope."""
        if self.last_error is not None:
            return []

        if self.config.search_scope is SearchScope.GLOBAL:
            base = self._source.users
        else:
            base = self.current_page.items if self.current_page else []

        return apply_query(base, self.config)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def initialize(self) -> Optional[Page]:
        """Load the first page at startup."""
        return await self._load_page(1)

    async def go_to_page(self, page_number: int) -> Optional[Page]:
        """Fetch ``page_number``, clamped into the current page range."""
        return await self._load_page(clamp_page(page_number, self.total_pages))

    async def go_to_first(self) -> Optional[Page]:
        return await self.go_to_page(1)

    async def go_to_prev(self) -> Optional[Page]:
        if self.page_number <= 1:
            return self.current_page
        return await self.go_to_page(self.page_number - 1)

    async def go_to_next(self) -> Optional[Page]:
        if self.page_number >= self.total_pages:
            return self.current_page
        return await self.go_to_page(self.page_number + 1)

    async def go_to_last(self) -> Optional[Page]:
        return await self.go_to_page(self.total_pages)

    async def set_page_size(self, page_size: int) -> Optional[Page]:
        """Persist a new page size and reload from page 1.

        Raises:
            InvalidArgumentError: if page_size is outside ``1..max_page_size``
        """
        if isinstance(page_size, bool) or not isinstance(page_size, int):
            raise InvalidArgumentError(f"Page size must be an integer, got {page_size!r}")
        if not 0 < page_size <= self.max_page_size:
            raise InvalidArgumentError(
                f"Page size must be between 1 and {self.max_page_size}, got {page_size}"
            )

        self._update(page_size=page_size)
        self.total_pages = self._source.total_pages(page_size)
        self.page_number = 1
        return await self._load_page(1)

    async def fetch_all_pages(self) -> List[User]:
        """Fetch every page in order and concatenate the items.

        Pages are requested one at a time, so the cost grows linearly with
        the number of pages. A page load already in flight is left alone;
        a navigation or another ``fetch_all_pages`` started afterwards
        supersedes this one.
        """
        self._fetch_all_token += 1
        token = self._fetch_all_token
        navigation_token = self._request_token
        self._fetch_all_in_flight = token
        page_size = self.page_size
        total_pages = self._source.total_pages(page_size)

        self.state = ControllerState.LOADING
        self.status = STATUS_FETCHING_ALL
        log_event(logger, "info", "fetch_all_started", total_pages=total_pages, fetch_all_token=token)

        collected: List[User] = []
        try:
            for page_number in range(1, total_pages + 1):
                page = await self._source.fetch_page(page_number, page_size)
                if self._fetch_all_superseded(token, navigation_token):
                    self._abandon_fetch_all(token, page_number)
                    return []
                collected.extend(page.items)
        except DirectoryError as e:
            if self._fetch_all_superseded(token, navigation_token):
                self._abandon_fetch_all(token, None)
                return []
            self._fetch_all_in_flight = None
            self._fail(e, STATUS_FETCH_ALL_FAILED)
            return []

        self._fetch_all_in_flight = None
        self.last_error = None
        self.status = STATUS_ALL_LOADED
        self._settle()
        log_event(logger, "info", "fetch_all_completed", user_count=len(collected), fetch_all_token=token)
        return collected

    # ------------------------------------------------------------------
    # Preference mutations
    # ------------------------------------------------------------------

    def set_search_text(self, text: str) -> QueryConfig:
        return self._update_query(search_text=text or "")

    def set_sort_key(self, key) -> QueryConfig:
        """Select a sort key; reselecting the active key flips the direction."""
        key = SortKey(key)
        current = self.config

        if key is SortKey.NONE:
            return self._update_query(sort_key=SortKey.NONE, sort_direction=SortDirection.ASC)
        if key is current.sort_key:
            return self._update_query(sort_direction=current.sort_direction.flipped())
        return self._update_query(sort_key=key, sort_direction=SortDirection.ASC)

    def set_sort_fallback(self, key) -> QueryConfig:
        key = SortKey(key)
        if key is SortKey.NONE:
            raise InvalidArgumentError("Sort fallback must name a field")
        return self._update_query(sort_fallback=key)

    def set_filter(self, kind, value: str = "") -> QueryConfig:
        return self._update_query(filter_kind=FilterKind(kind), filter_value=value or "")

    def set_search_scope(self, scope) -> QueryConfig:
        return self._update_query(search_scope=SearchScope(scope))

    def set_display_mode(self, mode) -> DirectoryPreferences:
        return self._update(display_mode=DisplayMode(mode))

    def toggle_compact(self) -> DirectoryPreferences:
        return self._update(compact=not self.preferences.compact)

    async def reset_all_config(self) -> Optional[Page]:
        """Clear the store, restore defaults and reload page 1."""
        self._store.clear()
        self.preferences = DirectoryPreferences(page_size=self.default_page_size)
        self.total_pages = self._source.total_pages(self.page_size)
        self.page_number = 1
        log_event(logger, "info", "preferences_reset", page_size=self.page_size)
        return await self._load_page(1)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup_user_by_id(self, user_id: int) -> User:
        """Return a single user for the detail view.

        Raises:
            NotFoundError: if the id is not in the dataset
        """
        try:
            return self._source.get_user(user_id)
        except NotFoundError:
            self.status = STATUS_NOT_FOUND
            log_event(logger, "warning", "user_not_found", user_id=user_id)
            raise

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_token(self) -> int:
        self._request_token += 1
        return self._request_token

    def _update(self, **changes) -> DirectoryPreferences:
        # store first; a failed write leaves the controller unchanged
        preferences = self.preferences.model_copy(update=changes)
        self._store.persist(preferences)
        self.preferences = preferences
        return preferences

    def _update_query(self, **changes) -> QueryConfig:
        query = self.config.model_copy(update=changes)
        self._update(query=query)
        return query

    def _settle(self) -> None:
        if self._navigation_in_flight is None and self._fetch_all_in_flight is None:
            self.state = ControllerState.IDLE
        else:
            self.state = ControllerState.LOADING

    def _fetch_all_superseded(self, token: int, navigation_token: int) -> bool:
        return token != self._fetch_all_token or navigation_token != self._request_token

    def _abandon_fetch_all(self, token: int, page_number: Optional[int]) -> None:
        if self._fetch_all_in_flight == token:
            self._fetch_all_in_flight = None
        log_event(
            logger,
            "debug",
            "stale_fetch_all_discarded",
            requested_page=page_number,
            fetch_all_token=token,
            latest_fetch_all_token=self._fetch_all_token,
        )
        self._settle()

    async def _load_page(self, page_number: int) -> Optional[Page]:
        token = self._next_token()
        self._navigation_in_flight = token
        page_size = self.page_size

        self.state = ControllerState.LOADING
        self.status = STATUS_FETCHING
        log_event(
            logger,
            "debug",
            "page_fetch_started",
            requested_page=page_number,
            page_size=page_size,
            request_token=token,
        )

        try:
            page = await self._source.fetch_page(page_number, page_size)
        except DirectoryError as e:
            if token != self._request_token:
                self._discard(token, page_number)
                return None
            self._navigation_in_flight = None
            self._fail(e, STATUS_FETCH_FAILED)
            return None

        if token != self._request_token:
            self._discard(token, page_number)
            return None

        self._navigation_in_flight = None
        self.current_page = page
        self.page_number = page.page_number
        self.total_pages = page.total_pages
        self.last_error = None
        self.status = STATUS_LOADED
        self._settle()
        log_event(
            logger,
            "info",
            "page_fetched",
            page_number=page.page_number,
            page_size=page.page_size,
            item_count=len(page.items),
            request_token=token,
        )
        return page

    def _discard(self, token: int, page_number: Optional[int]) -> None:
        log_event(
            logger,
            "debug",
            "stale_response_discarded",
            requested_page=page_number,
            request_token=token,
            latest_token=self._request_token,
        )

    def _fail(self, error: DirectoryError, status: str) -> None:
        self.state = ControllerState.ERROR
        self.last_error = error
        self.status = status
        log_event(
            logger,
            "error",
            "page_fetch_failed",
            error=str(error),
            error_type=type(error).__name__,
        )
        self._settle()
