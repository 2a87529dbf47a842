"""Simulated remote user backend serving one page at a time."""

import asyncio
import random
from typing import Dict, Optional, Sequence, Tuple

from userdirectory.core.exceptions import (InvalidArgumentError, NotFoundError,
                                           UnavailableError)
from userdirectory.core.logging import get_logger, log_event
from userdirectory.models.user import Page, User
from userdirectory.utils.pagination import (PaginationParams, slice_page,
                                            total_pages_for)

logger = get_logger(__name__)


class PaginatedUserSource:
    """Pages over an immutable dataset with jittered latency.

    Out-of-range page numbers are clamped to the nearest valid page, so
    callers must read ``pageNumber`` off the returned page rather than
    assume it matches the request.
    """

    def __init__(
        self,
        users: Sequence[User],
        latency: Tuple[float, float] = (0.2, 0.4),
        failure_rate: float = 0.0,
        rng: Optional[random.Random] = None,
    ):
        low, high = latency
        if low <= 0 or high < low:
            raise InvalidArgumentError(f"Invalid latency range {latency!r}")

        self._users: Tuple[User, ...] = tuple(users)
        self._by_id: Dict[int, User] = {u.id: u for u in self._users}
        self.latency = (low, high)
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()

    @property
    def users(self) -> Tuple[User, ...]:
        """The full dataset."""
        return self._users

    @property
    def total_count(self) -> int:
        return len(self._users)

    def total_pages(self, page_size: int) -> int:
        self._check_page_size(page_size)
        return total_pages_for(self.total_count, page_size)

    def get_user(self, user_id: int) -> User:
        """Look up a user by id.

        Raises:
            NotFoundError: if no user has this id
        """
        user = self._by_id.get(user_id)
        if user is None:
            raise NotFoundError(user_id)
        return user

    async def fetch_page(self, page_number: int, page_size: int) -> Page:
        """Fetch one page after a simulated network delay.

        Raises:
            InvalidArgumentError: if page_size is not positive
            UnavailableError: when a simulated transport failure occurs
        """
        self._check_page_size(page_size)

        await asyncio.sleep(self._rng.uniform(*self.latency))

        if self.failure_rate and self._rng.random() < self.failure_rate:
            log_event(logger, "warning", "source_unavailable", requested_page=page_number)
            raise UnavailableError("User source temporarily unavailable")

        params = PaginationParams(page=page_number, page_size=page_size, total=self.total_count)

        return Page(
            page_number=params.effective_page,
            page_size=page_size,
            total_count=self.total_count,
            total_pages=params.total_pages,
            items=slice_page(self._users, params),
        )

    @staticmethod
    def _check_page_size(page_size: int) -> None:
        if page_size <= 0:
            raise InvalidArgumentError(f"Page size must be positive, got {page_size}")
