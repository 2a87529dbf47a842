"""Response builders for directory endpoints."""

from typing import Any, Dict, Iterable

from userdirectory.models.user import User
from userdirectory.services.pagination import PaginationController


def serialize_users(users: Iterable[User]) -> list:
    return [user.model_dump(mode="json", by_alias=True) for user in users]


class DirectoryViewBuilder:
    """Builder for the directory view returned by every action."""

    def __init__(self, controller: PaginationController):
        self.controller = controller
        self.data: Dict[str, Any] = {
            "state": controller.state.value,
            "status": controller.status,
        }

    def with_pagination(self) -> "DirectoryViewBuilder":
        """Add page position and counts."""
        c = self.controller
        page = c.current_page
        self.data["pagination"] = {
            "pageNumber": c.page_number,
            "pageSize": c.page_size,
            "totalPages": c.total_pages,
            "totalCount": page.total_count if page else None,
            "hasNext": c.page_number < c.total_pages,
            "hasPrevious": c.page_number > 1,
        }
        return self

    def with_preferences(self) -> "DirectoryViewBuilder":
        """Add the persisted preferences."""
        self.data["preferences"] = self.controller.preferences.model_dump(
            mode="json", by_alias=True
        )
        return self

    def with_users(self) -> "DirectoryViewBuilder":
        """Add the display list for the current search scope."""
        users = self.controller.get_display_list()
        self.data["users"] = serialize_users(users)
        self.data["count"] = len(users)
        return self

    def with_error(self) -> "DirectoryViewBuilder":
        """Expose the last fetch error, if any."""
        error = self.controller.last_error
        self.data["error"] = (
            {"type": type(error).__name__, "message": str(error)} if error else None
        )
        return self

    def build(self) -> Dict[str, Any]:
        return self.data


def build_directory_view(controller: PaginationController) -> Dict[str, Any]:
    return (
        DirectoryViewBuilder(controller)
        .with_pagination()
        .with_preferences()
        .with_users()
        .with_error()
        .build()
    )
