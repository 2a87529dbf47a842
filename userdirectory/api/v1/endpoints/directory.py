"""Directory routes: navigation, query preferences and user lookup."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from userdirectory.api.dependencies.directory import get_controller
from userdirectory.api.responses.directory import (build_directory_view,
                                                   serialize_users)
from userdirectory.core.exceptions import (DirectoryError,
                                           InvalidArgumentError, NotFoundError,
                                           UnavailableError)
from userdirectory.core.logging import get_logger
from userdirectory.models.query import (DisplayMode, FilterKind, SearchScope,
                                        SortKey)
from userdirectory.services.pagination import PaginationController

logger = get_logger(__name__)

router = APIRouter()


# ============================================================================
# REQUEST BODIES
# ============================================================================


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PageSizeRequest(_Body):
    page_size: int = Field(..., alias="pageSize")


class SearchRequest(_Body):
    text: str = ""


class SortRequest(_Body):
    key: SortKey


class FilterRequest(_Body):
    kind: FilterKind = FilterKind.NONE
    value: str = ""


class ScopeRequest(_Body):
    scope: SearchScope


class DisplayRequest(_Body):
    mode: DisplayMode


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def to_http_error(error: DirectoryError) -> HTTPException:
    """Map a domain error onto an HTTP status."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, InvalidArgumentError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error)
        )
    if isinstance(error, UnavailableError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error)
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )


async def ensure_loaded(controller: PaginationController) -> None:
    """Load the first page if nothing has been fetched yet."""
    if controller.current_page is None and controller.last_error is None:
        await controller.initialize()


# ============================================================================
# ROUTES
# ============================================================================


@router.get("/directory", response_model=Dict[str, Any])
async def get_directory(
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    """Current page position, preferences and display list."""
    await ensure_loaded(controller)
    return build_directory_view(controller)


@router.post("/directory/pages/first", response_model=Dict[str, Any])
async def go_to_first(controller: PaginationController = Depends(get_controller)):
    await controller.go_to_first()
    return build_directory_view(controller)


@router.post("/directory/pages/prev", response_model=Dict[str, Any])
async def go_to_prev(controller: PaginationController = Depends(get_controller)):
    await ensure_loaded(controller)
    await controller.go_to_prev()
    return build_directory_view(controller)


@router.post("/directory/pages/next", response_model=Dict[str, Any])
async def go_to_next(controller: PaginationController = Depends(get_controller)):
    await ensure_loaded(controller)
    await controller.go_to_next()
    return build_directory_view(controller)


@router.post("/directory/pages/last", response_model=Dict[str, Any])
async def go_to_last(controller: PaginationController = Depends(get_controller)):
    await controller.go_to_last()
    return build_directory_view(controller)


@router.post("/directory/pages/{page_number}", response_model=Dict[str, Any])
async def go_to_page(
    page_number: int,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    """Navigate to a page; out-of-range numbers are clamped."""
    await controller.go_to_page(page_number)
    return build_directory_view(controller)


@router.put("/directory/page-size", response_model=Dict[str, Any])
async def set_page_size(
    body: PageSizeRequest,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    try:
        await controller.set_page_size(body.page_size)
    except InvalidArgumentError as e:
        raise to_http_error(e)
    return build_directory_view(controller)


@router.put("/directory/search", response_model=Dict[str, Any])
async def set_search_text(
    body: SearchRequest,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    await ensure_loaded(controller)
    controller.set_search_text(body.text)
    return build_directory_view(controller)


@router.post("/directory/sort", response_model=Dict[str, Any])
async def set_sort_key(
    body: SortRequest,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    """Select a sort key; posting the active key again flips direction."""
    await ensure_loaded(controller)
    controller.set_sort_key(body.key)
    return build_directory_view(controller)


@router.put("/directory/sort-fallback", response_model=Dict[str, Any])
async def set_sort_fallback(
    body: SortRequest,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    await ensure_loaded(controller)
    try:
        controller.set_sort_fallback(body.key)
    except InvalidArgumentError as e:
        raise to_http_error(e)
    return build_directory_view(controller)


@router.put("/directory/filter", response_model=Dict[str, Any])
async def set_filter(
    body: FilterRequest,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    await ensure_loaded(controller)
    controller.set_filter(body.kind, body.value)
    return build_directory_view(controller)


@router.put("/directory/scope", response_model=Dict[str, Any])
async def set_search_scope(
    body: ScopeRequest,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    await ensure_loaded(controller)
    controller.set_search_scope(body.scope)
    return build_directory_view(controller)


@router.put("/directory/display", response_model=Dict[str, Any])
async def set_display_mode(
    body: DisplayRequest,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    await ensure_loaded(controller)
    controller.set_display_mode(body.mode)
    return build_directory_view(controller)


@router.post("/directory/display/compact", response_model=Dict[str, Any])
async def toggle_compact(
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    await ensure_loaded(controller)
    controller.toggle_compact()
    return build_directory_view(controller)


@router.post("/directory/fetch-all", response_model=Dict[str, Any])
async def fetch_all_pages(
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    """Aggregate every page with the current page size."""
    users = await controller.fetch_all_pages()
    return {
        "state": controller.state.value,
        "status": controller.status,
        "users": serialize_users(users),
        "count": len(users),
    }


@router.post("/directory/reset", response_model=Dict[str, Any])
async def reset_all_config(
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    """Forget stored preferences and reload the first page."""
    await controller.reset_all_config()
    return build_directory_view(controller)


@router.get("/users/{user_id}", response_model=Dict[str, Any])
async def lookup_user(
    user_id: int,
    controller: PaginationController = Depends(get_controller),
) -> Dict[str, Any]:
    """Single user for the detail view."""
    try:
        user = controller.lookup_user_by_id(user_id)
    except NotFoundError as e:
        raise to_http_error(e)
    return user.model_dump(mode="json", by_alias=True)
