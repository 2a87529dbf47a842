"""API v1 router assembly."""

from fastapi import APIRouter

from userdirectory.api.v1.endpoints import directory, theme

api_router = APIRouter()

# Directory navigation, preferences and lookup
api_router.include_router(directory.router, tags=["directory"])

# Theme preference
api_router.include_router(theme.router, prefix="/theme", tags=["theme"])
