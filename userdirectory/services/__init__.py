"""Business logic services package."""

from .generator import build_user, generate_users
from .pagination import ControllerState, PaginationController
from .query import apply_query
from .theme import ThemeService

__all__ = [
    "generate_users",
    "build_user",
    "apply_query",
    "PaginationController",
    "ControllerState",
    "ThemeService",
]
