"""Response builders package."""

from .directory import DirectoryViewBuilder, build_directory_view, serialize_users

__all__ = ["DirectoryViewBuilder", "build_directory_view", "serialize_users"]
