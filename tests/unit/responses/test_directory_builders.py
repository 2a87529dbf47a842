"""Unit tests for directory response builders."""

import pytest

from userdirectory.api.responses.directory import (DirectoryViewBuilder,
                                                   build_directory_view,
                                                   serialize_users)


@pytest.mark.unit
class TestDirectoryViewBuilder:
    """Test DirectoryViewBuilder."""

    def test_before_first_fetch(self, controller):
        """Test the view before any page is loaded."""
        data = DirectoryViewBuilder(controller).with_pagination().build()

        assert data["state"] == "idle"
        assert data["pagination"]["pageNumber"] == 1
        assert data["pagination"]["totalCount"] is None
        assert data["pagination"]["totalPages"] == 4

    @pytest.mark.asyncio
    async def test_full_view(self, controller):
        """Test the view after a page is loaded."""
        await controller.go_to_page(4)

        data = build_directory_view(controller)

        assert data["pagination"]["hasNext"] is False
        assert data["pagination"]["hasPrevious"] is True
        assert data["count"] == 6
        assert data["preferences"]["query"]["sortKey"] == "none"
        assert data["error"] is None

    def test_builder_chains(self, controller):
        """Test builder methods return the builder."""
        builder = DirectoryViewBuilder(controller)

        assert builder.with_preferences() is builder
        assert builder.with_users() is builder
        assert builder.with_error() is builder


@pytest.mark.unit
def test_serialize_users_uses_camel_case(users):
    data = serialize_users(users[:1])

    assert data == [
        {
            "id": 1,
            "firstName": "Diana",
            "lastName": "Das",
            "email": "diana.das1@company.org",
            "avatarUrl": "https://i.pravatar.cc/150?img=2",
            "fullName": "Diana Das",
        }
    ]
