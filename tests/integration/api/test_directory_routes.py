"""Integration tests for directory API routes."""

import pytest
from fastapi import status

PREFIX = "/api/v1"


@pytest.mark.integration
class TestDirectoryView:
    """Test GET /api/v1/directory."""

    def test_initial_view(self, test_client):
        """Test the first page is loaded on startup."""
        response = test_client.get(f"{PREFIX}/directory")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["state"] == "idle"
        assert data["status"] == "Loaded"
        assert data["pagination"] == {
            "pageNumber": 1,
            "pageSize": 6,
            "totalPages": 4,
            "totalCount": 24,
            "hasNext": True,
            "hasPrevious": False,
        }
        assert data["count"] == 6
        assert data["users"][0]["firstName"] == "Diana"
        assert data["users"][0]["fullName"] == "Diana Das"
        assert data["error"] is None

    def test_preferences_in_view(self, test_client):
        """Test default preferences are reported in the view."""
        data = test_client.get(f"{PREFIX}/directory").json()

        assert data["preferences"]["pageSize"] == 6
        assert data["preferences"]["displayMode"] == "table"
        assert data["preferences"]["query"]["searchScope"] == "page"
        assert data["preferences"]["query"]["sortFallback"] == "firstName"


@pytest.mark.integration
class TestNavigationRoutes:
    """Test page navigation endpoints."""

    def test_go_to_page_clamps(self, test_client):
        """Test a page past the end lands on the last page."""
        response = test_client.post(f"{PREFIX}/directory/pages/5")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["pagination"]["pageNumber"] == 4
        assert [u["id"] for u in data["users"]] == [19, 20, 21, 22, 23, 24]

    def test_shortcuts(self, test_client):
        """Test first, prev, next and last shortcuts."""
        assert test_client.post(f"{PREFIX}/directory/pages/last").json()[
            "pagination"
        ]["pageNumber"] == 4
        assert test_client.post(f"{PREFIX}/directory/pages/prev").json()[
            "pagination"
        ]["pageNumber"] == 3
        assert test_client.post(f"{PREFIX}/directory/pages/first").json()[
            "pagination"
        ]["pageNumber"] == 1
        assert test_client.post(f"{PREFIX}/directory/pages/next").json()[
            "pagination"
        ]["pageNumber"] == 2

    def test_non_numeric_page(self, test_client):
        """Test a non-numeric page number is rejected."""
        response = test_client.post(f"{PREFIX}/directory/pages/seventh")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_set_page_size(self, test_client, fake_redis):
        """Test page size change resets to page 1 and is persisted."""
        test_client.post(f"{PREFIX}/directory/pages/3")

        response = test_client.put(f"{PREFIX}/directory/page-size", json={"pageSize": 10})

        assert response.status_code == status.HTTP_200_OK
        pagination = response.json()["pagination"]
        assert pagination["totalPages"] == 3
        assert pagination["pageNumber"] == 1
        assert fake_redis.hget("test:preferences", "u_per_page") == "10"

    @pytest.mark.parametrize("page_size", [0, -3, 1000])
    def test_invalid_page_size(self, test_client, page_size):
        """Test out-of-range page sizes return 422."""
        response = test_client.put(
            f"{PREFIX}/directory/page-size", json={"pageSize": page_size}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.integration
class TestQueryRoutes:
    """Test search, sort, filter and scope endpoints."""

    def test_search_on_page(self, test_client):
        """Test search over the current page."""
        response = test_client.put(f"{PREFIX}/directory/search", json={"text": "PRIYA"})

        data = response.json()
        assert data["count"] == 1
        assert data["users"][0]["id"] == 5
        assert data["preferences"]["query"]["searchText"] == "PRIYA"

    def test_global_filter_sorted(self, test_client):
        """Test global scope with a domain filter and name sort."""
        test_client.put(f"{PREFIX}/directory/scope", json={"scope": "global"})
        test_client.post(f"{PREFIX}/directory/sort", json={"key": "firstName"})

        response = test_client.put(
            f"{PREFIX}/directory/filter", json={"kind": "domain", "value": "gmail.com"}
        )

        data = response.json()
        assert [u["firstName"] for u in data["users"]] == [
            "Hannah",
            "Priya",
            "Ravi",
            "Zara",
        ]

    def test_sort_toggle(self, test_client):
        """Test reselecting the sort key flips the direction."""
        first = test_client.post(f"{PREFIX}/directory/sort", json={"key": "email"})
        second = test_client.post(f"{PREFIX}/directory/sort", json={"key": "email"})

        assert first.json()["preferences"]["query"]["sortDirection"] == "asc"
        assert second.json()["preferences"]["query"]["sortDirection"] == "desc"

    def test_invalid_sort_key(self, test_client):
        """Test an unknown sort key returns 422."""
        response = test_client.post(f"{PREFIX}/directory/sort", json={"key": "age"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_sort_fallback(self, test_client):
        """Test the sort fallback can be changed."""
        response = test_client.put(
            f"{PREFIX}/directory/sort-fallback", json={"key": "email"}
        )

        assert response.json()["preferences"]["query"]["sortFallback"] == "email"

    def test_sort_fallback_none_rejected(self, test_client):
        """Test the sort fallback must name a field."""
        response = test_client.put(
            f"{PREFIX}/directory/sort-fallback", json={"key": "none"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_display_preferences(self, test_client):
        """Test display mode and compact toggle."""
        test_client.put(f"{PREFIX}/directory/display", json={"mode": "card"})
        response = test_client.post(f"{PREFIX}/directory/display/compact")

        prefs = response.json()["preferences"]
        assert prefs["displayMode"] == "card"
        assert prefs["compact"] is True


@pytest.mark.integration
class TestAggregateRoutes:
    """Test fetch-all, reset and lookup."""

    def test_fetch_all(self, test_client):
        """Test fetch-all returns the whole dataset."""
        response = test_client.post(f"{PREFIX}/directory/fetch-all")

        data = response.json()
        assert data["count"] == 24
        assert data["status"] == "All pages loaded"

    def test_reset(self, test_client, fake_redis):
        """Test reset restores defaults and clears the store."""
        test_client.put(f"{PREFIX}/directory/page-size", json={"pageSize": 15})
        test_client.put(f"{PREFIX}/directory/search", json={"text": "x"})

        response = test_client.post(f"{PREFIX}/directory/reset")

        data = response.json()
        assert data["pagination"]["pageSize"] == 6
        assert data["pagination"]["pageNumber"] == 1
        assert data["preferences"]["query"]["searchText"] == ""
        assert not fake_redis.exists("test:preferences")

    def test_lookup_user(self, test_client):
        """Test lookup of an existing user."""
        response = test_client.get(f"{PREFIX}/users/1")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == "diana.das1@company.org"
        assert response.json()["avatarUrl"] == "https://i.pravatar.cc/150?img=2"

    def test_lookup_missing_user(self, test_client):
        """Test lookup of an unknown id returns 404."""
        response = test_client.get(f"{PREFIX}/users/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User 999 not found"


@pytest.mark.integration
class TestFailureRoutes:
    """Data source failures surface in the view, not as HTTP errors."""

    def test_failed_fetch_view(self, test_client, source):
        """Test a failed fetch shows an empty list and the error."""
        source.failure_rate = 1.0

        response = test_client.get(f"{PREFIX}/directory")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "Failed to fetch users"
        assert data["users"] == []
        assert data["error"]["type"] == "UnavailableError"


@pytest.mark.integration
class TestThemeRoutes:
    """Test theme endpoints."""

    def test_theme_round_trip(self, test_client, fake_redis):
        """Test reading, setting and toggling dark mode."""
        assert test_client.get(f"{PREFIX}/theme").json() == {"dark": False}

        assert test_client.put(f"{PREFIX}/theme", json={"dark": True}).json() == {
            "dark": True
        }
        assert fake_redis.hget("test:preferences", "u_dark") == "true"

        assert test_client.post(f"{PREFIX}/theme/toggle").json() == {"dark": False}
