"""Pytest configuration and shared fixtures for User Directory tests."""

import asyncio
import random
from collections import defaultdict

import pytest
from fakeredis import FakeStrictRedis
from fastapi.testclient import TestClient

from userdirectory.models.user import User
from userdirectory.repositories.config_store import RedisConfigStore
from userdirectory.repositories.user_source import PaginatedUserSource
from userdirectory.services.generator import generate_users
from userdirectory.services.pagination import PaginationController

FAST_LATENCY = (0.001, 0.002)

# ============================================================================
# Redis Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def fake_redis_session():
    """Single FakeRedis instance for entire test session."""
    return FakeStrictRedis(decode_responses=True)


@pytest.fixture(autouse=True)
def fake_redis(fake_redis_session):
    """
    Function-scoped fixture that clears session redis before each test.
    This ensures test isolation while using a single redis instance.
    """
    fake_redis_session.flushdb()
    yield fake_redis_session


@pytest.fixture
def store(fake_redis):
    """Preference store on fake Redis."""
    return RedisConfigStore(fake_redis, key="test:preferences")


# ============================================================================
# Dataset Fixtures
# ============================================================================


@pytest.fixture
def users():
    """The default 24-user dataset."""
    return generate_users(24)


@pytest.fixture
def make_user():
    """Factory for hand-built users."""

    def _make(user_id, first, last="Doe", email=None):
        return User(
            id=user_id,
            first_name=first,
            last_name=last,
            email=email or f"{first.lower()}.{last.lower()}@example.com",
            avatar_url=f"https://i.pravatar.cc/150?img={user_id}",
        )

    return _make


@pytest.fixture
def source(users):
    """Data source with millisecond latency."""
    return PaginatedUserSource(users, latency=FAST_LATENCY, rng=random.Random(7))


@pytest.fixture
def failing_source(users):
    """Data source whose every fetch fails."""
    return PaginatedUserSource(
        users, latency=FAST_LATENCY, failure_rate=1.0, rng=random.Random(7)
    )


class GatedUserSource(PaginatedUserSource):
    """Source that holds each page until its gate is opened."""

    def __init__(self, users):
        super().__init__(users, latency=FAST_LATENCY, rng=random.Random(7))
        self.gates = defaultdict(asyncio.Event)

    async def fetch_page(self, page_number, page_size):
        await self.gates[page_number].wait()
        return await super().fetch_page(page_number, page_size)


@pytest.fixture
def gated_source(users):
    return GatedUserSource(users)


# ============================================================================
# Controller Fixtures
# ============================================================================


@pytest.fixture
def controller(source, store):
    """Controller on the fast source and fake Redis store."""
    return PaginationController(source, store, default_page_size=6, max_page_size=100)


@pytest.fixture
def test_client(controller, store):
    """Provide a FastAPI test client wired to the test controller."""
    from userdirectory.api.dependencies.directory import (get_controller,
                                                          get_theme_service)
    from userdirectory.services.theme import ThemeService

    # Import app AFTER fixtures are built
    from userdirectory.main import app

    app.dependency_overrides[get_controller] = lambda: controller
    app.dependency_overrides[get_theme_service] = lambda: ThemeService(store)

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_lru_caches():
    """Reset cached singletons between tests."""
    from userdirectory.api.dependencies.directory import (get_user_source,
                                                          reset_controller)
    from userdirectory.core.config import get_settings
    from userdirectory.db.redis import get_redis_client, get_redis_pool

    get_settings.cache_clear()
    get_redis_client.cache_clear()
    get_redis_pool.cache_clear()
    get_user_source.cache_clear()
    reset_controller()

    yield

    get_settings.cache_clear()
    get_redis_client.cache_clear()
    get_redis_pool.cache_clear()
    get_user_source.cache_clear()
    reset_controller()


# ============================================================================
# Markers
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "redis: Redis-dependent tests")
