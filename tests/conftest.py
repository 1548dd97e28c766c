"""Shared test configuration and fixtures for all tests."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.template_cache.domain.cache_entry import CacheConfig
from src.template_cache.domain.template import Template
from src.template_cache.infrastructure.adapters.memory_store import InMemoryKeyValueStore
from src.template_cache.service.template_cache_service import TemplateCacheService
from .test_const import BASE_CREATED_AT, START_TIME_MS, TEST_USER_ID


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int = START_TIME_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


def make_template(index: int, user_id: str = TEST_USER_ID, **overrides) -> Template:
    """Build a template whose created_at grows with ``index``."""
    fields = {
        "id": f"tpl-{index}",
        "name": f"Template {index}",
        "content": f"Content of template {index}",
        "created_at": BASE_CREATED_AT + timedelta(hours=index),
        "user_id": user_id,
    }
    fields.update(overrides)
    return Template(**fields)


@pytest.fixture
def clock():
    """Controllable clock fixture."""
    return FakeClock()


@pytest.fixture
def store():
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def cache(store, clock):
    """Cache service namespaced to the test user."""
    service = TemplateCacheService(store, CacheConfig(), clock=clock)
    service.set_user(TEST_USER_ID)
    return service


@pytest.fixture
def templates():
    """Three templates created in increasing order."""
    return [make_template(i) for i in range(1, 4)]


@pytest.fixture
def mock_auth_provider():
    """Mock identity provider fixture."""
    provider = MagicMock()
    provider.get_session = AsyncMock(return_value=None)
    provider.sign_in_with_google = AsyncMock()
    provider.sign_out = AsyncMock()
    provider.on_auth_state_change = MagicMock(return_value=MagicMock())
    return provider


@pytest.fixture
def mock_repository():
    """Mock template repository fixture."""
    return MagicMock()
