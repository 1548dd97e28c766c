"""Integration tests with real SQLite database."""

import json

import pytest
from fastapi.testclient import TestClient

from main import NotasAIApp
from src.shared.config import Config
from src.template_cache.domain.cache_entry import CacheConfig
from src.template_cache.infrastructure.adapters.sqlite_store import SQLiteKeyValueStore
from src.template_cache.infrastructure.adapters.sqlite_template_repository import SQLiteTemplateRepository
from src.template_cache.service.template_cache_service import TemplateCacheService
from src.template_cache.service.template_service import TemplateService
from tests.conftest import FakeClock
from tests.test_const import CACHE_KEY, MAX_AGE_MS, OTHER_USER_ID, TEST_USER_ID


class TestSQLiteTemplateRepository:
    """Integration tests for the template persistence backend."""

    @pytest.fixture
    def sqlite_repo(self, tmp_path):
        """Create a repository with a temporary database file."""
        repo = SQLiteTemplateRepository(db_path=tmp_path / "templates.db")
        yield repo
        repo.close()

    def test_full_crud_workflow(self, sqlite_repo):
        """Test complete CRUD workflow with real database."""
        created = sqlite_repo.create_template(TEST_USER_ID, "Consulta", "Motivo de consulta")
        assert created.id

        fetched = sqlite_repo.get_template(created.id)
        assert fetched.name == "Consulta"
        assert fetched.created_at.tzinfo is not None

        updated = sqlite_repo.update_template(created.id, content="Exploración física")
        assert updated.name == "Consulta"
        assert sqlite_repo.get_template(created.id).content == "Exploración física"

        assert sqlite_repo.delete_template(created.id) is True
        assert sqlite_repo.get_template(created.id) is None
        assert sqlite_repo.delete_template(created.id) is False

    def test_list_is_scoped_and_newest_first(self, sqlite_repo):
        first = sqlite_repo.create_template(TEST_USER_ID, "First", "")
        second = sqlite_repo.create_template(TEST_USER_ID, "Second", "")
        sqlite_repo.create_template(OTHER_USER_ID, "Other", "")

        listed = sqlite_repo.list_templates(TEST_USER_ID)

        assert {t.id for t in listed} == {first.id, second.id}
        assert listed[0].created_at >= listed[1].created_at

    def test_invalid_name_is_rejected(self, sqlite_repo):
        with pytest.raises(ValueError):
            sqlite_repo.create_template(TEST_USER_ID, "x" * 101, "")
        assert sqlite_repo.list_templates(TEST_USER_ID) == []

    def test_update_unknown(self, sqlite_repo):
        assert sqlite_repo.update_template("missing", name="x") is None


class TestCachedTemplateWorkflow:
    """End-to-end read-through caching over SQLite."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def parts(self, tmp_path, clock):
        store = SQLiteKeyValueStore(db_path=tmp_path / "cache.db")
        repo = SQLiteTemplateRepository(db_path=tmp_path / "templates.db")
        cache = TemplateCacheService(store, CacheConfig(), clock=clock)
        yield store, repo, cache, TemplateService(repo, cache)
        repo.close()
        store.close()

    def test_list_populates_cache_and_survives_restart(self, parts, clock, tmp_path):
        store, repo, cache, service = parts
        created = service.create_template(TEST_USER_ID, "Consulta", "Motivo")

        service.list_templates(TEST_USER_ID, force_refresh=True)
        service.get_template(created.id)

        payload = json.loads(store.get(CACHE_KEY))
        assert payload["version"] == 2
        assert payload["data"][created.id]["accessCount"] == 1

        reopened = TemplateCacheService(store, CacheConfig(), clock=clock)
        reopened.set_user(TEST_USER_ID)
        assert [t.id for t in reopened.get_templates()] == [created.id]

    def test_expired_cache_falls_back_to_repository(self, parts, clock):
        store, repo, cache, service = parts
        service.create_template(TEST_USER_ID, "Consulta", "")
        service.list_templates(TEST_USER_ID, force_refresh=True)

        clock.advance(MAX_AGE_MS)

        assert cache.get_templates() is None
        assert len(service.list_templates(TEST_USER_ID)) == 1
        assert cache.is_cache_valid()


class TestApplicationWiring:
    """Smoke test for the assembled application."""

    def test_app_serves_health_and_stats(self, tmp_path):
        config = Config(storage_type="memory", database_path=tmp_path / "templates.db")
        client = TestClient(NotasAIApp(config).app)

        health = client.get("/health").json()
        assert health["storage"] == "Ok"
        assert health["cache_valid"] is False

        stats = client.get("/cache/stats").json()
        assert stats["total_templates"] == 0
