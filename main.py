"""Main entry point for the Notas AI template cache service."""

from typing import Optional

from fastapi import FastAPI

from src.shared.config import Config
from src.shared.logging import LoggingManager
from src.slices.cache.cache_router import CacheRouter
from src.slices.health.health_router import HealthRouter
from src.template_cache.domain.cache_entry import CacheConfig
from src.template_cache.infrastructure.adapters.sqlite_template_repository import SQLiteTemplateRepository
from src.template_cache.infrastructure.factory.store_factory import StoreFactory
from src.template_cache.service.cache_stats import TemplateCacheStats
from src.template_cache.service.template_cache_service import TemplateCacheService
from src.template_cache.service.template_service import TemplateService


class NotasAIApp:
    """Main application class for the Notas AI template cache service."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

        LoggingManager.setup_logging(self.config.log_level)

        # One cache instance per application session
        store = StoreFactory.create_store(self.config.storage_type, self.config.storage_path)
        self.cache = TemplateCacheService(store, CacheConfig.from_settings(self.config))
        self.cache_stats = TemplateCacheStats(self.cache)

        self.repository = SQLiteTemplateRepository(db_path=self.config.database_path)
        self.template_service = TemplateService(self.repository, self.cache)

        self.cache_router = CacheRouter.get_router(self.cache_stats)
        self.health_router = HealthRouter.get_router(self.cache)

        self.app = FastAPI(
            title=self.config.app_name,
            description="Template cache service for the Notas AI clinical note assistant",
            version="0.1.0",
        )

        # Mount slices
        self.app.include_router(self.cache_router)
        self.app.include_router(self.health_router)


if __name__ == "__main__":
    import uvicorn

    app_instance = NotasAIApp()
    uvicorn.run(app_instance.app, host=app_instance.config.server_host, port=app_instance.config.server_port)
