from fastapi import APIRouter
from typing import Dict, Any

from src.shared.logging import LoggingManager
from src.template_cache.service.template_cache_service import TemplateCacheService


class HealthRouter:
    """Router for health endpoints."""

    def __init__(self, cache: TemplateCacheService):
        self.cache = cache
        self.router = APIRouter(prefix="/health", tags=["health"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.get("", response_model=Dict[str, Any])(self.health_check)

    @classmethod
    def get_router(cls, cache: TemplateCacheService) -> APIRouter:
        """Get the router instance."""
        return cls(cache).router

    async def health_check(self) -> Dict[str, Any]:
        """Report service health and template cache state."""
        storage_status = "Ok" if self.cache.storage_available else "unavailable"
        cache_valid = self.cache.is_cache_valid()

        # Missing storage only disables caching
        status = "healthy" if storage_status == "Ok" else "degraded"
        self.logger.info(f"Health check result: {status} (storage: {storage_status}, cache valid: {cache_valid})")

        return {
            "status": status,
            "storage": storage_status,
            "cache_valid": cache_valid,
        }
