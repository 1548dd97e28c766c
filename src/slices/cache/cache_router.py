from fastapi import APIRouter
from typing import Dict, Any, List

from src.shared.logging import LoggingManager
from src.template_cache.const import DEFAULT_MOST_USED_LIMIT
from src.template_cache.service.cache_stats import TemplateCacheStats


class CacheRouter:
    """Router for template cache statistics and maintenance endpoints."""

    def __init__(self, stats: TemplateCacheStats):
        self.stats = stats
        self.router = APIRouter(prefix="/cache", tags=["cache"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.get("/stats", response_model=Dict[str, Any])(self.get_stats)
        self.router.get("/most-used", response_model=List[Dict[str, Any]])(self.get_most_used)
        self.router.post("/invalidate", response_model=Dict[str, str])(self.invalidate)
        self.router.post("/clear", response_model=Dict[str, str])(self.clear)
        self.router.post("/reset-counters", response_model=Dict[str, str])(self.reset_counters)
        self.router.post("/access/{template_id}", response_model=Dict[str, str])(self.record_access)

    @classmethod
    def get_router(cls, stats: TemplateCacheStats) -> APIRouter:
        """Get the router instance."""
        return cls(stats).router

    async def get_stats(self) -> Dict[str, Any]:
        """Summarize the current user's template cache."""
        return self.stats.get_stats().to_dict()

    async def get_most_used(self, limit: int = DEFAULT_MOST_USED_LIMIT) -> List[Dict[str, Any]]:
        """List the most used cached templates."""
        templates = self.stats.get_most_used(limit)
        self.logger.debug(f"Returning {len(templates)} most used templates")
        return [template.to_dict() for template in templates]

    async def invalidate(self) -> Dict[str, str]:
        self.stats.invalidate()
        return {"status": "invalidated"}

    async def clear(self) -> Dict[str, str]:
        self.stats.clear()
        return {"status": "cleared"}

    async def reset_counters(self) -> Dict[str, str]:
        self.stats.reset_counters()
        return {"status": "reset"}

    async def record_access(self, template_id: str) -> Dict[str, str]:
        self.stats.record_access(template_id)
        return {"status": "recorded", "template_id": template_id}
