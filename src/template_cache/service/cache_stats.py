"""Read-only statistics accessor over the template cache."""

from typing import List, Optional

from ..const import DEFAULT_MOST_USED_LIMIT
from ..domain.cache_entry import CacheStats
from ..domain.template import Template
from .template_cache_service import TemplateCacheService


class TemplateCacheStats:
    """Thin pass-through exposing the cache's statistics operations."""

    def __init__(self, cache: TemplateCacheService):
        self.cache = cache

    def get_stats(self) -> CacheStats:
        return self.cache.get_cache_stats()

    def get_most_used(self, limit: Optional[int] = None) -> List[Template]:
        return self.cache.get_most_used_templates(limit if limit is not None else DEFAULT_MOST_USED_LIMIT)

    def invalidate(self) -> None:
        self.cache.invalidate()

    def clear(self) -> None:
        self.cache.clear()

    def reset_counters(self) -> None:
        self.cache.reset_access_counters()

    def record_access(self, template_id: str) -> None:
        self.cache.record_template_access(template_id)
