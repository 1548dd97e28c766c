"""Template cache services."""

from .cache_stats import TemplateCacheStats
from .session_binder import AuthSessionBinder
from .template_cache_service import TemplateCacheService, cache_operation
from .template_service import TemplateService

__all__ = [
    "TemplateCacheStats",
    "AuthSessionBinder",
    "TemplateCacheService",
    "cache_operation",
    "TemplateService",
]
