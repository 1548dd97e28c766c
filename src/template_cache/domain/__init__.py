"""Domain layer for the template cache."""

from .cache_entry import CacheConfig, CacheContainer, CacheEntry, CacheStats, TemplateUsageStats, now_ms
from .errors import (
    CacheCorruptedError,
    CacheErrorKind,
    CacheOutcome,
    CacheVersionMismatchError,
    StorageUnavailableError,
    TemplateCacheError,
)
from .template import Template

__all__ = [
    "CacheConfig",
    "CacheContainer",
    "CacheEntry",
    "CacheStats",
    "TemplateUsageStats",
    "now_ms",
    "CacheCorruptedError",
    "CacheErrorKind",
    "CacheOutcome",
    "CacheVersionMismatchError",
    "StorageUnavailableError",
    "TemplateCacheError",
    "Template",
]
