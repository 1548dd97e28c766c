import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, TypeVar

from pydantic import ValidationError

from ..const import (
    DEFAULT_CACHE_MAX_AGE_SECONDS,
    DEFAULT_CACHE_MAX_SIZE,
    DEFAULT_CACHE_VERSION,
    EMPTY_CACHE_SIZE,
    STATS_ERROR,
    STATS_NOT_AVAILABLE,
    TEMPLATE_CACHE_PREFIX,
    TEMPLATE_USAGE_PREFIX,
)
from .errors import CacheCorruptedError
from .template import Template

T = TypeVar('T')


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheConfig:
    """Immutable cache configuration.

    ``storage_key`` and ``usage_stats_key`` are the un-namespaced bases; the
    service appends the signed-in user id.
    """
    max_size: int = DEFAULT_CACHE_MAX_SIZE
    max_age_ms: int = DEFAULT_CACHE_MAX_AGE_SECONDS * 1000
    storage_key: str = TEMPLATE_CACHE_PREFIX
    usage_stats_key: str = TEMPLATE_USAGE_PREFIX
    version: int = DEFAULT_CACHE_VERSION

    @classmethod
    def from_settings(cls, config: Any) -> "CacheConfig":
        """Build the cache configuration from the application Config."""
        return cls(
            max_size=config.cache_max_size,
            max_age_ms=config.cache_max_age_seconds * 1000,
            storage_key=config.cache_storage_key,
            usage_stats_key=config.usage_stats_key,
            version=config.cache_version,
        )


@dataclass
class CacheEntry(Generic[T]):
    """One cached payload plus its usage metadata."""
    data: T
    timestamp: int
    access_count: int = 0
    last_accessed: int = 0
    version: int = DEFAULT_CACHE_VERSION

    def to_dict(self) -> Dict[str, Any]:
        data = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        return {
            "data": data,
            "timestamp": self.timestamp,
            "accessCount": self.access_count,
            "lastAccessed": self.last_accessed,
            "version": self.version,
        }

    @classmethod
    def from_dict(
        cls,
        payload: Dict[str, Any],
        load_data: Callable[[Dict[str, Any]], T] = Template.from_dict,
    ) -> "CacheEntry[T]":
        """Rebuild an entry from its stored form.

        Raises:
            CacheCorruptedError: If the entry or its payload is malformed
        """
        if not isinstance(payload, dict):
            raise CacheCorruptedError(f"Cache entry is not an object: {type(payload).__name__}")
        try:
            return cls(
                data=load_data(payload["data"]),
                timestamp=int(payload["timestamp"]),
                access_count=int(payload.get("accessCount") or 0),
                last_accessed=int(payload.get("lastAccessed") or 0),
                version=int(payload.get("version") or 0),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise CacheCorruptedError(f"Malformed cache entry: {e}") from e


@dataclass
class CacheContainer:
    """The versioned bundle of entries stored under one namespaced key."""
    version: int
    data: Dict[str, CacheEntry[Template]] = field(default_factory=dict)
    last_updated: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "data": {template_id: entry.to_dict() for template_id, entry in self.data.items()},
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "CacheContainer":
        """Rebuild a container; the caller has already checked the version.

        Raises:
            CacheCorruptedError: If the container or any entry is malformed
        """
        raw_entries = payload.get("data") or {}
        if not isinstance(raw_entries, dict):
            raise CacheCorruptedError("Cache data is not an object")
        entries = {
            str(template_id): CacheEntry.from_dict(raw_entry)
            for template_id, raw_entry in raw_entries.items()
        }
        return cls(
            version=payload["version"],
            data=entries,
            last_updated=int(payload.get("lastUpdated") or 0),
        )


@dataclass
class TemplateUsageStats:
    """Usage record written alongside the container."""
    template_id: str
    access_count: int
    last_accessed: int
    created_at: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "templateId": self.template_id,
            "accessCount": self.access_count,
            "lastAccessed": self.last_accessed,
            "createdAt": self.created_at,
        }


@dataclass
class CacheStats:
    """Human-readable cache summary."""
    total_templates: int = 0
    cache_size: str = EMPTY_CACHE_SIZE
    oldest_entry: str = STATS_NOT_AVAILABLE
    newest_entry: str = STATS_NOT_AVAILABLE
    most_used: str = STATS_NOT_AVAILABLE

    @classmethod
    def empty(cls) -> "CacheStats":
        return cls()

    @classmethod
    def error(cls) -> "CacheStats":
        return cls(oldest_entry=STATS_ERROR, newest_entry=STATS_ERROR, most_used=STATS_ERROR)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_templates": self.total_templates,
            "cache_size": self.cache_size,
            "oldest_entry": self.oldest_entry,
            "newest_entry": self.newest_entry,
            "most_used": self.most_used,
        }
