"""Versioned, size-bounded LRU cache of templates over a key-value store."""

import functools
import json
from typing import Any, Callable, Dict, List, Optional, TypeVar

from src.shared.logging import LoggingManager
from ..const import BYTES_PER_KB, DEFAULT_MOST_USED_LIMIT, STATS_NONE_USED
from ..domain.cache_entry import (
    CacheConfig,
    CacheContainer,
    CacheEntry,
    CacheStats,
    TemplateUsageStats,
    now_ms,
)
from ..domain.errors import (
    CacheCorruptedError,
    CacheErrorKind,
    CacheOutcome,
    CacheVersionMismatchError,
    StorageUnavailableError,
    TemplateCacheError,
)
from ..domain.template import Template
from ..ports.key_value_store import KeyValueStore

logger = LoggingManager.get_logger(__name__)

F = TypeVar('F', bound=Callable[..., Any])

Entries = Dict[str, CacheEntry[Template]]


def cache_operation(
    fallback: Callable[[], Any] = lambda: None,
    error_fallback: Optional[Callable[[], Any]] = None,
) -> Callable[[F], F]:
    """Run a public cache operation behind the safe-default boundary.

    Args:
        fallback: Produces the value returned when storage is unavailable or
            the stored container is corrupt or version-mismatched
        error_fallback: Produces the value returned on unexpected failures;
            defaults to ``fallback``

    The decorated method never raises. Its outcome is recorded on
    ``self.last_outcome``.
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: "TemplateCacheService", *args, **kwargs):
            operation = func.__name__
            self._degradation = None
            if not self.storage_available:
                unavailable = StorageUnavailableError("Persistent storage is not available")
                self.last_outcome = CacheOutcome.degraded(operation, unavailable.kind, unavailable.message)
                return fallback()
            try:
                result = func(self, *args, **kwargs)
            except TemplateCacheError as e:
                logger.warning(f"Template cache {operation} degraded: {e.message}")
                self.last_outcome = CacheOutcome.degraded(operation, e.kind, e.message)
                return fallback()
            except Exception as e:
                logger.error(f"Error in template cache {operation}: {e}")
                self.last_outcome = CacheOutcome.degraded(operation, CacheErrorKind.UNEXPECTED, str(e))
                return (error_fallback or fallback)()
            if self._degradation is not None:
                kind, message = self._degradation
                self.last_outcome = CacheOutcome.degraded(operation, kind, message)
            else:
                self.last_outcome = CacheOutcome.success(operation)
            return result
        return wrapper  # type: ignore[return-value]
    return decorator


class TemplateCacheService:
    """Client-side cache of a user's templates.

    All state lives in the injected key-value store under
    ``<storage_key>_<user_id>``; one instance is held per application session
    and re-namespaced with :meth:`set_user` when the signed-in user changes.

    Reading the template list never counts as a usage event; only
    :meth:`record_template_access` increments access counters. Writes keep at
    most ``config.max_size`` entries, evicting the least recently accessed.

    Every public method degrades to a safe default (None, empty list, False or
    a no-op) instead of raising.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore],
        config: Optional[CacheConfig] = None,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize the cache service.

        Args:
            store: Key-value store, or None when no persistent storage exists
            config: Cache configuration, defaults to CacheConfig()
            clock: Returns the current time as epoch milliseconds
        """
        self.store = store
        self.config = config or CacheConfig()
        self.clock = clock
        self.storage_key = self.config.storage_key
        self.usage_stats_key = self.config.usage_stats_key
        self.user_id: Optional[str] = None
        self.last_outcome: Optional[CacheOutcome] = None
        self._degradation = None
        self._cleanup_done = False
        self.storage_available = self._check_storage()

        if self.storage_available:
            self._cleanup()

    def _check_storage(self) -> bool:
        if self.store is None:
            return False
        try:
            return bool(self.store.is_available())
        except Exception as e:
            logger.warning(f"Key-value store capability check failed: {e}")
            return False

    # =========================================================================
    # Public API
    # =========================================================================

    def set_user(self, user_id: Optional[str]) -> None:
        """Namespace the cache to a user; None restores the bare keys."""
        self.user_id = user_id
        if user_id is not None:
            self.storage_key = f"{self.config.storage_key}_{user_id}"
            self.usage_stats_key = f"{self.config.usage_stats_key}_{user_id}"
        else:
            self.storage_key = self.config.storage_key
            self.usage_stats_key = self.config.usage_stats_key
        logger.debug(f"Template cache namespaced to {self.storage_key}")

    @cache_operation()
    def get_templates(self) -> Optional[List[Template]]:
        """Return the unexpired cached templates, newest first, or None on a miss."""
        templates = self._read_valid_templates()
        if templates is not None:
            logger.info(f"Cache hit: {len(templates)} templates read from the local cache")
        return templates

    @cache_operation()
    def record_template_access(self, template_id: str) -> None:
        """Count one use of a template and mark it recently accessed."""
        entries = self._load_entries()
        entry = entries.get(template_id)
        if entry is None:
            return
        entry.last_accessed = self.clock()
        entry.access_count += 1
        self._save(entries)
        logger.debug(f"Access recorded for template {entry.data.name} ({entry.access_count} accesses)")

    @cache_operation()
    def set_templates(self, templates: List[Template]) -> None:
        """Replace the cached set, keeping usage metadata of known ids."""
        now = self.clock()
        existing = self._load_entries()
        entries: Entries = {}
        for template in templates:
            previous = existing.get(template.id)
            entries[template.id] = CacheEntry(
                data=template,
                timestamp=now,
                access_count=previous.access_count if previous else 0,
                last_accessed=previous.last_accessed if previous else now,
                version=self.config.version,
            )

        limited = self._apply_lru_limit(entries)
        self._save(limited)
        self._write_usage_stats(limited)
        logger.info(f"Cache updated: {len(limited)} templates stored")

    @cache_operation()
    def add_template(self, template: Template) -> None:
        """Insert or overwrite one template with fresh usage metadata."""
        self._add_entry(template)

    @cache_operation()
    def update_template(self, template: Template) -> None:
        """Replace a cached template's data, keeping its usage metadata.

        Unknown ids are added as new entries.
        """
        entries = self._load_entries()
        entry = entries.get(template.id)
        if entry is None:
            self._add_entry(template, entries)
            return
        entry.data = template
        entry.timestamp = self.clock()
        self._save(entries)
        logger.debug(f"Template updated in cache: {template.name}")

    @cache_operation()
    def remove_template(self, template_id: str) -> None:
        entries = self._load_entries()
        if template_id not in entries:
            return
        del entries[template_id]
        self._save(entries)
        logger.debug(f"Template removed from cache: {template_id}")

    @cache_operation(fallback=bool)
    def is_cache_valid(self) -> bool:
        """True when a current-version container with at least one entry exists."""
        raw = self.store.get(self.storage_key)
        if not raw:
            return False
        try:
            payload = json.loads(raw)
        except ValueError:
            return False
        if not isinstance(payload, dict) or payload.get("version") != self.config.version:
            return False
        data = payload.get("data") or {}
        return isinstance(data, dict) and len(data) > 0

    @cache_operation(fallback=list)
    def get_most_used_templates(self, limit: int = DEFAULT_MOST_USED_LIMIT) -> List[Template]:
        """Unexpired templates with at least one access, most accessed first."""
        templates = self._read_valid_templates()
        if not templates:
            return []
        entries = self._load_entries()
        used = [
            (template, entries[template.id].access_count)
            for template in templates
            if template.id in entries and entries[template.id].access_count > 0
        ]
        used.sort(key=lambda item: item[1], reverse=True)
        return [template for template, _ in used[:limit]]

    @cache_operation(fallback=CacheStats.empty, error_fallback=CacheStats.error)
    def get_cache_stats(self) -> CacheStats:
        entries = list(self._load_entries().values())
        if not entries:
            return CacheStats.empty()

        # Ties resolve to the most recently inserted entry
        latest_first = entries[::-1]
        oldest = min(latest_first, key=lambda entry: entry.timestamp)
        newest = max(latest_first, key=lambda entry: entry.timestamp)
        most_used = max(latest_first, key=lambda entry: entry.access_count)

        raw = self.store.get(self.storage_key)
        size_kb = int(len(raw.encode("utf-8")) / BYTES_PER_KB + 0.5) if raw else 0

        return CacheStats(
            total_templates=len(entries),
            cache_size=f"{size_kb} KB",
            oldest_entry=oldest.data.name,
            newest_entry=newest.data.name,
            most_used=(
                f"{most_used.data.name} ({most_used.access_count} accesses)"
                if most_used.access_count > 0
                else STATS_NONE_USED
            ),
        )

    @cache_operation()
    def reset_access_counters(self) -> None:
        entries = self._load_entries()
        now = self.clock()
        for entry in entries.values():
            entry.access_count = 0
            entry.last_accessed = now
        self._save(entries)
        logger.info("Template access counters reset")

    def invalidate(self) -> None:
        """Drop the cache so the next read goes to the backend."""
        self.clear()
        logger.info("Template cache invalidated")

    @cache_operation()
    def clear(self) -> None:
        """Remove the container and usage-stats record of the current namespace."""
        self._remove_keys()
        logger.info(f"Template cache cleared: {self.storage_key}")

    # =========================================================================
    # Container access
    # =========================================================================

    def _load_container(self) -> Optional[CacheContainer]:
        """Read and validate the stored container.

        Raises:
            CacheCorruptedError: If the stored value cannot be parsed
            CacheVersionMismatchError: If it was written under another version
        """
        raw = self.store.get(self.storage_key)
        if not raw:
            return None
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise CacheCorruptedError(f"Unparsable cache value: {e}", self.storage_key) from e
        if not isinstance(payload, dict):
            raise CacheCorruptedError("Cache value is not an object", self.storage_key)
        if payload.get("version") != self.config.version:
            raise CacheVersionMismatchError(payload.get("version"), self.config.version, self.storage_key)
        return CacheContainer.from_dict(payload)

    def _load_entries(self) -> Entries:
        """Entries of the stored container; an invalid container is dropped and reads as empty."""
        try:
            container = self._load_container()
        except (CacheCorruptedError, CacheVersionMismatchError) as e:
            self._drop_invalid(e)
            return {}
        return container.data if container else {}

    def _read_valid_templates(self) -> Optional[List[Template]]:
        try:
            container = self._load_container()
        except (CacheCorruptedError, CacheVersionMismatchError) as e:
            self._drop_invalid(e)
            return None
        if container is None:
            return None

        now = self.clock()
        valid = [
            entry.data
            for entry in container.data.values()
            if now - entry.timestamp < self.config.max_age_ms
        ]
        if not valid:
            self._remove_keys()
            return None
        return sorted(valid, key=lambda template: template.created_at, reverse=True)

    def _drop_invalid(self, error: TemplateCacheError) -> None:
        logger.warning(f"Dropping template cache {self.storage_key}: {error.message}")
        self._degradation = (error.kind, error.message)
        self._remove_keys()

    def _save(self, entries: Entries) -> None:
        container = CacheContainer(
            version=self.config.version,
            data=entries,
            last_updated=self.clock(),
        )
        self.store.set(self.storage_key, json.dumps(container.to_dict()))

    def _remove_keys(self) -> None:
        self.store.remove(self.storage_key)
        self.store.remove(self.usage_stats_key)

    def _add_entry(self, template: Template, entries: Optional[Entries] = None) -> None:
        if entries is None:
            entries = self._load_entries()
        now = self.clock()
        entries[template.id] = CacheEntry(
            data=template,
            timestamp=now,
            access_count=0,
            last_accessed=now,
            version=self.config.version,
        )
        self._save(self._apply_lru_limit(entries))
        logger.debug(f"Template added to cache: {template.name}")

    def _write_usage_stats(self, entries: Entries) -> None:
        stats = [
            TemplateUsageStats(
                template_id=template_id,
                access_count=entry.access_count,
                last_accessed=entry.last_accessed,
                created_at=entry.data.created_at_ms,
            ).to_dict()
            for template_id, entry in entries.items()
        ]
        self.store.set(self.usage_stats_key, json.dumps(stats))

    # =========================================================================
    # Eviction and cleanup
    # =========================================================================

    def _apply_lru_limit(self, entries: Entries) -> Entries:
        """Keep the ``max_size`` most recently accessed entries."""
        if len(entries) <= self.config.max_size:
            return entries

        # sorted() is stable, so ties keep insertion order
        ranked = sorted(entries.items(), key=lambda item: item[1].last_accessed, reverse=True)
        logger.info(f"Cache LRU: keeping {self.config.max_size} of {len(entries)} templates")
        return dict(ranked[:self.config.max_size])

    def _cleanup(self) -> List[str]:
        """Delete every cache or usage key, of any user, that is unparsable or predates the current version.

        Runs once per service lifetime. Returns the removed keys.
        """
        if self._cleanup_done:
            return []
        self._cleanup_done = True

        prefixes = (f"{self.config.storage_key}_", f"{self.config.usage_stats_key}_")
        removed: List[str] = []
        try:
            for key in self.store.list_keys():
                if not key.startswith(prefixes):
                    continue
                if self._is_stale(key):
                    self.store.remove(key)
                    removed.append(key)
        except Exception as e:
            logger.error(f"Error during template cache cleanup: {e}")
        if removed:
            logger.info(f"Removed {len(removed)} stale template cache keys: {', '.join(removed)}")
        return removed

    def _is_stale(self, key: str) -> bool:
        raw = self.store.get(key)
        if not raw:
            return False
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.debug(f"Corrupt template cache key: {key}")
            return True
        version = payload.get("version") if isinstance(payload, dict) else None
        if isinstance(version, bool) or not isinstance(version, (int, float)):
            return True
        return not version or version < self.config.version

