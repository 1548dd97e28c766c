from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class CacheErrorKind(Enum):
    """Ways a cache operation can degrade to its safe default."""
    STORAGE_UNAVAILABLE = "storage_unavailable"
    CORRUPT = "corrupt"
    VERSION_MISMATCH = "version_mismatch"
    UNEXPECTED = "unexpected"


class TemplateCacheError(Exception):
    """Base exception for template cache failures.

    Raised internally by the cache service and always converted to a safe
    default at the public boundary.
    """

    kind = CacheErrorKind.UNEXPECTED

    def __init__(self, message: str, storage_key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.storage_key = storage_key


class StorageUnavailableError(TemplateCacheError):
    """No persistent key-value storage is reachable from this context."""

    kind = CacheErrorKind.STORAGE_UNAVAILABLE


class CacheCorruptedError(TemplateCacheError):
    """The stored container could not be parsed."""

    kind = CacheErrorKind.CORRUPT


class CacheVersionMismatchError(TemplateCacheError):
    """The stored container was written under another schema version."""

    kind = CacheErrorKind.VERSION_MISMATCH

    def __init__(self, found: Any, expected: int, storage_key: Optional[str] = None):
        super().__init__(
            f"Cache version {found!r} does not match expected version {expected}",
            storage_key=storage_key,
        )
        self.found = found
        self.expected = expected


@dataclass(frozen=True)
class CacheOutcome:
    """Result of the last public cache operation.

    ``ok`` is False when the operation fell back to its safe default; the
    caller still only sees the default value.
    """
    operation: str
    ok: bool = True
    error_kind: Optional[CacheErrorKind] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, operation: str) -> "CacheOutcome":
        return cls(operation=operation)

    @classmethod
    def degraded(cls, operation: str, kind: CacheErrorKind, message: str) -> "CacheOutcome":
        return cls(operation=operation, ok=False, error_kind=kind, error_message=message)
