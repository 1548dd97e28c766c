"""Adapters for key-value storage and the template backend."""

from .file_store import JsonFileKeyValueStore
from .memory_store import InMemoryKeyValueStore
from .sqlite_store import SQLiteKeyValueStore
from .sqlite_template_repository import SQLiteTemplateRepository

__all__ = [
    "JsonFileKeyValueStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "SQLiteTemplateRepository",
]
