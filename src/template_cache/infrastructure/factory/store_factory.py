"""Store factory for creating key-value store adapters based on configuration."""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from src.shared.logging import LoggingManager
from ...const import STORAGE_FILE, STORAGE_MEMORY, STORAGE_NONE, STORAGE_SQLITE
from ...ports.key_value_store import KeyValueStore
from ..adapters.file_store import JsonFileKeyValueStore
from ..adapters.memory_store import InMemoryKeyValueStore
from ..adapters.sqlite_store import SQLiteKeyValueStore

logger = LoggingManager.get_logger(__name__)

DEFAULT_DATA_DIR = Path("data")


class StorageType(Enum):
    """Supported storage types."""
    MEMORY = STORAGE_MEMORY
    FILE = STORAGE_FILE
    SQLITE = STORAGE_SQLITE
    NONE = STORAGE_NONE


class StoreFactory:
    """Factory for creating key-value store adapters based on configuration."""

    @staticmethod
    def create_store(
        storage_type: str = STORAGE_MEMORY,
        storage_path: Optional[Union[Path, str]] = None
    ) -> Optional[KeyValueStore]:
        """Create and return the appropriate store adapter.

        Args:
            storage_type: "memory", "file", "sqlite" or "none"
            storage_path: File or database path for persistent adapters

        Returns:
            KeyValueStore instance, or None for "none" (no persistent storage)

        Raises:
            ValueError: If the storage type is unsupported
        """
        if storage_path is not None and isinstance(storage_path, str):
            storage_path = Path(storage_path)

        if storage_type == StorageType.MEMORY.value:
            logger.info("Creating InMemoryKeyValueStore")
            return InMemoryKeyValueStore()

        elif storage_type == StorageType.FILE.value:
            if storage_path is None:
                storage_path = DEFAULT_DATA_DIR / "template_cache.json"
                logger.info(f"Using default cache file path: {storage_path}")
            logger.info(f"Creating JsonFileKeyValueStore with path: {storage_path}")
            return JsonFileKeyValueStore(file_path=storage_path)

        elif storage_type == StorageType.SQLITE.value:
            if storage_path is None:
                storage_path = DEFAULT_DATA_DIR / "template_cache.db"
                logger.info(f"Using default SQLite path: {storage_path}")
            logger.info(f"Creating SQLiteKeyValueStore with path: {storage_path}")
            return SQLiteKeyValueStore(db_path=storage_path)

        elif storage_type == StorageType.NONE.value:
            logger.info("No persistent storage configured; template cache disabled")
            return None

        else:
            supported_types = ", ".join(st.value for st in StorageType)
            raise ValueError(
                f"Unsupported storage type: {storage_type}. "
                f"Supported types: {supported_types}"
            )

    @staticmethod
    def get_supported_types() -> List[str]:
        """Return list of supported storage types."""
        return [st.value for st in StorageType]
