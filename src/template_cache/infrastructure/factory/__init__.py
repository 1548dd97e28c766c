"""Store factory module for creating key-value store adapters."""

from .store_factory import StorageType, StoreFactory

__all__ = ["StorageType", "StoreFactory"]
