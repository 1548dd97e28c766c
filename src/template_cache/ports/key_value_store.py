"""Port interface for persistent string key-value storage."""

from abc import ABC, abstractmethod
from typing import List, Optional


class KeyValueStore(ABC):
    """Port interface for the string-keyed blob storage backing the cache."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is not an error."""
        pass

    @abstractmethod
    def list_keys(self) -> List[str]:
        """List every stored key."""
        pass

    def is_available(self) -> bool:
        """Whether the store can persist values in the current context."""
        return True

    def close(self) -> None:
        """Release any underlying resources."""
        pass
