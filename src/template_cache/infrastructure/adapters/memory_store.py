"""In-memory adapter for the KeyValueStore port."""

import threading
from typing import Dict, List, Optional

from ...ports.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; contents live as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._data.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
