"""JSON file adapter for the KeyValueStore port."""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional

from src.shared.logging import LoggingManager
from ...ports.key_value_store import KeyValueStore

logger = LoggingManager.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Keeps every key in a single JSON object file.

    Writes go to a temporary file in the same directory and are moved into
    place, so a crash never leaves a half-written file behind. An unreadable
    file loads as an empty store.
    """

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._write(data)

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._load().keys())

    def is_available(self) -> bool:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Storage directory {self.file_path.parent} is not writable: {e}")
            return False
        return os.access(self.file_path.parent, os.W_OK)

    def _load(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            with self.file_path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable store file {self.file_path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=self.file_path.parent, suffix=".tmp")
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2)
                fp.flush()
                os.fsync(fp.fileno())
            os.replace(tmp_path, self.file_path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
