from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from salon.application.exceptions import StoreUnavailableError
from salon.infrastructure.store.memory_store import MemoryDocumentStore


class JsonDocumentStore(MemoryDocumentStore):
    """
    Document store persisted to a single JSON file.

    Each commit is written to a temp file and atomically renamed over the data
    file before the new state becomes visible in memory, so a failed write leaves
    both the file and the in-memory view untouched.
    """

    def __init__(self, data_file: str = "./data/salon.json") -> None:
        self._data_file = Path(data_file)
        self._data_file.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(self._load())
        self._logger = logging.getLogger(__name__)

    def _load(self) -> dict[str, dict[str, Any]]:
        if not self._data_file.exists():
            return {}
        try:
            with open(self._data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StoreUnavailableError(f"Cannot read {self._data_file}: {e}") from e
        documents = data.get("documents", {}) if isinstance(data, dict) else {}
        return {str(path): dict(doc) for path, doc in documents.items()}

    def _persist(self, docs: dict[str, dict[str, Any]]) -> None:
        temp_path = self._data_file.with_suffix(self._data_file.suffix + ".tmp")
        payload = {"version": 1, "documents": docs}
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False, sort_keys=True)
            temp_path.replace(self._data_file)
        except (OSError, TypeError, ValueError) as e:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            self._logger.error("Failed to persist document store", extra={"error": str(e)})
            raise StoreUnavailableError(f"Cannot write {self._data_file}: {e}") from e
