from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Sequence

from salon.application.exceptions import BatchConflictError
from salon.application.ports.document_store import WRITE_KINDS, DocumentStorePort, WriteOp


class MemoryDocumentStore(DocumentStorePort):
    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        self._docs: dict[str, dict[str, Any]] = copy.deepcopy(documents or {})
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def get(self, path: str) -> dict[str, Any] | None:
        doc = self._docs.get(_normalize(path))
        return copy.deepcopy(doc) if doc is not None else None

    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        prefix = _normalize(collection_path) + "/"
        out: list[tuple[str, dict[str, Any]]] = []
        for path, doc in self._docs.items():
            if path.startswith(prefix) and "/" not in path[len(prefix):]:
                out.append((path, doc))
        out.sort(key=lambda item: item[0])
        return [copy.deepcopy(doc) for _, doc in out]

    def query_group(self, collection_id: str, field_name: str, value: Any) -> list[dict[str, Any]]:
        out: list[tuple[str, dict[str, Any]]] = []
        for path, doc in self._docs.items():
            parts = path.split("/")
            if len(parts) >= 2 and parts[-2] == collection_id and doc.get(field_name) == value:
                out.append((path, doc))
        out.sort(key=lambda item: item[0])
        return [copy.deepcopy(doc) for _, doc in out]

    def commit(self, ops: Sequence[WriteOp]) -> None:
        with self._lock:
            # Apply to a staged copy and swap only when every op went through
            staged = dict(self._docs)
            for index, op in enumerate(ops):
                self._apply(staged, op, index)
            self._persist(staged)
            self._docs = staged

    def _apply(self, docs: dict[str, dict[str, Any]], op: WriteOp, index: int) -> None:
        if op.kind not in WRITE_KINDS:
            raise ValueError(f"Unknown write kind: {op.kind!r}")
        path = _normalize(op.path)
        current = docs.get(path)

        if op.kind == "set":
            docs[path] = copy.deepcopy(op.data)
        elif op.kind == "merge":
            merged = dict(current or {})
            merged.update(copy.deepcopy(op.data))
            docs[path] = merged
        elif op.kind == "update":
            if current is None:
                raise BatchConflictError(f"No document to update: {path}")
            merged = dict(current)
            merged.update(copy.deepcopy(op.data))
            docs[path] = merged
        elif op.kind == "create":
            if current is not None:
                raise BatchConflictError(f"Document already exists: {path}")
            docs[path] = copy.deepcopy(op.data)
        elif op.kind == "delete":
            docs.pop(path, None)

    def _persist(self, docs: dict[str, dict[str, Any]]) -> None:
        """Hook for durable subclasses; runs before the staged state becomes visible."""
        return None


def _normalize(path: str) -> str:
    return "/".join(part for part in path.strip().split("/") if part)
