from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence

WRITE_KINDS = ("set", "merge", "update", "create", "delete")


@dataclass(frozen=True)
class WriteOp:
    kind: str  # one of WRITE_KINDS
    path: str
    data: dict[str, Any] = field(default_factory=dict)


class DocumentStorePort(ABC):
    """
    Hierarchical document store addressed by slash-separated paths
    (``collection/{id}/subcollection/{id}``).

    Write semantics inside ``commit``:
    - set: overwrite the document
    - merge: create or shallow-merge fields
    - update: shallow-merge fields; the document must exist
    - create: write the document; it must not exist
    - delete: remove the document if present

    ``commit`` is atomic: either every op is applied or none is visible.
    Raises:
        BatchConflictError: an update/create precondition failed
        StoreUnavailableError: transient failure, safe to retry
    """

    @abstractmethod
    def get(self, path: str) -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        """Direct children of a collection, ordered by document id."""
        raise NotImplementedError

    @abstractmethod
    def commit(self, ops: Sequence[WriteOp]) -> None:
        raise NotImplementedError

    @abstractmethod
    def query_group(self, collection_id: str, field_name: str, value: Any) -> list[dict[str, Any]]:
        """Equality filter across every collection named ``collection_id``, at any depth."""
        raise NotImplementedError

    def query(self, collection_path: str, field_name: str, value: Any) -> list[dict[str, Any]]:
        """Equality filter over a collection. Adapters may push this down."""
        return [doc for doc in self.list_documents(collection_path) if doc.get(field_name) == value]

    def exists(self, path: str) -> bool:
        return self.get(path) is not None

    def new_id(self) -> str:
        return uuid.uuid4().hex[:20]

    def set(self, path: str, data: dict[str, Any], merge: bool = False) -> None:
        self.commit([WriteOp(kind="merge" if merge else "set", path=path, data=data)])

    def delete(self, path: str) -> None:
        self.commit([WriteOp(kind="delete", path=path)])

    def batch(self) -> "WriteBatch":
        return WriteBatch(self)


class WriteBatch:
    """Collects writes and hands them to the store as one atomic commit."""

    def __init__(self, store: DocumentStorePort) -> None:
        self._store = store
        self._ops: list[WriteOp] = []

    def set(self, path: str, data: dict[str, Any]) -> "WriteBatch":
        self._ops.append(WriteOp(kind="set", path=path, data=dict(data)))
        return self

    def merge(self, path: str, data: dict[str, Any]) -> "WriteBatch":
        self._ops.append(WriteOp(kind="merge", path=path, data=dict(data)))
        return self

    def update(self, path: str, data: dict[str, Any]) -> "WriteBatch":
        self._ops.append(WriteOp(kind="update", path=path, data=dict(data)))
        return self

    def create(self, path: str, data: dict[str, Any]) -> "WriteBatch":
        self._ops.append(WriteOp(kind="create", path=path, data=dict(data)))
        return self

    def delete(self, path: str) -> "WriteBatch":
        self._ops.append(WriteOp(kind="delete", path=path))
        return self

    @property
    def ops(self) -> list[WriteOp]:
        return list(self._ops)

    def __len__(self) -> int:
        return len(self._ops)

    def commit(self) -> None:
        if self._ops:
            self._store.commit(self._ops)
