from __future__ import annotations

import logging
from typing import Any, Sequence

from google.api_core import exceptions as gexc
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from salon.application.exceptions import BatchConflictError, StoreUnavailableError
from salon.application.ports.document_store import DocumentStorePort, WriteOp


class FirestoreDocumentStore(DocumentStorePort):
    """Cloud Firestore adapter. Credentials come from Application Default Credentials."""

    def __init__(self, project: str | None = None, timeout: float = 10.0) -> None:
        self._client = firestore.Client(project=project)
        self._timeout = timeout
        self._logger = logging.getLogger(__name__)

    def get(self, path: str) -> dict[str, Any] | None:
        try:
            snapshot = self._client.document(path).get(timeout=self._timeout)
        except gexc.GoogleAPICallError as e:
            raise StoreUnavailableError(f"Firestore error: {e}") from e
        return snapshot.to_dict() if snapshot.exists else None

    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        try:
            snapshots = self._client.collection(collection_path).order_by("__name__").stream(timeout=self._timeout)
            return [snap.to_dict() for snap in snapshots]
        except gexc.GoogleAPICallError as e:
            raise StoreUnavailableError(f"Firestore error: {e}") from e

    def query(self, collection_path: str, field_name: str, value: Any) -> list[dict[str, Any]]:
        try:
            snapshots = (
                self._client.collection(collection_path)
                .where(filter=FieldFilter(field_name, "==", value))
                .stream(timeout=self._timeout)
            )
            return [snap.to_dict() for snap in snapshots]
        except gexc.GoogleAPICallError as e:
            raise StoreUnavailableError(f"Firestore error: {e}") from e

    def query_group(self, collection_id: str, field_name: str, value: Any) -> list[dict[str, Any]]:
        try:
            snapshots = (
                self._client.collection_group(collection_id)
                .where(filter=FieldFilter(field_name, "==", value))
                .stream(timeout=self._timeout)
            )
            return [snap.to_dict() for snap in snapshots]
        except gexc.GoogleAPICallError as e:
            raise StoreUnavailableError(f"Firestore error: {e}") from e

    def new_id(self) -> str:
        return self._client.collection("_ids").document().id

    def commit(self, ops: Sequence[WriteOp]) -> None:
        batch = self._client.batch()
        for op in ops:
            ref = self._client.document(op.path)
            if op.kind == "set":
                batch.set(ref, op.data)
            elif op.kind == "merge":
                batch.set(ref, op.data, merge=True)
            elif op.kind == "update":
                batch.update(ref, op.data)
            elif op.kind == "create":
                batch.create(ref, op.data)
            elif op.kind == "delete":
                batch.delete(ref)
            else:
                raise ValueError(f"Unknown write kind: {op.kind!r}")
        try:
            batch.commit(timeout=self._timeout)
        except (gexc.NotFound, gexc.AlreadyExists, gexc.FailedPrecondition) as e:
            raise BatchConflictError(str(e)) from e
        except gexc.GoogleAPICallError as e:
            self._logger.error("Firestore batch commit failed", extra={"error": str(e)})
            raise StoreUnavailableError(f"Firestore error: {e}") from e
