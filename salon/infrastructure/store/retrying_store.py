from __future__ import annotations

import logging
import time
from typing import Any, Callable, Sequence, TypeVar

from salon.application.exceptions import StoreUnavailableError
from salon.application.ports.document_store import DocumentStorePort, WriteOp

T = TypeVar("T")


class RetryingDocumentStore(DocumentStorePort):
    """
    Wraps a store and retries transient failures (StoreUnavailableError) a bounded
    number of times with linear backoff. Precondition failures are re-raised at once.
    """

    def __init__(
        self,
        inner: DocumentStorePort,
        max_attempts: int = 3,
        backoff_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._inner = inner
        self._max_attempts = max(1, max_attempts)
        self._backoff_seconds = max(0.0, backoff_seconds)
        self._sleep = sleep
        self._logger = logging.getLogger(__name__)

    def get(self, path: str) -> dict[str, Any] | None:
        return self._call(lambda: self._inner.get(path), "get")

    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        return self._call(lambda: self._inner.list_documents(collection_path), "list")

    def query(self, collection_path: str, field_name: str, value: Any) -> list[dict[str, Any]]:
        return self._call(lambda: self._inner.query(collection_path, field_name, value), "query")

    def query_group(self, collection_id: str, field_name: str, value: Any) -> list[dict[str, Any]]:
        return self._call(lambda: self._inner.query_group(collection_id, field_name, value), "query_group")

    def commit(self, ops: Sequence[WriteOp]) -> None:
        self._call(lambda: self._inner.commit(ops), "commit")

    def new_id(self) -> str:
        return self._inner.new_id()

    def _call(self, fn: Callable[[], T], operation: str) -> T:
        attempt = 1
        while True:
            try:
                return fn()
            except StoreUnavailableError as e:
                if attempt >= self._max_attempts:
                    self._logger.error(
                        "Store operation failed, giving up",
                        extra={"reason": operation, "error": str(e)},
                    )
                    raise
                self._logger.warning(
                    "Store operation failed, retrying",
                    extra={"reason": operation, "error": str(e)},
                )
                self._sleep(self._backoff_seconds * attempt)
                attempt += 1
