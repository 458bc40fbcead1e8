"""
Tests for the document store adapters: batch semantics, JSON persistence and retries.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from salon.application.exceptions import BatchConflictError, StoreUnavailableError
from salon.application.ports.document_store import WriteOp
from salon.infrastructure.store.json_store import JsonDocumentStore
from salon.infrastructure.store.memory_store import MemoryDocumentStore
from salon.infrastructure.store.retrying_store import RetryingDocumentStore


def test_batch_write_kinds():
    store = MemoryDocumentStore()
    store.batch().set("services/a", {"id": "a", "name": "Corte"}).create("services/b", {"id": "b"}).commit()
    store.batch().merge("services/a", {"price": 10}).update("services/b", {"name": "Tinte"}).commit()

    assert store.get("services/a") == {"id": "a", "name": "Corte", "price": 10}
    assert store.get("services/b") == {"id": "b", "name": "Tinte"}

    store.delete("services/a")
    assert store.get("services/a") is None


def test_failed_precondition_rolls_back_whole_batch():
    store = MemoryDocumentStore()
    store.set("services/a", {"id": "a"})

    with pytest.raises(BatchConflictError):
        store.batch().set("services/c", {"id": "c"}).update("services/missing", {"x": 1}).commit()
    with pytest.raises(BatchConflictError):
        store.batch().set("services/d", {"id": "d"}).create("services/a", {"id": "a"}).commit()

    assert store.get("services/c") is None
    assert store.get("services/d") is None


def test_list_documents_returns_direct_children_only():
    store = MemoryDocumentStore()
    store.set("customers/c1", {"id": "c1"})
    store.set("customers/c2", {"id": "c2"})
    store.set("customers/c1/appointments/a1", {"id": "a1"})

    assert [d["id"] for d in store.list_documents("customers")] == ["c1", "c2"]
    assert [d["id"] for d in store.list_documents("customers/c1/appointments")] == ["a1"]
    assert [d["id"] for d in store.query("customers", "id", "c2")] == ["c2"]


def test_query_group_spans_every_parent():
    store = MemoryDocumentStore()
    store.set("customers/c1/appointments/a1", {"id": "a1", "status": "scheduled"})
    store.set("customers/c2/appointments/a2", {"id": "a2", "status": "scheduled"})
    store.set("stylists/s1/appointments/a3", {"id": "a3", "status": "confirmed"})
    store.set("appointments_archive/a4", {"id": "a4", "status": "scheduled"})

    assert [d["id"] for d in store.query_group("appointments", "status", "scheduled")] == ["a1", "a2"]
    wrapped = RetryingDocumentStore(store)
    assert [d["id"] for d in wrapped.query_group("appointments", "status", "confirmed")] == ["a3"]


def test_reads_return_copies():
    store = MemoryDocumentStore()
    store.set("services/a", {"id": "a", "tags": ["x"]})

    doc = store.get("services/a")
    doc["tags"].append("y")

    assert store.get("services/a")["tags"] == ["x"]


def test_json_store_persists_across_instances():
    """Documents written by one instance are visible to a fresh instance on the same file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        data_file = Path(tmpdir) / "salon.json"
        store = JsonDocumentStore(data_file=str(data_file))
        store.batch().set("services/a", {"id": "a", "name": "Corte"}).set(
            "customers/c1/appointments/x", {"id": "x", "status": "scheduled"}
        ).commit()

        reopened = JsonDocumentStore(data_file=str(data_file))

        assert reopened.get("services/a")["name"] == "Corte"
        assert reopened.get("customers/c1/appointments/x")["status"] == "scheduled"
        payload = json.loads(data_file.read_text(encoding="utf-8"))
        assert payload["version"] == 1
        assert not data_file.with_suffix(".json.tmp").exists()


def test_json_store_failed_write_leaves_state_untouched():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonDocumentStore(data_file=str(Path(tmpdir) / "salon.json"))
        store.set("services/a", {"id": "a"})

        with pytest.raises(StoreUnavailableError):
            store.set("services/b", {"id": "b", "bad": object()})

        assert store.get("services/b") is None
        assert JsonDocumentStore(data_file=str(Path(tmpdir) / "salon.json")).get("services/b") is None


class FlakyStore(MemoryDocumentStore):
    def __init__(self, failures: int, error: Exception) -> None:
        super().__init__()
        self.failures = failures
        self.error = error
        self.calls = 0

    def commit(self, ops):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        super().commit(ops)


def test_retrying_store_retries_transient_failures():
    inner = FlakyStore(failures=2, error=StoreUnavailableError("timeout"))
    sleeps: list[float] = []
    store = RetryingDocumentStore(inner, max_attempts=3, backoff_seconds=0.5, sleep=sleeps.append)

    store.set("services/a", {"id": "a"})

    assert inner.calls == 3
    assert sleeps == [0.5, 1.0]
    assert store.get("services/a") == {"id": "a"}


def test_retrying_store_gives_up_and_skips_conflicts():
    inner = FlakyStore(failures=5, error=StoreUnavailableError("down"))
    store = RetryingDocumentStore(inner, max_attempts=2, sleep=lambda _: None)
    with pytest.raises(StoreUnavailableError):
        store.commit([WriteOp(kind="set", path="services/a", data={})])
    assert inner.calls == 2

    conflicting = FlakyStore(failures=5, error=BatchConflictError("exists"))
    store = RetryingDocumentStore(conflicting, max_attempts=3, sleep=lambda _: None)
    with pytest.raises(BatchConflictError):
        store.commit([WriteOp(kind="create", path="services/a", data={})])
    assert conflicting.calls == 1
