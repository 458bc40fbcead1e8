from __future__ import annotations

from datetime import date
from typing import Iterable

from salon.application.ports.document_store import DocumentStorePort
from salon.application.utils import store_paths
from salon.domain.entities.appointment import Appointment, AppointmentStatus


class StylistScheduleReader:
    """
    Reads what occupies a stylist's time: confirmed bookings from the
    stylist-scoped mirror plus pending requests, which live only in customer mirrors.
    """

    def __init__(self, store: DocumentStorePort) -> None:
        self._store = store

    def appointments(self, stylist_id: str) -> list[Appointment]:
        docs = self._store.list_documents(store_paths.stylist_appointments(stylist_id))
        return sorted((Appointment.from_document(d) for d in docs), key=lambda a: a.start)

    def pending_requests(self, stylist_id: str | None = None) -> list[Appointment]:
        docs = self._store.query_group(store_paths.APPOINTMENTS, "status", AppointmentStatus.scheduled.value)
        pending = [Appointment.from_document(d) for d in docs]
        if stylist_id is not None:
            pending = [a for a in pending if a.stylist_id == stylist_id]
        return sorted(pending, key=lambda a: a.start)

    def active_on(self, stylist_id: str, day: date, exclude_ids: Iterable[str] = ()) -> list[Appointment]:
        """Non-cancelled appointments and pending requests starting on ``day``."""
        excluded = set(exclude_ids)
        by_id: dict[str, Appointment] = {}
        for a in self.appointments(stylist_id) + self.pending_requests(stylist_id):
            if a.is_active and a.start.date() == day and a.id not in excluded:
                by_id[a.id] = a
        return sorted(by_id.values(), key=lambda a: a.start)
