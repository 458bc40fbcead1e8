from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable

from salon.application.exceptions import (
    BatchConflictError,
    NotFoundError,
    SlotUnavailableError,
    StoreError,
    ValidationError,
)
from salon.application.ports.document_store import DocumentStorePort, WriteBatch
from salon.application.use_cases.catalog import CatalogUseCase
from salon.application.use_cases.schedule import StylistScheduleReader
from salon.application.utils import store_paths
from salon.application.utils.in_flight import InFlightGuard
from salon.application.utils.slot_rules import fits_availability, overlaps
from salon.application.utils.validation import require_text
from salon.core.clock import to_business_time
from salon.domain.entities.appointment import Appointment, AppointmentStatus
from salon.domain.entities.service import Service
from salon.domain.entities.stylist import Stylist


@dataclass(frozen=True)
class OperationResult:
    success: bool
    message: str
    appointment: Appointment | None = None


class BookingCoordinator:
    """
    Owns every appointment write. An appointment lives in up to three mirrors
    (admin-wide, stylist-scoped, customer-scoped) and each operation keeps them
    consistent with a single atomic batch.

    Public methods never raise for domain or store failures; they return an
    OperationResult with success=False and a human-readable message.
    """

    def __init__(
        self,
        store: DocumentStorePort,
        catalog: CatalogUseCase,
        guard: InFlightGuard | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._schedule = StylistScheduleReader(store)
        self._guard = guard or InFlightGuard()
        self._logger = logging.getLogger(__name__)

    # Writes

    def create_appointment(
        self,
        customer_id: str,
        customer_name: str,
        service_id: str,
        stylist_id: str,
        start: datetime,
    ) -> OperationResult:
        """Admin booking: confirmed immediately and written to all three mirrors."""
        start = _wall_clock(start)
        return self._guarded(
            "create",
            (stylist_id, start),
            lambda: self._create(customer_id, customer_name, service_id, stylist_id, start),
            customer_id=customer_id,
            stylist_id=stylist_id,
        )

    def request_appointment(
        self,
        customer_id: str,
        customer_name: str,
        service_id: str,
        stylist_id: str,
        start: datetime,
    ) -> OperationResult:
        """Customer booking: pending until an admin confirms it. Customer mirror only."""
        start = _wall_clock(start)
        return self._guarded(
            "request",
            (stylist_id, start),
            lambda: self._request(customer_id, customer_name, service_id, stylist_id, start),
            customer_id=customer_id,
            stylist_id=stylist_id,
        )

    def confirm_appointment(self, customer_id: str, appointment_id: str) -> OperationResult:
        """
        Promote a scheduled request. The confirmed record gets a NEW id; the old
        id is deleted from the customer mirror in the same batch.
        """
        try:
            pending = self._load_customer_copy(customer_id, appointment_id)
        except (NotFoundError, StoreError) as e:
            return self._failure("confirm", e, appointment_id=appointment_id, customer_id=customer_id)
        return self._guarded(
            "confirm",
            (pending.stylist_id, pending.start),
            lambda: self._confirm(pending),
            appointment_id=appointment_id,
            customer_id=customer_id,
        )

    def cancel_appointment(self, appointment_id: str, customer_id: str, stylist_id: str) -> OperationResult:
        """
        Mark the appointment cancelled on every mirror where it currently exists.
        Cancelling twice is a no-op status write, not an error.
        """
        return self._run(
            "cancel",
            lambda: self._cancel(appointment_id, customer_id, stylist_id),
            appointment_id=appointment_id,
            customer_id=customer_id,
            stylist_id=stylist_id,
        )

    def update_appointment(
        self,
        customer_id: str,
        appointment_id: str,
        service_id: str | None = None,
        stylist_id: str | None = None,
        start: datetime | None = None,
    ) -> OperationResult:
        """Admin edit, same id. Changing the stylist moves the stylist mirror."""
        start = _wall_clock(start) if start is not None else None
        try:
            current = self._load_customer_copy(customer_id, appointment_id)
        except (NotFoundError, StoreError) as e:
            return self._failure("update", e, appointment_id=appointment_id, customer_id=customer_id)
        key = (stylist_id or current.stylist_id, start or current.start)
        return self._guarded(
            "update",
            key,
            lambda: self._update(current, service_id, stylist_id, start),
            appointment_id=appointment_id,
            customer_id=customer_id,
        )

    def delete_appointment(self, customer_id: str, appointment_id: str) -> OperationResult:
        return self._run(
            "delete",
            lambda: self._delete(customer_id, appointment_id),
            appointment_id=appointment_id,
            customer_id=customer_id,
        )

    # Reads

    def list_admin_appointments(self) -> list[Appointment]:
        docs = self._store.list_documents(store_paths.ADMIN_APPOINTMENTS)
        return sorted((Appointment.from_document(d) for d in docs), key=lambda a: a.start)

    def list_customer_appointments(self, customer_id: str) -> list[Appointment]:
        """Newest first, as shown on the customer's own page."""
        docs = self._store.list_documents(store_paths.customer_appointments(customer_id))
        return sorted((Appointment.from_document(d) for d in docs), key=lambda a: a.start, reverse=True)

    def list_stylist_appointments(self, stylist_id: str) -> list[Appointment]:
        return self._schedule.appointments(stylist_id)

    def list_pending_requests(self) -> list[Appointment]:
        """Scheduled requests across all customers, oldest first. They live only in customer mirrors."""
        return self._schedule.pending_requests()

    def get_customer_appointment(self, customer_id: str, appointment_id: str) -> Appointment:
        return self._load_customer_copy(customer_id, appointment_id)

    # Internals

    def _create(
        self,
        customer_id: str,
        customer_name: str,
        service_id: str,
        stylist_id: str,
        start: datetime,
    ) -> OperationResult:
        appointment, stylist = self._draft(
            customer_id, customer_name, service_id, stylist_id, start, AppointmentStatus.confirmed
        )
        self._ensure_slot_free(stylist, appointment)

        admin_path, stylist_path, customer_path = store_paths.appointment_mirrors(
            customer_id, stylist_id, appointment.id
        )
        doc = appointment.to_document()
        batch = self._store.batch()
        batch.create(admin_path, doc).create(stylist_path, doc).create(customer_path, doc)
        self._claim(batch, appointment)
        self._commit_new(batch, appointment, customer_path)

        self._logger.info(
            "Appointment created",
            extra={"appointment_id": appointment.id, "customer_id": customer_id, "stylist_id": stylist_id},
        )
        return OperationResult(True, "Appointment created and confirmed.", appointment)

    def _request(
        self,
        customer_id: str,
        customer_name: str,
        service_id: str,
        stylist_id: str,
        start: datetime,
    ) -> OperationResult:
        appointment, stylist = self._draft(
            customer_id, customer_name, service_id, stylist_id, start, AppointmentStatus.scheduled
        )
        self._ensure_slot_free(stylist, appointment)

        path = store_paths.customer_appointment_doc(customer_id, appointment.id)
        self._commit_new(self._store.batch().create(path, appointment.to_document()), appointment, path)

        self._logger.info(
            "Appointment requested",
            extra={"appointment_id": appointment.id, "customer_id": customer_id, "stylist_id": stylist_id},
        )
        return OperationResult(True, "Appointment requested. The salon will confirm it shortly.", appointment)

    def _confirm(self, pending: Appointment) -> OperationResult:
        if pending.status != AppointmentStatus.scheduled:
            raise ValidationError(f"Only scheduled appointments can be confirmed (status is {pending.status.value})")

        stylist = self._catalog.get_stylist(pending.stylist_id)
        confirmed = replace(pending, id=self._store.new_id(), status=AppointmentStatus.confirmed)
        self._ensure_no_overlap(stylist, confirmed, ignore=(pending.id,))

        admin_path, stylist_path, customer_path = store_paths.appointment_mirrors(
            confirmed.customer_id, confirmed.stylist_id, confirmed.id
        )
        doc = confirmed.to_document()
        batch = self._store.batch()
        batch.create(admin_path, doc).create(stylist_path, doc).create(customer_path, doc)
        batch.delete(store_paths.customer_appointment_doc(pending.customer_id, pending.id))
        self._claim(batch, confirmed)
        self._commit_new(batch, confirmed, customer_path)

        self._logger.info(
            "Appointment confirmed",
            extra={"appointment_id": confirmed.id, "customer_id": confirmed.customer_id, "reason": f"replaces {pending.id}"},
        )
        return OperationResult(True, "Appointment confirmed.", confirmed)

    def _cancel(self, appointment_id: str, customer_id: str, stylist_id: str) -> OperationResult:
        current = self._load_customer_copy(customer_id, appointment_id)
        if stylist_id and stylist_id != current.stylist_id:
            self._logger.warning(
                "Cancel called with a stale stylist id, using the stored one",
                extra={"appointment_id": appointment_id, "stylist_id": stylist_id, "reason": current.stylist_id},
            )
        admin_path, stylist_path, customer_path = store_paths.appointment_mirrors(
            customer_id, current.stylist_id, appointment_id
        )
        status = {"status": AppointmentStatus.cancelled.value}

        batch = self._store.batch()
        batch.update(customer_path, status)
        for path in (admin_path, stylist_path):
            if self._store.exists(path):
                batch.update(path, status)
        if current.is_active:
            self._release(batch, current)
        batch.commit()

        self._logger.info(
            "Appointment cancelled",
            extra={"appointment_id": appointment_id, "customer_id": customer_id, "reason": f"{len(batch)} writes"},
        )
        return OperationResult(True, "Appointment cancelled.", replace(current, status=AppointmentStatus.cancelled))

    def _update(
        self,
        current: Appointment,
        service_id: str | None,
        stylist_id: str | None,
        start: datetime | None,
    ) -> OperationResult:
        if not current.is_active:
            raise ValidationError("Cancelled appointments cannot be edited")

        service = self._catalog.get_service(service_id or current.service_id)
        stylist = self._catalog.get_stylist(stylist_id or current.stylist_id)
        new_start = start or current.start
        changed_service = service.id != current.service_id
        updated = replace(
            current,
            service_id=service.id,
            stylist_id=stylist.id,
            start=new_start,
            end=new_start + timedelta(minutes=service.duration),
            price=service.price if changed_service or current.price is None else current.price,
        )
        self._ensure_slot_free(stylist, updated)

        old_admin, old_stylist, customer_path = store_paths.appointment_mirrors(
            current.customer_id, current.stylist_id, current.id
        )
        doc = updated.to_document()
        batch = self._store.batch()
        batch.merge(customer_path, doc)
        mirrored = current.status == AppointmentStatus.confirmed
        if mirrored:
            batch.merge(old_admin, doc)
            if updated.stylist_id != current.stylist_id:
                batch.delete(old_stylist)
                batch.set(store_paths.stylist_appointment_doc(updated.stylist_id, updated.id), doc)
            else:
                batch.merge(old_stylist, doc)
            moved = (updated.stylist_id, updated.start) != (current.stylist_id, current.start)
            if moved:
                self._release(batch, current)
                self._claim(batch, updated)
        batch.commit()

        self._logger.info(
            "Appointment updated",
            extra={"appointment_id": updated.id, "customer_id": updated.customer_id, "stylist_id": updated.stylist_id},
        )
        return OperationResult(True, "Appointment updated.", updated)

    def _delete(self, customer_id: str, appointment_id: str) -> OperationResult:
        current = self._load_customer_copy(customer_id, appointment_id)
        batch = self._store.batch()
        for path in store_paths.appointment_mirrors(customer_id, current.stylist_id, appointment_id):
            if self._store.exists(path):
                batch.delete(path)
        if current.is_active:
            self._release(batch, current)
        batch.commit()

        self._logger.info("Appointment deleted", extra={"appointment_id": appointment_id, "customer_id": customer_id})
        return OperationResult(True, "Appointment deleted.", current)

    def _draft(
        self,
        customer_id: str,
        customer_name: str,
        service_id: str,
        stylist_id: str,
        start: datetime,
        status: AppointmentStatus,
    ) -> tuple[Appointment, Stylist]:
        customer_id = require_text(customer_id, "customer_id")
        customer_name = require_text(customer_name, "customer_name")
        if not isinstance(start, datetime):
            raise ValidationError("start must be a date and time")
        service: Service = self._catalog.get_service(service_id)
        stylist = self._catalog.get_stylist(stylist_id)
        start = _wall_clock(start)
        appointment = Appointment(
            id=self._store.new_id(),
            customer_name=customer_name,
            customer_id=customer_id,
            service_id=service.id,
            stylist_id=stylist.id,
            start=start,
            end=start + timedelta(minutes=service.duration),
            status=status,
            price=service.price,
        )
        return appointment, stylist

    def _ensure_slot_free(self, stylist: Stylist, appointment: Appointment) -> None:
        if not fits_availability(appointment.start, appointment.end, stylist.windows_for(appointment.start.date()), []):
            raise SlotUnavailableError(f"{stylist.name} is not available at {appointment.start:%Y-%m-%d %H:%M}.")
        self._ensure_no_overlap(stylist, appointment)

    def _ensure_no_overlap(self, stylist: Stylist, appointment: Appointment, ignore: tuple[str, ...] = ()) -> None:
        booked = self._schedule.active_on(
            stylist.id, appointment.start.date(), exclude_ids=(appointment.id, *ignore)
        )
        for other in booked:
            if overlaps(appointment.start, appointment.end, other.start, other.end):
                raise SlotUnavailableError(
                    f"{stylist.name} already has an appointment from {other.start:%H:%M} to {other.end:%H:%M}."
                )

    def _commit_new(self, batch: WriteBatch, appointment: Appointment, marker_path: str) -> None:
        """
        Commit a batch that introduces a freshly minted appointment id. A retried
        commit whose first attempt actually landed conflicts with its own writes;
        finding our id at ``marker_path`` means the booking exists.
        """
        try:
            batch.commit()
        except BatchConflictError:
            landed = self._store.get(marker_path)
            if not landed or landed.get("id") != appointment.id:
                raise
            self._logger.info(
                "Commit already applied by an earlier attempt",
                extra={"appointment_id": appointment.id, "customer_id": appointment.customer_id},
            )

    def _claim(self, batch: WriteBatch, appointment: Appointment) -> None:
        batch.create(
            store_paths.slot_claim_doc(appointment.stylist_id, appointment.start),
            {
                "appointment_id": appointment.id,
                "stylist_id": appointment.stylist_id,
                "start": appointment.start.isoformat(),
            },
        )

    def _release(self, batch: WriteBatch, appointment: Appointment) -> None:
        path = store_paths.slot_claim_doc(appointment.stylist_id, appointment.start)
        claim = self._store.get(path)
        if claim and claim.get("appointment_id") == appointment.id:
            batch.delete(path)

    def _load_customer_copy(self, customer_id: str, appointment_id: str) -> Appointment:
        doc = self._store.get(store_paths.customer_appointment_doc(customer_id, appointment_id))
        if doc is None:
            raise NotFoundError(f"Appointment {appointment_id} not found")
        return Appointment.from_document(doc)

    def _guarded(
        self,
        action: str,
        key: tuple[str, datetime],
        fn: Callable[[], OperationResult],
        **log_extra: str,
    ) -> OperationResult:
        with self._guard.hold(key) as acquired:
            if not acquired:
                self._logger.warning(
                    "Duplicate booking submission rejected",
                    extra={**log_extra, "reason": action},
                )
                return OperationResult(False, "This booking is already being processed. Please wait.")
            return self._run(action, fn, **log_extra)

    def _run(self, action: str, fn: Callable[[], OperationResult], **log_extra: str) -> OperationResult:
        try:
            return fn()
        except (ValidationError, NotFoundError, SlotUnavailableError, StoreError) as e:
            return self._failure(action, e, **log_extra)

    def _failure(self, action: str, error: Exception, **log_extra: str) -> OperationResult:
        if isinstance(error, BatchConflictError):
            message = "This slot was just taken or the appointment changed. Please refresh and try again."
        elif isinstance(error, StoreError):
            message = "Could not save the appointment right now. Please try again."
        else:
            message = str(error)
        self._logger.warning(
            "Appointment %s failed",
            action,
            extra={**log_extra, "error": type(error).__name__, "reason": str(error)},
        )
        return OperationResult(False, message)


def _wall_clock(start: datetime) -> datetime:
    if isinstance(start, datetime):
        return to_business_time(start).replace(second=0, microsecond=0)
    return start
