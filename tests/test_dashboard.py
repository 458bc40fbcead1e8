"""
Tests for the admin dashboard aggregation.
"""

from __future__ import annotations

from datetime import date, datetime

from salon.application.use_cases.booking_coordinator import BookingCoordinator
from salon.application.use_cases.catalog import CatalogUseCase
from salon.application.use_cases.dashboard import DashboardUseCase
from salon.application.utils import store_paths
from salon.domain.entities.appointment import Appointment, AppointmentStatus
from salon.domain.entities.stylist import AvailabilitySlot
from salon.infrastructure.store.memory_store import MemoryDocumentStore


def test_summary_counts_revenue_and_week_activity():
    store = MemoryDocumentStore()
    catalog = CatalogUseCase(store)
    coordinator = BookingCoordinator(store, catalog)
    cut = catalog.create_service("Corte", "", 25.0, 60)
    color = catalog.create_service("Tinte", "", 40.0, 90)
    hours = [AvailabilitySlot("09:00", "18:00")]
    ana = catalog.create_stylist("Ana", availability={"monday": hours, "wednesday": hours})
    bea = catalog.create_stylist("Bea", availability={"monday": hours})

    monday = date(2030, 6, 3)
    coordinator.create_appointment("c1", "Lucia", cut.id, ana.id, datetime(2030, 6, 3, 11, 0))
    coordinator.create_appointment("c2", "Marta", color.id, bea.id, datetime(2030, 6, 3, 9, 0))
    cancelled = coordinator.create_appointment("c3", "Rosa", cut.id, ana.id, datetime(2030, 6, 3, 15, 0))
    coordinator.cancel_appointment(cancelled.appointment.id, "c3", ana.id)
    coordinator.create_appointment("c1", "Lucia", cut.id, ana.id, datetime(2030, 6, 5, 10, 0))
    coordinator.create_appointment("c1", "Lucia", cut.id, ana.id, datetime(2030, 6, 10, 10, 0))

    # The price changes after booking; revenue keeps the booked price
    catalog.update_service(cut.id, price=99.0)

    summary = DashboardUseCase(coordinator, catalog).summary(monday)

    assert summary.appointments_today_count == 2
    assert summary.confirmed_today == 2
    assert summary.revenue_today == 65.0
    assert summary.active_stylists == 2
    assert summary.week_activity["monday"] == 2
    assert summary.week_activity["wednesday"] == 1
    assert sum(summary.week_activity.values()) == 3
    assert [a.customer_name for a in summary.appointments_today] == ["Marta", "Lucia"]
    assert [a.customer_name for a in summary.stylist_agenda[ana.id]] == ["Lucia"]


def test_legacy_records_without_price_use_the_catalogue():
    store = MemoryDocumentStore()
    catalog = CatalogUseCase(store)
    service = catalog.create_service("Corte", "", 30.0, 60)
    legacy = Appointment(
        id="old1",
        customer_name="Lucia",
        customer_id="c1",
        service_id=service.id,
        stylist_id="sty1",
        start=datetime(2030, 6, 3, 10, 0),
        end=datetime(2030, 6, 3, 11, 0),
        status=AppointmentStatus.confirmed,
    )
    store.set(store_paths.admin_appointment_doc("old1"), legacy.to_document())

    summary = DashboardUseCase(BookingCoordinator(store, catalog), catalog).summary(date(2030, 6, 3))

    assert summary.revenue_today == 30.0
    assert summary.stylist_agenda["sty1"][0].id == "old1"
