from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from salon.application.use_cases.booking_coordinator import BookingCoordinator
from salon.application.use_cases.catalog import CatalogUseCase
from salon.domain.entities.appointment import Appointment, AppointmentStatus
from salon.domain.entities.stylist import DAYS_OF_WEEK


@dataclass(frozen=True)
class DashboardSummary:
    day: date
    appointments_today: list[Appointment]
    confirmed_today: int
    revenue_today: float
    active_stylists: int
    week_activity: dict[str, int]
    stylist_agenda: dict[str, list[Appointment]] = field(default_factory=dict)

    @property
    def appointments_today_count(self) -> int:
        return len(self.appointments_today)


class DashboardUseCase:
    def __init__(self, bookings: BookingCoordinator, catalog: CatalogUseCase) -> None:
        self._bookings = bookings
        self._catalog = catalog

    def summary(self, day: date) -> DashboardSummary:
        appointments = [a for a in self._bookings.list_admin_appointments() if a.is_active]
        today = [a for a in appointments if a.start.date() == day]
        live_prices = {s.id: s.price for s in self._catalog.list_services()}
        stylists = self._catalog.list_stylists()

        # Records written before prices were snapshotted fall back to the catalogue.
        revenue = sum(a.price if a.price is not None else live_prices.get(a.service_id, 0.0) for a in today)

        week_start = day - timedelta(days=day.weekday())
        week_activity = {name: 0 for name in DAYS_OF_WEEK}
        for a in appointments:
            offset = (a.start.date() - week_start).days
            if 0 <= offset < 7:
                week_activity[DAYS_OF_WEEK[offset]] += 1

        agenda: dict[str, list[Appointment]] = {s.id: [] for s in stylists}
        for a in today:
            agenda.setdefault(a.stylist_id, []).append(a)
        for items in agenda.values():
            items.sort(key=lambda a: a.start)

        return DashboardSummary(
            day=day,
            appointments_today=sorted(today, key=lambda a: a.start),
            confirmed_today=sum(1 for a in today if a.status == AppointmentStatus.confirmed),
            revenue_today=round(revenue, 2),
            active_stylists=len(stylists),
            week_activity=week_activity,
            stylist_agenda=agenda,
        )
