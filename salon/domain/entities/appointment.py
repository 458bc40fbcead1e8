from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class AppointmentStatus(str, Enum):
    scheduled = "scheduled"
    confirmed = "confirmed"
    cancelled = "cancelled"


@dataclass(frozen=True)
class Appointment:
    id: str
    customer_name: str
    customer_id: str
    service_id: str
    stylist_id: str
    start: datetime
    end: datetime
    status: AppointmentStatus = AppointmentStatus.scheduled
    price: float | None = None  # snapshot at booking time; None on legacy records

    @property
    def is_active(self) -> bool:
        return self.status != AppointmentStatus.cancelled

    def is_cancellable(self, now: datetime) -> bool:
        return self.is_active and self.start > now

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_id": self.customer_id,
            "service_id": self.service_id,
            "stylist_id": self.stylist_id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "status": self.status.value,
            "price": self.price,
        }

    @staticmethod
    def from_document(data: dict[str, Any]) -> "Appointment":
        price = data.get("price")
        return Appointment(
            id=str(data["id"]),
            customer_name=str(data.get("customer_name") or ""),
            customer_id=str(data.get("customer_id") or ""),
            service_id=str(data.get("service_id") or ""),
            stylist_id=str(data.get("stylist_id") or ""),
            start=_as_datetime(data["start"]),
            end=_as_datetime(data["end"]),
            status=AppointmentStatus(data.get("status") or AppointmentStatus.scheduled.value),
            price=float(price) if price is not None else None,
        )


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        # Firestore hands back aware timestamps; mirrors store wall-clock time
        return value.replace(tzinfo=None)
    return datetime.fromisoformat(str(value))
