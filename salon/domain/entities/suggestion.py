from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class TimeWindow:
    start: str  # "HH:mm"
    end: str  # "HH:mm"


@dataclass(frozen=True)
class StylistAvailability:
    stylist_id: str
    available_times: tuple[TimeWindow, ...] = ()


@dataclass(frozen=True)
class BookedInterval:
    stylist_id: str
    start: str  # "HH:mm"
    end: str  # "HH:mm"


@dataclass(frozen=True)
class SuggestionRequest:
    service: str
    duration: int
    preferred_date: date
    stylist_availability: tuple[StylistAvailability, ...] = ()
    existing_appointments: tuple[BookedInterval, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        return {
            "service": self.service,
            "duration": self.duration,
            "preferredDate": self.preferred_date.isoformat(),
            "stylistAvailability": [
                {
                    "stylistId": sa.stylist_id,
                    "availableTimes": [{"start": w.start, "end": w.end} for w in sa.available_times],
                }
                for sa in self.stylist_availability
            ],
            "existingAppointments": [
                {"stylistId": b.stylist_id, "start": b.start, "end": b.end}
                for b in self.existing_appointments
            ],
        }


@dataclass(frozen=True)
class SlotSuggestion:
    stylist_id: str
    start_time: datetime
    end_time: datetime

    def to_payload(self) -> dict[str, str]:
        return {
            "stylistId": self.stylist_id,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
        }
