from __future__ import annotations

import logging

from salon.application.ports.suggestion_service import SuggestionServicePort
from salon.application.utils.slot_rules import candidate_starts, parse_hhmm, to_datetime
from salon.domain.entities.suggestion import SlotSuggestion, SuggestionRequest

DEFAULT_LIMIT = 5


class LocalSuggestionService(SuggestionServicePort):
    """
    Deterministic constraint search: per stylist (sorted by id) sweep windows
    chronologically on a fixed grid, drop starts that collide with bookings,
    then keep the earliest candidates (ties broken by stylist id).
    """

    def __init__(self, limit: int = DEFAULT_LIMIT, step_minutes: int = 15) -> None:
        self._limit = max(0, limit)
        self._step = step_minutes
        self._logger = logging.getLogger(__name__)

    def suggest(self, request: SuggestionRequest) -> list[SlotSuggestion]:
        if request.duration <= 0 or self._limit == 0:
            return []

        booked_by_stylist: dict[str, list[tuple[int, int]]] = {}
        for booking in request.existing_appointments:
            booked_by_stylist.setdefault(booking.stylist_id, []).append(
                (parse_hhmm(booking.start), parse_hhmm(booking.end))
            )

        found: list[tuple[int, str]] = []
        for availability in sorted(request.stylist_availability, key=lambda sa: sa.stylist_id):
            windows = [(parse_hhmm(w.start), parse_hhmm(w.end)) for w in availability.available_times]
            starts = candidate_starts(
                request.duration,
                windows,
                booked_by_stylist.get(availability.stylist_id, []),
                self._step,
            )
            found.extend((start, availability.stylist_id) for start in starts)

        found.sort()
        suggestions = [
            SlotSuggestion(
                stylist_id=stylist_id,
                start_time=to_datetime(request.preferred_date, start),
                end_time=to_datetime(request.preferred_date, start + request.duration),
            )
            for start, stylist_id in found[: self._limit]
        ]
        self._logger.debug(
            "Local suggestions computed",
            extra={"service": request.service, "reason": f"{len(found)} fits, {len(suggestions)} returned"},
        )
        return suggestions
