from __future__ import annotations

import logging
from datetime import date, timedelta

from salon.application.exceptions import NotFoundError
from salon.application.ports.suggestion_service import SuggestionServicePort
from salon.application.use_cases.catalog import CatalogUseCase
from salon.application.use_cases.schedule import StylistScheduleReader
from salon.application.utils.slot_rules import format_hhmm, is_valid_start, minutes_of, parse_hhmm
from salon.domain.entities.service import Service
from salon.domain.entities.stylist import Stylist
from salon.domain.entities.suggestion import (
    BookedInterval,
    SlotSuggestion,
    StylistAvailability,
    SuggestionRequest,
    TimeWindow,
)


class SuggestAppointmentsUseCase:
    def __init__(
        self,
        catalog: CatalogUseCase,
        schedule: StylistScheduleReader,
        suggestions: SuggestionServicePort,
        limit: int = 5,
    ) -> None:
        self._catalog = catalog
        self._schedule = schedule
        self._suggestions = suggestions
        self._limit = limit
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        service_id: str,
        preferred_date: date,
        stylist_id: str | None = None,
        exclude_appointment_id: str | None = None,
    ) -> list[SlotSuggestion]:
        """
        Candidate slots for one service on one date, optionally for one stylist.
        An empty list means nothing fits. SuggestionServiceError propagates.
        """
        service = self._catalog.get_service(service_id)
        if stylist_id:
            stylists = [self._catalog.get_stylist(stylist_id)]
        else:
            stylists = self._catalog.list_stylists()
        if not stylists:
            raise NotFoundError("No stylists are available")

        request = self.build_request(service, stylists, preferred_date, exclude_appointment_id)
        raw = self._suggestions.suggest(request)
        verified = self._verify(raw, request)
        if len(verified) < len(raw):
            self._logger.warning(
                "Discarded invalid suggestions",
                extra={"service": service.id, "reason": f"{len(raw) - len(verified)} of {len(raw)} rejected"},
            )
        return verified[: self._limit]

    def build_request(
        self,
        service: Service,
        stylists: list[Stylist],
        preferred_date: date,
        exclude_appointment_id: str | None = None,
    ) -> SuggestionRequest:
        availability: list[StylistAvailability] = []
        booked: list[BookedInterval] = []
        for stylist in stylists:
            availability.append(
                StylistAvailability(
                    stylist_id=stylist.id,
                    available_times=tuple(TimeWindow(start=w.start, end=w.end) for w in stylist.windows_for(preferred_date)),
                )
            )
            excluded = [exclude_appointment_id] if exclude_appointment_id else []
            for appointment in self._schedule.active_on(stylist.id, preferred_date, exclude_ids=excluded):
                end_minutes = minutes_of(appointment.end)
                if appointment.end.date() != preferred_date:
                    end_minutes = 24 * 60 - 1
                booked.append(
                    BookedInterval(
                        stylist_id=stylist.id,
                        start=format_hhmm(minutes_of(appointment.start)),
                        end=format_hhmm(end_minutes),
                    )
                )
        return SuggestionRequest(
            service=service.name,
            duration=service.duration,
            preferred_date=preferred_date,
            stylist_availability=tuple(availability),
            existing_appointments=tuple(booked),
        )

    def _verify(self, raw: list[SlotSuggestion], request: SuggestionRequest) -> list[SlotSuggestion]:
        windows = {
            sa.stylist_id: [(parse_hhmm(w.start), parse_hhmm(w.end)) for w in sa.available_times]
            for sa in request.stylist_availability
        }
        booked: dict[str, list[tuple[int, int]]] = {}
        for b in request.existing_appointments:
            booked.setdefault(b.stylist_id, []).append((parse_hhmm(b.start), parse_hhmm(b.end)))

        out: list[SlotSuggestion] = []
        seen: set[tuple[str, int]] = set()
        for suggestion in raw:
            if suggestion.stylist_id not in windows:
                continue
            if suggestion.start_time.date() != request.preferred_date:
                continue
            if suggestion.end_time - suggestion.start_time != timedelta(minutes=request.duration):
                continue
            start = minutes_of(suggestion.start_time)
            key = (suggestion.stylist_id, start)
            if key in seen:
                continue
            if is_valid_start(start, request.duration, windows[suggestion.stylist_id], booked.get(suggestion.stylist_id, [])):
                out.append(suggestion)
                seen.add(key)
        return out
