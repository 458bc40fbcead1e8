"""
Tests for slot suggestions: the local interval sweep, the model-backed adapter
and the use case that re-checks every candidate.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from salon.application.exceptions import LLMUpstreamError, SuggestionServiceError
from salon.application.ports.suggestion_service import SuggestionServicePort
from salon.application.use_cases.booking_coordinator import BookingCoordinator
from salon.application.use_cases.catalog import CatalogUseCase
from salon.application.use_cases.schedule import StylistScheduleReader
from salon.application.use_cases.suggest_appointments import SuggestAppointmentsUseCase
from salon.core.config import settings
from salon.domain.entities.stylist import AvailabilitySlot
from salon.domain.entities.suggestion import (
    BookedInterval,
    SlotSuggestion,
    StylistAvailability,
    SuggestionRequest,
    TimeWindow,
)
from salon.infrastructure.llm.openai_llm import OpenAISuggestionService
from salon.infrastructure.store.memory_store import MemoryDocumentStore
from salon.infrastructure.suggestions.local_suggestions import LocalSuggestionService

MONDAY = date(2030, 6, 3)


class FakeJsonClient:
    def __init__(self, data=None, error: Exception | None = None) -> None:
        self.data = data
        self.error = error
        self.prompts: list[str] = []

    def call_json(self, model, prompt, temperature, what, max_tokens=1200):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.data


class StaticSuggestions(SuggestionServicePort):
    def __init__(self, suggestions: list[SlotSuggestion]) -> None:
        self.suggestions = suggestions
        self.requests: list[SuggestionRequest] = []

    def suggest(self, request: SuggestionRequest) -> list[SlotSuggestion]:
        self.requests.append(request)
        return list(self.suggestions)


def _request(availability, booked=(), duration=60) -> SuggestionRequest:
    return SuggestionRequest(
        service="Corte",
        duration=duration,
        preferred_date=MONDAY,
        stylist_availability=tuple(availability),
        existing_appointments=tuple(booked),
    )


def test_local_search_orders_by_start_then_stylist():
    """Two stylists with the same hours interleave by start time, ties broken by stylist id."""
    request = _request(
        [
            StylistAvailability("sty2", (TimeWindow("09:00", "12:00"),)),
            StylistAvailability("sty1", (TimeWindow("09:00", "12:00"),)),
        ]
    )

    suggestions = LocalSuggestionService(limit=5, step_minutes=15).suggest(request)

    assert [(s.stylist_id, s.start_time.strftime("%H:%M")) for s in suggestions] == [
        ("sty1", "09:00"),
        ("sty2", "09:00"),
        ("sty1", "09:15"),
        ("sty2", "09:15"),
        ("sty1", "09:30"),
    ]
    assert all(s.end_time - s.start_time == timedelta(minutes=60) for s in suggestions)
    assert suggestions[0].end_time == datetime(2030, 6, 3, 10, 0)


def test_local_search_skips_booked_intervals():
    request = _request(
        [StylistAvailability("sty1", (TimeWindow("09:00", "12:00"),))],
        booked=[BookedInterval("sty1", "09:00", "11:00")],
    )

    suggestions = LocalSuggestionService(limit=5).suggest(request)

    assert [s.start_time.strftime("%H:%M") for s in suggestions] == ["11:00"]


def test_local_search_empty_is_a_valid_answer():
    request = _request([StylistAvailability("sty1", (TimeWindow("09:00", "09:30"),))])
    assert LocalSuggestionService().suggest(request) == []


def test_local_search_caps_results():
    request = _request([StylistAvailability("sty1", (TimeWindow("08:00", "20:00"),))], duration=30)
    assert len(LocalSuggestionService(limit=3).suggest(request)) == 3


def test_openai_adapter_parses_and_drops_unknown_stylists():
    client = FakeJsonClient(
        {
            "suggestions": [
                {"stylistId": "sty1", "startTime": "2030-06-03T09:00:00", "endTime": "2030-06-03T10:00:00"},
                {"stylistId": "ghost", "startTime": "2030-06-03T09:00:00", "endTime": "2030-06-03T10:00:00"},
            ]
        }
    )
    request = _request([StylistAvailability("sty1", (TimeWindow("09:00", "12:00"),))])

    suggestions = OpenAISuggestionService(client=client, limit=5).suggest(request)

    assert suggestions == [SlotSuggestion("sty1", datetime(2030, 6, 3, 9, 0), datetime(2030, 6, 3, 10, 0))]
    assert '"preferredDate": "2030-06-03"' in client.prompts[0]


def test_openai_adapter_converts_offset_timestamps_to_salon_time(monkeypatch):
    monkeypatch.setattr(settings, "BUSINESS_TIMEZONE", "Europe/Madrid")
    client = FakeJsonClient(
        {"suggestions": [{"stylistId": "sty1", "startTime": "2030-06-03T07:00:00+00:00", "endTime": "2030-06-03T08:00:00+00:00"}]}
    )
    request = _request([StylistAvailability("sty1", (TimeWindow("09:00", "12:00"),))])

    suggestions = OpenAISuggestionService(client=client).suggest(request)

    assert suggestions == [SlotSuggestion("sty1", datetime(2030, 6, 3, 9, 0), datetime(2030, 6, 3, 10, 0))]


def test_openai_adapter_wraps_failures():
    request = _request([StylistAvailability("sty1", (TimeWindow("09:00", "12:00"),))])

    with pytest.raises(SuggestionServiceError):
        OpenAISuggestionService(client=FakeJsonClient(error=LLMUpstreamError("timeout"))).suggest(request)
    with pytest.raises(SuggestionServiceError):
        OpenAISuggestionService(client=FakeJsonClient({"suggestions": "nope"})).suggest(request)


def _seed(store: MemoryDocumentStore) -> tuple[CatalogUseCase, str, str]:
    catalog = CatalogUseCase(store)
    service = catalog.create_service("Corte", "Corte y peinado", 25.0, 60)
    stylist = catalog.create_stylist("Ana", availability={"monday": [AvailabilitySlot("09:00", "13:00")]})
    return catalog, service.id, stylist.id


def test_use_case_builds_request_from_store_and_respects_bookings():
    store = MemoryDocumentStore()
    catalog, service_id, stylist_id = _seed(store)
    coordinator = BookingCoordinator(store, catalog)
    assert coordinator.create_appointment("cust1", "Lucia", service_id, stylist_id, datetime(2030, 6, 3, 9, 0)).success

    uc = SuggestAppointmentsUseCase(catalog, StylistScheduleReader(store), LocalSuggestionService(limit=5))
    suggestions = uc.execute(service_id, MONDAY)

    starts = [s.start_time.strftime("%H:%M") for s in suggestions]
    assert starts == ["10:00", "10:15", "10:30", "10:45", "11:00"]


def test_use_case_ignores_cancelled_and_excluded_bookings():
    store = MemoryDocumentStore()
    catalog, service_id, stylist_id = _seed(store)
    coordinator = BookingCoordinator(store, catalog)
    first = coordinator.create_appointment("cust1", "Lucia", service_id, stylist_id, datetime(2030, 6, 3, 9, 0))
    coordinator.cancel_appointment(first.appointment.id, "cust1", stylist_id)
    second = coordinator.create_appointment("cust2", "Marta", service_id, stylist_id, datetime(2030, 6, 3, 10, 0))

    uc = SuggestAppointmentsUseCase(catalog, StylistScheduleReader(store), LocalSuggestionService(limit=5))

    starts = [s.start_time.strftime("%H:%M") for s in uc.execute(service_id, MONDAY)]
    assert starts[0] == "09:00"
    assert "10:00" not in starts

    editing = [s.start_time.strftime("%H:%M") for s in uc.execute(service_id, MONDAY, exclude_appointment_id=second.appointment.id)]
    assert editing[:5] == ["09:00", "09:15", "09:30", "09:45", "10:00"]


def test_use_case_drops_invalid_model_output():
    store = MemoryDocumentStore()
    catalog, service_id, stylist_id = _seed(store)
    backend = StaticSuggestions(
        [
            SlotSuggestion(stylist_id, datetime(2030, 6, 3, 9, 0), datetime(2030, 6, 3, 10, 0)),
            SlotSuggestion(stylist_id, datetime(2030, 6, 3, 12, 30), datetime(2030, 6, 3, 13, 30)),
            SlotSuggestion(stylist_id, datetime(2030, 6, 3, 9, 0), datetime(2030, 6, 3, 10, 0)),
            SlotSuggestion(stylist_id, datetime(2030, 6, 4, 9, 0), datetime(2030, 6, 4, 10, 0)),
            SlotSuggestion(stylist_id, datetime(2030, 6, 3, 10, 0), datetime(2030, 6, 3, 10, 30)),
            SlotSuggestion("unknown", datetime(2030, 6, 3, 9, 0), datetime(2030, 6, 3, 10, 0)),
        ]
    )

    uc = SuggestAppointmentsUseCase(catalog, StylistScheduleReader(store), backend)
    suggestions = uc.execute(service_id, MONDAY)

    assert suggestions == [SlotSuggestion(stylist_id, datetime(2030, 6, 3, 9, 0), datetime(2030, 6, 3, 10, 0))]
    assert backend.requests[0].stylist_availability[0].available_times == (TimeWindow("09:00", "13:00"),)


def test_use_case_returns_empty_on_day_off():
    store = MemoryDocumentStore()
    catalog, service_id, _ = _seed(store)
    uc = SuggestAppointmentsUseCase(catalog, StylistScheduleReader(store), LocalSuggestionService())

    assert uc.execute(service_id, date(2030, 6, 4)) == []


def test_use_case_treats_pending_requests_as_booked():
    store = MemoryDocumentStore()
    catalog, service_id, stylist_id = _seed(store)
    coordinator = BookingCoordinator(store, catalog)
    assert coordinator.request_appointment("cust1", "Lucia", service_id, stylist_id, datetime(2030, 6, 3, 9, 0)).success

    uc = SuggestAppointmentsUseCase(catalog, StylistScheduleReader(store), LocalSuggestionService(limit=5))

    starts = [s.start_time.strftime("%H:%M") for s in uc.execute(service_id, MONDAY)]
    assert starts[0] == "10:00"
