from functools import lru_cache
import logging

from fastapi import Depends

from salon.core.config import settings
from salon.application.ports.document_store import DocumentStorePort
from salon.application.ports.marketing_assistant import MarketingAssistantPort
from salon.application.ports.suggestion_service import SuggestionServicePort
from salon.application.use_cases.auth import AuthUseCase
from salon.application.use_cases.booking_coordinator import BookingCoordinator
from salon.application.use_cases.catalog import CatalogUseCase
from salon.application.use_cases.dashboard import DashboardUseCase
from salon.application.use_cases.generate_marketing_post import GenerateMarketingPostUseCase
from salon.application.use_cases.schedule import StylistScheduleReader
from salon.application.use_cases.suggest_appointments import SuggestAppointmentsUseCase
from salon.application.utils.in_flight import InFlightGuard
from salon.infrastructure.identity.local_identity import LocalIdentityProvider
from salon.infrastructure.llm.mock_llm import MockMarketingAssistant
from salon.infrastructure.llm.openai_llm import OpenAIMarketingAssistant, OpenAISuggestionService
from salon.infrastructure.store.json_store import JsonDocumentStore
from salon.infrastructure.store.memory_store import MemoryDocumentStore
from salon.infrastructure.store.retrying_store import RetryingDocumentStore
from salon.infrastructure.suggestions.local_suggestions import LocalSuggestionService


_store: DocumentStorePort | None = None
_in_flight = InFlightGuard()


def _has_openai_key() -> bool:
    return bool(settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip())


def build_store() -> DocumentStorePort:
    logger = logging.getLogger(__name__)
    provider = settings.STORE_PROVIDER.lower()
    if provider == "memory":
        inner: DocumentStorePort = MemoryDocumentStore()
    elif provider == "json":
        inner = JsonDocumentStore(data_file=settings.STORE_DATA_FILE)
    elif provider == "firestore":
        # google-cloud-firestore is an optional extra
        from salon.infrastructure.store.firestore_store import FirestoreDocumentStore

        inner = FirestoreDocumentStore(project=settings.FIRESTORE_PROJECT, timeout=settings.STORE_TIMEOUT_SECONDS)
    else:
        raise ValueError(f"Unknown STORE_PROVIDER {settings.STORE_PROVIDER!r}")

    logger.info("Using %s document store", provider)
    return RetryingDocumentStore(
        inner,
        max_attempts=settings.STORE_MAX_ATTEMPTS,
        backoff_seconds=settings.STORE_RETRY_BACKOFF_SECONDS,
    )


def get_store() -> DocumentStorePort:
    global _store
    if _store is None:
        _store = build_store()
    return _store


@lru_cache
def get_suggestion_service() -> SuggestionServicePort:
    if settings.SUGGESTION_PROVIDER.lower() == "openai":
        if _has_openai_key():
            return OpenAISuggestionService(limit=settings.SUGGESTION_LIMIT)
        logging.getLogger(__name__).warning(
            "SUGGESTION_PROVIDER=openai without OPENAI_API_KEY, falling back to local search"
        )
    return LocalSuggestionService(limit=settings.SUGGESTION_LIMIT, step_minutes=settings.SLOT_STEP_MINUTES)


@lru_cache
def get_marketing_assistant() -> MarketingAssistantPort:
    if _has_openai_key():
        return OpenAIMarketingAssistant(business_name=settings.BUSINESS_NAME)
    return MockMarketingAssistant(business_name=settings.BUSINESS_NAME)


def get_auth_use_case(store: DocumentStorePort = Depends(get_store)) -> AuthUseCase:
    return AuthUseCase(identity=LocalIdentityProvider(store), store=store)


def get_catalog_use_case(store: DocumentStorePort = Depends(get_store)) -> CatalogUseCase:
    return CatalogUseCase(store)


def get_booking_coordinator(store: DocumentStorePort = Depends(get_store)) -> BookingCoordinator:
    return BookingCoordinator(store=store, catalog=CatalogUseCase(store), guard=_in_flight)


def get_suggest_use_case(
    store: DocumentStorePort = Depends(get_store),
    suggestions: SuggestionServicePort = Depends(get_suggestion_service),
) -> SuggestAppointmentsUseCase:
    return SuggestAppointmentsUseCase(
        catalog=CatalogUseCase(store),
        schedule=StylistScheduleReader(store),
        suggestions=suggestions,
        limit=settings.SUGGESTION_LIMIT,
    )


def get_dashboard_use_case(
    store: DocumentStorePort = Depends(get_store),
    bookings: BookingCoordinator = Depends(get_booking_coordinator),
) -> DashboardUseCase:
    return DashboardUseCase(bookings=bookings, catalog=CatalogUseCase(store))


def get_marketing_use_case(
    assistant: MarketingAssistantPort = Depends(get_marketing_assistant),
) -> GenerateMarketingPostUseCase:
    return GenerateMarketingPostUseCase(assistant)
