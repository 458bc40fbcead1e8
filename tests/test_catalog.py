"""
Tests for catalogue administration: services, stylists, customers and gallery.
"""

from __future__ import annotations

import pytest

from salon.application.exceptions import AvailabilityValidationError, NotFoundError, ValidationError
from salon.application.use_cases.catalog import CatalogUseCase
from salon.domain.entities.stylist import AvailabilitySlot
from salon.infrastructure.store.memory_store import MemoryDocumentStore


def test_service_crud():
    catalog = CatalogUseCase(MemoryDocumentStore())

    service = catalog.create_service("  Corte ", "Corte y peinado", 25, 45)
    assert service.name == "Corte"
    assert catalog.get_service(service.id) == service

    updated = catalog.update_service(service.id, price=30.0)
    assert updated.price == 30.0
    assert updated.duration == 45
    assert [s.id for s in catalog.list_services()] == [service.id]

    catalog.delete_service(service.id)
    with pytest.raises(NotFoundError):
        catalog.get_service(service.id)


def test_service_validation():
    catalog = CatalogUseCase(MemoryDocumentStore())

    with pytest.raises(ValidationError):
        catalog.create_service("", "x", 10, 30)
    with pytest.raises(ValidationError):
        catalog.create_service("Corte", "x", -1, 30)
    with pytest.raises(ValidationError):
        catalog.create_service("Corte", "x", 10, 0)


def test_stylist_availability_is_validated_on_write():
    catalog = CatalogUseCase(MemoryDocumentStore())
    stylist = catalog.create_stylist("Ana", availability={"Monday": [AvailabilitySlot("09:00", "13:00")]})

    assert stylist.availability == {"monday": (AvailabilitySlot("09:00", "13:00"),)}

    with pytest.raises(AvailabilityValidationError):
        catalog.set_availability(stylist.id, {"monday": [AvailabilitySlot("13:00", "09:00")]})

    updated = catalog.set_availability(stylist.id, {"friday": [AvailabilitySlot("10:00", "14:00")]})
    assert catalog.get_stylist(stylist.id).availability == updated.availability
    assert catalog.get_stylist(stylist.id).name == "Ana"


def test_stylist_update_keeps_availability():
    catalog = CatalogUseCase(MemoryDocumentStore())
    stylist = catalog.create_stylist("Ana", availability={"monday": [AvailabilitySlot("09:00", "13:00")]})

    catalog.update_stylist(stylist.id, name="Ana Maria")

    stored = catalog.get_stylist(stylist.id)
    assert stored.name == "Ana Maria"
    assert stored.availability["monday"] == (AvailabilitySlot("09:00", "13:00"),)


def test_get_or_create_customer_matches_lowercased_email():
    catalog = CatalogUseCase(MemoryDocumentStore())

    first = catalog.get_or_create_customer("Lucia@Example.com", "Lucia", "Perez")
    second = catalog.get_or_create_customer("lucia@example.com", "Otra", "Persona")

    assert first.id == second.id
    assert second.first_name == "Lucia"
    assert len(catalog.list_customers()) == 1


def test_gallery_crud_and_validation():
    catalog = CatalogUseCase(MemoryDocumentStore())

    image = catalog.create_gallery_image("https://img/1.jpg", "Peinado", "updo")
    assert catalog.update_gallery_image(image.id, alt="Recogido").alt == "Recogido"
    with pytest.raises(ValidationError):
        catalog.create_gallery_image("", "alt", "hint")

    catalog.delete_gallery_image(image.id)
    assert catalog.list_gallery() == []
    with pytest.raises(NotFoundError):
        catalog.delete_gallery_image(image.id)
