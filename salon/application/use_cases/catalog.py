from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from salon.application.exceptions import NotFoundError
from salon.application.ports.document_store import DocumentStorePort
from salon.application.utils import store_paths
from salon.application.utils.slot_rules import validate_availability
from salon.application.utils.validation import (
    require_email,
    require_non_negative,
    require_positive_int,
    require_text,
)
from salon.domain.entities.customer import Customer
from salon.domain.entities.gallery_image import GalleryImage
from salon.domain.entities.service import Service
from salon.domain.entities.stylist import AvailabilitySlot, Stylist


class CatalogUseCase:
    """Administrative CRUD over services, stylists, customers and gallery images."""

    def __init__(self, store: DocumentStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    # Services

    def list_services(self) -> list[Service]:
        return [Service.from_document(d) for d in self._store.list_documents(store_paths.SERVICES)]

    def get_service(self, service_id: str) -> Service:
        doc = self._store.get(store_paths.service_doc(service_id))
        if doc is None:
            raise NotFoundError(f"Service {service_id} not found")
        return Service.from_document(doc)

    def create_service(self, name: str, description: str, price: float, duration: int) -> Service:
        service = _validated_service(
            Service(id=self._store.new_id(), name=name, description=description, price=price, duration=duration)
        )
        self._store.set(store_paths.service_doc(service.id), service.to_document())
        return service

    def update_service(
        self,
        service_id: str,
        name: str | None = None,
        description: str | None = None,
        price: float | None = None,
        duration: int | None = None,
    ) -> Service:
        current = self.get_service(service_id)
        service = _validated_service(
            replace(
                current,
                name=current.name if name is None else name,
                description=current.description if description is None else description,
                price=current.price if price is None else price,
                duration=current.duration if duration is None else duration,
            )
        )
        self._store.set(store_paths.service_doc(service.id), service.to_document(), merge=True)
        return service

    def delete_service(self, service_id: str) -> None:
        self.get_service(service_id)
        self._store.delete(store_paths.service_doc(service_id))

    # Stylists

    def list_stylists(self) -> list[Stylist]:
        return [Stylist.from_document(d) for d in self._store.list_documents(store_paths.STYLISTS)]

    def get_stylist(self, stylist_id: str) -> Stylist:
        doc = self._store.get(store_paths.stylist_doc(stylist_id))
        if doc is None:
            raise NotFoundError(f"Stylist {stylist_id} not found")
        return Stylist.from_document(doc)

    def create_stylist(
        self,
        name: str,
        avatar_url: str = "",
        availability: dict[str, Sequence[AvailabilitySlot]] | None = None,
    ) -> Stylist:
        stylist = Stylist(
            id=self._store.new_id(),
            name=require_text(name, "name"),
            avatar_url=(avatar_url or "").strip(),
            availability=validate_availability(availability or {}),
        )
        self._store.set(store_paths.stylist_doc(stylist.id), stylist.to_document())
        return stylist

    def update_stylist(self, stylist_id: str, name: str | None = None, avatar_url: str | None = None) -> Stylist:
        current = self.get_stylist(stylist_id)
        stylist = replace(
            current,
            name=current.name if name is None else require_text(name, "name"),
            avatar_url=current.avatar_url if avatar_url is None else avatar_url.strip(),
        )
        self._store.set(
            store_paths.stylist_doc(stylist.id),
            {"name": stylist.name, "avatar_url": stylist.avatar_url},
            merge=True,
        )
        return stylist

    def set_availability(self, stylist_id: str, availability: dict[str, Sequence[AvailabilitySlot]]) -> Stylist:
        # Last writer wins; there is no version token on schedules
        current = self.get_stylist(stylist_id)
        stylist = replace(current, availability=validate_availability(availability))
        self._store.set(
            store_paths.stylist_doc(stylist.id),
            {"availability": stylist.to_document()["availability"]},
            merge=True,
        )
        self._logger.info("Stylist availability updated", extra={"stylist_id": stylist_id})
        return stylist

    def delete_stylist(self, stylist_id: str) -> None:
        self.get_stylist(stylist_id)
        self._store.delete(store_paths.stylist_doc(stylist_id))

    # Customers

    def list_customers(self) -> list[Customer]:
        return [Customer.from_document(d) for d in self._store.list_documents(store_paths.CUSTOMERS)]

    def get_customer(self, customer_id: str) -> Customer:
        doc = self._store.get(store_paths.customer_doc(customer_id))
        if doc is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        return Customer.from_document(doc)

    def create_customer(self, first_name: str, last_name: str, email: str, phone: str = "") -> Customer:
        customer = Customer(
            id=self._store.new_id(),
            first_name=require_text(first_name, "first_name"),
            last_name=require_text(last_name, "last_name"),
            email=require_email(email),
            phone=(phone or "").strip(),
        )
        self._store.set(store_paths.customer_doc(customer.id), customer.to_document())
        return customer

    def update_customer(
        self,
        customer_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> Customer:
        current = self.get_customer(customer_id)
        customer = replace(
            current,
            first_name=current.first_name if first_name is None else require_text(first_name, "first_name"),
            last_name=current.last_name if last_name is None else require_text(last_name, "last_name"),
            email=current.email if email is None else require_email(email),
            phone=current.phone if phone is None else phone.strip(),
        )
        self._store.set(store_paths.customer_doc(customer.id), customer.to_document(), merge=True)
        return customer

    def delete_customer(self, customer_id: str) -> None:
        self.get_customer(customer_id)
        self._store.delete(store_paths.customer_doc(customer_id))

    def find_customer_by_email(self, email: str) -> Customer | None:
        matches = self._store.query(store_paths.CUSTOMERS, "email", require_email(email))
        return Customer.from_document(matches[0]) if matches else None

    def get_or_create_customer(self, email: str, first_name: str, last_name: str, phone: str = "") -> Customer:
        existing = self.find_customer_by_email(email)
        if existing is not None:
            return existing
        customer = self.create_customer(first_name, last_name, email, phone)
        self._logger.info("Customer profile created for booking", extra={"customer_id": customer.id})
        return customer

    # Gallery

    def list_gallery(self) -> list[GalleryImage]:
        return [GalleryImage.from_document(d) for d in self._store.list_documents(store_paths.GALLERY)]

    def create_gallery_image(self, src: str, alt: str, hint: str) -> GalleryImage:
        image = GalleryImage(
            id=self._store.new_id(),
            src=require_text(src, "src"),
            alt=require_text(alt, "alt"),
            hint=require_text(hint, "hint"),
        )
        self._store.set(store_paths.gallery_doc(image.id), image.to_document())
        return image

    def update_gallery_image(
        self,
        image_id: str,
        src: str | None = None,
        alt: str | None = None,
        hint: str | None = None,
    ) -> GalleryImage:
        doc = self._store.get(store_paths.gallery_doc(image_id))
        if doc is None:
            raise NotFoundError(f"Gallery image {image_id} not found")
        current = GalleryImage.from_document(doc)
        image = replace(
            current,
            src=current.src if src is None else require_text(src, "src"),
            alt=current.alt if alt is None else require_text(alt, "alt"),
            hint=current.hint if hint is None else require_text(hint, "hint"),
        )
        self._store.set(store_paths.gallery_doc(image.id), image.to_document())
        return image

    def delete_gallery_image(self, image_id: str) -> None:
        if not self._store.exists(store_paths.gallery_doc(image_id)):
            raise NotFoundError(f"Gallery image {image_id} not found")
        self._store.delete(store_paths.gallery_doc(image_id))


def _validated_service(service: Service) -> Service:
    return replace(
        service,
        name=require_text(service.name, "name"),
        description=(service.description or "").strip(),
        price=require_non_negative(service.price, "price"),
        duration=require_positive_int(service.duration, "duration"),
    )
