from datetime import datetime

from fastapi import HTTPException, status

from salon.api.v1.schemas import (
    AppointmentSchema,
    CustomerSchema,
    GalleryImageSchema,
    OperationResultSchema,
    ServiceSchema,
    StylistSchema,
    TimeWindowSchema,
)
from salon.application.use_cases.booking_coordinator import OperationResult
from salon.core.clock import business_now
from salon.domain.entities.appointment import Appointment
from salon.domain.entities.customer import Customer
from salon.domain.entities.gallery_image import GalleryImage
from salon.domain.entities.service import Service
from salon.domain.entities.stylist import AvailabilitySlot, Stylist


def service_schema(service: Service) -> ServiceSchema:
    return ServiceSchema(**service.to_document())


def stylist_schema(stylist: Stylist) -> StylistSchema:
    return StylistSchema(
        id=stylist.id,
        name=stylist.name,
        avatar_url=stylist.avatar_url,
        availability={
            day: [TimeWindowSchema(start=s.start, end=s.end) for s in slots]
            for day, slots in stylist.availability.items()
        },
    )


def availability_from_schema(raw: dict[str, list[TimeWindowSchema]]) -> dict[str, list[AvailabilitySlot]]:
    return {day: [AvailabilitySlot(start=w.start, end=w.end) for w in windows] for day, windows in raw.items()}


def customer_schema(customer: Customer) -> CustomerSchema:
    return CustomerSchema(**customer.to_document())


def gallery_schema(image: GalleryImage) -> GalleryImageSchema:
    return GalleryImageSchema(**image.to_document())


def appointment_schema(appointment: Appointment, now: datetime | None = None) -> AppointmentSchema:
    return AppointmentSchema(
        id=appointment.id,
        customer_name=appointment.customer_name,
        customer_id=appointment.customer_id,
        service_id=appointment.service_id,
        stylist_id=appointment.stylist_id,
        start=appointment.start,
        end=appointment.end,
        status=appointment.status.value,
        price=appointment.price,
        cancellable=appointment.is_cancellable(now or business_now()),
    )


def result_schema(result: OperationResult) -> OperationResultSchema:
    """Failed coordinator results surface as 409 with the coordinator's message."""
    if not result.success:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.message)
    return OperationResultSchema(
        success=True,
        message=result.message,
        appointment=appointment_schema(result.appointment) if result.appointment else None,
    )
