from fastapi import APIRouter, Depends

from salon.api.deps import require_admin
from salon.api.v1.converters import appointment_schema, availability_from_schema, stylist_schema
from salon.api.v1.schemas import (
    AppointmentSchema,
    AvailabilitySchema,
    StylistCreateSchema,
    StylistSchema,
    StylistUpdateSchema,
)
from salon.application.use_cases.booking_coordinator import BookingCoordinator
from salon.application.use_cases.catalog import CatalogUseCase
from salon.wiring.dependencies import get_booking_coordinator, get_catalog_use_case

router = APIRouter()


@router.get("", response_model=list[StylistSchema])
def list_stylists(uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return [stylist_schema(s) for s in uc.list_stylists()]


@router.get("/{stylist_id}", response_model=StylistSchema)
def get_stylist(stylist_id: str, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return stylist_schema(uc.get_stylist(stylist_id))


@router.post("", response_model=StylistSchema, status_code=201, dependencies=[Depends(require_admin)])
def create_stylist(req: StylistCreateSchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    stylist = uc.create_stylist(
        name=req.name,
        avatar_url=req.avatar_url,
        availability=availability_from_schema(req.availability),
    )
    return stylist_schema(stylist)


@router.patch("/{stylist_id}", response_model=StylistSchema, dependencies=[Depends(require_admin)])
def update_stylist(stylist_id: str, req: StylistUpdateSchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return stylist_schema(uc.update_stylist(stylist_id, name=req.name, avatar_url=req.avatar_url))


@router.put("/{stylist_id}/availability", response_model=StylistSchema, dependencies=[Depends(require_admin)])
def set_availability(stylist_id: str, req: AvailabilitySchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return stylist_schema(uc.set_availability(stylist_id, availability_from_schema(req.availability)))


@router.delete("/{stylist_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_stylist(stylist_id: str, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    uc.delete_stylist(stylist_id)


@router.get(
    "/{stylist_id}/appointments",
    response_model=list[AppointmentSchema],
    dependencies=[Depends(require_admin)],
)
def stylist_appointments(stylist_id: str, coordinator: BookingCoordinator = Depends(get_booking_coordinator)):
    return [appointment_schema(a) for a in coordinator.list_stylist_appointments(stylist_id)]
