from fastapi import APIRouter, Depends, HTTPException

from salon.api.deps import get_current_principal, require_admin
from salon.api.v1.converters import appointment_schema, result_schema
from salon.api.v1.schemas import (
    AdminAppointmentCreateSchema,
    AppointmentRequestSchema,
    AppointmentSchema,
    AppointmentUpdateSchema,
    CancelRequestSchema,
    OperationResultSchema,
    SlotSuggestionSchema,
    SuggestionRequestSchema,
    SuggestionResponseSchema,
)
from salon.application.exceptions import NotFoundError, SuggestionServiceError
from salon.application.use_cases.booking_coordinator import BookingCoordinator
from salon.application.use_cases.catalog import CatalogUseCase
from salon.application.use_cases.suggest_appointments import SuggestAppointmentsUseCase
from salon.core.clock import business_now
from salon.domain.entities.principal import Principal
from salon.wiring.dependencies import get_booking_coordinator, get_catalog_use_case, get_suggest_use_case

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/suggestions", response_model=SuggestionResponseSchema)
def suggest(req: SuggestionRequestSchema, uc: SuggestAppointmentsUseCase = Depends(get_suggest_use_case)):
    try:
        suggestions = uc.execute(
            service_id=req.service_id,
            preferred_date=req.preferred_date,
            stylist_id=req.stylist_id,
            exclude_appointment_id=req.exclude_appointment_id,
        )
    except SuggestionServiceError:
        raise HTTPException(status_code=502, detail="Could not compute suggestions right now. Please try again.")
    return SuggestionResponseSchema(
        suggestions=[
            SlotSuggestionSchema(stylist_id=s.stylist_id, start_time=s.start_time, end_time=s.end_time)
            for s in suggestions
        ]
    )


@router.post("/requests", response_model=OperationResultSchema, status_code=201)
def request_appointment(
    req: AppointmentRequestSchema,
    principal: Principal = Depends(get_current_principal),
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
    catalog: CatalogUseCase = Depends(get_catalog_use_case),
):
    try:
        customer_name = catalog.get_customer(principal.uid).display_name or principal.email
    except NotFoundError:
        customer_name = principal.email
    result = coordinator.request_appointment(
        customer_id=principal.uid,
        customer_name=customer_name,
        service_id=req.service_id,
        stylist_id=req.stylist_id,
        start=req.start,
    )
    return result_schema(result)


@router.get("/mine", response_model=list[AppointmentSchema])
def my_appointments(
    principal: Principal = Depends(get_current_principal),
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    now = business_now()
    return [appointment_schema(a, now) for a in coordinator.list_customer_appointments(principal.uid)]


@router.post("/mine/{appointment_id}/cancel", response_model=OperationResultSchema)
def cancel_my_appointment(
    appointment_id: str,
    principal: Principal = Depends(get_current_principal),
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    appointment = coordinator.get_customer_appointment(principal.uid, appointment_id)
    if not appointment.is_cancellable(business_now()):
        raise HTTPException(status_code=409, detail="This appointment can no longer be cancelled.")
    return result_schema(coordinator.cancel_appointment(appointment.id, principal.uid, appointment.stylist_id))


@admin_router.get("", response_model=list[AppointmentSchema])
def list_appointments(coordinator: BookingCoordinator = Depends(get_booking_coordinator)):
    return [appointment_schema(a) for a in coordinator.list_admin_appointments()]


@admin_router.get("/pending", response_model=list[AppointmentSchema])
def list_pending(coordinator: BookingCoordinator = Depends(get_booking_coordinator)):
    return [appointment_schema(a) for a in coordinator.list_pending_requests()]


@admin_router.post("", response_model=OperationResultSchema, status_code=201)
def create_appointment(
    req: AdminAppointmentCreateSchema,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
    catalog: CatalogUseCase = Depends(get_catalog_use_case),
):
    if req.customer_id:
        customer = catalog.get_customer(req.customer_id)
    elif req.customer_email:
        customer = catalog.get_or_create_customer(
            req.customer_email, req.customer_first_name, req.customer_last_name, req.customer_phone
        )
    else:
        raise HTTPException(status_code=422, detail="customer_id or customer_email is required")

    result = coordinator.create_appointment(
        customer_id=customer.id,
        customer_name=customer.display_name or customer.email,
        service_id=req.service_id,
        stylist_id=req.stylist_id,
        start=req.start,
    )
    return result_schema(result)


@admin_router.patch("/{customer_id}/{appointment_id}", response_model=OperationResultSchema)
def update_appointment(
    customer_id: str,
    appointment_id: str,
    req: AppointmentUpdateSchema,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    result = coordinator.update_appointment(
        customer_id=customer_id,
        appointment_id=appointment_id,
        service_id=req.service_id,
        stylist_id=req.stylist_id,
        start=req.start,
    )
    return result_schema(result)


@admin_router.post("/{customer_id}/{appointment_id}/confirm", response_model=OperationResultSchema)
def confirm_appointment(
    customer_id: str,
    appointment_id: str,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    return result_schema(coordinator.confirm_appointment(customer_id, appointment_id))


@admin_router.post("/{appointment_id}/cancel", response_model=OperationResultSchema)
def cancel_appointment(
    appointment_id: str,
    req: CancelRequestSchema,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    return result_schema(coordinator.cancel_appointment(appointment_id, req.customer_id, req.stylist_id))


@admin_router.delete("/{customer_id}/{appointment_id}", response_model=OperationResultSchema)
def delete_appointment(
    customer_id: str,
    appointment_id: str,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    return result_schema(coordinator.delete_appointment(customer_id, appointment_id))
