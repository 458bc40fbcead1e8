from datetime import date, datetime

from pydantic import BaseModel, Field

from salon.domain.entities.marketing import Tone


# Auth

class CredentialsSchema(BaseModel):
    email: str
    password: str


class SignupSchema(CredentialsSchema):
    first_name: str
    last_name: str
    phone: str = ""


class PrincipalSchema(BaseModel):
    uid: str
    email: str
    role: str


class TokenSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"
    principal: PrincipalSchema


# Catalog

class ServiceSchema(BaseModel):
    id: str
    name: str
    description: str
    price: float
    duration: int


class ServiceCreateSchema(BaseModel):
    name: str
    description: str = ""
    price: float
    duration: int


class ServiceUpdateSchema(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    duration: int | None = None


class TimeWindowSchema(BaseModel):
    start: str
    end: str


class StylistSchema(BaseModel):
    id: str
    name: str
    avatar_url: str = ""
    availability: dict[str, list[TimeWindowSchema]] = Field(default_factory=dict)


class StylistCreateSchema(BaseModel):
    name: str
    avatar_url: str = ""
    availability: dict[str, list[TimeWindowSchema]] = Field(default_factory=dict)


class StylistUpdateSchema(BaseModel):
    name: str | None = None
    avatar_url: str | None = None


class AvailabilitySchema(BaseModel):
    availability: dict[str, list[TimeWindowSchema]]


class CustomerSchema(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str = ""


class CustomerCreateSchema(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str = ""


class CustomerUpdateSchema(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None


class GalleryImageSchema(BaseModel):
    id: str
    src: str
    alt: str
    hint: str


class GalleryImageCreateSchema(BaseModel):
    src: str
    alt: str
    hint: str


class GalleryImageUpdateSchema(BaseModel):
    src: str | None = None
    alt: str | None = None
    hint: str | None = None


# Appointments

class AppointmentSchema(BaseModel):
    id: str
    customer_name: str
    customer_id: str
    service_id: str
    stylist_id: str
    start: datetime
    end: datetime
    status: str
    price: float | None = None
    cancellable: bool = False


class SuggestionRequestSchema(BaseModel):
    service_id: str
    preferred_date: date
    stylist_id: str | None = None
    exclude_appointment_id: str | None = None


class SlotSuggestionSchema(BaseModel):
    stylist_id: str
    start_time: datetime
    end_time: datetime


class SuggestionResponseSchema(BaseModel):
    suggestions: list[SlotSuggestionSchema]


class AppointmentRequestSchema(BaseModel):
    service_id: str
    stylist_id: str
    start: datetime


class AdminAppointmentCreateSchema(BaseModel):
    service_id: str
    stylist_id: str
    start: datetime
    customer_id: str | None = None
    customer_email: str | None = None
    customer_first_name: str = ""
    customer_last_name: str = ""
    customer_phone: str = ""


class AppointmentUpdateSchema(BaseModel):
    service_id: str | None = None
    stylist_id: str | None = None
    start: datetime | None = None


class CancelRequestSchema(BaseModel):
    customer_id: str
    stylist_id: str


class OperationResultSchema(BaseModel):
    success: bool
    message: str
    appointment: AppointmentSchema | None = None


# Dashboard and marketing

class DashboardSchema(BaseModel):
    day: date
    appointments_today: list[AppointmentSchema]
    appointments_today_count: int
    confirmed_today: int
    revenue_today: float
    active_stylists: int
    week_activity: dict[str, int]
    stylist_agenda: dict[str, list[AppointmentSchema]]


class MarketingRequestSchema(BaseModel):
    service_name: str
    offer: str = ""
    tone: Tone = Tone.friendly


class MarketingResponseSchema(BaseModel):
    post_content: str
