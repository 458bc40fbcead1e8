import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from salon.api.v1.appointments import admin_router as admin_appointments_router
from salon.api.v1.appointments import router as appointments_router
from salon.api.v1.auth import router as auth_router
from salon.api.v1.customers import router as customers_router
from salon.api.v1.dashboard import router as dashboard_router
from salon.api.v1.gallery import router as gallery_router
from salon.api.v1.marketing import router as marketing_router
from salon.api.v1.services import router as services_router
from salon.api.v1.stylists import router as stylists_router
from salon.application.exceptions import NotFoundError, StoreError, ValidationError
from salon.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("appointment_id", "customer_id", "stylist_id", "uid", "service", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking API", version="1.0.0")

app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(services_router, prefix="/api/v1/services", tags=["services"])
app.include_router(stylists_router, prefix="/api/v1/stylists", tags=["stylists"])
app.include_router(customers_router, prefix="/api/v1/customers", tags=["customers"])
app.include_router(gallery_router, prefix="/api/v1/gallery", tags=["gallery"])
app.include_router(appointments_router, prefix="/api/v1/appointments", tags=["appointments"])
app.include_router(admin_appointments_router, prefix="/api/v1/admin/appointments", tags=["admin"])
app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["admin"])
app.include_router(marketing_router, prefix="/api/v1/marketing", tags=["admin"])


@app.exception_handler(ValidationError)
def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreError)
def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logging.getLogger(__name__).error("Store failure", extra={"error": str(exc), "reason": request.url.path})
    return JSONResponse(status_code=503, content={"detail": "Storage is temporarily unavailable. Please try again."})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
