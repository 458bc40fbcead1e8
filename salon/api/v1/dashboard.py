from datetime import date

from fastapi import APIRouter, Depends

from salon.api.deps import require_admin
from salon.api.v1.converters import appointment_schema
from salon.api.v1.schemas import DashboardSchema
from salon.application.use_cases.dashboard import DashboardUseCase
from salon.core.clock import business_now
from salon.wiring.dependencies import get_dashboard_use_case

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=DashboardSchema)
def summary(day: date | None = None, uc: DashboardUseCase = Depends(get_dashboard_use_case)):
    s = uc.summary(day or business_now().date())
    return DashboardSchema(
        day=s.day,
        appointments_today=[appointment_schema(a) for a in s.appointments_today],
        appointments_today_count=s.appointments_today_count,
        confirmed_today=s.confirmed_today,
        revenue_today=s.revenue_today,
        active_stylists=s.active_stylists,
        week_activity=s.week_activity,
        stylist_agenda={sid: [appointment_schema(a) for a in items] for sid, items in s.stylist_agenda.items()},
    )
