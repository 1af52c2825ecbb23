"""Dashboard routes: month totals, trip calendar and the yearly chart."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response

from logimaster.adapters.clock import SystemClock
from logimaster.api.deps import get_clock, get_dashboard_service
from logimaster.api.schemas import CalendarResponse, MonthStatsResponse
from logimaster.components.dashboard import DashboardService

router = APIRouter()


def _current(clock: SystemClock, year: int | None, month: int | None) -> tuple[int, int]:
    now = clock.now()
    return year or now.year, month or now.month


@router.get("/stats", response_model=MonthStatsResponse)
def month_stats(
    year: int | None = Query(None, ge=1),
    month: int | None = Query(None, ge=1, le=12),
    clock: SystemClock = Depends(get_clock),
    service: DashboardService = Depends(get_dashboard_service),
) -> MonthStatsResponse:
    year, month = _current(clock, year, month)
    return MonthStatsResponse.model_validate(service.month_stats(year, month))


@router.get("/calendar", response_model=CalendarResponse)
def month_calendar(
    year: int | None = Query(None, ge=1),
    month: int | None = Query(None, ge=1, le=12),
    clock: SystemClock = Depends(get_clock),
    service: DashboardService = Depends(get_dashboard_service),
) -> CalendarResponse:
    year, month = _current(clock, year, month)
    cal = service.calendar(year, month)
    payload = asdict(cal)
    payload["days"] = [{**asdict(day), "has_operation": day.has_operation} for day in cal.days]
    return CalendarResponse.model_validate(payload)


@router.get("/chart.png")
def yearly_chart(
    year: int | None = Query(None, ge=1),
    clock: SystemClock = Depends(get_clock),
    service: DashboardService = Depends(get_dashboard_service),
) -> Response:
    year, _ = _current(clock, year, None)
    return Response(content=service.yearly_chart(year), media_type="image/png")
