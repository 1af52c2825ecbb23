"""
Dashboard component - monthly totals, trip calendar and the yearly chart.

Month totals count trip revenue against trip costs (commission, tolls,
helpers, estimated fuel) plus the general expenses dated in that month.
"""

from __future__ import annotations

import calendar as _calendar
from datetime import date

from logimaster.domain import calculations
from logimaster.domain.entities import (
    DRIVERS,
    GENERAL_EXPENSES,
    OPERATIONS,
    GeneralExpense,
    Operation,
)
from logimaster.domain.formatting import MONTH_NAMES, WEEKDAY_LABELS, month_title

from .models import CalendarDay, CalendarEntry, CalendarMonth, MonthStats, YearlySeries
from .ports import ChartRendererPort, RepoMapPort


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move `delta` months forward (or back), wrapping years."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class DashboardService:
    def __init__(self, repos: RepoMapPort, renderer: ChartRendererPort | None = None):
        self.repos = repos
        self.renderer = renderer

    def _operations(self) -> list[Operation]:
        return [op for op in self.repos[OPERATIONS].list_all() if isinstance(op, Operation)]

    def _expenses(self) -> list[GeneralExpense]:
        return [
            e for e in self.repos[GENERAL_EXPENSES].list_all() if isinstance(e, GeneralExpense)
        ]

    def _stats(
        self,
        year: int,
        month: int,
        operations: list[Operation],
        expenses: list[GeneralExpense],
    ) -> MonthStats:
        month_ops = [op for op in operations if calculations.in_month(op.date, year, month)]
        return MonthStats(
            year=year,
            month=month,
            revenue=sum(op.revenue for op in month_ops),
            operation_costs=sum(calculations.operation_costs(op, operations) for op in month_ops),
            general_expenses=sum(
                e.amount for e in expenses if calculations.in_month(e.date, year, month)
            ),
        )

    def month_stats(self, year: int, month: int) -> MonthStats:
        return self._stats(year, month, self._operations(), self._expenses())

    def calendar(self, year: int, month: int) -> CalendarMonth:
        operations = self._operations()
        drivers = {r.record_id: r for r in self.repos[DRIVERS].list_all()}

        first_weekday, days_in_month = _calendar.monthrange(year, month)
        # monthrange counts from Monday; the grid starts on Sunday
        leading_blanks = (first_weekday + 1) % 7

        days = []
        for day in range(1, days_in_month + 1):
            date_str = date(year, month, day).isoformat()
            entries = tuple(
                CalendarEntry(
                    operation_id=op.id,
                    vehicle_plate=op.vehicle_plate,
                    driver_name=getattr(drivers.get(str(op.driver_id)), "name", "-") or "-",
                    revenue=op.revenue,
                )
                for op in operations
                if op.date.strip() == date_str
            )
            days.append(CalendarDay(day=day, date=date_str, entries=entries))

        return CalendarMonth(
            year=year,
            month=month,
            title=month_title(year, month),
            weekday_labels=WEEKDAY_LABELS,
            leading_blanks=leading_blanks,
            days=tuple(days),
        )

    def yearly_series(self, year: int) -> YearlySeries:
        operations = self._operations()
        expenses = self._expenses()
        stats = [self._stats(year, m, operations, expenses) for m in range(1, 13)]
        return YearlySeries(
            year=year,
            labels=tuple(name[:3].upper() for name in MONTH_NAMES),
            revenue=tuple(s.revenue for s in stats),
            costs=tuple(s.total_costs for s in stats),
            net=tuple(s.net for s in stats),
        )

    def yearly_chart(self, year: int) -> bytes:
        """Grouped bars of revenue, costs and net per month, as PNG."""
        if self.renderer is None:
            raise RuntimeError("No renderer configured")
        series = self.yearly_series(year)
        spec = {
            "type": "grouped_bar",
            "title": f"RESULTADO {year}",
            "data": {
                "x": list(series.labels),
                "series": {
                    "Faturamento": list(series.revenue),
                    "Custos": list(series.costs),
                    "Lucro": list(series.net),
                },
            },
            "ylabel": "R$",
        }
        return self.renderer.render_chart(spec, width=1000, height=500)
