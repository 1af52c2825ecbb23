"""
Dashboard component - month stats, calendar and yearly chart.
"""

from .component import DashboardService, shift_month
from .models import CalendarDay, CalendarEntry, CalendarMonth, MonthStats, YearlySeries

__all__ = [
    "DashboardService",
    "shift_month",
    "MonthStats",
    "CalendarMonth",
    "CalendarDay",
    "CalendarEntry",
    "YearlySeries",
]
