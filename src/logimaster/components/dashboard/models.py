"""
Dashboard component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MonthStats:
    year: int
    month: int
    revenue: float
    operation_costs: float
    general_expenses: float

    @property
    def total_costs(self) -> float:
        return self.operation_costs + self.general_expenses

    @property
    def net(self) -> float:
        return self.revenue - self.total_costs


@dataclass(frozen=True)
class CalendarEntry:
    """A trip as listed in the day popup."""

    operation_id: int
    vehicle_plate: str
    driver_name: str
    revenue: float


@dataclass(frozen=True)
class CalendarDay:
    day: int
    date: str
    entries: tuple[CalendarEntry, ...] = field(default_factory=tuple)

    @property
    def has_operation(self) -> bool:
        return bool(self.entries)


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    title: str
    weekday_labels: tuple[str, ...]
    leading_blanks: int
    days: tuple[CalendarDay, ...]


@dataclass(frozen=True)
class YearlySeries:
    year: int
    labels: tuple[str, ...]
    revenue: tuple[float, ...]
    costs: tuple[float, ...]
    net: tuple[float, ...]
