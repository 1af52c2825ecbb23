"""
Operations component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from logimaster.domain.entities import Operation

# --- Validation Errors ---


@dataclass(frozen=True)
class OperationValidationError:
    """Operation validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SaveOperationInput:
    """Create (no id) or replace (id given) a trip."""

    data: dict[str, Any]
    operation_id: int | None = None


@dataclass(frozen=True)
class OperationIdInput:
    operation_id: int


# --- Output Models ---


@dataclass(frozen=True)
class OperationOutput:
    operation: Operation | None
    errors: tuple[OperationValidationError, ...]
    success: bool


@dataclass(frozen=True)
class OperationRow:
    """One line of the trips table."""

    id: int
    date: str
    date_display: str
    driver_name: str
    activity_name: str
    revenue: float
    net: float

    @property
    def is_profit(self) -> bool:
        return self.net >= 0


@dataclass(frozen=True)
class HelperLine:
    id: int
    name: str
    daily_rate: float


@dataclass(frozen=True)
class OperationDetails:
    """Everything shown in the trip detail view."""

    operation: Operation
    date_display: str
    driver_name: str
    client_name: str
    revenue: float
    advance: float
    balance_due: float
    commission: float
    expenses: float
    helpers_total: float
    average_km_per_litre: float
    fuel_cost: float
    total_costs: float
    profit: float
    helpers: tuple[HelperLine, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OperationListOutput:
    rows: tuple[OperationRow, ...]
    total: int
