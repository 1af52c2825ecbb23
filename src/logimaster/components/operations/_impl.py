"""
Operations service - trips with revenue, costs and helper crews.

Costs and net profit are computed on read from the full trip history, since
the fuel estimate depends on the vehicle's average consumption.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from pydantic import ValidationError

from logimaster.components.registry import next_record_id
from logimaster.domain import calculations
from logimaster.domain.entities import (
    ACTIVITIES,
    CLIENTS,
    DRIVERS,
    HELPERS,
    OPERATIONS,
    VEHICLES,
    HelperShift,
    Operation,
    Record,
)
from logimaster.domain.formatting import format_date
from logimaster.rules.models import ValidationRules

from .models import HelperLine, OperationDetails, OperationRow, OperationValidationError
from .ports import ClockPort, RecordRepoPort, RepoMapPort

logger = logging.getLogger(__name__)

MONEY_FIELDS = (
    "revenue",
    "advance",
    "commission",
    "fuel",
    "fuel_price",
    "expenses",
    "km_driven",
)


def is_iso_date(value: str) -> bool:
    try:
        date.fromisoformat(value.strip())
    except ValueError:
        return False
    return True


def add_helper(shifts: list[HelperShift], helper_id: int, daily_rate: Any) -> list[HelperShift]:
    """Return the crew with the helper added; re-adding replaces the rate."""
    crew = [s for s in shifts if s.id != helper_id]
    crew.append(HelperShift(id=helper_id, daily_rate=daily_rate))
    return crew


def remove_helper(shifts: list[HelperShift], helper_id: int) -> list[HelperShift]:
    return [s for s in shifts if s.id != helper_id]


class OperationService:
    def __init__(
        self,
        repos: RepoMapPort,
        clock: ClockPort,
        rules: ValidationRules | None = None,
    ):
        self.repos = repos
        self.clock = clock
        self.rules = rules or ValidationRules()

    @property
    def repo(self) -> RecordRepoPort:
        return self.repos[OPERATIONS]

    def _operations(self) -> list[Operation]:
        return [op for op in self.repo.list_all() if isinstance(op, Operation)]

    def _index(self, collection: str) -> dict[str, Record]:
        return {r.record_id: r for r in self.repos[collection].list_all()}

    # --- Validation ---

    def _validate(self, op: Operation) -> list[OperationValidationError]:
        errors: list[OperationValidationError] = []

        if not is_iso_date(op.date):
            errors.append(
                OperationValidationError(
                    code="invalid_date", message="Date must be YYYY-MM-DD", field="date"
                )
            )

        references = [
            ("driver_id", DRIVERS, op.driver_id, True),
            ("vehicle_plate", VEHICLES, op.vehicle_plate, True),
            ("client_cnpj", CLIENTS, op.client_cnpj, True),
            ("activity_id", ACTIVITIES, op.activity_id, self.rules.require_activity),
        ]
        for field_name, collection, value, required in references:
            if value in (None, ""):
                if required:
                    errors.append(
                        OperationValidationError(
                            code="required",
                            message=f"Field '{field_name}' is required",
                            field=field_name,
                        )
                    )
                continue
            if self.repos[collection].get(str(value)) is None:
                errors.append(
                    OperationValidationError(
                        code="not_found",
                        message=f"Unknown {field_name}: {value}",
                        field=field_name,
                    )
                )

        helpers = self._index(HELPERS) if op.helpers else {}
        for shift in op.helpers:
            if str(shift.id) not in helpers:
                errors.append(
                    OperationValidationError(
                        code="not_found", message=f"Unknown helper: {shift.id}", field="helpers"
                    )
                )
            if shift.daily_rate < 0:
                errors.append(
                    OperationValidationError(
                        code="negative", message="Daily rate cannot be negative", field="helpers"
                    )
                )

        for field_name in MONEY_FIELDS:
            if getattr(op, field_name) < 0:
                errors.append(
                    OperationValidationError(
                        code="negative",
                        message=f"Field '{field_name}' cannot be negative",
                        field=field_name,
                    )
                )

        return errors

    # --- CRUD ---

    def save(
        self, data: dict[str, Any], operation_id: int | None = None
    ) -> tuple[Operation | None, list[OperationValidationError]]:
        if operation_id is None:
            operation_id = next_record_id(self.clock.now_ms(), self.repo.list_all())

        payload = dict(data)
        payload["id"] = operation_id
        try:
            op = Operation.model_validate(payload)
        except ValidationError as e:
            return None, [
                OperationValidationError(
                    code="invalid",
                    message=err["msg"],
                    field=".".join(str(p) for p in err["loc"]),
                )
                for err in e.errors()
            ]

        op = op.model_copy(update={"date": op.date.strip()})
        errors = self._validate(op)
        if errors:
            return None, errors

        self.repo.save(op)
        logger.info("Saved operation %s (%s, %s)", op.id, op.date, op.vehicle_plate)
        return op, []

    def delete(self, operation_id: int) -> bool:
        if self.repo.get(str(operation_id)) is None:
            return False
        self.repo.delete(str(operation_id))
        logger.info("Deleted operation %s", operation_id)
        return True

    def get(self, operation_id: int) -> Operation | None:
        op = self.repo.get(str(operation_id))
        return op if isinstance(op, Operation) else None

    # --- Views ---

    def rows(self) -> list[OperationRow]:
        """Trips table, newest first."""
        operations = self._operations()
        drivers = self._index(DRIVERS)
        activities = self._index(ACTIVITIES)

        ordered = sorted(operations, key=lambda op: op.date, reverse=True)
        rows = []
        for op in ordered:
            driver = drivers.get(str(op.driver_id))
            activity = activities.get(str(op.activity_id))
            rows.append(
                OperationRow(
                    id=op.id,
                    date=op.date,
                    date_display=format_date(op.date),
                    driver_name=getattr(driver, "name", "N/A") or "N/A",
                    activity_name=getattr(activity, "name", "N/A") or "N/A",
                    revenue=op.revenue,
                    net=calculations.operation_net(op, operations),
                )
            )
        return rows

    def details(self, operation_id: int) -> OperationDetails | None:
        op = self.get(operation_id)
        if op is None:
            return None

        operations = self._operations()
        driver = self._index(DRIVERS).get(str(op.driver_id))
        client = self._index(CLIENTS).get(op.client_cnpj)
        helpers = self._index(HELPERS)

        costs = calculations.operation_costs(op, operations)
        return OperationDetails(
            operation=op,
            date_display=format_date(op.date),
            driver_name=getattr(driver, "name", "-") or "-",
            client_name=getattr(client, "company_name", "-") or "-",
            revenue=op.revenue,
            advance=op.advance,
            balance_due=calculations.balance_due(op),
            commission=op.commission,
            expenses=op.expenses,
            helpers_total=calculations.helpers_total(op),
            average_km_per_litre=calculations.historical_average(op.vehicle_plate, operations),
            fuel_cost=calculations.trip_fuel_cost(op, operations),
            total_costs=costs,
            profit=op.revenue - costs,
            helpers=tuple(
                HelperLine(
                    id=shift.id,
                    name=getattr(helpers.get(str(shift.id)), "name", "?"),
                    daily_rate=shift.daily_rate,
                )
                for shift in op.helpers
            ),
        )
