"""
Expenses component - General (non-trip) expenses such as maintenance,
insurance and taxes, optionally tied to a vehicle.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from logimaster.components.operations import is_iso_date
from logimaster.components.registry import next_record_id
from logimaster.domain.entities import GENERAL_EXPENSES, VEHICLES, GeneralExpense

from .models import ExpenseListOutput, ExpenseOutput, ExpenseValidationError, SaveExpenseInput
from .ports import ClockPort, RecordRepoPort, RepoMapPort

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, repos: RepoMapPort, clock: ClockPort):
        self.repos = repos
        self.clock = clock

    @property
    def repo(self) -> RecordRepoPort:
        return self.repos[GENERAL_EXPENSES]

    def _validate(self, expense: GeneralExpense) -> list[ExpenseValidationError]:
        errors = []
        if not is_iso_date(expense.date):
            errors.append(
                ExpenseValidationError("invalid_date", "Date must be YYYY-MM-DD", "date")
            )
        if not expense.description.strip():
            errors.append(
                ExpenseValidationError("required", "Field 'description' is required", "description")
            )
        if expense.amount < 0:
            errors.append(ExpenseValidationError("negative", "Amount cannot be negative", "amount"))
        if expense.vehicle_plate and self.repos[VEHICLES].get(expense.vehicle_plate) is None:
            errors.append(
                ExpenseValidationError(
                    "not_found", f"Unknown vehicle: {expense.vehicle_plate}", "vehicle_plate"
                )
            )
        return errors

    def save(
        self, data: dict[str, Any], expense_id: int | None = None
    ) -> tuple[GeneralExpense | None, list[ExpenseValidationError]]:
        if expense_id is None:
            expense_id = next_record_id(self.clock.now_ms(), self.repo.list_all())
        payload = dict(data)
        payload["id"] = expense_id
        try:
            expense = GeneralExpense.model_validate(payload)
        except ValidationError as e:
            return None, [
                ExpenseValidationError("invalid", err["msg"], ".".join(map(str, err["loc"])))
                for err in e.errors()
            ]

        expense = expense.model_copy(
            update={
                "date": expense.date.strip(),
                "description": expense.description.strip().upper(),
                "vehicle_plate": expense.vehicle_plate.strip().upper(),
            }
        )
        errors = self._validate(expense)
        if errors:
            return None, errors
        self.repo.save(expense)
        logger.info("Saved expense %s (%s)", expense.id, expense.date)
        return expense, []

    def delete(self, expense_id: int) -> bool:
        if self.repo.get(str(expense_id)) is None:
            return False
        self.repo.delete(str(expense_id))
        logger.info("Deleted expense %s", expense_id)
        return True

    def get(self, expense_id: int) -> GeneralExpense | None:
        expense = self.repo.get(str(expense_id))
        return expense if isinstance(expense, GeneralExpense) else None

    def list_expenses(self) -> list[GeneralExpense]:
        expenses = [e for e in self.repo.list_all() if isinstance(e, GeneralExpense)]
        return sorted(expenses, key=lambda e: e.date, reverse=True)


def run_save(input_data: SaveExpenseInput, service: ExpenseService) -> ExpenseOutput:
    expense, errors = service.save(input_data.data, input_data.expense_id)
    return ExpenseOutput(expense=expense, errors=tuple(errors), success=expense is not None)


def run_delete(expense_id: int, service: ExpenseService) -> ExpenseOutput:
    if not service.delete(expense_id):
        return ExpenseOutput(
            expense=None,
            errors=(ExpenseValidationError("not_found", f"Expense {expense_id} not found"),),
            success=False,
        )
    return ExpenseOutput(expense=None, errors=(), success=True)


def run_list(service: ExpenseService) -> ExpenseListOutput:
    expenses = service.list_expenses()
    return ExpenseListOutput(
        expenses=tuple(expenses),
        total=len(expenses),
        amount_total=sum(e.amount for e in expenses),
    )
