"""
Expenses component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from logimaster.domain.entities import GeneralExpense


@dataclass(frozen=True)
class ExpenseValidationError:
    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class SaveExpenseInput:
    data: dict[str, Any]
    expense_id: int | None = None


@dataclass(frozen=True)
class ExpenseOutput:
    expense: GeneralExpense | None
    errors: tuple[ExpenseValidationError, ...]
    success: bool


@dataclass(frozen=True)
class ExpenseListOutput:
    expenses: tuple[GeneralExpense, ...]
    total: int
    amount_total: float
