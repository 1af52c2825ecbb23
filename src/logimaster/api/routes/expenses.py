"""General expense routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from logimaster.api.deps import get_expense_service
from logimaster.api.errors import raise_for_errors
from logimaster.components.expenses import (
    ExpenseService,
    SaveExpenseInput,
    run_delete,
    run_list,
    run_save,
)

router = APIRouter()


@router.get("")
def list_expenses(service: ExpenseService = Depends(get_expense_service)) -> dict[str, Any]:
    result = run_list(service)
    return {
        "expenses": [e.to_storage() for e in result.expenses],
        "total": result.total,
        "amount_total": result.amount_total,
    }


@router.post("", status_code=201)
def create_expense(
    data: dict[str, Any] = Body(...),
    service: ExpenseService = Depends(get_expense_service),
) -> dict[str, Any]:
    result = run_save(SaveExpenseInput(data=data), service)
    if not result.success:
        raise_for_errors(result.errors)
    assert result.expense is not None
    return result.expense.to_storage()


@router.delete("/{expense_id}", status_code=204)
def delete_expense(
    expense_id: int,
    service: ExpenseService = Depends(get_expense_service),
) -> None:
    result = run_delete(expense_id, service)
    if not result.success:
        raise_for_errors(result.errors)


@router.put("/{expense_id}")
def update_expense(
    expense_id: int,
    data: dict[str, Any] = Body(...),
    service: ExpenseService = Depends(get_expense_service),
) -> dict[str, Any]:
    if service.get(expense_id) is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    result = run_save(SaveExpenseInput(data=data, expense_id=expense_id), service)
    if not result.success:
        raise_for_errors(result.errors)
    assert result.expense is not None
    return result.expense.to_storage()
