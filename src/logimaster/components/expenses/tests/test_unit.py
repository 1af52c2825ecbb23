"""
Expenses component unit tests.
"""

from __future__ import annotations

import pytest

from logimaster.components.expenses import (
    ExpenseService,
    SaveExpenseInput,
    run_delete,
    run_list,
    run_save,
)
from logimaster.domain.entities import VEHICLES, Vehicle


@pytest.fixture
def service(repos, clock) -> ExpenseService:
    repos[VEHICLES].save(Vehicle(plate="ABC1234"))
    return ExpenseService(repos, clock)


def test_save_normalises_text(service: ExpenseService) -> None:
    result = run_save(
        SaveExpenseInput(
            data={"data": "2026-10-02", "descricao": " seguro ", "valor": "350,5"}
        ),
        service,
    )

    assert result.success
    assert result.expense is not None
    assert result.expense.description == "SEGURO"
    # Comma decimals are not numbers, same as Number("350,5")
    assert result.expense.amount == 0


def test_save_with_vehicle(service: ExpenseService) -> None:
    result = run_save(
        SaveExpenseInput(
            data={
                "data": "2026-10-02",
                "descricao": "pneu",
                "valor": "900",
                "veiculoPlaca": "abc1234",
            }
        ),
        service,
    )

    assert result.success
    assert result.expense is not None
    assert result.expense.vehicle_plate == "ABC1234"
    assert result.expense.to_storage()["valor"] == 900


def test_validation_errors(service: ExpenseService) -> None:
    result = run_save(
        SaveExpenseInput(
            data={"data": "", "descricao": "", "valor": "-1", "veiculoPlaca": "ZZZ9999"}
        ),
        service,
    )

    assert not result.success
    assert {e.code for e in result.errors} == {"invalid_date", "required", "negative", "not_found"}


def test_list_newest_first_with_total(service: ExpenseService) -> None:
    run_save(SaveExpenseInput(data={"data": "2026-09-01", "descricao": "a", "valor": 10}), service)
    run_save(SaveExpenseInput(data={"data": "2026-10-01", "descricao": "b", "valor": 5}), service)

    result = run_list(service)

    assert [e.description for e in result.expenses] == ["B", "A"]
    assert result.total == 2
    assert result.amount_total == 15


def test_update_and_delete(service: ExpenseService) -> None:
    created = run_save(
        SaveExpenseInput(data={"data": "2026-09-01", "descricao": "a", "valor": 10}), service
    )
    assert created.expense is not None
    expense_id = created.expense.id

    run_save(
        SaveExpenseInput(
            data={"data": "2026-09-01", "descricao": "a", "valor": 12}, expense_id=expense_id
        ),
        service,
    )
    stored = service.get(expense_id)
    assert stored is not None
    assert stored.amount == 12

    assert run_delete(expense_id, service).success
    assert service.get(expense_id) is None
    result = run_delete(expense_id, service)
    assert not result.success
    assert result.errors[0].code == "not_found"
