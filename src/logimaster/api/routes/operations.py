"""Trip routes."""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from logimaster.api.deps import get_operation_service
from logimaster.api.errors import raise_for_errors
from logimaster.api.schemas import OperationDetailsResponse, OperationRowResponse
from logimaster.components.operations import (
    OperationIdInput,
    OperationService,
    SaveOperationInput,
    run_delete,
    run_details,
    run_get,
    run_list,
    run_save,
)

router = APIRouter()


@router.get("", response_model=list[OperationRowResponse])
def list_operations(
    service: OperationService = Depends(get_operation_service),
) -> list[OperationRowResponse]:
    """Trips table, newest first, with net result per trip."""
    result = run_list(service)
    return [OperationRowResponse.model_validate(row) for row in result.rows]


@router.post("", status_code=201)
def create_operation(
    data: dict[str, Any] = Body(...),
    service: OperationService = Depends(get_operation_service),
) -> dict[str, Any]:
    result = run_save(SaveOperationInput(data=data), service)
    if not result.success:
        raise_for_errors(result.errors)
    assert result.operation is not None
    return result.operation.to_storage()


@router.get("/{operation_id}")
def get_operation(
    operation_id: int,
    service: OperationService = Depends(get_operation_service),
) -> dict[str, Any]:
    result = run_get(OperationIdInput(operation_id=operation_id), service)
    if not result.success:
        raise_for_errors(result.errors)
    assert result.operation is not None
    return result.operation.to_storage()


@router.get("/{operation_id}/details", response_model=OperationDetailsResponse)
def get_operation_details(
    operation_id: int,
    service: OperationService = Depends(get_operation_service),
) -> OperationDetailsResponse:
    details = run_details(OperationIdInput(operation_id=operation_id), service)
    if details is None:
        raise HTTPException(status_code=404, detail="Operation not found")
    payload = asdict(details)
    payload["operation"] = details.operation.to_storage()
    return OperationDetailsResponse.model_validate(payload)


@router.put("/{operation_id}")
def update_operation(
    operation_id: int,
    data: dict[str, Any] = Body(...),
    service: OperationService = Depends(get_operation_service),
) -> dict[str, Any]:
    existing = run_get(OperationIdInput(operation_id=operation_id), service)
    if not existing.success:
        raise_for_errors(existing.errors)
    result = run_save(SaveOperationInput(data=data, operation_id=operation_id), service)
    if not result.success:
        raise_for_errors(result.errors)
    assert result.operation is not None
    return result.operation.to_storage()


@router.delete("/{operation_id}", status_code=204)
def delete_operation(
    operation_id: int,
    service: OperationService = Depends(get_operation_service),
) -> None:
    result = run_delete(OperationIdInput(operation_id=operation_id), service)
    if not result.success:
        raise_for_errors(result.errors)
