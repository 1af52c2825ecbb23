"""Master data routes: drivers, vehicles, clients, helpers and activities."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from logimaster.api.deps import get_registry_service
from logimaster.api.errors import raise_for_errors
from logimaster.api.schemas import RecordListResponse, SelectOptionResponse
from logimaster.components.registry import (
    DeleteRecordInput,
    GetRecordInput,
    ListRecordsInput,
    RegistryService,
    SaveRecordInput,
    run_delete,
    run_get,
    run_list,
    run_options,
    run_payee_options,
    run_save,
)
from logimaster.domain.entities import RegistryKind

router = APIRouter()


@router.get("/payees/options", response_model=list[SelectOptionResponse])
def payee_options(
    service: RegistryService = Depends(get_registry_service),
) -> list[SelectOptionResponse]:
    """Drivers and helpers for the receipt payee select."""
    result = run_payee_options(service)
    return [SelectOptionResponse.model_validate(o) for o in result.options]


@router.get("/{kind}", response_model=RecordListResponse)
def list_records(
    kind: RegistryKind,
    service: RegistryService = Depends(get_registry_service),
) -> RecordListResponse:
    result = run_list(ListRecordsInput(kind=kind), service)
    return RecordListResponse(
        records=[r.to_storage() for r in result.records],
        total=result.total,
    )


@router.get("/{kind}/options", response_model=list[SelectOptionResponse])
def record_options(
    kind: RegistryKind,
    service: RegistryService = Depends(get_registry_service),
) -> list[SelectOptionResponse]:
    result = run_options(ListRecordsInput(kind=kind), service)
    return [SelectOptionResponse.model_validate(o) for o in result.options]


@router.post("/{kind}", status_code=201)
def create_record(
    kind: RegistryKind,
    data: dict[str, Any] = Body(...),
    service: RegistryService = Depends(get_registry_service),
) -> dict[str, Any]:
    result = run_save(SaveRecordInput(kind=kind, data=data), service)
    if not result.success:
        raise_for_errors(result.errors)
    assert result.record is not None
    return result.record.to_storage()


@router.get("/{kind}/{record_id}")
def get_record(
    kind: RegistryKind,
    record_id: str,
    service: RegistryService = Depends(get_registry_service),
) -> dict[str, Any]:
    result = run_get(GetRecordInput(kind=kind, record_id=record_id), service)
    if not result.success:
        raise_for_errors(result.errors)
    assert result.record is not None
    return result.record.to_storage()


@router.put("/{kind}/{record_id}")
def update_record(
    kind: RegistryKind,
    record_id: str,
    data: dict[str, Any] = Body(...),
    service: RegistryService = Depends(get_registry_service),
) -> dict[str, Any]:
    """Replace a record. For vehicles and clients the body may carry a new key."""
    existing = run_get(GetRecordInput(kind=kind, record_id=record_id), service)
    if not existing.success:
        raise_for_errors(existing.errors)
    result = run_save(SaveRecordInput(kind=kind, data=data, previous_id=record_id), service)
    if not result.success:
        raise_for_errors(result.errors)
    assert result.record is not None
    return result.record.to_storage()


@router.delete("/{kind}/{record_id}", status_code=204)
def delete_record(
    kind: RegistryKind,
    record_id: str,
    service: RegistryService = Depends(get_registry_service),
) -> None:
    result = run_delete(DeleteRecordInput(kind=kind, record_id=record_id), service)
    if not result.success:
        raise_for_errors(result.errors)
