"""Whole-database JSON backup, restore and reset."""

from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response

from logimaster.api.deps import get_backup_service, get_rules
from logimaster.api.schemas import ImportResultResponse, ResetRequest
from logimaster.components.backup import (
    BackupFormatError,
    BackupService,
    ResetNotConfirmedError,
    backup_filename,
)
from logimaster.rules.models import Rules

router = APIRouter()


@router.get("/export")
def export_backup(
    service: BackupService = Depends(get_backup_service),
    rules: Rules = Depends(get_rules),
) -> Response:
    """Download every collection as one JSON document."""
    filename = backup_filename(date.today(), rules.ops.backups.export_prefix)
    return Response(
        content=service.export_json().encode("utf-8"),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResultResponse)
def import_backup(
    data: Any = Body(...),
    service: BackupService = Depends(get_backup_service),
) -> ImportResultResponse:
    try:
        result = service.import_snapshot(data)
    except BackupFormatError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return ImportResultResponse.model_validate(result)


@router.post("/reset", status_code=204)
def reset(
    data: ResetRequest,
    service: BackupService = Depends(get_backup_service),
) -> None:
    try:
        service.reset_all(data.confirm)
    except ResetNotConfirmedError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
