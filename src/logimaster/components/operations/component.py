"""
Operations component - Trip bookkeeping.

Shell Layer - converts service results into output models.
"""

from __future__ import annotations

from ._impl import OperationService
from .models import (
    OperationDetails,
    OperationIdInput,
    OperationListOutput,
    OperationOutput,
    OperationValidationError,
    SaveOperationInput,
)


def _not_found(operation_id: int) -> OperationOutput:
    return OperationOutput(
        operation=None,
        errors=(
            OperationValidationError(
                code="not_found", message=f"Operation {operation_id} not found"
            ),
        ),
        success=False,
    )


def run_save(input_data: SaveOperationInput, service: OperationService) -> OperationOutput:
    op, errors = service.save(input_data.data, input_data.operation_id)
    return OperationOutput(operation=op, errors=tuple(errors), success=op is not None)


def run_delete(input_data: OperationIdInput, service: OperationService) -> OperationOutput:
    if not service.delete(input_data.operation_id):
        return _not_found(input_data.operation_id)
    return OperationOutput(operation=None, errors=(), success=True)


def run_get(input_data: OperationIdInput, service: OperationService) -> OperationOutput:
    op = service.get(input_data.operation_id)
    if op is None:
        return _not_found(input_data.operation_id)
    return OperationOutput(operation=op, errors=(), success=True)


def run_list(service: OperationService) -> OperationListOutput:
    rows = service.rows()
    return OperationListOutput(rows=tuple(rows), total=len(rows))


def run_details(input_data: OperationIdInput, service: OperationService) -> OperationDetails | None:
    return service.details(input_data.operation_id)
