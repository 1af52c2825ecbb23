"""
Registry component - Master data for drivers, vehicles, clients, helpers
and activity types.

Shell Layer - converts service results into output models.
"""

from __future__ import annotations

from ._impl import RegistryService
from .models import (
    DeleteRecordInput,
    GetRecordInput,
    ListRecordsInput,
    OptionsOutput,
    RecordListOutput,
    RecordOperationOutput,
    RegistryValidationError,
    SaveRecordInput,
)


def run_save(input_data: SaveRecordInput, service: RegistryService) -> RecordOperationOutput:
    """Create a record, or replace the one named by `previous_id`."""
    record, errors = service.save(input_data.kind, input_data.data, input_data.previous_id)
    return RecordOperationOutput(
        record=record,
        errors=tuple(errors),
        success=record is not None,
    )


def run_delete(input_data: DeleteRecordInput, service: RegistryService) -> RecordOperationOutput:
    success, errors = service.delete(input_data.kind, input_data.record_id)
    return RecordOperationOutput(record=None, errors=tuple(errors), success=success)


def run_get(input_data: GetRecordInput, service: RegistryService) -> RecordOperationOutput:
    record = service.get(input_data.kind, input_data.record_id)
    if record is None:
        return RecordOperationOutput(
            record=None,
            errors=(
                RegistryValidationError(
                    code="not_found",
                    message=f"{input_data.kind} record {input_data.record_id} not found",
                ),
            ),
            success=False,
        )
    return RecordOperationOutput(record=record, errors=(), success=True)


def run_list(input_data: ListRecordsInput, service: RegistryService) -> RecordListOutput:
    records = service.list_records(input_data.kind)
    return RecordListOutput(records=tuple(records), total=len(records))


def run_options(input_data: ListRecordsInput, service: RegistryService) -> OptionsOutput:
    return OptionsOutput(options=tuple(service.options(input_data.kind)))


def run_payee_options(service: RegistryService) -> OptionsOutput:
    return OptionsOutput(options=tuple(service.payee_options()))
