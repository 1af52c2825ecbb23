"""
Registry component - drivers, vehicles, clients, helpers and activities.
"""

from ._impl import KIND_SPECS, RegistryService, get_kind_spec, next_record_id
from .component import (
    run_delete,
    run_get,
    run_list,
    run_options,
    run_payee_options,
    run_save,
)
from .models import (
    DeleteRecordInput,
    GetRecordInput,
    ListRecordsInput,
    OptionsOutput,
    RecordListOutput,
    RecordOperationOutput,
    RegistryValidationError,
    SaveRecordInput,
    SelectOption,
)
from .ports import RepoMapPort

__all__ = [
    # Entry points
    "run_save",
    "run_delete",
    "run_get",
    "run_list",
    "run_options",
    "run_payee_options",
    # Input models
    "SaveRecordInput",
    "DeleteRecordInput",
    "GetRecordInput",
    "ListRecordsInput",
    # Output models
    "RecordOperationOutput",
    "RecordListOutput",
    "OptionsOutput",
    "SelectOption",
    "RegistryValidationError",
    # Ports
    "RepoMapPort",
    # Service
    "RegistryService",
    "KIND_SPECS",
    "get_kind_spec",
    "next_record_id",
]
