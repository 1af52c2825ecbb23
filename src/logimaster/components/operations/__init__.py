"""
Operations component - trips, their costs and helper crews.
"""

from ._impl import OperationService, add_helper, is_iso_date, remove_helper
from .component import run_delete, run_details, run_get, run_list, run_save
from .models import (
    HelperLine,
    OperationDetails,
    OperationIdInput,
    OperationListOutput,
    OperationOutput,
    OperationRow,
    OperationValidationError,
    SaveOperationInput,
)

__all__ = [
    "run_save",
    "run_delete",
    "run_get",
    "run_list",
    "run_details",
    "SaveOperationInput",
    "OperationIdInput",
    "OperationOutput",
    "OperationListOutput",
    "OperationRow",
    "OperationDetails",
    "HelperLine",
    "OperationValidationError",
    "OperationService",
    "add_helper",
    "remove_helper",
    "is_iso_date",
]
