"""
Expenses component - general expenses outside of trips.
"""

from .component import ExpenseService, run_delete, run_list, run_save
from .models import ExpenseListOutput, ExpenseOutput, ExpenseValidationError, SaveExpenseInput

__all__ = [
    "run_save",
    "run_delete",
    "run_list",
    "SaveExpenseInput",
    "ExpenseOutput",
    "ExpenseListOutput",
    "ExpenseValidationError",
    "ExpenseService",
]
