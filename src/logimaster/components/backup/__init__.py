"""
Backup component - JSON export/import and reset.
"""

from .component import (
    DEFAULT_EXPORT_PREFIX,
    RESET_CONFIRMATION,
    BackupFormatError,
    BackupService,
    ImportResult,
    ResetNotConfirmedError,
    backup_filename,
)

__all__ = [
    "BackupService",
    "BackupFormatError",
    "ResetNotConfirmedError",
    "ImportResult",
    "backup_filename",
    "RESET_CONFIRMATION",
    "DEFAULT_EXPORT_PREFIX",
]
