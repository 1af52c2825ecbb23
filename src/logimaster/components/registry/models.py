"""
Registry component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from logimaster.domain.entities import Record, RegistryKind

# --- Validation Errors ---


@dataclass(frozen=True)
class RegistryValidationError:
    """Registry validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SaveRecordInput:
    """
    Input for creating or editing a registry record.

    `previous_id` is the id of the record being edited (empty for new ones).
    For vehicles and clients it is the old plate/CNPJ, which may differ from
    the one in `data` when the key itself was changed.
    """

    kind: RegistryKind
    data: dict[str, Any]
    previous_id: str | None = None


@dataclass(frozen=True)
class DeleteRecordInput:
    kind: RegistryKind
    record_id: str


@dataclass(frozen=True)
class GetRecordInput:
    kind: RegistryKind
    record_id: str


@dataclass(frozen=True)
class ListRecordsInput:
    kind: RegistryKind


# --- Output Models ---


@dataclass(frozen=True)
class RecordOperationOutput:
    """Output from a registry operation."""

    record: Record | None
    errors: tuple[RegistryValidationError, ...]
    success: bool


@dataclass(frozen=True)
class RecordListOutput:
    records: tuple[Record, ...]
    total: int


@dataclass(frozen=True)
class SelectOption:
    value: str
    label: str


@dataclass(frozen=True)
class OptionsOutput:
    options: tuple[SelectOption, ...] = field(default_factory=tuple)
