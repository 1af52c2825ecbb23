"""
Registry service - drivers, vehicles, clients, helpers and activities.

Numeric-id kinds get an epoch-millisecond id on creation. Vehicles and clients
are keyed by plate and CNPJ, so editing the key replaces the old entry.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from logimaster.domain.entities import (
    ACTIVITIES,
    CLIENTS,
    DRIVERS,
    HELPERS,
    VEHICLES,
    Activity,
    Client,
    Driver,
    Helper,
    Record,
    RegistryKind,
    Vehicle,
)
from logimaster.domain.formatting import only_digits
from logimaster.rules.models import ValidationRules

from .models import RegistryValidationError, SelectOption
from .ports import ClockPort, RecordRepoPort, RepoMapPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KindSpec:
    collection: str
    model: type[Record]
    numeric_id: bool
    uppercase: tuple[str, ...]
    required: tuple[str, ...]
    label_field: str


KIND_SPECS: dict[str, KindSpec] = {
    "drivers": KindSpec(DRIVERS, Driver, True, ("name", "course_description"), ("name",), "name"),
    "vehicles": KindSpec(
        VEHICLES, Vehicle, False, ("plate", "model", "chassis"), ("plate",), "plate"
    ),
    "clients": KindSpec(
        CLIENTS, Client, False, ("company_name",), ("cnpj", "company_name"), "company_name"
    ),
    "helpers": KindSpec(HELPERS, Helper, True, ("name", "address"), ("name",), "name"),
    "activities": KindSpec(ACTIVITIES, Activity, True, ("name",), ("name",), "name"),
}


def get_kind_spec(kind: str) -> KindSpec:
    try:
        return KIND_SPECS[kind]
    except KeyError:
        raise ValueError(f"Unknown registry kind: {kind}") from None


def next_record_id(now_ms: int, existing: list[Record]) -> int:
    """Epoch-ms id, bumped past existing ids so rapid saves never collide."""
    ids = [int(getattr(r, "id", 0) or 0) for r in existing]
    return max([now_ms, *(i + 1 for i in ids)])


def pydantic_errors(e: ValidationError) -> list[RegistryValidationError]:
    errors = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"])
        errors.append(RegistryValidationError(code="invalid", message=err["msg"], field=loc))
    return errors


class RegistryService:
    def __init__(
        self,
        repos: RepoMapPort,
        clock: ClockPort,
        rules: ValidationRules | None = None,
    ):
        self.repos = repos
        self.clock = clock
        self.rules = rules or ValidationRules()

    def _repo(self, kind: str) -> RecordRepoPort:
        return self.repos[get_kind_spec(kind).collection]

    # --- Validation ---

    def _validate(self, kind: str, record: Record) -> list[RegistryValidationError]:
        spec = get_kind_spec(kind)
        errors: list[RegistryValidationError] = []

        for field_name in spec.required:
            if not str(getattr(record, field_name, "")).strip():
                errors.append(
                    RegistryValidationError(
                        code="required",
                        message=f"Field '{field_name}' is required",
                        field=field_name,
                    )
                )
        if errors:
            return errors

        if isinstance(record, Vehicle) and self.rules.plate_pattern:
            if not re.match(self.rules.plate_pattern, record.plate):
                errors.append(
                    RegistryValidationError(
                        code="invalid_plate",
                        message=f"Invalid plate: {record.plate}",
                        field="plate",
                    )
                )

        if isinstance(record, Client) and self.rules.cnpj_digits:
            if len(only_digits(record.cnpj)) not in self.rules.cnpj_digits:
                errors.append(
                    RegistryValidationError(
                        code="invalid_document",
                        message=f"CNPJ/CPF must have {self.rules.cnpj_digits} digits",
                        field="cnpj",
                    )
                )

        return errors

    def _build(
        self, kind: str, data: dict[str, Any], record_id: int | None
    ) -> tuple[Record | None, list[RegistryValidationError]]:
        spec = get_kind_spec(kind)
        payload = dict(data)
        if spec.numeric_id:
            payload["id"] = record_id
        else:
            key = spec.model.KEY_FIELD
            if key not in payload and spec.model.model_fields[key].alias not in payload:
                payload[key] = ""

        try:
            record = spec.model.model_validate(payload)
        except ValidationError as e:
            return None, pydantic_errors(e)

        updates: dict[str, Any] = {}
        for field_name in spec.uppercase:
            value = str(getattr(record, field_name)).strip()
            updates[field_name] = value.upper() if self.rules.uppercase_names else value
        if isinstance(record, Client):
            updates["cnpj"] = record.cnpj.strip()
        return record.model_copy(update=updates), []

    # --- Operations ---

    def save(
        self, kind: RegistryKind, data: dict[str, Any], previous_id: str | None = None
    ) -> tuple[Record | None, list[RegistryValidationError]]:
        spec = get_kind_spec(kind)
        repo = self._repo(kind)

        record_id: int | None = None
        if spec.numeric_id:
            if previous_id:
                try:
                    record_id = int(previous_id)
                except ValueError:
                    return None, [
                        RegistryValidationError(
                            code="invalid_id", message=f"Invalid id: {previous_id}", field="id"
                        )
                    ]
            else:
                record_id = next_record_id(self.clock.now_ms(), repo.list_all())

        record, errors = self._build(kind, data, record_id)
        if record is None:
            return None, errors
        errors = self._validate(kind, record)
        if errors:
            return None, errors

        if not spec.numeric_id and previous_id and previous_id != record.record_id:
            repo.delete(previous_id)
        repo.save(record)
        logger.info("Saved %s record %s", kind, record.record_id)
        return record, []

    def delete(
        self, kind: RegistryKind, record_id: str
    ) -> tuple[bool, list[RegistryValidationError]]:
        repo = self._repo(kind)
        if repo.get(str(record_id)) is None:
            return False, [
                RegistryValidationError(
                    code="not_found", message=f"{kind} record {record_id} not found"
                )
            ]
        repo.delete(str(record_id))
        logger.info("Deleted %s record %s", kind, record_id)
        return True, []

    def get(self, kind: RegistryKind, record_id: str) -> Record | None:
        return self._repo(kind).get(str(record_id))

    def list_records(self, kind: RegistryKind) -> list[Record]:
        return self._repo(kind).list_all()

    def options(self, kind: RegistryKind) -> list[SelectOption]:
        spec = get_kind_spec(kind)
        return [
            SelectOption(value=r.record_id, label=str(getattr(r, spec.label_field)))
            for r in self.list_records(kind)
        ]

    def payee_options(self) -> list[SelectOption]:
        """Drivers and helpers who can receive a payment receipt."""
        options = []
        for prefix, kind in (("motorista", "drivers"), ("ajudante", "helpers")):
            for person in self.list_records(kind):  # type: ignore[arg-type]
                name = getattr(person, "name", "")
                options.append(
                    SelectOption(
                        value=f"{prefix}:{person.record_id}",
                        label=f"{prefix.upper()} - {name}",
                    )
                )
        return options

