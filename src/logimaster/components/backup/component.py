"""
Backup component - whole-database JSON export/import and factory reset.

The document has one top-level key per storage key (``db_motoristas``,
``db_operacoes``, ...) holding a list of camelCase records. The company
profile is a single object.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from pydantic import ValidationError

from logimaster.domain.entities import (
    COLLECTION_KEYS,
    COLLECTION_MODELS,
    COMPANY,
    CompanyProfile,
    Record,
)

from .ports import CompanyRepoPort, RepoMapPort

logger = logging.getLogger(__name__)

RESET_CONFIRMATION = "RESET"
DEFAULT_EXPORT_PREFIX = "backup_logimaster_"


class BackupFormatError(ValueError):
    """The uploaded document is not a usable backup."""


class ResetNotConfirmedError(ValueError):
    """Reset was requested without the confirmation token."""


@dataclass(frozen=True)
class ImportResult:
    restored_keys: tuple[str, ...]
    record_counts: dict[str, int]


def backup_filename(today: date, prefix: str = DEFAULT_EXPORT_PREFIX) -> str:
    return f"{prefix}{today.isoformat()}.json"


def _present(value: Any) -> bool:
    # JS truthiness: empty lists and objects still count as present
    return value is not None and value is not False and value != "" and value != 0


class BackupService:
    def __init__(self, repos: RepoMapPort, company_repo: CompanyRepoPort):
        self.repos = repos
        self.company_repo = company_repo

    def export_snapshot(self) -> dict[str, Any]:
        snapshot: dict[str, Any] = {}
        for key in COLLECTION_KEYS:
            if key == COMPANY:
                snapshot[key] = self.company_repo.get().model_dump(by_alias=True)
            else:
                snapshot[key] = [r.to_storage() for r in self.repos[key].list_all()]
        return snapshot

    def export_json(self) -> str:
        return json.dumps(self.export_snapshot(), ensure_ascii=False, indent=2)

    def _parse(
        self, data: dict[str, Any]
    ) -> tuple[CompanyProfile | None, dict[str, list[Record]]]:
        company: CompanyProfile | None = None
        collections: dict[str, list[Record]] = {}

        for key in COLLECTION_KEYS:
            value = data.get(key)
            if not _present(value):
                continue
            try:
                if key == COMPANY:
                    if not isinstance(value, dict):
                        raise BackupFormatError(f"'{key}' must be an object")
                    company = CompanyProfile.model_validate(value)
                else:
                    if not isinstance(value, list):
                        raise BackupFormatError(f"'{key}' must be a list")
                    model = COLLECTION_MODELS[key]
                    collections[key] = [model.model_validate(item) for item in value]
            except ValidationError as e:
                raise BackupFormatError(f"Invalid records in '{key}': {e}") from e

        return company, collections

    def import_snapshot(self, data: Any) -> ImportResult:
        """
        Replace every collection present in the document.

        The whole document is validated before anything is written, so a bad
        record leaves the database untouched.
        """
        if not isinstance(data, dict):
            raise BackupFormatError("Backup must be a JSON object")

        company, collections = self._parse(data)

        restored: list[str] = []
        counts: dict[str, int] = {}
        for key in COLLECTION_KEYS:
            if key == COMPANY and company is not None:
                self.company_repo.save(company)
                restored.append(key)
                counts[key] = 1
            elif key in collections:
                self.repos[key].replace_all(collections[key])
                restored.append(key)
                counts[key] = len(collections[key])

        logger.info("Restored backup keys: %s", ", ".join(restored) or "(none)")
        return ImportResult(restored_keys=tuple(restored), record_counts=counts)

    def import_json(self, text: str) -> ImportResult:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise BackupFormatError(f"Invalid backup file: {e}") from e
        return self.import_snapshot(data)

    def reset_all(self, confirm: str) -> None:
        """Wipe all data. Requires the literal confirmation token."""
        if confirm != RESET_CONFIRMATION:
            raise ResetNotConfirmedError(
                f"Reset requires confirmation '{RESET_CONFIRMATION}'"
            )
        for key in COLLECTION_KEYS:
            if key == COMPANY:
                self.company_repo.clear()
            else:
                self.repos[key].clear()
        logger.warning("All data erased")
