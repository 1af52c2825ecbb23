"""
Backup component unit tests.
"""

from __future__ import annotations

import json
from datetime import date

import pytest

from logimaster.components.backup import (
    RESET_CONFIRMATION,
    BackupFormatError,
    BackupService,
    ResetNotConfirmedError,
    backup_filename,
)
from logimaster.domain.entities import (
    COLLECTION_KEYS,
    COMPANY,
    DRIVERS,
    OPERATIONS,
    VEHICLES,
    CompanyProfile,
    Driver,
    Operation,
    Vehicle,
)


@pytest.fixture
def service(repos, company_repo) -> BackupService:
    return BackupService(repos, company_repo)


def test_backup_filename() -> None:
    assert backup_filename(date(2026, 10, 19)) == "backup_logimaster_2026-10-19.json"
    assert backup_filename(date(2026, 1, 2), "x_") == "x_2026-01-02.json"


def test_export_uses_storage_keys(service: BackupService, repos, company_repo) -> None:
    repos[DRIVERS].save(Driver(id=1, name="ANA"))
    repos[OPERATIONS].save(Operation(id=5, date="2026-10-01", revenue=10))
    company_repo.save(CompanyProfile(company_name="ACME"))

    snapshot = service.export_snapshot()

    assert list(snapshot) == list(COLLECTION_KEYS)
    assert snapshot[DRIVERS][0]["nome"] == "ANA"
    assert snapshot[OPERATIONS][0]["faturamento"] == 10
    assert snapshot[COMPANY]["razaoSocial"] == "ACME"
    assert snapshot[VEHICLES] == []


def test_export_json_round_trips_unicode(service: BackupService, repos) -> None:
    repos[DRIVERS].save(Driver(id=1, name="JOÃO"))

    text = service.export_json()

    assert "JOÃO" in text
    assert json.loads(text)[DRIVERS][0]["id"] == 1


def test_import_replaces_present_collections(service: BackupService, repos) -> None:
    repos[DRIVERS].save(Driver(id=1, name="OLD"))
    repos[VEHICLES].save(Vehicle(plate="KEEP123"))

    result = service.import_snapshot(
        {
            DRIVERS: [{"id": 2, "nome": "NEW"}],
            VEHICLES: [],
            COMPANY: {"razaoSocial": "ACME", "cnpj": "1", "telefone": "2"},
            "unknown_key": [1, 2, 3],
        }
    )

    assert [d.name for d in repos[DRIVERS].list_all()] == ["NEW"]  # type: ignore[attr-defined]
    # Empty lists still count as present
    assert repos[VEHICLES].list_all() == []
    assert result.restored_keys == (DRIVERS, VEHICLES, COMPANY)
    assert result.record_counts[DRIVERS] == 1


def test_import_skips_falsy_values(service: BackupService, repos) -> None:
    repos[DRIVERS].save(Driver(id=1, name="KEEP"))

    result = service.import_snapshot({DRIVERS: None, OPERATIONS: ""})

    assert result.restored_keys == ()
    assert len(repos[DRIVERS].list_all()) == 1


def test_import_is_all_or_nothing(service: BackupService, repos) -> None:
    repos[DRIVERS].save(Driver(id=1, name="KEEP"))

    with pytest.raises(BackupFormatError):
        service.import_snapshot(
            {DRIVERS: [{"id": 2, "nome": "NEW"}], OPERATIONS: [{"faturamento": 1}]}
        )

    assert [d.name for d in repos[DRIVERS].list_all()] == ["KEEP"]  # type: ignore[attr-defined]


@pytest.mark.parametrize("data", [[], "text", 3])
def test_import_rejects_non_object(service: BackupService, data) -> None:
    with pytest.raises(BackupFormatError):
        service.import_snapshot(data)


def test_import_rejects_wrong_shapes(service: BackupService) -> None:
    with pytest.raises(BackupFormatError, match="must be a list"):
        service.import_snapshot({DRIVERS: {"id": 1}})
    with pytest.raises(BackupFormatError, match="must be an object"):
        service.import_snapshot({COMPANY: ["x"]})


def test_import_json_invalid(service: BackupService) -> None:
    with pytest.raises(BackupFormatError, match="Invalid backup file"):
        service.import_json("{not json")


def test_reset_requires_confirmation(service: BackupService, repos, company_repo) -> None:
    repos[DRIVERS].save(Driver(id=1, name="ANA"))
    company_repo.save(CompanyProfile(company_name="ACME"))

    with pytest.raises(ResetNotConfirmedError):
        service.reset_all("yes")
    assert repos[DRIVERS].list_all()

    service.reset_all(RESET_CONFIRMATION)

    assert repos[DRIVERS].list_all() == []
    assert company_repo.get().is_empty
