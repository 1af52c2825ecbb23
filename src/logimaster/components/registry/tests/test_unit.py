"""
Registry component unit tests.

Tests for master-data CRUD, key changes and select options.
"""

from __future__ import annotations

import pytest

from logimaster.components.registry import (
    DeleteRecordInput,
    GetRecordInput,
    ListRecordsInput,
    RegistryService,
    SaveRecordInput,
    get_kind_spec,
    next_record_id,
    run_delete,
    run_get,
    run_list,
    run_options,
    run_payee_options,
    run_save,
)
from logimaster.domain.entities import DRIVERS, VEHICLES, Activity, Driver, Vehicle
from logimaster.rules.models import ValidationRules


@pytest.fixture
def service(repos, clock) -> RegistryService:
    return RegistryService(repos, clock)


# --- Creation Tests ---


class TestSaveRecord:
    """Test record creation and editing."""

    def test_create_driver_gets_epoch_id(self, service: RegistryService, clock) -> None:
        result = run_save(
            SaveRecordInput(kind="drivers", data={"nome": "joão silva", "cnh": "123"}),
            service,
        )

        assert result.success
        assert isinstance(result.record, Driver)
        assert result.record.id == clock.now_ms()
        assert result.record.name == "JOÃO SILVA"
        assert result.record.license_number == "123"

    def test_rapid_creates_get_distinct_ids(self, service: RegistryService) -> None:
        first = run_save(SaveRecordInput(kind="activities", data={"nome": "mudança"}), service)
        second = run_save(SaveRecordInput(kind="activities", data={"nome": "frete"}), service)

        assert first.record is not None and second.record is not None
        assert second.record.id == first.record.id + 1  # type: ignore[attr-defined]

    def test_accepts_english_field_names(self, service: RegistryService) -> None:
        result = run_save(
            SaveRecordInput(kind="helpers", data={"name": "ana", "address": "rua a"}),
            service,
        )
        assert result.success
        assert result.record is not None
        assert result.record.to_storage()["nome"] == "ANA"
        assert result.record.to_storage()["endereco"] == "RUA A"

    def test_edit_keeps_id(self, service: RegistryService) -> None:
        created = run_save(SaveRecordInput(kind="drivers", data={"nome": "ana"}), service)
        assert created.record is not None
        record_id = created.record.record_id

        edited = run_save(
            SaveRecordInput(kind="drivers", data={"nome": "ana maria"}, previous_id=record_id),
            service,
        )

        assert edited.success
        assert edited.record is not None
        assert edited.record.record_id == record_id
        assert len(run_list(ListRecordsInput(kind="drivers"), service).records) == 1

    def test_missing_name_fails(self, service: RegistryService) -> None:
        result = run_save(SaveRecordInput(kind="drivers", data={"nome": "   "}), service)

        assert not result.success
        assert result.errors[0].code == "required"
        assert result.errors[0].field == "name"

    def test_invalid_numeric_previous_id(self, service: RegistryService) -> None:
        result = run_save(
            SaveRecordInput(kind="drivers", data={"nome": "x"}, previous_id="abc"), service
        )
        assert not result.success
        assert result.errors[0].code == "invalid_id"

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown registry kind"):
            get_kind_spec("trucks")


class TestVehicles:
    """Vehicles are keyed by plate."""

    def test_plate_is_uppercased(self, service: RegistryService, repos) -> None:
        result = run_save(
            SaveRecordInput(kind="vehicles", data={"placa": "abc1d23", "modelo": "volvo"}),
            service,
        )

        assert result.success
        assert isinstance(repos[VEHICLES].get("ABC1D23"), Vehicle)

    def test_invalid_plate(self, service: RegistryService) -> None:
        result = run_save(SaveRecordInput(kind="vehicles", data={"placa": "12"}), service)

        assert not result.success
        assert result.errors[0].code == "invalid_plate"

    def test_plate_pattern_can_be_disabled(self, repos, clock) -> None:
        service = RegistryService(repos, clock, ValidationRules(plate_pattern=""))
        result = run_save(SaveRecordInput(kind="vehicles", data={"placa": "12"}), service)
        assert result.success

    def test_changing_plate_replaces_entry(self, service: RegistryService, repos) -> None:
        run_save(SaveRecordInput(kind="vehicles", data={"placa": "ABC1234"}), service)

        result = run_save(
            SaveRecordInput(kind="vehicles", data={"placa": "XYZ9876"}, previous_id="ABC1234"),
            service,
        )

        assert result.success
        assert repos[VEHICLES].get("ABC1234") is None
        assert repos[VEHICLES].get("XYZ9876") is not None


class TestClients:
    def test_client_requires_cnpj_and_name(self, service: RegistryService) -> None:
        result = run_save(SaveRecordInput(kind="clients", data={}), service)

        assert not result.success
        assert {e.field for e in result.errors} == {"cnpj", "company_name"}

    def test_client_document_length(self, service: RegistryService) -> None:
        result = run_save(
            SaveRecordInput(kind="clients", data={"cnpj": "123", "razaoSocial": "acme"}),
            service,
        )
        assert not result.success
        assert result.errors[0].code == "invalid_document"

    def test_cpf_is_accepted(self, service: RegistryService) -> None:
        result = run_save(
            SaveRecordInput(
                kind="clients", data={"cnpj": "123.456.789-09", "razaoSocial": "acme"}
            ),
            service,
        )
        assert result.success
        assert result.record is not None
        assert result.record.record_id == "123.456.789-09"


# --- Read / Delete Tests ---


class TestGetAndDelete:
    def test_get_missing(self, service: RegistryService) -> None:
        result = run_get(GetRecordInput(kind="drivers", record_id="42"), service)

        assert not result.success
        assert result.errors[0].code == "not_found"

    def test_delete(self, service: RegistryService, repos) -> None:
        repos[DRIVERS].save(Driver(id=7, name="ANA"))

        result = run_delete(DeleteRecordInput(kind="drivers", record_id="7"), service)

        assert result.success
        assert repos[DRIVERS].get("7") is None

    def test_delete_missing(self, service: RegistryService) -> None:
        result = run_delete(DeleteRecordInput(kind="drivers", record_id="7"), service)
        assert not result.success


# --- Options ---


class TestOptions:
    def test_options_use_label_field(self, service: RegistryService, repos) -> None:
        repos["db_atividades"].save(Activity(id=1, name="MUDANÇA"))

        result = run_options(ListRecordsInput(kind="activities"), service)

        assert [(o.value, o.label) for o in result.options] == [("1", "MUDANÇA")]

    def test_payee_options(self, service: RegistryService, repos) -> None:
        repos[DRIVERS].save(Driver(id=1, name="ANA"))
        repos["db_ajudantes"].save(
            get_kind_spec("helpers").model.model_validate({"id": 2, "nome": "BETO"})
        )

        labels = [(o.value, o.label) for o in run_payee_options(service).options]

        assert labels == [("motorista:1", "MOTORISTA - ANA"), ("ajudante:2", "AJUDANTE - BETO")]


def test_next_record_id_bumps_past_existing() -> None:
    existing = [Driver(id=5000, name="A")]
    assert next_record_id(1000, existing) == 5001
    assert next_record_id(9000, existing) == 9000
    assert next_record_id(1000, []) == 1000
