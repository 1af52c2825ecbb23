"""End-to-end flow through a real SQLite-backed service context."""

from logimaster.components.backup import RESET_CONFIRMATION
from logimaster.components.operations import SaveOperationInput, run_save
from logimaster.components.registry import SaveRecordInput
from logimaster.components.registry import run_save as run_save_record
from logimaster.components.reports import BillingReportInput, ReceiptInput, render_billing_pdf
from logimaster.context import ServiceContext, resolve_db_path
from logimaster.domain.entities import DRIVERS, OPERATIONS


def _seed(ctx: ServiceContext) -> dict[str, str]:
    registry = ctx.registry_service
    driver = run_save_record(SaveRecordInput(kind="drivers", data={"nome": "ana"}), registry)
    helper = run_save_record(SaveRecordInput(kind="helpers", data={"nome": "beto"}), registry)
    run_save_record(SaveRecordInput(kind="vehicles", data={"placa": "ABC1D23"}), registry)
    run_save_record(
        SaveRecordInput(kind="clients", data={"cnpj": "11222333000181", "razaoSocial": "acme"}),
        registry,
    )
    assert driver.record is not None and helper.record is not None
    return {"driver": driver.record.record_id, "helper": helper.record.record_id}


def test_full_flow(test_ctx: ServiceContext):
    ids = _seed(test_ctx)

    saved = run_save(
        SaveOperationInput(
            data={
                "data": "2026-10-05",
                "motoristaId": ids["driver"],
                "veiculoPlaca": "ABC1D23",
                "contratanteCNPJ": "11222333000181",
                "faturamento": 2000,
                "adiantamento": 500,
                "comissao": 200,
                "combustivel": 600,
                "precoLitro": 6,
                "kmRodado": 800,
                "ajudantes": [{"id": ids["helper"], "diaria": 100}],
            }
        ),
        test_ctx.operation_service,
    )
    assert saved.success, saved.errors

    test_ctx.expense_service.save({"data": "2026-10-20", "descricao": "seguro", "valor": 300})

    stats = test_ctx.dashboard_service.month_stats(2026, 10)
    # commission + helper + 800 km at 8 km/l and R$6
    assert stats.operation_costs == 200 + 100 + 600
    assert stats.general_expenses == 300
    assert stats.net == 2000 - 1200

    report = test_ctx.report_service.billing_report(
        BillingReportInput(start="2026-10-01", end="2026-10-31", client_cnpj="11222333000181")
    )
    assert report.total == 1500
    pdf = render_billing_pdf(report, test_ctx.rules.reports.billing_title, test_ctx.renderer)
    assert pdf.startswith(b"%PDF")

    receipt = test_ctx.report_service.receipt(
        ReceiptInput(start="2026-10-01", end="2026-10-31", payee=f"ajudante:{ids['helper']}")
    )
    assert receipt.total == 100

    chart = test_ctx.dashboard_service.yearly_chart(2026)
    assert chart.startswith(b"\x89PNG")


def test_export_import_between_databases(test_ctx: ServiceContext, tmp_path):
    _seed(test_ctx)
    test_ctx.company_service.save_profile({"razaoSocial": "minha empresa"})
    exported = test_ctx.backup_service.export_json()

    other = ServiceContext.create(str(tmp_path / "other" / "logimaster.db"), test_ctx.rules)
    result = other.backup_service.import_json(exported)

    assert result.record_counts[DRIVERS] == 1
    assert other.company_service.get_profile().company_name == "MINHA EMPRESA"
    assert other.backup_service.export_snapshot() == test_ctx.backup_service.export_snapshot()


def test_reset(test_ctx: ServiceContext):
    _seed(test_ctx)

    test_ctx.backup_service.reset_all(RESET_CONFIRMATION)

    snapshot = test_ctx.backup_service.export_snapshot()
    assert snapshot[DRIVERS] == []
    assert snapshot[OPERATIONS] == []


def test_resolve_db_path(rules, tmp_path, monkeypatch):
    monkeypatch.setenv("LOGIMASTER_DATA_DIR", str(tmp_path))
    assert resolve_db_path(rules) == str(tmp_path / "logimaster.db")
    assert resolve_db_path(rules, "/srv/data") == "/srv/data/logimaster.db"

    monkeypatch.delenv("LOGIMASTER_DATA_DIR")
    assert resolve_db_path(rules) == "data/logimaster.db"
