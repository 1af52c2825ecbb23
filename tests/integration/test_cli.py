import json
from pathlib import Path

import pytest

from logimaster.app_shell.cli import format_calendar, main
from logimaster.components.dashboard import CalendarDay, CalendarEntry, CalendarMonth
from logimaster.domain.formatting import WEEKDAY_LABELS

ACME = "11222333000181"


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv("LOGIMASTER_RULES", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path / "data"


def cli(data_dir: Path, *args: str) -> int:
    return main(["--data-dir", str(data_dir), *args])


@pytest.fixture
def backup_file(tmp_path: Path) -> Path:
    path = tmp_path / "backup.json"
    path.write_text(
        json.dumps(
            {
                "db_motoristas": [{"id": 1, "nome": "ANA", "documento": "12345678909"}],
                "db_veiculos": [{"placa": "ABC1234"}],
                "db_contratantes": [{"cnpj": ACME, "razaoSocial": "ACME"}],
                "db_operacoes": [
                    {
                        "id": 5,
                        "data": "2026-10-05",
                        "motoristaId": 1,
                        "veiculoPlaca": "ABC1234",
                        "contratanteCNPJ": ACME,
                        "faturamento": "1000",
                        "adiantamento": "400",
                        "comissao": "100",
                    }
                ],
                "db_minha_empresa": {"razaoSocial": "MINHA", "cnpj": "1", "telefone": "2"},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_migrate(data_dir: Path, capsys):
    assert cli(data_dir, "migrate") == 0
    assert "Applied 1 migration(s)." in capsys.readouterr().out
    assert (data_dir / "logimaster.db").exists()


def test_import_then_reports(data_dir: Path, backup_file: Path, tmp_path: Path, capsys):
    assert cli(data_dir, "import", str(backup_file)) == 0

    assert cli(data_dir, "stats", "--year", "2026", "--month", "10") == 0
    out = capsys.readouterr().out
    assert "OUTUBRO DE 2026" in out
    assert "R$ 1.000,00" in out

    html = tmp_path / "billing.html"
    pdf = tmp_path / "billing.pdf"
    args = ["billing", "--start", "2026-10-01", "--end", "2026-10-31", "--client", ACME]
    assert cli(data_dir, *args, "--html", str(html), "--pdf", str(pdf)) == 0
    assert "TOTAL: R$ 600,00" in capsys.readouterr().out
    assert "ACME" in html.read_text(encoding="utf-8")
    assert pdf.read_bytes().startswith(b"%PDF")

    assert (
        cli(
            data_dir,
            "receipt",
            "--start",
            "2026-10-01",
            "--end",
            "2026-10-31",
            "--payee",
            "motorista:1",
        )
        == 0
    )
    assert "TOTAL: R$ 100,00" in capsys.readouterr().out

    chart = tmp_path / "chart.png"
    assert cli(data_dir, "chart", "--year", "2026", "--out", str(chart)) == 0
    assert chart.read_bytes().startswith(b"\x89PNG")


def test_billing_error_exit_code(data_dir: Path, caplog):
    args = ["billing", "--start", "2026-10-01", "--end", "2026-10-31", "--client", ACME]
    assert cli(data_dir, *args) == 1
    assert "No operations found." in caplog.text


def test_export_default_name(data_dir: Path, tmp_path: Path):
    assert cli(data_dir, "export") == 0
    exported = list(tmp_path.glob("backup_logimaster_*.json"))
    assert len(exported) == 1
    assert "db_operacoes" in json.loads(exported[0].read_text(encoding="utf-8"))


def test_import_bad_file(data_dir: Path, tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")

    assert cli(data_dir, "import", str(bad)) == 1
    assert cli(data_dir, "import", str(tmp_path / "missing.json")) == 1


def test_reset_requires_token(data_dir: Path, backup_file: Path, tmp_path: Path):
    cli(data_dir, "import", str(backup_file))

    assert cli(data_dir, "reset") == 1
    assert cli(data_dir, "reset", "--confirm", "RESET") == 0

    out = tmp_path / "after.json"
    cli(data_dir, "export", "--out", str(out))
    assert json.loads(out.read_text(encoding="utf-8"))["db_motoristas"] == []


def test_zip_backup_and_restore(data_dir: Path, capsys):
    cli(data_dir, "migrate")

    assert cli(data_dir, "backup") == 0
    assert len(list((data_dir / "backups").glob("backup_*.zip"))) == 1

    (data_dir / "logimaster.db").unlink()
    assert cli(data_dir, "restore", "--latest") == 0
    assert (data_dir / "logimaster.db").exists()

    assert cli(data_dir, "restore", "--list") == 0
    assert "Available Backups:" in capsys.readouterr().out


def test_restore_needs_target(data_dir: Path):
    assert cli(data_dir, "restore") == 1


def test_format_calendar():
    days = tuple(
        CalendarDay(
            day=d,
            date=f"2026-02-{d:02d}",
            entries=(CalendarEntry(1, "ABC1234", "ANA", 10.0),) if d == 3 else (),
        )
        for d in range(1, 29)
    )
    cal = CalendarMonth(2026, 2, "FEVEREIRO DE 2026", WEEKDAY_LABELS, 0, days)

    lines = format_calendar(cal).splitlines()

    assert lines[0] == "FEVEREIRO DE 2026"
    assert lines[1].split() == list(WEEKDAY_LABELS)
    assert lines[2].split() == ["1", "2", "3*", "4", "5", "6", "7"]
    assert len(lines) == 6
