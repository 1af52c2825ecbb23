import argparse
import json
import logging
import shutil
import sys
import tempfile
from datetime import date, datetime
from pathlib import Path

from logimaster.adapters.sqlite.migrator import SQLiteMigrator
from logimaster.components.backup import (
    BackupFormatError,
    ResetNotConfirmedError,
    backup_filename,
)
from logimaster.components.dashboard import CalendarMonth
from logimaster.components.reports import (
    BillingReportInput,
    ReceiptInput,
    render_billing_html,
    render_billing_pdf,
    render_receipt_html,
    run_billing_report,
    run_receipt,
)
from logimaster.context import ServiceContext, resolve_db_path
from logimaster.domain.formatting import format_currency, format_document, month_title
from logimaster.rules.loader import load_rules
from logimaster.rules.models import Rules

logger = logging.getLogger("logimaster.cli")


def get_rules(args: argparse.Namespace) -> Rules:
    return load_rules(Path(args.rules) if args.rules else None)


def get_context(args: argparse.Namespace) -> ServiceContext:
    rules = get_rules(args)
    return ServiceContext.create(resolve_db_path(rules, args.data_dir), rules)


def _year_month(ctx: ServiceContext, args: argparse.Namespace) -> tuple[int, int]:
    now = ctx.clock.now()
    return args.year or now.year, args.month or now.month


def format_calendar(cal: CalendarMonth) -> str:
    """Month grid; days with trips are marked with '*'."""
    lines = [cal.title, " ".join(f"{label:>4}" for label in cal.weekday_labels)]
    cells = ["    "] * cal.leading_blanks
    for day in cal.days:
        mark = "*" if day.has_operation else " "
        cells.append(f"{day.day:>3}{mark}")
    for i in range(0, len(cells), 7):
        lines.append(" ".join(cells[i : i + 7]))
    return "\n".join(lines)


# --- Handlers ---


def handle_migrate(args: argparse.Namespace) -> int:
    rules = get_rules(args)
    db_path = resolve_db_path(rules, args.data_dir)
    applied = SQLiteMigrator(db_path).run_migrations()
    print(f"Database: {db_path}")
    print(f"Applied {len(applied)} migration(s).")
    return 0


def handle_stats(ctx: ServiceContext, args: argparse.Namespace) -> int:
    year, month = _year_month(ctx, args)
    stats = ctx.dashboard_service.month_stats(year, month)
    print(month_title(year, month))
    print(f"Faturamento: {format_currency(stats.revenue)}")
    print(f"Custos:      {format_currency(stats.total_costs)}")
    print(f"Lucro:       {format_currency(stats.net)}")
    return 0


def handle_calendar(ctx: ServiceContext, args: argparse.Namespace) -> int:
    year, month = _year_month(ctx, args)
    cal = ctx.dashboard_service.calendar(year, month)
    print(format_calendar(cal))
    for day in cal.days:
        for entry in day.entries:
            print(
                f"{day.date}  {entry.vehicle_plate:<9} {entry.driver_name:<24} "
                f"{format_currency(entry.revenue)}"
            )
    return 0


def handle_billing(ctx: ServiceContext, args: argparse.Namespace) -> int:
    result = run_billing_report(
        BillingReportInput(start=args.start, end=args.end, client_cnpj=args.client),
        ctx.report_service,
    )
    if not result.success or result.report is None:
        logger.error(result.error)
        return 1

    report = result.report
    title = ctx.rules.reports.billing_title
    print(f"{title} - {report.client_name}")
    for row in report.rows:
        print(f"{row.date_display}  {row.vehicle_plate:<9} {format_currency(row.balance_due)}")
    print(f"TOTAL: {format_currency(report.total)}")

    if args.html:
        Path(args.html).write_text(render_billing_html(report, title), encoding="utf-8")
        print(f"HTML written: {args.html}")
    if args.pdf:
        Path(args.pdf).write_bytes(render_billing_pdf(report, title, ctx.renderer))
        print(f"PDF written: {args.pdf}")
    return 0


def handle_receipt(ctx: ServiceContext, args: argparse.Namespace) -> int:
    result = run_receipt(
        ReceiptInput(
            start=args.start,
            end=args.end,
            payee=args.payee,
            vehicle_plate=args.vehicle or "",
            client_cnpj=args.client or "",
        ),
        ctx.report_service,
    )
    if not result.success or result.receipt is None:
        logger.error(result.error)
        return 1

    receipt = result.receipt
    print(f"{ctx.rules.reports.receipt_title}")
    print(f"{receipt.payee_name} ({format_document(receipt.payee_document)})")
    for line in receipt.lines:
        print(
            f"{line.date_display}  {line.vehicle_plate:<9} {line.description:<10} "
            f"{format_currency(line.amount)}"
        )
    print(f"TOTAL: {format_currency(receipt.total)}")

    if args.html:
        html = render_receipt_html(receipt, ctx.rules.reports.receipt_title)
        Path(args.html).write_text(html, encoding="utf-8")
        print(f"HTML written: {args.html}")
    return 0


def handle_chart(ctx: ServiceContext, args: argparse.Namespace) -> int:
    year = args.year or ctx.clock.now().year
    Path(args.out).write_bytes(ctx.dashboard_service.yearly_chart(year))
    print(f"Chart written: {args.out}")
    return 0


def handle_export(ctx: ServiceContext, args: argparse.Namespace) -> int:
    out = Path(args.out or backup_filename(date.today(), ctx.rules.ops.backups.export_prefix))
    out.write_text(ctx.backup_service.export_json(), encoding="utf-8")
    print(f"Backup written: {out}")
    return 0


def handle_import(ctx: ServiceContext, args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not path.exists():
        logger.error("File %s not found.", path)
        return 1
    try:
        result = ctx.backup_service.import_json(path.read_text(encoding="utf-8"))
    except BackupFormatError as e:
        logger.error("Import failed: %s", e)
        return 1
    print(json.dumps(result.record_counts, indent=2))
    print("Dados restaurados!")
    return 0


def handle_reset(ctx: ServiceContext, args: argparse.Namespace) -> int:
    try:
        ctx.backup_service.reset_all(args.confirm or "")
    except ResetNotConfirmedError as e:
        logger.error(str(e))
        return 1
    print("All data erased.")
    return 0


def _list_backups(backup_dir: Path) -> list[Path]:
    return sorted(backup_dir.glob("backup_*.zip"), key=lambda p: p.stat().st_mtime, reverse=True)


def handle_backup(rules: Rules, data_dir: Path) -> int:
    backup_cfg = rules.ops.backups

    backup_dir = data_dir / backup_cfg.backup_dir_name
    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    zip_name = backup_dir / f"backup_{timestamp}"

    with tempfile.TemporaryDirectory() as tmp_dir:
        tmp_path = Path(tmp_dir)

        items_included = 0
        for item in backup_cfg.include:
            src = data_dir / item
            if src.exists():
                dst = tmp_path / item
                if src.is_dir():
                    shutil.copytree(src, dst)
                else:
                    shutil.copy2(src, dst)
                items_included += 1

        if items_included == 0:
            logger.warning("No files found to backup.")
            return 1

        archive_path = shutil.make_archive(str(zip_name), "zip", tmp_path)
        print(f"Backup created: {archive_path}")

    # Retention
    limit = backup_cfg.retention_count
    for old in _list_backups(backup_dir)[limit:]:
        old.unlink()
        print(f"Pruned old backup: {old.name}")
    return 0


def handle_restore(rules: Rules, data_dir: Path, args: argparse.Namespace) -> int:
    backup_dir = data_dir / rules.ops.backups.backup_dir_name

    if args.list:
        print("Available Backups:")
        for b in _list_backups(backup_dir):
            print(f" - {b.name} ({b.stat().st_size} bytes)")
        return 0

    target = None
    if args.latest:
        backups = _list_backups(backup_dir)
        if not backups:
            logger.error("No backups found.")
            return 1
        target = backups[0]
    elif args.file:
        target = Path(args.file)
        if not target.exists():
            logger.error("File %s not found.", target)
            return 1

    if not target:
        logger.error("Specify --latest or --file <path>.")
        return 1

    print(f"Restoring from {target}...")
    shutil.unpack_archive(str(target), str(data_dir))
    print("Restore complete.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="logimaster", description="LogiMaster CLI")
    parser.add_argument("--data-dir", help="Directory holding the database")
    parser.add_argument("--rules", help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # stats / calendar
    for name, help_text in (("stats", "Month totals"), ("calendar", "Month trip calendar")):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("--year", type=int)
        p.add_argument("--month", type=int, choices=range(1, 13), metavar="1-12")

    # billing
    billing_parser = subparsers.add_parser("billing", help="Client billing report")
    billing_parser.add_argument("--start", required=True, help="YYYY-MM-DD")
    billing_parser.add_argument("--end", required=True, help="YYYY-MM-DD")
    billing_parser.add_argument("--client", required=True, help="Client CNPJ")
    billing_parser.add_argument("--pdf", help="Write the report as PDF")
    billing_parser.add_argument("--html", help="Write the report as HTML")

    # receipt
    receipt_parser = subparsers.add_parser("receipt", help="Driver or helper payment receipt")
    receipt_parser.add_argument("--start", required=True, help="YYYY-MM-DD")
    receipt_parser.add_argument("--end", required=True, help="YYYY-MM-DD")
    receipt_parser.add_argument("--payee", required=True, help="motorista:<id> or ajudante:<id>")
    receipt_parser.add_argument("--vehicle", help="Only trips with this plate")
    receipt_parser.add_argument("--client", help="Only trips for this client CNPJ")
    receipt_parser.add_argument("--html", help="Write the receipt as HTML")

    # chart
    chart_parser = subparsers.add_parser("chart", help="Yearly result chart (PNG)")
    chart_parser.add_argument("--year", type=int)
    chart_parser.add_argument("--out", required=True)

    # export / import / reset
    export_parser = subparsers.add_parser("export", help="Export all data as JSON")
    export_parser.add_argument("--out")
    import_parser = subparsers.add_parser("import", help="Restore data from a JSON export")
    import_parser.add_argument("file")
    reset_parser = subparsers.add_parser("reset", help="Erase all data")
    reset_parser.add_argument("--confirm", help="Type RESET to confirm")

    # backup / restore
    subparsers.add_parser("backup", help="Create a zip backup of the data directory")
    restore_parser = subparsers.add_parser("restore", help="Restore from backup")
    restore_parser.add_argument("--list", action="store_true", help="List available backups")
    restore_parser.add_argument("--latest", action="store_true", help="Restore most recent backup")
    restore_parser.add_argument("--file", help="Path to backup zip")

    return parser


HANDLERS = {
    "stats": handle_stats,
    "calendar": handle_calendar,
    "billing": handle_billing,
    "receipt": handle_receipt,
    "chart": handle_chart,
    "export": handle_export,
    "import": handle_import,
    "reset": handle_reset,
}


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    if args.command == "migrate":
        return handle_migrate(args)
    if args.command in ("backup", "restore"):
        rules = get_rules(args)
        data_dir = Path(resolve_db_path(rules, args.data_dir)).parent
        if args.command == "backup":
            return handle_backup(rules, data_dir)
        return handle_restore(rules, data_dir, args)

    ctx = get_context(args)
    return HANDLERS[args.command](ctx, args)


if __name__ == "__main__":
    sys.exit(main())
