"""HTML and PDF rendering of reports."""

from __future__ import annotations

import html

from logimaster.components.company import EMPTY_SUMMARY
from logimaster.domain.formatting import format_currency, format_date, format_document

from .models import BillingReport, Receipt
from .ports import TablePdfRendererPort


_TABLE_OPEN = '<table style="width:100%; border-collapse:collapse; margin-top:15px;" border="1">'
_TOTAL_OPEN = '<h3 style="text-align:right; margin-top:20px;">'
_SIGNATURE_LINE = "_" * 30


def _e(value: object) -> str:
    return html.escape(str(value))


def _header(*labels: str) -> str:
    cells = "".join(f"<th>{label}</th>" for label in labels)
    return f'<tr style="background:#eee;">{cells}</tr>'


def render_billing_html(report: BillingReport, title: str) -> str:
    rows = "".join(
        f"<tr><td>{_e(r.date_display)}</td><td>{_e(r.vehicle_plate)}</td>"
        f"<td>{_e(format_currency(r.balance_due))}</td></tr>"
        for r in report.rows
    )
    client = report.client_name or report.client_cnpj
    return f"""
        <div style="padding:20px;">
            <h3>{_e(title)}</h3>
            <p>Cliente: {_e(client)} ({_e(format_document(report.client_cnpj))})</p>
            <p>Período: {_e(format_date(report.start))} a {_e(format_date(report.end))}</p>
            {_TABLE_OPEN}
                {_header("DATA", "VEÍCULO", "SALDO")}
                {rows}
            </table>
            {_TOTAL_OPEN}TOTAL: {_e(format_currency(report.total))}</h3>
        </div>
    """


def render_billing_pdf(
    report: BillingReport, title: str, renderer: TablePdfRendererPort
) -> bytes:
    client = report.client_name or report.client_cnpj
    subtitle = (
        f"Cliente: {client} ({format_document(report.client_cnpj)})   "
        f"Período: {format_date(report.start)} a {format_date(report.end)}"
    )
    return renderer.render_table_pdf(
        title=title,
        subtitle=subtitle,
        headers=["DATA", "VEÍCULO", "SALDO"],
        rows=[
            [r.date_display, r.vehicle_plate, format_currency(r.balance_due)]
            for r in report.rows
        ],
        footer=f"TOTAL: {format_currency(report.total)}",
    )


def render_receipt_html(receipt: Receipt, title: str) -> str:
    lines = "".join(
        f"<tr><td>{_e(line.date_display)}</td><td>{_e(line.vehicle_plate)}</td>"
        f"<td>{_e(line.description)}</td><td>{_e(format_currency(line.amount))}</td></tr>"
        for line in receipt.lines
    )
    payer = receipt.payer
    payer_line = (
        f"{_e(payer.company_name)} (CNPJ: {_e(format_document(payer.cnpj))})"
        if not payer.is_empty
        else EMPTY_SUMMARY
    )
    role = "MOTORISTA" if receipt.payee_kind == "motorista" else "AJUDANTE"
    return f"""
        <div style="padding:20px;">
            <h3>{_e(title)}</h3>
            <p>Recebi de {payer_line} a importância de
               <strong>{_e(format_currency(receipt.total))}</strong>
               referente aos serviços prestados no período de
               {_e(format_date(receipt.start))} a {_e(format_date(receipt.end))}.</p>
            <p>{role}: <strong>{_e(receipt.payee_name)}</strong>
               - DOC: {_e(format_document(receipt.payee_document))}
               - PIX: {_e(receipt.payee_pix or "-")}</p>
            {_TABLE_OPEN}
                {_header("DATA", "VEÍCULO", "REFERENTE", "VALOR")}
                {lines}
            </table>
            {_TOTAL_OPEN}TOTAL: {_e(format_currency(receipt.total))}</h3>
            <p style="margin-top:40px; text-align:center;">
                {_SIGNATURE_LINE}<br>{_e(receipt.payee_name)}
            </p>
        </div>
    """
