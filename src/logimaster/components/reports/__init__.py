"""
Reports component - billing reports and payment receipts.
"""

from ._impl import ReportError, ReportService, parse_payee
from ._render import render_billing_html, render_billing_pdf, render_receipt_html
from .component import run_billing_report, run_receipt
from .models import (
    BillingReport,
    BillingReportInput,
    BillingReportOutput,
    BillingRow,
    Receipt,
    ReceiptInput,
    ReceiptLine,
    ReceiptOutput,
)

__all__ = [
    "run_billing_report",
    "run_receipt",
    "render_billing_html",
    "render_billing_pdf",
    "render_receipt_html",
    "BillingReportInput",
    "ReceiptInput",
    "BillingReport",
    "BillingRow",
    "BillingReportOutput",
    "Receipt",
    "ReceiptLine",
    "ReceiptOutput",
    "ReportError",
    "ReportService",
    "parse_payee",
]
