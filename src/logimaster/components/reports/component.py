"""
Reports component - billing statements per client and payment receipts
for drivers and helpers.

Shell Layer - converts ReportError into output models.
"""

from __future__ import annotations

from ._impl import ReportError, ReportService
from .models import (
    BillingReportInput,
    BillingReportOutput,
    ReceiptInput,
    ReceiptOutput,
)


def run_billing_report(
    input_data: BillingReportInput, service: ReportService
) -> BillingReportOutput:
    try:
        report = service.billing_report(input_data)
    except ReportError as e:
        return BillingReportOutput(report=None, error=str(e), success=False)
    return BillingReportOutput(report=report, error=None, success=True)


def run_receipt(input_data: ReceiptInput, service: ReportService) -> ReceiptOutput:
    try:
        receipt = service.receipt(input_data)
    except ReportError as e:
        return ReceiptOutput(receipt=None, error=str(e), success=False)
    return ReceiptOutput(receipt=receipt, error=None, success=True)
