"""
Report service - client billing statements and payment receipts.

Billing lists what each trip still owes after the advance (revenue - advance).
Receipts list what the company pays a driver (commission) or a helper
(daily rate) over a period.
"""

from __future__ import annotations

import logging

from logimaster.domain import calculations
from logimaster.domain.entities import (
    CLIENTS,
    DRIVERS,
    HELPERS,
    OPERATIONS,
    Operation,
)
from logimaster.domain.formatting import format_date

from .models import (
    BillingReport,
    BillingReportInput,
    BillingRow,
    PayeeKind,
    Receipt,
    ReceiptInput,
    ReceiptLine,
)
from .ports import PayerProfilePort, RepoMapPort

logger = logging.getLogger(__name__)

PAYEE_COLLECTIONS: dict[str, str] = {"motorista": DRIVERS, "ajudante": HELPERS}


class ReportError(ValueError):
    """Raised when a report cannot be generated from the given input."""


def parse_payee(payee: str) -> tuple[PayeeKind, int]:
    kind, _, raw_id = payee.partition(":")
    if kind not in PAYEE_COLLECTIONS or not raw_id:
        raise ReportError("Select a driver or helper.")
    try:
        return kind, int(raw_id)  # type: ignore[return-value]
    except ValueError:
        raise ReportError("Select a driver or helper.") from None


def _in_period(op: Operation, start: str, end: str) -> bool:
    return start <= op.date <= end


class ReportService:
    def __init__(self, repos: RepoMapPort, company_repo: PayerProfilePort):
        self.repos = repos
        self.company_repo = company_repo

    def _operations(self) -> list[Operation]:
        return [op for op in self.repos[OPERATIONS].list_all() if isinstance(op, Operation)]

    def billing_report(self, inp: BillingReportInput) -> BillingReport:
        if not inp.start or not inp.end:
            raise ReportError("Select the period.")
        if not inp.client_cnpj:
            raise ReportError("Select a client.")

        ops = [
            op
            for op in self._operations()
            if _in_period(op, inp.start, inp.end) and op.client_cnpj == inp.client_cnpj
        ]
        ops.sort(key=lambda op: op.date)
        if not ops:
            raise ReportError("No operations found.")

        rows = tuple(
            BillingRow(
                operation_id=op.id,
                date=op.date,
                date_display=format_date(op.date),
                vehicle_plate=op.vehicle_plate,
                balance_due=calculations.balance_due(op),
            )
            for op in ops
        )
        client = self.repos[CLIENTS].get(inp.client_cnpj)
        logger.info(
            "Billing report for %s (%s..%s): %d operations",
            inp.client_cnpj,
            inp.start,
            inp.end,
            len(rows),
        )
        return BillingReport(
            start=inp.start,
            end=inp.end,
            client_cnpj=inp.client_cnpj,
            client_name=getattr(client, "company_name", "") or "",
            rows=rows,
            total=sum(r.balance_due for r in rows),
        )

    def receipt(self, inp: ReceiptInput) -> Receipt:
        if not inp.start or not inp.end:
            raise ReportError("Select the period.")
        kind, payee_id = parse_payee(inp.payee)
        person = self.repos[PAYEE_COLLECTIONS[kind]].get(str(payee_id))
        if person is None:
            raise ReportError(f"Unknown {kind}: {payee_id}")

        ops = [
            op
            for op in self._operations()
            if _in_period(op, inp.start, inp.end)
            and (not inp.vehicle_plate or op.vehicle_plate == inp.vehicle_plate)
            and (not inp.client_cnpj or op.client_cnpj == inp.client_cnpj)
        ]
        ops.sort(key=lambda op: op.date)

        lines: list[ReceiptLine] = []
        for op in ops:
            if kind == "motorista":
                if op.driver_id != payee_id:
                    continue
                amount = op.commission
                description = "COMISSÃO"
            else:
                shift = next((s for s in op.helpers if s.id == payee_id), None)
                if shift is None:
                    continue
                amount = shift.daily_rate
                description = "DIÁRIA"
            lines.append(
                ReceiptLine(
                    operation_id=op.id,
                    date=op.date,
                    date_display=format_date(op.date),
                    vehicle_plate=op.vehicle_plate,
                    description=description,
                    amount=amount,
                )
            )

        if not lines:
            raise ReportError("No operations found.")

        return Receipt(
            payee_kind=kind,
            payee_id=payee_id,
            payee_name=getattr(person, "name", ""),
            payee_document=getattr(person, "document", ""),
            payee_pix=getattr(person, "pix", ""),
            payer=self.company_repo.get(),
            start=inp.start,
            end=inp.end,
            lines=tuple(lines),
        )
