"""
Reports component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from logimaster.domain.entities import CompanyProfile

PayeeKind = Literal["motorista", "ajudante"]


# --- Input Models ---


@dataclass(frozen=True)
class BillingReportInput:
    """Period is inclusive; dates are YYYY-MM-DD."""

    start: str
    end: str
    client_cnpj: str


@dataclass(frozen=True)
class ReceiptInput:
    """
    Payment receipt for a driver or helper.

    `payee` uses the select-option form ``motorista:<id>`` / ``ajudante:<id>``.
    """

    start: str
    end: str
    payee: str
    vehicle_plate: str = ""
    client_cnpj: str = ""


# --- Report Models ---


@dataclass(frozen=True)
class BillingRow:
    operation_id: int
    date: str
    date_display: str
    vehicle_plate: str
    balance_due: float


@dataclass(frozen=True)
class BillingReport:
    start: str
    end: str
    client_cnpj: str
    client_name: str
    rows: tuple[BillingRow, ...]
    total: float


@dataclass(frozen=True)
class ReceiptLine:
    operation_id: int
    date: str
    date_display: str
    vehicle_plate: str
    description: str
    amount: float


@dataclass(frozen=True)
class Receipt:
    payee_kind: PayeeKind
    payee_id: int
    payee_name: str
    payee_document: str
    payee_pix: str
    payer: CompanyProfile
    start: str
    end: str
    lines: tuple[ReceiptLine, ...] = field(default_factory=tuple)

    @property
    def total(self) -> float:
        return sum(line.amount for line in self.lines)


# --- Output Models ---


@dataclass(frozen=True)
class BillingReportOutput:
    report: BillingReport | None
    error: str | None
    success: bool


@dataclass(frozen=True)
class ReceiptOutput:
    receipt: Receipt | None
    error: str | None
    success: bool
