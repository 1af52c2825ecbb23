"""
Display formatting for the pt-BR locale.

Currency, CPF/CNPJ masks and dates follow what Brazilian users expect to see on
screen and on printed reports.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from logimaster.domain.entities import to_number

MONTH_NAMES = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

WEEKDAY_LABELS = ("DOM", "SEG", "TER", "QUA", "QUI", "SEX", "SÁB")

_CPF_RE = re.compile(r"(\d{3})(\d{3})(\d{3})(\d{0,2})")
_CNPJ_RE = re.compile(r"(\d{2})(\d{3})(\d{3})(\d{4})(\d{0,2})")


def format_currency(value: Any) -> str:
    """Format as BRL, e.g. ``R$ 1.234,56``."""
    amount = to_number(value)
    # Half-cents round away from zero
    cents = Decimal(abs(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 and cents else ""
    # Swap separators: 1,234.56 -> 1.234,56
    body = f"{cents:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {body}"


def only_digits(value: Any) -> str:
    return re.sub(r"\D", "", str(value or ""))


def format_document(value: Any) -> str:
    """Mask a CPF (up to 11 digits) or a CNPJ."""
    if not value:
        return ""
    digits = only_digits(value)
    if len(digits) <= 11:
        return _CPF_RE.sub(r"\1.\2.\3-\4", digits, count=1)
    return _CNPJ_RE.sub(r"\1.\2.\3/\4-\5", digits, count=1)


def format_date(iso_date: str) -> str:
    """YYYY-MM-DD -> DD/MM/YYYY"""
    return "/".join(reversed(iso_date.strip().split("-")))


def month_title(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} de {year}".upper()
