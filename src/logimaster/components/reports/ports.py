"""
Reports component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from logimaster.domain.entities import CompanyProfile
from logimaster.ports.repo import RepoMapPort


class PayerProfilePort(Protocol):
    """Source of the company printed as payer on receipts."""

    def get(self) -> CompanyProfile:
        ...


class TablePdfRendererPort(Protocol):
    """Prints billing statements."""

    def render_table_pdf(
        self,
        title: str,
        subtitle: str,
        headers: list[str],
        rows: list[list[str]],
        footer: str = "",
    ) -> bytes:
        """Render a titled table to PDF bytes."""
        ...


__all__ = ["PayerProfilePort", "RepoMapPort", "TablePdfRendererPort"]
