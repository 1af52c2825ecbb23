"""
Company component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from logimaster.domain.entities import CompanyProfile


class CompanyProfileRepoPort(Protocol):
    """Storage for the single company profile."""

    def get(self) -> CompanyProfile:
        """Stored profile, or an empty one."""
        ...

    def save(self, profile: CompanyProfile) -> CompanyProfile:
        """Replace the stored profile."""
        ...
