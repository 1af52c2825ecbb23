"""
Backup component - Port interfaces.
"""

from __future__ import annotations

from logimaster.ports.repo import CompanyRepoPort, RepoMapPort

__all__ = ["CompanyRepoPort", "RepoMapPort"]
