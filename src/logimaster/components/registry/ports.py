"""
Registry component - Port interfaces.
"""

from __future__ import annotations

from logimaster.ports.clock import ClockPort
from logimaster.ports.repo import RecordRepoPort, RepoMapPort

__all__ = ["ClockPort", "RecordRepoPort", "RepoMapPort"]
