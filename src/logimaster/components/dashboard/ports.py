"""
Dashboard component - Port interfaces.
"""

from __future__ import annotations

from typing import Any, Protocol

from logimaster.ports.repo import RepoMapPort


class ChartRendererPort(Protocol):
    """Draws the yearly result chart."""

    def render_chart(
        self, spec: dict[str, Any], width: int = 800, height: int = 600, dpi: int = 100
    ) -> bytes:
        """Render a chart spec to PNG bytes."""
        ...


__all__ = ["ChartRendererPort", "RepoMapPort"]
