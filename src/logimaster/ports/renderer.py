from typing import Any, Protocol


class RendererPort(Protocol):
    def render_chart(
        self, spec: dict[str, Any], width: int = 800, height: int = 600, dpi: int = 100
    ) -> bytes:
        """Render a chart spec to PNG bytes."""
        ...

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
