from io import BytesIO
from typing import Any

import matplotlib.figure
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.backends.backend_pdf import PdfPages

A4_INCHES = (8.27, 11.69)
ROWS_PER_PAGE = 32


class MatplotlibRenderer:
    def render_chart(
        self, spec: dict[str, Any], width: int = 800, height: int = 600, dpi: int = 100
    ) -> bytes:
        """
        Renders a chart based on the spec.
        Spec Schema:
        {
            "type": "bar" | "line" | "grouped_bar",
            "title": str,
            "data": {
                "x": list[int|float|str],
                "y": list[int|float],
                "series": {label: list[int|float]}   # grouped_bar only
            },
            "xlabel": str,
            "ylabel": str
        }
        """
        fig = matplotlib.figure.Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(fig)  # Attach canvas backend
        ax = fig.add_subplot(111)

        c_type = spec.get("type", "line")
        data = spec.get("data", {})
        x = data.get("x", [])
        y = data.get("y", [])

        if c_type == "grouped_bar":
            series: dict[str, list[float]] = data.get("series", {})
            count = max(len(series), 1)
            bar_width = 0.8 / count
            positions = range(len(x))
            for i, (label, values) in enumerate(series.items()):
                offset = (i - (count - 1) / 2) * bar_width
                ax.bar([p + offset for p in positions], values, width=bar_width, label=label)
            ax.set_xticks(list(positions))
            ax.set_xticklabels([str(v) for v in x])
            if series:
                ax.legend()
            ax.axhline(0, color="#888888", linewidth=0.8)
        elif c_type == "bar":
            ax.bar(x, y)
        else:  # line
            ax.plot(x, y)

        if title := spec.get("title"):
            ax.set_title(title)
        if xlabel := spec.get("xlabel"):
            ax.set_xlabel(xlabel)
        if ylabel := spec.get("ylabel"):
            ax.set_ylabel(ylabel)

        fig.tight_layout()

        buf = BytesIO()
        fig.savefig(buf, format="png")
        png_data = buf.getvalue()
        buf.close()
        return png_data

    def render_table_pdf(
        self,
        title: str,
        subtitle: str,
        headers: list[str],
        rows: list[list[str]],
        footer: str = "",
    ) -> bytes:
        """Lay a table out on A4 pages; the footer goes on the last page."""
        chunks = [rows[i : i + ROWS_PER_PAGE] for i in range(0, len(rows), ROWS_PER_PAGE)]
        if not chunks:
            chunks = [[]]

        buf = BytesIO()
        with PdfPages(buf) as pdf:
            for page_no, chunk in enumerate(chunks, start=1):
                fig = matplotlib.figure.Figure(figsize=A4_INCHES)
                FigureCanvasAgg(fig)
                fig.text(0.08, 0.95, title, fontsize=16, fontweight="bold")
                fig.text(0.08, 0.925, subtitle, fontsize=10)

                ax = fig.add_axes((0.08, 0.12, 0.84, 0.78))
                ax.axis("off")
                if chunk:
                    table = ax.table(
                        cellText=chunk,
                        colLabels=headers,
                        loc="upper center",
                        cellLoc="left",
                    )
                    table.auto_set_font_size(False)
                    table.set_fontsize(9)
                    table.scale(1, 1.3)
                    for col in range(len(headers)):
                        table[0, col].set_facecolor("#eeeeee")

                if page_no == len(chunks) and footer:
                    fig.text(0.92, 0.07, footer, fontsize=13, fontweight="bold", ha="right")
                fig.text(0.5, 0.03, f"{page_no}/{len(chunks)}", fontsize=8, ha="center")
                pdf.savefig(fig)

        pdf_data = buf.getvalue()
        buf.close()
        return pdf_data
