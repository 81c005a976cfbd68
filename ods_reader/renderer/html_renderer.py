"""Render a materialized grid into an HTML table preview."""
from __future__ import annotations

from html import escape
from pathlib import Path

from ods_reader.model.elements import MaterializedCell, MaterializedGrid, MaterializedRow
from ods_reader.renderer.utils import cell_to_css


class HtmlRenderer:
    """Produce an HTML table whose cells carry their resolved styles inline."""

    def __init__(self, output_path: Path) -> None:
        self._output_path = output_path

    def render(self, grid: MaterializedGrid) -> None:
        html = self.build_html(grid)
        self._output_path.write_text(html, encoding="utf-8")

    def build_html(self, grid: MaterializedGrid) -> str:
        body = "\n".join(self._row_to_tr(row) for row in grid.rows)
        title = escape(grid.name or "Spreadsheet Preview")
        return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <title>{title}</title>
  <style>
    table {{ border-collapse: collapse; table-layout: fixed; }}
    td {{ white-space: pre-wrap; overflow: hidden; }}
  </style>
</head>
<body>
<table>
{body}
</table>
</body>
</html>
"""

    def _row_to_tr(self, row: MaterializedRow) -> str:
        return "  <tr>" + "".join(self._cell_to_td(cell) for cell in row.cells) + "</tr>"

    def _cell_to_td(self, cell: MaterializedCell) -> str:
        style_str = "; ".join(f"{k}: {v}" for k, v in cell_to_css(cell).items())
        content = escape(cell.value)
        if style_str:
            return f"<td style=\"{escape(style_str)}\">{content}</td>"
        return f"<td>{content}</td>"
