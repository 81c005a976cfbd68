"""Expand compressed tables into explicit grids of styled cells."""
from __future__ import annotations

from bisect import bisect_right
from dataclasses import replace
from itertools import accumulate
from typing import List, Optional, Sequence

from ods_reader.model.elements import MaterializedCell, MaterializedGrid, MaterializedRow
from ods_reader.model.style_model import StyleDefinition, StylesCatalog
from ods_reader.model.table_model import CompressedCell, CompressedColumn, CompressedRow, Table
from ods_reader.parser.style_resolver import CascadeResolver
from ods_reader.utils.errors import Diagnostic
from ods_reader.utils.logger import get_logger
from ods_reader.utils.text_extractor import PlainTextExtractor

LOGGER = get_logger(__name__)


def trim_trailing_empty_rows(rows: Sequence[CompressedRow]) -> List[CompressedRow]:
    """Return ``rows`` without the run of fully empty rows at the end."""
    end = len(rows)
    while end > 0 and rows[end - 1].is_empty():
        end -= 1
    return list(rows[:end])


def trim_trailing_empty_cells(cells: Sequence[CompressedCell]) -> List[CompressedCell]:
    end = len(cells)
    while end > 0 and cells[end - 1].is_empty():
        end -= 1
    return list(cells[:end])


def expanded_row_count(rows: Sequence[CompressedRow]) -> int:
    """Number of rows once repeats are expanded."""
    return sum(row.repeat_count for row in rows)


class ColumnCursor:
    """Walks the logical columns of a table across run-length encoded column entries."""

    def __init__(self, columns: Sequence[CompressedColumn]) -> None:
        self._columns = list(columns)
        self._ends = list(accumulate(column.repeat_count for column in self._columns))
        self.position = 0

    def column_at(self, index: int) -> Optional[CompressedColumn]:
        """Return the column entry covering logical column ``index``, if any."""
        if index < 0:
            return None
        slot = bisect_right(self._ends, index)
        if slot >= len(self._columns):
            return None
        return self._columns[slot]

    def current(self) -> Optional[CompressedColumn]:
        return self.column_at(self.position)

    def advance(self, count: int = 1) -> None:
        self.position += count


class GridMaterializer:
    """Builds materialized rows for a table using the document's style catalog."""

    def __init__(self, styles: StylesCatalog, extractor: Optional[PlainTextExtractor] = None) -> None:
        self._styles = styles
        self._extractor = extractor or PlainTextExtractor()

    def materialize(self, table: Table) -> MaterializedGrid:
        """Expand ``table`` into rows of styled cells.

        Trailing empty rows and, within each row, trailing empty cells are
        dropped. Repeated cells and rows are shared copies of a single
        resolved entry.
        """
        diagnostics: List[Diagnostic] = []
        resolver = CascadeResolver(diagnostics)
        rows: List[MaterializedRow] = []
        trimmed = trim_trailing_empty_rows(table.rows)
        LOGGER.debug("Materializing %d rows of table %r", expanded_row_count(trimmed), table.name)
        for compressed_row in trimmed:
            row = self._materialize_row(compressed_row, table.columns, resolver)
            rows.extend([row] * compressed_row.repeat_count)

        if diagnostics:
            LOGGER.debug("Table %r: %d attribute(s) fell back to defaults", table.name, len(diagnostics))
        return MaterializedGrid(rows=rows, diagnostics=diagnostics, name=table.name)

    def strings(self, table: Table) -> List[List[str]]:
        """Return only the cell texts of ``table``, with the same trimming and expansion rules."""
        grid: List[List[str]] = []
        for compressed_row in trim_trailing_empty_rows(table.rows):
            values: List[str] = []
            for cell in trim_trailing_empty_cells(compressed_row.cells):
                values.extend([self._cell_value(cell)] * cell.repeat_count)
            grid.extend(list(values) for _ in range(compressed_row.repeat_count))
        return grid

    def _materialize_row(
        self,
        compressed_row: CompressedRow,
        columns: Sequence[CompressedColumn],
        resolver: CascadeResolver,
    ) -> MaterializedRow:
        cursor = ColumnCursor(columns)
        row_style = self._styles.row_properties(compressed_row.style_name)
        cells: List[MaterializedCell] = []
        for cell in trim_trailing_empty_cells(compressed_row.cells):
            column = cursor.current()
            column_style = self._styles.column_properties(column.style_name if column else None)
            spanned_width = None
            if cell.column_span > 1:
                spanned_width = self._spanned_width(cursor, cell.column_span, resolver)
                column_style = replace(column_style, width=None)
            resolved = resolver.resolve(
                row_style,
                column_style,
                self._styles.get(cell.style_name),
                self._default_cell_style(column),
            )
            if spanned_width is not None:
                resolved = replace(resolved, width=spanned_width)

            materialized = replace(resolved, value=self._cell_value(cell))
            cells.extend([materialized] * cell.repeat_count)
            # One step per base cell, however many copies it expands to.
            cursor.advance()
        return MaterializedRow(cells=tuple(cells))

    def _spanned_width(self, cursor: ColumnCursor, span: int, resolver: CascadeResolver) -> float:
        total = 0.0
        for offset in range(span):
            column = cursor.column_at(cursor.position + offset)
            if column is None:
                continue
            total += resolver.column_width(self._styles.column_properties(column.style_name))
        return total

    def _default_cell_style(self, column: Optional[CompressedColumn]) -> StyleDefinition:
        if column is None:
            return StyleDefinition()
        return self._styles.get(column.default_cell_style_name)

    def _cell_value(self, cell: CompressedCell) -> str:
        if cell.covered:
            return ""
        return self._extractor.cell_text(cell)
