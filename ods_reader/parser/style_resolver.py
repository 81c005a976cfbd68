"""Cascade row, column, cell and column-default styles into one cell style."""
from __future__ import annotations

from typing import Callable, List, Optional, TypeVar

from ods_reader.model.elements import HorizontalAlign, MaterializedCell, Rgba, VerticalAlign
from ods_reader.model.style_model import ColumnProperties, RowProperties, StyleDefinition
from ods_reader.utils.colors import parse_hex_color
from ods_reader.utils.errors import AttributeFormatError, Diagnostic, ErrorKind
from ods_reader.utils.logger import get_logger
from ods_reader.utils.units import size_to_points, to_mm

LOGGER = get_logger(__name__)

T = TypeVar("T")

HORIZONTAL_ALIGNS = {
    "start": HorizontalAlign.START,
    "left": HorizontalAlign.START,
    "justify": HorizontalAlign.START,
    "center": HorizontalAlign.CENTER,
    "end": HorizontalAlign.END,
    "right": HorizontalAlign.END,
    "automatic": HorizontalAlign.UNSET,
}
VERTICAL_ALIGNS = {
    "top": VerticalAlign.TOP,
    "middle": VerticalAlign.MIDDLE,
    "bottom": VerticalAlign.BOTTOM,
    "automatic": VerticalAlign.UNSET,
}


def _pick(own: Optional[str], fallback: Optional[str]) -> Optional[str]:
    return own if own else fallback


class CascadeResolver:
    """Resolves the visual attributes of one cell.

    Each attribute group is decided on its own: width comes from the column,
    height from the row, everything else from the cell's style and otherwise
    from the column's default cell style. A literal that fails to parse leaves
    its attribute at the zero value and is recorded in ``diagnostics``.
    """

    def __init__(self, diagnostics: Optional[List[Diagnostic]] = None) -> None:
        self.diagnostics: List[Diagnostic] = diagnostics if diagnostics is not None else []

    def resolve(
        self,
        row: Optional[RowProperties],
        column: Optional[ColumnProperties],
        cell: Optional[StyleDefinition],
        default_cell: Optional[StyleDefinition],
    ) -> MaterializedCell:
        """Return a cell carrying the resolved style and an empty value."""
        row = row or RowProperties()
        column = column or ColumnProperties()
        cell = cell or StyleDefinition()
        default_cell = default_cell or StyleDefinition()

        if cell.text.font_name:
            font = cell.text
        else:
            font = default_cell.text

        return MaterializedCell(
            width=self._convert("width", column.width, to_mm, 0.0),
            height=self._convert("height", row.height, to_mm, 0.0),
            background_color=self._convert(
                "background_color",
                _pick(cell.cell.background_color, default_cell.cell.background_color),
                parse_hex_color,
                Rgba(0, 0, 0, 255),
            ),
            font_color=self._convert(
                "font_color",
                _pick(cell.text.color, default_cell.text.color),
                parse_hex_color,
                Rgba(0, 0, 0, 255),
            ),
            font_name=font.font_name or "",
            font_weight=font.font_weight or "",
            font_size=self._convert("font_size", font.font_size, size_to_points, 0.0),
            align=self._align(
                "align",
                _pick(cell.paragraph.text_align, default_cell.paragraph.text_align),
                HORIZONTAL_ALIGNS,
                HorizontalAlign.UNSET,
            ),
            vertical_align=self._align(
                "vertical_align",
                _pick(cell.cell.vertical_align, default_cell.cell.vertical_align),
                VERTICAL_ALIGNS,
                VerticalAlign.UNSET,
            ),
            padding=self._convert("padding", _pick(cell.cell.padding, default_cell.cell.padding), to_mm, 0.0),
        )

    def column_width(self, column: Optional[ColumnProperties]) -> float:
        """Width of a single column in millimetres, 0.0 when unset or malformed."""
        return self._convert("width", column.width if column else None, to_mm, 0.0)

    def _convert(self, attribute: str, literal: Optional[str], parse: Callable[[Optional[str]], T], zero: T) -> T:
        try:
            return parse(literal)
        except AttributeFormatError as exc:
            self._record(Diagnostic.from_error(attribute, exc))
            return zero

    def _align(self, attribute: str, literal: Optional[str], table: dict, unset: T) -> T:
        if not literal:
            return unset
        if literal in table:
            return table[literal]
        error = AttributeFormatError(ErrorKind.ALIGN, literal, "unknown alignment")
        self._record(Diagnostic.from_error(attribute, error))
        return unset

    def _record(self, diagnostic: Diagnostic) -> None:
        LOGGER.debug("Falling back to zero value for %s: %s", diagnostic.attribute, diagnostic.message)
        self.diagnostics.append(diagnostic)


def consolidate_styles(
    row: Optional[RowProperties],
    column: Optional[ColumnProperties],
    cell: Optional[StyleDefinition],
    default_cell: Optional[StyleDefinition],
) -> tuple[MaterializedCell, List[Diagnostic]]:
    """Resolve one cell's style, returning the diagnostics of that call alongside."""
    resolver = CascadeResolver()
    return resolver.resolve(row, column, cell, default_cell), resolver.diagnostics
