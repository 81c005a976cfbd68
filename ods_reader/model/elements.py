"""Materialized cells and rows handed to consumers of a spreadsheet table."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, NamedTuple, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ods_reader.utils.errors import Diagnostic


class Rgba(NamedTuple):
    """8-bit RGBA color."""

    r: int
    g: int
    b: int
    a: int = 255


class HorizontalAlign(str, Enum):
    START = "start"
    CENTER = "center"
    END = "end"
    UNSET = ""


class VerticalAlign(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"
    UNSET = ""


@dataclass(frozen=True, slots=True)
class MaterializedCell:
    """One grid position with its text and resolved visual attributes.

    Lengths (``width``, ``height``, ``padding``) are in millimetres and
    ``font_size`` is in points.
    """

    value: str = ""
    width: float = 0.0
    height: float = 0.0
    padding: float = 0.0
    font_name: str = ""
    font_size: float = 0.0
    font_weight: str = ""
    font_color: Rgba = Rgba(0, 0, 0, 255)
    background_color: Rgba = Rgba(0, 0, 0, 255)
    align: HorizontalAlign = HorizontalAlign.UNSET
    vertical_align: VerticalAlign = VerticalAlign.UNSET

    def is_empty(self) -> bool:
        return self.value == ""


@dataclass(frozen=True, slots=True)
class MaterializedRow:
    """Ordered cells of one row; index N is the same logical column in every row."""

    cells: Tuple[MaterializedCell, ...] = ()

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[MaterializedCell]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> MaterializedCell:
        return self.cells[index]

    def is_empty(self) -> bool:
        return all(cell.is_empty() for cell in self.cells)

    def width_in_mm(self) -> float:
        """Sum cell widths, ignoring the run of empty cells at the start of the row."""
        total = 0.0
        leading = True
        for cell in self.cells:
            if cell.is_empty() and leading:
                continue
            leading = False
            total += cell.width
        return total

    def height_in_mm(self) -> float:
        """Row height taken from its first cell, or -1 for a row without cells."""
        if self.cells:
            return self.cells[0].height
        return -1.0

    def values(self) -> List[str]:
        return [cell.value for cell in self.cells]


@dataclass(slots=True)
class MaterializedGrid:
    """Rows produced for one table, plus the attribute errors met on the way."""

    rows: List[MaterializedRow]
    diagnostics: List["Diagnostic"] = field(default_factory=list)
    name: str = ""

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[MaterializedRow]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> MaterializedRow:
        return self.rows[index]

    def values(self) -> List[List[str]]:
        return [row.values() for row in self.rows]
