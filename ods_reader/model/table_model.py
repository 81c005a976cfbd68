"""Compressed table structures as declared in content.xml."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


def effective_repeat(count: int) -> int:
    """Repeat counts below one mean "not specified" and count as a single entry."""
    return count if count > 0 else 1


@dataclass(slots=True)
class Paragraph:
    """A ``text:p`` element, kept as its raw inline markup."""

    raw: str = ""


@dataclass(slots=True)
class CompressedCell:
    """A ``table:table-cell`` or ``table:covered-table-cell``."""

    paragraphs: List[Paragraph] = field(default_factory=list)
    value_type: Optional[str] = None
    value: Optional[str] = None
    formula: Optional[str] = None
    repeat: int = 1
    column_span: int = 1
    row_span: int = 1
    style_name: Optional[str] = None
    covered: bool = False

    @property
    def repeat_count(self) -> int:
        return effective_repeat(self.repeat)

    def is_empty(self) -> bool:
        if not self.paragraphs:
            return True
        return len(self.paragraphs) == 1 and self.paragraphs[0].raw == ""


@dataclass(slots=True)
class CompressedRow:
    """A ``table:table-row`` standing in for ``repeat`` identical rows."""

    cells: List[CompressedCell] = field(default_factory=list)
    repeat: int = 1
    style_name: Optional[str] = None

    @property
    def repeat_count(self) -> int:
        return effective_repeat(self.repeat)

    def is_empty(self) -> bool:
        return all(cell.is_empty() for cell in self.cells)


@dataclass(slots=True)
class CompressedColumn:
    """A ``table:table-column`` standing in for ``repeat`` identical columns."""

    repeat: int = 1
    style_name: Optional[str] = None
    default_cell_style_name: Optional[str] = None

    @property
    def repeat_count(self) -> int:
        return effective_repeat(self.repeat)


@dataclass(slots=True)
class Table:
    """A ``table:table`` with its run-length encoded columns and rows."""

    name: str = ""
    columns: List[CompressedColumn] = field(default_factory=list)
    rows: List[CompressedRow] = field(default_factory=list)

    def width(self) -> int:
        """Number of declared column entries, before repeat expansion."""
        return len(self.columns)

    def height(self) -> int:
        """Number of declared row entries, before repeat expansion."""
        return len(self.rows)
