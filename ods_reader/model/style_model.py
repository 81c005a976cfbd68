"""Style model captures OpenDocument automatic and common styles."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Mapping, Optional, TypeVar

_Record = TypeVar("_Record")


@dataclass(slots=True)
class ColumnProperties:
    """``style:table-column-properties``."""

    width: Optional[str] = None
    break_before: Optional[str] = None


@dataclass(slots=True)
class RowProperties:
    """``style:table-row-properties``."""

    height: Optional[str] = None
    break_before: Optional[str] = None
    use_optimal_height: Optional[bool] = None


@dataclass(slots=True)
class CellProperties:
    """``style:table-cell-properties``."""

    border_top: Optional[str] = None
    border_bottom: Optional[str] = None
    border_left: Optional[str] = None
    border_right: Optional[str] = None
    background_color: Optional[str] = None
    vertical_align: Optional[str] = None
    padding: Optional[str] = None


@dataclass(slots=True)
class TextProperties:
    """``style:text-properties``."""

    font_name: Optional[str] = None
    font_size: Optional[str] = None
    font_weight: Optional[str] = None
    color: Optional[str] = None


@dataclass(slots=True)
class ParagraphProperties:
    """``style:paragraph-properties``."""

    text_align: Optional[str] = None
    margin_left: Optional[str] = None


@dataclass(slots=True)
class StyleDefinition:
    """A named style; every property record is ``None`` when the style omits it."""

    name: str = ""
    family: Optional[str] = None
    parent_name: Optional[str] = None
    column_properties: Optional[ColumnProperties] = None
    row_properties: Optional[RowProperties] = None
    cell_properties: Optional[CellProperties] = None
    text_properties: Optional[TextProperties] = None
    paragraph_properties: Optional[ParagraphProperties] = None

    @property
    def cell(self) -> CellProperties:
        return self.cell_properties or CellProperties()

    @property
    def text(self) -> TextProperties:
        return self.text_properties or TextProperties()

    @property
    def paragraph(self) -> ParagraphProperties:
        return self.paragraph_properties or ParagraphProperties()


PROPERTY_RECORDS = (
    "column_properties",
    "row_properties",
    "cell_properties",
    "text_properties",
    "paragraph_properties",
)


def merge_record(parent: Optional[_Record], child: Optional[_Record]) -> Optional[_Record]:
    """Fill attributes the child leaves unset from the parent record."""
    if parent is None:
        return child
    if child is None:
        return type(parent)(**{f.name: getattr(parent, f.name) for f in fields(parent)})
    values = {}
    for f in fields(child):
        own = getattr(child, f.name)
        values[f.name] = own if own is not None else getattr(parent, f.name)
    return type(child)(**values)


class StylesCatalog:
    """Collection of style definitions keyed by name.

    When several styles share a name the first one declared wins. Unknown
    names resolve to an empty definition, meaning "apply defaults".
    """

    def __init__(self, styles: Iterable[StyleDefinition] = ()) -> None:
        self._ordered: List[StyleDefinition] = list(styles)
        self._by_name: Dict[str, StyleDefinition] = {}
        for style in self._ordered:
            self._by_name.setdefault(style.name, style)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def get(self, name: Optional[str]) -> StyleDefinition:
        """Return the style called ``name`` or an empty definition."""
        if name is None:
            return StyleDefinition()
        return self._by_name.get(name) or StyleDefinition()

    def column_properties(self, name: Optional[str]) -> ColumnProperties:
        return self.get(name).column_properties or ColumnProperties()

    def row_properties(self, name: Optional[str]) -> RowProperties:
        return self.get(name).row_properties or RowProperties()

    def all(self) -> Mapping[str, StyleDefinition]:
        """Return a copy of the name to style mapping."""
        return dict(self._by_name)

    def declared(self) -> List[StyleDefinition]:
        """Return every style in declaration order, duplicates included."""
        return list(self._ordered)
