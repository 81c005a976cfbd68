"""Extract style definitions from content.xml and styles.xml and produce a catalog."""
from __future__ import annotations

from typing import Dict, List, Optional
from xml.etree import ElementTree as ET

from ods_reader.model.style_model import (
    PROPERTY_RECORDS,
    CellProperties,
    ColumnProperties,
    ParagraphProperties,
    RowProperties,
    StyleDefinition,
    StylesCatalog,
    TextProperties,
    merge_record,
)
from ods_reader.utils.logger import get_logger
from ods_reader.utils.xml_utils import Namespaces, get_attr

LOGGER = get_logger(__name__)

_BORDER_SIDES = ("border_top", "border_bottom", "border_left", "border_right")


class StylesParser:
    """Parse ``style:style`` records and resolve ``style:parent-style-name`` inheritance."""

    def __init__(self, content_xml: ET.ElementTree, styles_xml: Optional[ET.ElementTree] = None) -> None:
        self._content_xml = content_xml
        self._styles_xml = styles_xml

    def parse(self) -> StylesCatalog:
        """Parse the XML trees and return a resolved catalog."""
        raw_styles = self._collect_styles()
        return StylesCatalog(self._resolve_inheritance(raw_styles))

    def _collect_styles(self) -> List[StyleDefinition]:
        # Automatic styles come first so they win name clashes with common styles.
        styles: List[StyleDefinition] = []
        styles.extend(self._styles_in(self._content_xml, "office:automatic-styles"))
        if self._styles_xml is not None:
            styles.extend(self._styles_in(self._styles_xml, "office:styles"))
        LOGGER.debug("Collected %d style definitions", len(styles))
        return styles

    def _styles_in(self, tree: ET.ElementTree, container: str) -> List[StyleDefinition]:
        section = tree.getroot().find(container, Namespaces.ODF)
        if section is None:
            return []
        return [self.parse_style(style_el) for style_el in section.findall("style:style", Namespaces.ODF)]

    def parse_style(self, style_el: ET.Element) -> StyleDefinition:
        return StyleDefinition(
            name=get_attr(style_el, "style:name") or "",
            family=get_attr(style_el, "style:family"),
            parent_name=get_attr(style_el, "style:parent-style-name"),
            column_properties=self._column_properties(style_el),
            row_properties=self._row_properties(style_el),
            cell_properties=self._cell_properties(style_el),
            text_properties=self._text_properties(style_el),
            paragraph_properties=self._paragraph_properties(style_el),
        )

    def _column_properties(self, style_el: ET.Element) -> Optional[ColumnProperties]:
        props = style_el.find("style:table-column-properties", Namespaces.ODF)
        if props is None:
            return None
        return ColumnProperties(
            width=get_attr(props, "style:column-width"),
            break_before=get_attr(props, "fo:break-before"),
        )

    def _row_properties(self, style_el: ET.Element) -> Optional[RowProperties]:
        props = style_el.find("style:table-row-properties", Namespaces.ODF)
        if props is None:
            return None
        optimal = get_attr(props, "style:use-optimal-row-height")
        return RowProperties(
            height=get_attr(props, "style:row-height"),
            break_before=get_attr(props, "fo:break-before"),
            use_optimal_height=None if optimal is None else optimal == "true",
        )

    def _cell_properties(self, style_el: ET.Element) -> Optional[CellProperties]:
        props = style_el.find("style:table-cell-properties", Namespaces.ODF)
        if props is None:
            return None
        cell = CellProperties(
            border_top=get_attr(props, "fo:border-top"),
            border_bottom=get_attr(props, "fo:border-bottom"),
            border_left=get_attr(props, "fo:border-left"),
            border_right=get_attr(props, "fo:border-right"),
            background_color=get_attr(props, "fo:background-color"),
            vertical_align=get_attr(props, "style:vertical-align"),
            padding=get_attr(props, "fo:padding"),
        )
        border = get_attr(props, "fo:border")
        if border is not None:
            for side in _BORDER_SIDES:
                if getattr(cell, side) is None:
                    setattr(cell, side, border)
        return cell

    def _text_properties(self, style_el: ET.Element) -> Optional[TextProperties]:
        props = style_el.find("style:text-properties", Namespaces.ODF)
        if props is None:
            return None
        return TextProperties(
            font_name=get_attr(props, "style:font-name"),
            font_size=get_attr(props, "fo:font-size"),
            font_weight=get_attr(props, "fo:font-weight"),
            color=get_attr(props, "fo:color"),
        )

    def _paragraph_properties(self, style_el: ET.Element) -> Optional[ParagraphProperties]:
        props = style_el.find("style:paragraph-properties", Namespaces.ODF)
        if props is None:
            return None
        return ParagraphProperties(
            text_align=get_attr(props, "fo:text-align"),
            margin_left=get_attr(props, "fo:margin-left"),
        )

    def _resolve_inheritance(self, raw_styles: List[StyleDefinition]) -> List[StyleDefinition]:
        by_name: Dict[str, StyleDefinition] = {}
        for style in raw_styles:
            by_name.setdefault(style.name, style)
        resolved: Dict[int, StyleDefinition] = {}

        def resolve(style: StyleDefinition, stack: Optional[List[str]] = None) -> StyleDefinition:
            if id(style) in resolved:
                return resolved[id(style)]
            if stack is None:
                stack = []
            parent = by_name.get(style.parent_name) if style.parent_name else None
            if parent is None or style.name in stack or parent is style:
                return style
            stack.append(style.name)
            parent_style = resolve(parent, stack)
            stack.pop()
            merged = StyleDefinition(name=style.name, family=style.family, parent_name=style.parent_name)
            for record in PROPERTY_RECORDS:
                setattr(merged, record, merge_record(getattr(parent_style, record), getattr(style, record)))
            resolved[id(style)] = merged
            return merged

        return [resolve(style) for style in raw_styles]
