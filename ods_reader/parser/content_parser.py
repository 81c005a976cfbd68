"""Parse content.xml into compressed tables and a style catalog."""
from __future__ import annotations

from typing import Iterator, List, Optional
from xml.etree import ElementTree as ET

from ods_reader.model.document_model import OdsDocument
from ods_reader.model.table_model import (
    CompressedCell,
    CompressedColumn,
    CompressedRow,
    Paragraph,
    Table,
)
from ods_reader.parser.styles_parser import StylesParser
from ods_reader.utils.errors import ContentError
from ods_reader.utils.logger import get_logger
from ods_reader.utils.text_extractor import inner_xml
from ods_reader.utils.xml_utils import Namespaces, get_attr, local_name

LOGGER = get_logger(__name__)

ROW_GROUPS = frozenset({"table-header-rows", "table-rows", "table-row-group"})
COLUMN_GROUPS = frozenset({"table-header-columns", "table-columns", "table-column-group"})
CELL_TAGS = frozenset({"table-cell", "covered-table-cell"})
VALUE_ATTRS = (
    "office:value",
    "office:date-value",
    "office:time-value",
    "office:boolean-value",
    "office:string-value",
)


class ContentParser:
    """Transforms spreadsheet body XML into model elements."""

    def __init__(self, content_xml: ET.ElementTree, styles_xml: Optional[ET.ElementTree] = None) -> None:
        self._content_xml = content_xml
        self._styles_xml = styles_xml

    def parse(self) -> OdsDocument:
        """Decode every table of the spreadsheet body plus the styles it references."""
        root = self._content_xml.getroot()
        if local_name(root.tag) != "document-content":
            raise ContentError(f"Unexpected root element {local_name(root.tag)!r} in content.xml")

        styles = StylesParser(self._content_xml, self._styles_xml).parse()
        spreadsheet = root.find("office:body/office:spreadsheet", Namespaces.ODF)
        if spreadsheet is None:
            LOGGER.warning("content.xml has no spreadsheet body")
            return OdsDocument(tables=[], styles=styles)

        tables = [self._parse_table(table_el) for table_el in spreadsheet.findall("table:table", Namespaces.ODF)]
        LOGGER.debug("Parsed %d tables and %d styles", len(tables), len(styles))
        return OdsDocument(tables=tables, styles=styles)

    def _parse_table(self, table_el: ET.Element) -> Table:
        columns = [self._parse_column(col_el) for col_el in self._walk(table_el, "table-column", COLUMN_GROUPS)]
        rows = [self._parse_row(row_el) for row_el in self._walk(table_el, "table-row", ROW_GROUPS)]
        return Table(name=get_attr(table_el, "table:name") or "", columns=columns, rows=rows)

    def _walk(self, parent: ET.Element, tag: str, groups: frozenset) -> Iterator[ET.Element]:
        """Yield ``tag`` children in document order, descending into grouping elements."""
        for child in parent:
            name = local_name(child.tag)
            if name == tag:
                yield child
            elif name in groups:
                yield from self._walk(child, tag, groups)

    def _parse_column(self, column_el: ET.Element) -> CompressedColumn:
        return CompressedColumn(
            repeat=self._int_attr(column_el, "table:number-columns-repeated", 1),
            style_name=get_attr(column_el, "table:style-name"),
            default_cell_style_name=get_attr(column_el, "table:default-cell-style-name"),
        )

    def _parse_row(self, row_el: ET.Element) -> CompressedRow:
        cells: List[CompressedCell] = []
        for child in row_el:
            if local_name(child.tag) in CELL_TAGS:
                cells.append(self._parse_cell(child))
            else:
                LOGGER.debug("Skipping row child element: %s", local_name(child.tag))
        return CompressedRow(
            cells=cells,
            repeat=self._int_attr(row_el, "table:number-rows-repeated", 1),
            style_name=get_attr(row_el, "table:style-name"),
        )

    def _parse_cell(self, cell_el: ET.Element) -> CompressedCell:
        paragraphs = [Paragraph(raw=inner_xml(p_el)) for p_el in cell_el.findall("text:p", Namespaces.ODF)]
        return CompressedCell(
            paragraphs=paragraphs,
            value_type=get_attr(cell_el, "office:value-type"),
            value=self._cell_value(cell_el),
            formula=get_attr(cell_el, "table:formula"),
            repeat=self._int_attr(cell_el, "table:number-columns-repeated", 1),
            column_span=self._int_attr(cell_el, "table:number-columns-spanned", 1),
            row_span=self._int_attr(cell_el, "table:number-rows-spanned", 1),
            style_name=get_attr(cell_el, "table:style-name"),
            covered=local_name(cell_el.tag) == "covered-table-cell",
        )

    def _cell_value(self, cell_el: ET.Element) -> Optional[str]:
        for attr in VALUE_ATTRS:
            value = get_attr(cell_el, attr)
            if value is not None:
                return value
        return None

    def _int_attr(self, element: ET.Element, name: str, default: int) -> int:
        value = get_attr(element, name)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise ContentError(f"{name} must be an integer, got {value!r}") from exc
