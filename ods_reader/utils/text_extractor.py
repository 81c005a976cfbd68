"""
Plain-text extraction for spreadsheet cells.

Paragraphs are stored as the raw inline markup of ``text:p``. Most cells hold
plain character data and are returned as-is; anything containing markup is
decoded, expanding ``text:s`` space runs and dropping every other element
while keeping the text nested inside it.
"""

from typing import Iterable, List, Optional
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

from ods_reader.model.table_model import CompressedCell, Paragraph
from ods_reader.utils.xml_utils import Namespaces, local_name, parse_xml

MARKUP_CHARS = ("<", "&")

_WRAPPER_OPEN = "<wrapper {}>".format(
    " ".join(f'xmlns:{prefix}="{uri}"' for prefix, uri in Namespaces.ODF.items())
)
_WRAPPER_CLOSE = "</wrapper>"


def inner_xml(element: ET.Element) -> str:
    """Serialize an element's content (text and children) without the element itself."""
    parts = [escape(element.text or "")]
    for child in element:
        parts.append(ET.tostring(child, encoding="unicode"))
    return "".join(parts)


class PlainTextExtractor:
    """Turns raw paragraph markup into displayed text."""

    # Element carrying a run of spaces and its count attribute.
    SPACE_TAG = "s"
    COUNT_ATTR = "c"

    def __init__(self, paragraph_separator: str = "\n"):
        """Initialize the extractor.

        Args:
            paragraph_separator: Text placed between consecutive paragraphs
                                 of one cell.
        """
        self.paragraph_separator = paragraph_separator

    def cell_text(self, cell: CompressedCell) -> str:
        """Return the displayed text of a cell."""
        return self.join_paragraphs(cell.paragraphs)

    def join_paragraphs(self, paragraphs: Iterable[Paragraph]) -> str:
        return self.paragraph_separator.join(self.paragraph_text(p.raw) for p in paragraphs)

    def paragraph_text(self, raw: str) -> str:
        """Return the text of one paragraph's raw inline markup."""
        if not any(char in raw for char in MARKUP_CHARS):
            return raw

        root = parse_xml(_WRAPPER_OPEN + raw + _WRAPPER_CLOSE, "paragraph").getroot()
        # Scratch buffer local to this call
        buffer: List[str] = []
        self._write_content(root, buffer)
        return "".join(buffer)

    def _write_content(self, element: ET.Element, buffer: List[str]) -> None:
        if element.text:
            buffer.append(element.text)
        for child in element:
            if local_name(child.tag) == self.SPACE_TAG:
                buffer.append(" " * self._space_count(child))
            else:
                self._write_content(child, buffer)
            if child.tail:
                buffer.append(child.tail)

    def _space_count(self, element: ET.Element) -> int:
        raw_count = self._find_attr(element, self.COUNT_ATTR)
        if raw_count is None:
            return 1
        try:
            return int(raw_count)
        except ValueError:
            return 1

    def _find_attr(self, element: ET.Element, name: str) -> Optional[str]:
        for key, value in element.attrib.items():
            if local_name(key) == name:
                return value
        return None


_DEFAULT_EXTRACTOR = PlainTextExtractor()


def cell_plain_text(cell: CompressedCell) -> str:
    """Convenience function returning a cell's text with newline-separated paragraphs."""
    return _DEFAULT_EXTRACTOR.cell_text(cell)


def paragraph_plain_text(raw: str) -> str:
    return _DEFAULT_EXTRACTOR.paragraph_text(raw)
