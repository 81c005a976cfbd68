"""Helper functions to work with OpenDocument namespaces and XML parsing."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
from xml.etree import ElementTree as ET

from ods_reader.utils.errors import ContentError


@dataclass(frozen=True)
class Namespaces:
    """OpenDocument namespace prefixes used across parsers."""

    ODF: Dict[str, str] = None  # type: ignore[assignment]
    MANIFEST: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.ODF = {  # type: ignore[attr-defined]
    "office": "urn:oasis:names:tc:opendocument:xmlns:office:1.0",
    "style": "urn:oasis:names:tc:opendocument:xmlns:style:1.0",
    "table": "urn:oasis:names:tc:opendocument:xmlns:table:1.0",
    "text": "urn:oasis:names:tc:opendocument:xmlns:text:1.0",
    "fo": "urn:oasis:names:tc:opendocument:xmlns:xsl-fo-compatible:1.0",
}
Namespaces.MANIFEST = {  # type: ignore[attr-defined]
    "manifest": "urn:oasis:names:tc:opendocument:xmlns:manifest:1.0",
}

for _prefix, _uri in Namespaces.ODF.items():
    ET.register_namespace(_prefix, _uri)


def parse_xml(data: bytes | str, part_name: str = "<xml>") -> ET.ElementTree:
    """Parse XML from raw bytes, reporting malformed input as a content error."""
    try:
        return ET.ElementTree(ET.fromstring(data))
    except ET.ParseError as exc:
        raise ContentError(f"Malformed XML in {part_name}: {exc}") from exc


def qualify(name: str) -> str:
    """Expand ``prefix:local`` into ElementTree's ``{uri}local`` notation."""
    prefix, local = name.split(":", 1)
    namespace = Namespaces.ODF.get(prefix) or Namespaces.MANIFEST[prefix]
    return f"{{{namespace}}}{local}"


def local_name(tag: str) -> str:
    return tag.split("}", 1)[-1]


def get_attr(element: ET.Element, name: str) -> Optional[str]:
    """Return a namespaced attribute value, or ``None`` when absent."""
    return element.attrib.get(qualify(name))
