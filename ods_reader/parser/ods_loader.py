"""ODS package loader responsible for unpacking the XML parts of a spreadsheet."""
from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, Mapping, Optional
from xml.etree import ElementTree as ET

from ods_reader.utils.errors import PackageError
from ods_reader.utils.logger import get_logger
from ods_reader.utils.xml_utils import Namespaces, parse_xml, qualify

LOGGER = get_logger(__name__)

SPREADSHEET_MIME_TYPE = "application/vnd.oasis.opendocument.spreadsheet"
MIMETYPE_PATH = "mimetype"
MANIFEST_PATH = "META-INF/manifest.xml"
CONTENT_XML_PATH = "content.xml"
STYLES_XML_PATH = "styles.xml"


@dataclass(slots=True)
class OdsPackage:
    """Container for the parts extracted from an ODS archive."""

    raw_parts: Mapping[str, bytes]
    xml_cache: Dict[str, ET.ElementTree] = field(default_factory=dict)
    mime_type: Optional[str] = None

    @classmethod
    def load(cls, ods_path: Path | str) -> "OdsPackage":
        """Open an ODS archive from disk and check that it is a spreadsheet."""
        path = Path(ods_path)
        try:
            with zipfile.ZipFile(path) as ods_zip:
                parts = {name: ods_zip.read(name) for name in ods_zip.namelist()}
        except zipfile.BadZipFile as exc:
            raise PackageError(f"{path.name} is not a zip package") from exc

        LOGGER.debug("Loaded %d parts from %s", len(parts), path.name)
        return cls.from_parts(parts)

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "OdsPackage":
        """Read an already opened ODS archive (any seekable binary file object)."""
        try:
            with zipfile.ZipFile(stream) as ods_zip:
                parts = {name: ods_zip.read(name) for name in ods_zip.namelist()}
        except zipfile.BadZipFile as exc:
            raise PackageError("stream is not a zip package") from exc

        LOGGER.debug("Loaded %d parts from stream", len(parts))
        return cls.from_parts(parts)

    @classmethod
    def from_parts(cls, parts: Mapping[str, bytes]) -> "OdsPackage":
        package = cls(raw_parts=parts)
        package.mime_type = package._detect_mime_type()
        if package.mime_type != SPREADSHEET_MIME_TYPE:
            raise PackageError(f"not a spreadsheet (media type {package.mime_type!r})")
        return package

    # ------------------------------------------------------------------
    # Public helpers
    def require_content_xml(self) -> ET.ElementTree:
        tree = self.get_xml_part(CONTENT_XML_PATH)
        if tree is None:
            raise PackageError("Content part missing from package")
        return tree

    def get_styles_xml(self) -> Optional[ET.ElementTree]:
        return self.get_xml_part(STYLES_XML_PATH)

    def get_xml_part(self, name: str) -> Optional[ET.ElementTree]:
        if name in self.xml_cache:
            return self.xml_cache[name]
        data = self.raw_parts.get(name)
        if data is None:
            return None
        tree = parse_xml(data, name)
        self.xml_cache[name] = tree
        return tree

    # ------------------------------------------------------------------
    # Internal bootstrap
    def _detect_mime_type(self) -> Optional[str]:
        data = self.raw_parts.get(MIMETYPE_PATH)
        if data is not None:
            return data.decode("ascii", errors="replace").strip()

        manifest = self.get_xml_part(MANIFEST_PATH)
        if manifest is None:
            return None
        for entry in manifest.getroot().findall("manifest:file-entry", Namespaces.MANIFEST):
            if entry.attrib.get(qualify("manifest:full-path")) == "/":
                return entry.attrib.get(qualify("manifest:media-type"))
        return None
