"""
Integration tests for the complete ODS reading pipeline.

Tests the end-to-end flow from a zipped package to materialized grids and
rendered outputs.
"""

import io
import json
import tempfile
import unittest
import zipfile
from pathlib import Path

from ods_reader.main import build_document, main, materialize_tables, parse_package, render_outputs
from ods_reader.model.elements import HorizontalAlign, Rgba, VerticalAlign
from ods_reader.parser.grid_materializer import GridMaterializer
from ods_reader.parser.ods_loader import SPREADSHEET_MIME_TYPE, OdsPackage
from ods_reader.utils.debug import DebugDumper
from ods_reader.utils.errors import ContentError, PackageError

NAMESPACES = (
    'xmlns:office="urn:oasis:names:tc:opendocument:xmlns:office:1.0" '
    'xmlns:style="urn:oasis:names:tc:opendocument:xmlns:style:1.0" '
    'xmlns:table="urn:oasis:names:tc:opendocument:xmlns:table:1.0" '
    'xmlns:text="urn:oasis:names:tc:opendocument:xmlns:text:1.0" '
    'xmlns:fo="urn:oasis:names:tc:opendocument:xmlns:xsl-fo-compatible:1.0"'
)

CONTENT_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<office:document-content {NAMESPACES}>
  <office:automatic-styles>
    <style:style style:name="co1" style:family="table-column">
      <style:table-column-properties style:column-width="2cm"/>
    </style:style>
    <style:style style:name="co2" style:family="table-column">
      <style:table-column-properties style:column-width="72pt"/>
    </style:style>
    <style:style style:name="ro1" style:family="table-row">
      <style:table-row-properties style:row-height="0.5cm"/>
    </style:style>
    <style:style style:name="ce1" style:family="table-cell" style:parent-style-name="Default">
      <style:table-cell-properties fo:background-color="#ffff00" style:vertical-align="middle"/>
      <style:paragraph-properties fo:text-align="center"/>
      <style:text-properties fo:font-weight="bold" fo:color="#f00"/>
    </style:style>
    <style:style style:name="ce2" style:family="table-cell">
      <style:table-cell-properties fo:background-color="not-a-color"/>
    </style:style>
  </office:automatic-styles>
  <office:body>
    <office:spreadsheet>
      <table:table table:name="Sheet1">
        <table:table-column table:style-name="co1" table:number-columns-repeated="2" table:default-cell-style-name="Default"/>
        <table:table-column table:style-name="co2" table:number-columns-repeated="1021"/>
        <table:table-row table:style-name="ro1">
          <table:table-cell table:style-name="ce1"><text:p>A</text:p></table:table-cell>
          <table:table-cell office:value-type="float" office:value="1"><text:p>1</text:p></table:table-cell>
          <table:table-cell><text:p>A cell containing</text:p><text:p>more than one line.</text:p></table:table-cell>
          <table:table-cell table:number-columns-repeated="1020"/>
        </table:table-row>
        <table:table-row table:style-name="ro1">
          <table:table-cell table:number-columns-spanned="2"><text:p>cell spanning two columns</text:p></table:table-cell>
          <table:covered-table-cell/>
          <table:table-cell table:style-name="ce2"><text:p>Cell with<text:s text:c="2"/>styles</text:p></table:table-cell>
        </table:table-row>
        <table:table-row table:style-name="ro1" table:number-rows-repeated="2">
          <table:table-cell table:number-columns-repeated="3"><text:p>same content</text:p></table:table-cell>
        </table:table-row>
        <table:table-row table:style-name="ro1" table:number-rows-repeated="1048570">
          <table:table-cell table:number-columns-repeated="1023"/>
        </table:table-row>
      </table:table>
    </office:spreadsheet>
  </office:body>
</office:document-content>
"""

STYLES_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<office:document-styles {NAMESPACES}>
  <office:styles>
    <style:style style:name="Default" style:family="table-cell">
      <style:text-properties style:font-name="Liberation Sans" fo:font-size="10pt"/>
    </style:style>
  </office:styles>
</office:document-styles>
"""

MANIFEST_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<manifest:manifest xmlns:manifest="urn:oasis:names:tc:opendocument:xmlns:manifest:1.0">
  <manifest:file-entry manifest:full-path="/" manifest:media-type="{SPREADSHEET_MIME_TYPE}"/>
  <manifest:file-entry manifest:full-path="content.xml" manifest:media-type="text/xml"/>
</manifest:manifest>
"""


def build_ods(parts=None, mimetype=SPREADSHEET_MIME_TYPE) -> bytes:
    """Create an ODS archive in memory."""
    if parts is None:
        parts = {"content.xml": CONTENT_XML, "styles.xml": STYLES_XML}
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        if mimetype is not None:
            archive.writestr("mimetype", mimetype)
        for name, data in parts.items():
            archive.writestr(name, data)
    return buffer.getvalue()


class PackageLoaderTest(unittest.TestCase):
    """Container and media type checks."""

    def test_load_from_stream(self):
        package = OdsPackage.from_stream(io.BytesIO(build_ods()))
        self.assertEqual(package.mime_type, SPREADSHEET_MIME_TYPE)
        self.assertIsNotNone(package.require_content_xml())
        self.assertIsNotNone(package.get_styles_xml())

    def test_load_from_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sample.ods"
            path.write_bytes(build_ods())
            document = build_document(path)
        self.assertEqual(document.mime_type, SPREADSHEET_MIME_TYPE)
        self.assertEqual(document.tables[0].name, "Sheet1")

    def test_not_a_zip(self):
        with self.assertRaises(PackageError):
            OdsPackage.from_stream(io.BytesIO(b"plain text, not an archive"))

    def test_not_a_spreadsheet(self):
        data = build_ods(mimetype="application/vnd.oasis.opendocument.text")
        with self.assertRaises(PackageError):
            OdsPackage.from_stream(io.BytesIO(data))

    def test_manifest_media_type_fallback(self):
        data = build_ods({"content.xml": CONTENT_XML, "META-INF/manifest.xml": MANIFEST_XML}, mimetype=None)
        package = OdsPackage.from_stream(io.BytesIO(data))
        self.assertEqual(package.mime_type, SPREADSHEET_MIME_TYPE)
        self.assertIsNone(package.get_styles_xml())

    def test_missing_media_type(self):
        with self.assertRaises(PackageError):
            OdsPackage.from_stream(io.BytesIO(build_ods({"content.xml": CONTENT_XML}, mimetype=None)))

    def test_missing_content(self):
        package = OdsPackage.from_stream(io.BytesIO(build_ods({"styles.xml": STYLES_XML})))
        with self.assertRaises(PackageError):
            parse_package(package)

    def test_malformed_content_aborts_parse(self):
        package = OdsPackage.from_stream(io.BytesIO(build_ods({"content.xml": "<office:document-content"})))
        with self.assertRaises(ContentError):
            parse_package(package)


class PipelineTest(unittest.TestCase):
    """Decoded documents materialize into the expected grids."""

    def setUp(self):
        self.document = parse_package(OdsPackage.from_stream(io.BytesIO(build_ods())))
        self.table = self.document.tables[0]

    def test_text_grid(self):
        strings = GridMaterializer(self.document.styles).strings(self.table)
        self.assertEqual(strings, [
            ["A", "1", "A cell containing\nmore than one line."],
            ["cell spanning two columns", "", "Cell with  styles"],
            ["same content"] * 3,
            ["same content"] * 3,
        ])

    def test_materialized_grid(self):
        grid = GridMaterializer(self.document.styles).materialize(self.table)
        self.assertEqual(len(grid), 4)
        self.assertEqual(grid.name, "Sheet1")

        first = grid[0][0]
        self.assertEqual(first.value, "A")
        self.assertAlmostEqual(first.width, 20.0)
        self.assertAlmostEqual(first.height, 5.0)
        self.assertEqual(first.background_color, Rgba(255, 255, 0, 255))
        self.assertEqual(first.font_color, Rgba(255, 0, 0, 255))
        self.assertEqual(first.font_name, "Liberation Sans")
        self.assertEqual(first.font_weight, "bold")
        self.assertEqual(first.font_size, 10.0)
        self.assertIs(first.align, HorizontalAlign.CENTER)
        self.assertIs(first.vertical_align, VerticalAlign.MIDDLE)

        # Column default cell style supplies the font of unstyled cells.
        self.assertEqual(grid[0][1].font_name, "Liberation Sans")
        self.assertAlmostEqual(grid[0][2].width, 25.4, delta=1e-6)
        self.assertEqual(grid[0][2].font_name, "")

        spanned = grid[1]
        self.assertAlmostEqual(spanned[0].width, 40.0)
        self.assertEqual(spanned[1].value, "")
        self.assertEqual(spanned[2].value, "Cell with  styles")
        self.assertEqual(spanned[2].background_color, Rgba(0, 0, 0, 255))

        self.assertIs(grid[2], grid[3])
        self.assertEqual([d.literal for d in grid.diagnostics], ["not-a-color"])

    def test_materialize_all_tables(self):
        grids = materialize_tables(self.document)
        self.assertEqual(len(grids), 1)
        self.assertEqual(grids[0].values()[0][0], "A")


class OutputTest(unittest.TestCase):
    """Rendered artifacts and the command line entry point."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.ods_path = self.tmp / "sample.ods"
        self.ods_path.write_bytes(build_ods())

    def tearDown(self):
        self._tmp.cleanup()

    def test_render_outputs(self):
        document = build_document(self.ods_path)
        render_outputs(document, self.tmp / "out", html=True)
        csv_text = (self.tmp / "out" / "table_0.csv").read_text(encoding="utf-8")
        self.assertTrue(csv_text.startswith('A,1,"A cell containing\nmore than one line."\n'))
        html = (self.tmp / "out" / "table_0.html").read_text(encoding="utf-8")
        self.assertIn("<td", html)
        self.assertIn("Sheet1", html)

    def test_render_outputs_rejects_unknown_table(self):
        document = build_document(self.ods_path)
        with self.assertRaises(IndexError):
            render_outputs(document, self.tmp / "out", table_index=3)

    def test_command_line(self):
        main([str(self.ods_path), "--output", str(self.tmp / "cli"), "--tsv", "--debug"])
        tsv = (self.tmp / "cli" / "table_0.tsv").read_text(encoding="utf-8")
        self.assertTrue(tsv.startswith("A\t1\t"))
        dump = json.loads((self.tmp / "cli" / "debug" / "document_model.json").read_text())
        self.assertEqual(dump["tables"][0]["name"], "Sheet1")
        self.assertIn("co1", [style["name"] for style in dump["styles"]])
        grid = json.loads((self.tmp / "cli" / "debug" / "grid_0.json").read_text())
        self.assertEqual(grid["rows"][0]["cells"][0]["value"], "A")
        self.assertEqual(grid["rows"][0]["cells"][0]["align"], "center")

    def test_command_line_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            main([str(self.tmp / "missing.ods")])

    def test_debug_dumper_without_grids(self):
        document = build_document(self.ods_path)
        DebugDumper(self.tmp / "dbg").dump(document)
        self.assertTrue((self.tmp / "dbg" / "document_model.json").exists())
        self.assertFalse((self.tmp / "dbg" / "grid_0.json").exists())


if __name__ == '__main__':
    unittest.main()
