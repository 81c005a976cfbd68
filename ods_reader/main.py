"""Entry-point for the ODS reading pipeline."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from ods_reader.model.document_model import OdsDocument
from ods_reader.model.elements import MaterializedGrid
from ods_reader.parser.content_parser import ContentParser
from ods_reader.parser.grid_materializer import GridMaterializer
from ods_reader.parser.ods_loader import OdsPackage
from ods_reader.renderer.csv_renderer import CsvRenderer
from ods_reader.renderer.html_renderer import HtmlRenderer
from ods_reader.utils.debug import DebugDumper
from ods_reader.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)


def parse_package(package: OdsPackage) -> OdsDocument:
    """Decode the content (and common styles) of an opened spreadsheet package."""
    document = ContentParser(package.require_content_xml(), package.get_styles_xml()).parse()
    document.mime_type = package.mime_type
    return document


def build_document(ods_path: Path | str) -> OdsDocument:
    """Load an ODS package and decode its tables and styles."""
    return parse_package(OdsPackage.load(ods_path))


def materialize_tables(document: OdsDocument) -> List[MaterializedGrid]:
    materializer = GridMaterializer(document.styles)
    return [materializer.materialize(table) for table in document.tables]


def render_outputs(
    document: OdsDocument,
    output_dir: Path,
    *,
    table_index: int = 0,
    tsv: bool = False,
    html: bool = False,
) -> None:
    """Write the selected table as CSV/TSV and optionally as an HTML preview."""
    if not 0 <= table_index < len(document.tables):
        raise IndexError(f"Document has {len(document.tables)} table(s), no table {table_index}")
    output_dir.mkdir(parents=True, exist_ok=True)
    table = document.tables[table_index]
    materializer = GridMaterializer(document.styles)

    suffix = "tsv" if tsv else "csv"
    CsvRenderer(output_dir / f"table_{table_index}.{suffix}", delimiter="\t" if tsv else ",").render(
        materializer.strings(table)
    )
    if html:
        grid = materializer.materialize(table)
        for diagnostic in grid.diagnostics:
            LOGGER.warning("%s: %s", diagnostic.attribute, diagnostic.message)
        HtmlRenderer(output_dir / f"table_{table_index}.html").render(grid)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Run the ODS → materialized grid → renderer pipeline."""
    parser = argparse.ArgumentParser(description="Export spreadsheet tables from ODS files")
    parser.add_argument("ods_file", help="Path to the input .ods file")
    parser.add_argument("--output", help="Directory to write generated artifacts")
    parser.add_argument("--table", type=int, default=0, help="Index of the table to export")
    parser.add_argument("--tsv", action="store_true", help="Write tab separated values instead of CSV")
    parser.add_argument("--html", action="store_true", help="Generate a styled HTML preview as well")
    parser.add_argument("--debug", action="store_true", help="Dump intermediate JSON and log verbosely")
    args = parser.parse_args(argv)

    set_verbosity(args.debug)
    ods_path = Path(args.ods_file).resolve()
    if not ods_path.exists():
        raise FileNotFoundError(f"ODS file not found: {ods_path}")

    LOGGER.info("Building document model for %s", ods_path.name)
    document = build_document(ods_path)

    output_path = Path(args.output or ods_path.with_suffix("")).resolve()
    LOGGER.info("Rendering outputs into %s", output_path)
    render_outputs(document, output_path, table_index=args.table, tsv=args.tsv, html=args.html)

    if args.debug:
        DebugDumper(output_path / "debug").dump(document, materialize_tables(document))


if __name__ == "__main__":  # pragma: no cover
    main()
