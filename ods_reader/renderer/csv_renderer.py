"""Write the text grid of a table as CSV (or any delimiter-separated) output."""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Sequence


class CsvRenderer:
    """Serialize rows of cell texts with the ``csv`` module."""

    def __init__(self, output_path: Path, delimiter: str = ",") -> None:
        self._output_path = output_path
        self.delimiter = delimiter

    def render(self, rows: Sequence[Sequence[str]]) -> None:
        self._output_path.write_text(self.to_text(rows), encoding="utf-8", newline="")

    def to_text(self, rows: Sequence[Sequence[str]]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=self.delimiter, lineterminator="\n")
        writer.writerows(rows)
        return buffer.getvalue()
