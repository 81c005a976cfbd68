"""Aggregate model combining the decoded tables and styles."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ods_reader.model.style_model import StylesCatalog
from ods_reader.model.table_model import Table


@dataclass(slots=True)
class OdsDocument:
    """Decoded spreadsheet content; read-only once parsing finishes."""

    tables: List[Table] = field(default_factory=list)
    styles: StylesCatalog = field(default_factory=StylesCatalog)
    mime_type: Optional[str] = None

    def table(self, name: str) -> Optional[Table]:
        """Return the first table called ``name``."""
        for table in self.tables:
            if table.name == name:
                return table
        return None
