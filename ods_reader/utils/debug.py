"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Sequence

from ods_reader.model.document_model import OdsDocument
from ods_reader.model.elements import MaterializedGrid
from ods_reader.model.style_model import StylesCatalog


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, document: OdsDocument, grids: Sequence[MaterializedGrid] = ()) -> None:
        """Persist the decoded document and any materialized grids as JSON."""
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = {
            "tables": self._serialize(document.tables),
            "styles": self._serialize(document.styles),
        }
        (self.directory / "document_model.json").write_text(json.dumps(payload, indent=2))
        for index, grid in enumerate(grids):
            (self.directory / f"grid_{index}.json").write_text(json.dumps(self._serialize(grid), indent=2))

    def _serialize(self, value: Any) -> Any:
        if isinstance(value, StylesCatalog):
            return [self._serialize(style) for style in value.declared()]
        if is_dataclass(value):
            return {k: self._serialize(v) for k, v in asdict(value).items()}
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
