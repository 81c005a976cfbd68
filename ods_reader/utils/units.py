"""Unit conversion helpers for OpenDocument length and font-size literals."""
from __future__ import annotations

import re
from typing import Optional

from ods_reader.utils.errors import AttributeFormatError, ErrorKind

MM_PER_CM = 10.0
MM_PER_POINT = 0.3527777778

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_number(text: str) -> Optional[float]:
    if not _NUMBER_PATTERN.fullmatch(text):
        return None
    return float(text)


def to_mm(literal: Optional[str]) -> float:
    """Convert a ``cm`` or ``pt`` length literal to millimetres.

    An empty literal means "not specified" and converts to ``0.0``. Any other
    unit, or a literal whose numeric part does not parse, raises
    :class:`AttributeFormatError`.
    """
    if not literal:
        return 0.0
    unit = literal[-2:]
    if unit == "cm":
        factor = MM_PER_CM
    elif unit == "pt":
        factor = MM_PER_POINT
    else:
        raise AttributeFormatError(ErrorKind.UNIT, literal, "unknown length unit")
    value = _parse_number(literal[:-2])
    if value is None:
        raise AttributeFormatError(ErrorKind.UNIT, literal, f"malformed length in {unit}")
    return value * factor


def size_to_points(literal: Optional[str]) -> float:
    """Parse a font size such as ``10pt`` (or a bare number) into points."""
    if not literal:
        return 0.0
    text = literal[:-2] if literal.endswith("pt") else literal
    value = _parse_number(text)
    if value is None:
        raise AttributeFormatError(ErrorKind.SIZE, literal, "malformed font size")
    return value
