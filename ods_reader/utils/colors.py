"""Parse ``#RGB`` / ``#RRGGBB`` color literals."""
from __future__ import annotations

import string
from typing import Optional

from ods_reader.model.elements import Rgba
from ods_reader.utils.errors import AttributeFormatError, ErrorKind

OPAQUE = 0xFF


def parse_hex_color(literal: Optional[str]) -> Rgba:
    """Return the color for ``literal``.

    An empty literal, or a ``#`` literal too short to hold a color, is treated
    as unspecified and gives opaque black rather than an error.
    """
    if not literal:
        return Rgba(0, 0, 0, OPAQUE)
    if literal[0] != "#":
        raise AttributeFormatError(ErrorKind.COLOR, literal, "color must start with '#'")
    if len(literal) < 4:
        return Rgba(0, 0, 0, OPAQUE)
    digits = literal[1:]
    if any(char not in string.hexdigits for char in digits):
        raise AttributeFormatError(ErrorKind.COLOR, literal, "invalid hex digit in color")

    if len(digits) == 3:
        red, green, blue = (int(char, 16) * 17 for char in digits)
    elif len(digits) == 6:
        red, green, blue = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    else:
        raise AttributeFormatError(ErrorKind.COLOR, literal, "unsupported color length")
    return Rgba(red, green, blue, OPAQUE)
