"""Error types and non-fatal diagnostics raised while reading spreadsheets."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Category of a malformed attribute literal."""

    UNIT = "unit"
    SIZE = "size"
    COLOR = "color"
    ALIGN = "align"


class OdsError(Exception):
    """Base class for every error raised by the library."""


class PackageError(OdsError):
    """The container is not a readable OpenDocument spreadsheet."""


class ContentError(OdsError):
    """The document content is malformed XML or violates the table schema."""


class AttributeFormatError(OdsError, ValueError):
    """A single style literal could not be interpreted."""

    def __init__(self, kind: ErrorKind, literal: Optional[str], message: str) -> None:
        super().__init__(f"{message}: {literal!r}")
        self.kind = kind
        self.literal = literal


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Record of an attribute that fell back to its zero value."""

    kind: ErrorKind
    attribute: str
    literal: Optional[str]
    message: str

    @classmethod
    def from_error(cls, attribute: str, error: AttributeFormatError) -> "Diagnostic":
        return cls(kind=error.kind, attribute=attribute, literal=error.literal, message=str(error))
