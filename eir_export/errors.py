"""Typed errors raised while loading and decoding a health-record export."""

from enum import Enum
from typing import Optional


class FailureCategory(str, Enum):
    """What kind of decode failure occurred."""

    TYPE_MISMATCH = "type_mismatch"
    MISSING_KEY = "missing_key"
    UNEXPECTED_NULL = "unexpected_null"
    SYNTAX = "syntax"


class EirExportError(Exception):
    """Base class for every error surfaced by the export parser."""


class ExportIOError(EirExportError, OSError):
    """The export file could not be read (missing, permission denied, ...)."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Could not read export file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class EncodingError(EirExportError, ValueError):
    """The export bytes are not valid UTF-8."""

    def __init__(self, position: Optional[int] = None):
        self.position = position
        message = "Could not read file as UTF-8"
        if position is not None:
            message += f" (invalid byte at offset {position})"
        super().__init__(message)


class StructuralDecodeError(EirExportError):
    """No value tree could be built, even after the repair pass.

    Carries a bounded prefix of the original text so the caller can show what
    the file started with. ``in_repaired_text`` is set when ``line`` and
    ``column`` refer to the repaired text rather than the original.
    """

    category = FailureCategory.SYNTAX

    def __init__(
        self,
        problem: str,
        preview: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
        path: str = "",
        in_repaired_text: bool = False,
    ):
        self.problem = problem
        self.preview = preview
        self.line = line
        self.column = column
        self.path = path
        self.in_repaired_text = in_repaired_text
        location = f" at line {line}, column {column}" if line is not None else ""
        if location and in_repaired_text:
            location += " of the repaired text"
        message = f"Invalid YAML{location}: {problem}"
        if preview:
            message += f"\nFile starts with: {preview}"
        super().__init__(message)


class SchemaError(EirExportError):
    """A value tree was built but does not fit the document schema."""

    def __init__(self, path: str, category: FailureCategory, expected: str = ""):
        self.path = path
        self.category = category
        self.expected = expected
        where = path or "<root>"
        if category is FailureCategory.MISSING_KEY:
            detail = f"missing key at '{where}'"
        elif category is FailureCategory.UNEXPECTED_NULL:
            detail = f"null value at '{where}'"
        else:
            detail = f"type mismatch at '{where}'"
        if expected:
            detail += f": {expected}"
        super().__init__(f"Failed to decode EIR document: {detail}")
