"""Decode health-record exports into typed documents."""

from .errors import (
    EirExportError,
    ExportIOError,
    EncodingError,
    StructuralDecodeError,
    SchemaError,
    FailureCategory,
)
from .models import Document
from .parser import parse_bytes, parse_file, parse_text, read_export, repaired_text

__all__ = [
    "Document",
    "parse_bytes",
    "parse_file",
    "parse_text",
    "read_export",
    "repaired_text",
    "EirExportError",
    "ExportIOError",
    "EncodingError",
    "StructuralDecodeError",
    "SchemaError",
    "FailureCategory",
]
