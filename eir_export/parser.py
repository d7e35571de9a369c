"""Decode health-record exports into :class:`~eir_export.models.Document` values.

Well-formed text is decoded directly and never goes through the repair pass.
Only when the direct decode fails is :func:`eir_export.repair.repair` applied,
exactly once, before a second and final attempt.
"""

import logging
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from eir_export.config import DEFAULT_PREVIEW_CHARS
from eir_export.errors import (
    EncodingError,
    ExportIOError,
    FailureCategory,
    SchemaError,
    StructuralDecodeError,
)
from eir_export.loader import load_tree
from eir_export.models import Document
from eir_export.repair import repair

logger = logging.getLogger(__name__)


def _type_name(value: Any) -> str:
    if value is None:
        return "nothing"
    if isinstance(value, list):
        return "a list"
    return f"a {type(value).__name__} scalar"


def _decode(text: str) -> Document:
    tree = load_tree(text)
    if not isinstance(tree, dict):
        raise SchemaError(
            "",
            FailureCategory.TYPE_MISMATCH,
            f"document root should be a mapping, got {_type_name(tree)}",
        )
    return Document.model_validate(tree)


def _schema_error(error: ValidationError) -> SchemaError:
    first = error.errors()[0]
    path = ".".join(str(part) for part in first["loc"])
    if first["type"] == "missing":
        category = FailureCategory.MISSING_KEY
    elif "input" in first and first["input"] is None:
        category = FailureCategory.UNEXPECTED_NULL
    else:
        category = FailureCategory.TYPE_MISMATCH
    return SchemaError(path, category, first["msg"])


def _structural_error(
    error: yaml.YAMLError,
    text: str,
    preview_chars: int,
    in_repaired_text: bool = False,
) -> StructuralDecodeError:
    mark = getattr(error, "problem_mark", None)
    problem = getattr(error, "problem", None) or str(error)
    return StructuralDecodeError(
        problem,
        preview=text[:preview_chars],
        line=mark.line + 1 if mark is not None else None,
        column=mark.column + 1 if mark is not None else None,
        in_repaired_text=in_repaired_text,
    )


def parse_text(text: str, preview_chars: int = DEFAULT_PREVIEW_CHARS) -> Document:
    """
    Decode export text, repairing it once if the direct decode fails.

    Args:
        text: Export YAML text
        preview_chars: How much of the text to include in a syntax error

    Returns:
        The decoded document

    Raises:
        StructuralDecodeError: The text is not YAML even after repair. The
            line and column point into ``text`` when the text itself was not
            YAML; otherwise they point into the repaired text.
        SchemaError: The YAML does not fit the document schema even after repair
    """
    try:
        return _decode(text)
    except (yaml.YAMLError, ValidationError, SchemaError) as e:
        direct_error = e
        logger.debug("Direct decode failed (%s); retrying with repaired text", type(e).__name__)

    fixed = repair(text)
    try:
        return _decode(fixed)
    except yaml.YAMLError as e:
        # Repair merges and re-indents lines, so only the direct failure has
        # coordinates in the caller's text.
        if isinstance(direct_error, yaml.YAMLError):
            raise _structural_error(direct_error, text, preview_chars) from e
        raise _structural_error(e, text, preview_chars, in_repaired_text=True) from e
    except ValidationError as e:
        raise _schema_error(e) from e


def parse_bytes(data: bytes, preview_chars: int = DEFAULT_PREVIEW_CHARS) -> Document:
    """Decode raw export bytes (UTF-8, optional BOM) into a document."""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise EncodingError(e.start) from e
    return parse_text(text, preview_chars=preview_chars)


def read_export(path: Union[str, Path]) -> bytes:
    """Read an export file in one blocking read; raises :class:`ExportIOError`."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ExportIOError(str(path), e.strerror or str(e)) from e


def parse_file(path: Union[str, Path], preview_chars: int = DEFAULT_PREVIEW_CHARS) -> Document:
    """Read an export file and decode it."""
    return parse_bytes(read_export(path), preview_chars=preview_chars)


def repaired_text(text: str) -> str:
    """The text the second decode attempt would see; for diagnostics."""
    return repair(text)
