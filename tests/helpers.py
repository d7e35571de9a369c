"""Helper functions for export parsing tests."""

from pathlib import Path
from typing import List, Union

from eir_export.models import Document


def write_export(directory: str, content: Union[str, bytes], name: str = "export.yaml") -> str:
    """
    Write export content to a file inside a test directory.

    Args:
        directory: Target directory
        content: Text (written as UTF-8) or raw bytes
        name: File name

    Returns:
        Path of the written file
    """
    path = Path(directory) / name
    if isinstance(content, str):
        content = content.encode("utf-8")
    path.write_bytes(content)
    return str(path)


def entry_ids(document: Document) -> List[str]:
    """Entry identifiers in document order."""
    return [entry.id for entry in document.entries]


def assert_same_document(actual: Document, expected: Document) -> None:
    """Compare two documents field by field, with a readable failure."""
    assert actual.model_dump() == expected.model_dump(), (
        f"Documents differ:\n{actual.model_dump()}\n!=\n{expected.model_dump()}"
    )
