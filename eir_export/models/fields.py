"""Coercing field types for fields the export writes inconsistently."""

import re
from typing import Annotated, Any, List, Optional, Tuple, Union

from pydantic import BeforeValidator

# Wire shape of fields that are sometimes a string and sometimes a list of strings.
ScalarOrList = Union[str, List[str]]

_INTEGER = re.compile(r"[-+]?[0-9]+")


def scalar_to_str(value: Any) -> Any:
    """Read any YAML scalar as text; leave everything else for validation."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _string_items(value: Any) -> Optional[List[str]]:
    if not isinstance(value, (list, tuple)):
        return None
    items = [scalar_to_str(item) for item in value]
    if not all(isinstance(item, str) for item in items):
        return None
    return items


def coerce_int(value: Any) -> Optional[int]:
    """Integer or numeric string -> int; anything else -> None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.fullmatch(value):
        return int(value)
    return None


def join_lines(value: Optional[ScalarOrList]) -> Optional[str]:
    """String stays as is; a list of strings is joined with line breaks."""
    value = scalar_to_str(value)
    if isinstance(value, str):
        return value
    items = _string_items(value)
    if items is None:
        return None
    return "\n".join(items)


def to_string_list(value: Optional[ScalarOrList]) -> Optional[List[str]]:
    """List of strings stays; a non-empty string becomes a one-element list.

    An empty string yields None, never an empty list.
    """
    value = scalar_to_str(value)
    if isinstance(value, str):
        return [value] if value else None
    return _string_items(value)


LenientStr = Annotated[str, BeforeValidator(scalar_to_str)]
OptionalStr = Optional[LenientStr]
StrList = Optional[Tuple[LenientStr, ...]]
FlexibleInt = Annotated[Optional[int], BeforeValidator(coerce_int)]
Details = Annotated[Optional[str], BeforeValidator(join_lines)]
Notes = Annotated[Optional[Tuple[str, ...]], BeforeValidator(to_string_list)]
