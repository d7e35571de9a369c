"""Repair pass for malformed health-record exports.

The upstream export tool occasionally writes YAML that no decoder accepts.
Two indentation shapes have been observed in the ``entries`` list:

**Pattern A**: dash at indent 0, fields at indent 2::

    entries:
    -     id: "..."
      date: "..."
      provider:
        name: "..."

**Pattern B**: dash at indent 2 with extra spaces, fields at indent 4, and
empty lists split onto their own line::

    entries:
      -     id: "..."
        date: "..."
        attachments:
    []

Both are rewritten to ``  - id:`` at indent 2 with fields at indent 4.
Unescaped double quotes inside double-quoted values are escaped as well.

The pass works in two stages: :func:`classify_lines` tags each line, then
:func:`repair_entries_block` maps tag + pattern to canonical indentation.
Everything here is a pure function of the input text.
"""

import logging
import re
from enum import Enum
from typing import Iterator, List, NamedTuple, Sequence

logger = logging.getLogger(__name__)

ENTRIES_KEY = "entries:"
EMPTY_LIST = "[]"
CANONICAL_ENTRY_PREFIX = "  - id:"

# Dash followed by whitespace and the identifier field, at any indent.
_ENTRY_MARKER = re.compile(r"^( *)-([ \t]+)id:")
# Remainder of a dash line that opens a mapping (``key:`` or ``key: value``).
_MAPPING_START = re.compile(r"^[^\s\"'#-][^:]*:(?:\s|$)")

PATTERN_A_FIELD_SHIFT = 2
PATTERN_A_ITEM_SHIFT = 4


class Defect(str, Enum):
    """Which malformed-indentation shape a document carries."""

    NONE = "none"
    PATTERN_A = "pattern_a"
    PATTERN_B = "pattern_b"


class LineKind(str, Enum):
    OUT_OF_SCOPE = "out_of_scope"
    CONTINUATION = "continuation"
    ENTRY_START = "entry_start"
    FIELD = "field"
    ARRAY_ITEM = "array_item"
    STANDALONE_EMPTY_LIST = "standalone_empty_list"


class TaggedLine(NamedTuple):
    kind: LineKind
    text: str
    indent: int
    body: str


def _leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _requote(content: str) -> str:
    # Normalize: unescape existing \" first, then re-escape all
    return content.replace('\\"', '"').replace('"', '\\"')


def escape_embedded_quotes(line: str) -> str:
    """Escape double quotes embedded in a double-quoted value.

    Handles list items (``- "text with "word" inside"``) and simple
    ``key: "value"`` pairs. Already-escaped quotes are normalized first, so
    applying this twice gives the same result as applying it once. Lines of
    any other shape are returned unchanged.
    """
    stripped = line.strip()
    leading = " " * _leading_spaces(line)

    if stripped.startswith('- "') and stripped.endswith('"') and len(stripped) > 4:
        content = stripped[3:-1]
        if '"' in content:
            return f'{leading}- "{_requote(content)}"'

    separator = stripped.find(': "')
    if separator > 0 and stripped.endswith('"'):
        key = stripped[:separator]
        # Only simple unquoted keys
        if '"' in key or "'" in key:
            return line
        value_start = separator + 3
        value_end = len(stripped) - 1
        if value_start >= value_end:
            return line
        content = stripped[value_start:value_end]
        if '"' in content:
            return f'{leading}{key}: "{_requote(content)}"'

    return line


def _is_standalone_empty_list(line: str) -> bool:
    return line.strip() == EMPTY_LIST


def classify_defect(lines: Sequence[str]) -> Defect:
    """Inspect the document once and decide which repair, if any, applies."""
    has_canonical = any(line.startswith(CANONICAL_ENTRY_PREFIX) for line in lines)
    has_standalone = any(_is_standalone_empty_list(line) for line in lines)
    if has_canonical and not has_standalone:
        return Defect.NONE

    markers = [m for m in map(_ENTRY_MARKER.match, lines) if m]
    malformed = [m for m in markers if len(m.group(2)) > 1]
    if not (has_standalone or malformed):
        return Defect.NONE

    # The first malformed dash decides; fall back to any entry dash, then indent 2.
    reference = malformed[0] if malformed else (markers[0] if markers else None)
    dash_indent = len(reference.group(1)) if reference else 2
    return Defect.PATTERN_A if dash_indent == 0 else Defect.PATTERN_B


def _is_entries_key(line: str) -> bool:
    return line.rstrip() == ENTRIES_KEY


def _is_base_level_key(line: str, stripped: str) -> bool:
    return (
        bool(stripped)
        and not line.startswith((" ", "\t", "-"))
        and ":" in stripped
    )


def classify_lines(lines: Sequence[str]) -> Iterator[TaggedLine]:
    """Tag every line; only lines inside the ``entries`` span get a real kind."""
    in_entries = False
    for line in lines:
        stripped = line.strip()
        indent = _leading_spaces(line)

        if _is_entries_key(line):
            in_entries = True
            yield TaggedLine(LineKind.OUT_OF_SCOPE, line, indent, stripped)
            continue

        if in_entries and _is_base_level_key(line, stripped):
            in_entries = False

        if not in_entries:
            yield TaggedLine(LineKind.OUT_OF_SCOPE, line, indent, stripped)
        elif not stripped:
            yield TaggedLine(LineKind.CONTINUATION, line, indent, stripped)
        elif stripped == EMPTY_LIST:
            yield TaggedLine(LineKind.STANDALONE_EMPTY_LIST, line, indent, stripped)
        elif stripped.startswith("-"):
            after_dash = stripped[1:].strip()
            if indent <= 2 and _MAPPING_START.match(after_dash):
                yield TaggedLine(LineKind.ENTRY_START, line, indent, after_dash)
            else:
                yield TaggedLine(LineKind.ARRAY_ITEM, line, indent, stripped)
        else:
            yield TaggedLine(LineKind.FIELD, line, indent, stripped)


def _reindent_pattern_a(tagged: TaggedLine) -> str:
    if tagged.kind is LineKind.FIELD and tagged.indent >= 2:
        return " " * (tagged.indent + PATTERN_A_FIELD_SHIFT) + tagged.body
    if tagged.kind is LineKind.ARRAY_ITEM and tagged.indent >= 2:
        return " " * (tagged.indent + PATTERN_A_ITEM_SHIFT) + tagged.body
    return tagged.text


def repair_entries_block(lines: Sequence[str], defect: Defect) -> List[str]:
    """Rewrite the ``entries`` span for the given defect; pass the rest through."""
    if defect is Defect.NONE:
        return list(lines)

    result: List[str] = []
    for tagged in classify_lines(lines):
        if tagged.kind is LineKind.OUT_OF_SCOPE:
            result.append(tagged.text)
            continue

        # Standalone [] -> merge with previous line as an empty array
        if tagged.kind is LineKind.STANDALONE_EMPTY_LIST and result:
            previous = result[-1]
            if previous.strip().endswith(":"):
                result[-1] = f"{previous.rstrip()} {EMPTY_LIST}"
                continue

        if tagged.kind is LineKind.ENTRY_START:
            result.append(f"  - {tagged.body}")
            continue

        if defect is Defect.PATTERN_A:
            result.append(_reindent_pattern_a(tagged))
        else:
            # Pattern B: interior indentation is already correct
            result.append(tagged.text)

    return result


def repair(text: str) -> str:
    """Run the full repair pass over an export's text."""
    lines = [escape_embedded_quotes(line) for line in text.split("\n")]
    defect = classify_defect(lines)
    if defect is not Defect.NONE:
        logger.info("Repairing malformed entries block (%s)", defect.value)
    return "\n".join(repair_entries_block(lines, defect))
