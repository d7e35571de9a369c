"""Plain-text views of a decoded document for the conversational assistant.

Both builders only read the document; they re-derive text from it each call.
"""

from typing import Iterable, List, Optional, Tuple

from eir_export.config import DEFAULT_CONTEXT_ENTRY_LIMIT
from eir_export.models import Document, Entry

ASSISTANT_PREAMBLE = (
    "You are a helpful medical assistant for Eir, a Swedish healthcare records viewer. "
    "You help users understand their medical records written in Swedish. "
    "You can explain medical terms, summarize visits, and answer health-related questions. "
    "Always be accurate and note when something requires professional medical advice. "
    "Respond in the same language the user writes in."
)


def _context_entry(entry: Entry) -> List[str]:
    lines = ["---"]
    when = entry.display_date
    if entry.time:
        when += f" {entry.time}"
    lines.append(f"Date: {when}")
    lines.append(f"Category: {entry.category or '?'}")
    if entry.type:
        lines.append(f"Type: {entry.type}")
    if entry.provider and entry.provider.name:
        lines.append(f"Provider: {entry.provider.name}")
    if entry.responsible_person:
        person = entry.responsible_person
        lines.append(f"Responsible: {person.name or '?'} ({person.role or '?'})")
    content = entry.content
    if content is not None:
        if content.summary:
            lines.append(f"Summary: {content.summary}")
        if content.details:
            lines.append(f"Details: {content.details}")
        if content.notes:
            lines.append(f"Notes: {'; '.join(content.notes)}")
    return lines


def build_context_prompt(
    document: Optional[Document],
    limit: int = DEFAULT_CONTEXT_ENTRY_LIMIT,
) -> str:
    """
    Build the system prompt handed to the assistant.

    Args:
        document: The decoded export, or None when nothing is loaded
        limit: Maximum number of entries to include, in document order

    Returns:
        Prompt text: preamble, patient and export summary, then entries
    """
    prompt = ASSISTANT_PREAMBLE
    if document is None:
        return prompt

    metadata = document.metadata
    if metadata.patient is not None:
        prompt += f"\n\nPatient: {metadata.patient.name or 'Unknown'}"
        if metadata.patient.birth_date:
            prompt += f", born {metadata.patient.birth_date}"

    info = metadata.export_info
    if info is not None:
        if info.total_entries is not None:
            prompt += f"\nTotal entries: {info.total_entries}"
        if info.date_range is not None:
            prompt += f"\nDate range: {info.date_range.start or '?'} to {info.date_range.end or '?'}"

    entries = document.entries[:max(limit, 0)]
    if entries:
        prompt += "\n\nRecent medical records:\n"
        for entry in entries:
            prompt += "\n" + "\n".join(_context_entry(entry))

    return prompt


def _record_block(entry: Entry, ref_id: str) -> str:
    heading = f"## [{ref_id}] {entry.date or '?'}"
    if entry.time:
        heading += f" {entry.time}"
    heading += f" - {entry.category or '?'}"
    if entry.type:
        heading += f" / {entry.type}"

    lines = [heading]
    if entry.provider and entry.provider.name:
        lines.append(f"Provider: {entry.provider.name}")
    if entry.responsible_person:
        person = entry.responsible_person
        lines.append(f"Responsible: {person.name or '?'} ({person.role or '?'})")
    content = entry.content
    if content is not None:
        if content.summary:
            lines.append(content.summary)
        if content.details:
            lines.append(content.details)
        for note in content.notes or ():
            lines.append(f"- {note}")
    if entry.tags:
        lines.append(f"Tags: {', '.join(entry.tags)}")
    return "\n".join(lines) + "\n"


def format_records(
    documents: Iterable[Tuple[str, Document]],
    person: Optional[str] = None,
) -> str:
    """
    Serialize every entry of every loaded document for full-record retrieval.

    Args:
        documents: ``(person_name, document)`` pairs
        person: Optional case-insensitive filter on the person name

    Returns:
        Markdown-ish text. Entry references are ``person::id`` whenever more
        than one person is loaded, so citations stay unambiguous.
    """
    loaded = list(documents)
    if not loaded:
        return "No medical records loaded."

    composite_ids = len(loaded) > 1
    if person:
        needle = person.casefold()
        selected = [(name, doc) for name, doc in loaded if needle in name.casefold()]
    else:
        selected = loaded

    if not selected:
        return f"No records found for '{person}'."

    output = []
    for name, doc in selected:
        output.append(f"# {name}\n")
        patient = doc.metadata.patient
        if patient is not None and patient.birth_date:
            output.append(f"Born: {patient.birth_date}\n")
        output.append(f"Total entries: {len(doc.entries)}\n\n")
        for entry in doc.entries:
            ref_id = f"{name}::{entry.id}" if composite_ids else entry.id
            output.append(_record_block(entry, ref_id) + "\n")
    return "".join(output)
