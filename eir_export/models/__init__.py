"""Data models for decoded health-record exports."""

from .metadata import Metadata, Patient, ExportInfo, DateRange
from .entry import Entry, Provider, ResponsiblePerson, Content
from .document import Document, decode_or_drop

__all__ = [
    "Document", "Metadata", "Patient", "ExportInfo", "DateRange",
    "Entry", "Provider", "ResponsiblePerson", "Content", "decode_or_drop",
]
