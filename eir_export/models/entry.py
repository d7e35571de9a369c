"""Entry model: one record/event in a health-record export."""

import uuid
import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from .fields import Details, Notes, OptionalStr, StrList

UNKNOWN_DATE_LABEL = "Okänt datum"

SWEDISH_MONTHS = (
    "januari", "februari", "mars", "april", "maj", "juni",
    "juli", "augusti", "september", "oktober", "november", "december",
)


def new_entry_id() -> str:
    """Fresh identifier for an entry that arrived without one."""
    return str(uuid.uuid4())


class Provider(BaseModel):
    """Care unit responsible for an entry."""

    name: OptionalStr = None
    region: OptionalStr = None
    location: OptionalStr = None

    model_config = {"frozen": True}


class ResponsiblePerson(BaseModel):
    """Clinician who signed or owns an entry."""

    name: OptionalStr = None
    role: OptionalStr = None

    model_config = {"frozen": True}


class Content(BaseModel):
    """Free-text body of an entry.

    ``details`` may arrive as a list of strings and is joined with line
    breaks. ``notes`` may arrive as a single string and becomes a one-element
    tuple; an empty string becomes None.
    """

    summary: OptionalStr = None
    details: Details = None
    notes: Notes = None

    model_config = {"frozen": True}


class Entry(BaseModel):
    """Represents one journal entry, visit, lab result, etc."""

    id: str = Field(default_factory=new_entry_id, description="Entry identifier; synthesized when absent")
    date: OptionalStr = Field(default=None, description="Entry date, normally YYYY-MM-DD")
    time: OptionalStr = Field(default=None, description="Entry time of day")
    category: OptionalStr = Field(default=None, description="Record category (e.g. Vårdkontakter, Provsvar)")
    type: OptionalStr = Field(default=None, description="Entry type within the category")
    provider: Optional[Provider] = None
    status: OptionalStr = None
    responsible_person: Optional[ResponsiblePerson] = None
    content: Optional[Content] = None
    attachments: StrList = None
    tags: StrList = None

    model_config = {"frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def _synthesize_missing_id(cls, value: Any) -> Any:
        """A null or empty identifier is treated like an absent one."""
        if value is None or value == "":
            return new_entry_id()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def display_date(self) -> str:
        return self.date or ""

    @property
    def parsed_date(self) -> Optional[datetime.date]:
        """The entry date as a ``datetime.date``, if it is in YYYY-MM-DD form."""
        if not self.date:
            return None
        try:
            return datetime.datetime.strptime(self.date, "%Y-%m-%d").date()
        except ValueError:
            return None

    @property
    def date_group_key(self) -> str:
        """Month label used to group entries on a timeline, e.g. ``mars 2025``."""
        parsed = self.parsed_date
        if parsed is None:
            return self.date or UNKNOWN_DATE_LABEL
        return f"{SWEDISH_MONTHS[parsed.month - 1]} {parsed.year}"
