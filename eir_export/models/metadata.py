"""Export metadata: who the record belongs to and what the export covers."""

from typing import Optional
from pydantic import BaseModel, Field

from .fields import FlexibleInt, OptionalStr, StrList


class Patient(BaseModel):
    """Patient identity as written by the export; free text, never validated."""

    name: OptionalStr = Field(default=None, description="Patient full name")
    birth_date: OptionalStr = Field(default=None, description="Birth date as written in the export")
    personal_number: OptionalStr = Field(default=None, description="Personal identity number")

    model_config = {"frozen": True}


class DateRange(BaseModel):
    """First and last entry dates covered by the export."""

    start: OptionalStr = None
    end: OptionalStr = None

    model_config = {"frozen": True}


class ExportInfo(BaseModel):
    """Summary counters written by the export tool."""

    total_entries: FlexibleInt = Field(default=None, description="Entry count; int or numeric string on the wire")
    date_range: Optional[DateRange] = Field(default=None, description="Covered date range")
    healthcare_providers: StrList = Field(default=None, description="Names of providers in the export")

    model_config = {"frozen": True}


class Metadata(BaseModel):
    """Top-level ``metadata`` block. Every field is independently optional."""

    format_version: OptionalStr = Field(default=None, description="Export format version")
    created_at: OptionalStr = Field(default=None, description="Export creation timestamp")
    source: OptionalStr = Field(default=None, description="Where the records were exported from")
    patient: Optional[Patient] = Field(default=None, description="Patient the records belong to")
    export_info: Optional[ExportInfo] = Field(default=None, description="Export summary counters")

    model_config = {"frozen": True}
