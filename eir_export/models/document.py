"""Document model: the root value decoded from an export."""

import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar
from pydantic import BaseModel, Field, ValidationError, field_validator

from .entry import Entry
from .metadata import Metadata

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_or_drop(model: Type[ModelT], items: Sequence[Any], label: str = "item") -> List[ModelT]:
    """Validate each item independently, keeping successes in order.

    Items that fail validation are logged and dropped; the rest of the
    sequence is still decoded.
    """
    decoded: List[ModelT] = []
    for index, item in enumerate(items):
        if isinstance(item, model):
            decoded.append(item)
            continue
        try:
            decoded.append(model.model_validate(item))
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "<root>"
            logger.warning(
                "Dropping %s %d: %s at '%s' (%d error(s))",
                label, index, first["type"], location, e.error_count(),
            )
    return decoded


class Document(BaseModel):
    """A decoded health-record export: metadata plus entries in source order.

    Entries that fail to decode are dropped individually, so
    ``len(entries)`` is the source entry count minus the dropped ones.
    """

    metadata: Metadata = Field(default_factory=Metadata, description="Export metadata")
    entries: Tuple[Entry, ...] = Field(default_factory=tuple, description="Entries in source order")

    model_config = {"frozen": True}

    @field_validator("metadata", mode="before")
    @classmethod
    def _empty_metadata(cls, value: Any) -> Any:
        return Metadata() if value is None else value

    @field_validator("entries", mode="before")
    @classmethod
    def _decode_entries(cls, value: Any) -> Any:
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            # Let the tuple validator report the mismatch
            return value
        return tuple(decode_or_drop(Entry, value, label="entry"))

    def entry_by_id(self, entry_id: str) -> Optional[Entry]:
        """Get an entry by its ID."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def categories(self) -> Dict[str, int]:
        """Entry count per category, most common first."""
        counts = Counter(entry.category or "?" for entry in self.entries)
        return dict(counts.most_common())
