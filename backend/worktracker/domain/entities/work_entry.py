"""Domain entity — one recorded unit of painting work for a client."""

from dataclasses import dataclass
from datetime import date


@dataclass
class WorkEntry:
    """Core domain entity for a client job record.

    ``id`` is assigned once at creation and never changes; edits replace
    every other field by building a new instance with the same id.
    """

    id: str
    client_name: str
    date: date
    location: str = ""
    description: str = ""
    hours: float = 0.0
    amount: float = 0.0
    materials: str = ""

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match over the searchable text fields.

        ``needle`` must already be lower-cased.
        """
        return (
            needle in self.client_name.lower()
            or needle in self.location.lower()
            or needle in self.description.lower()
            or needle in self.materials.lower()
        )
