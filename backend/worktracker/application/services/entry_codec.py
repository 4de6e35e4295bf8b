"""Codec for work entries — persisted JSON blob and CSV export text.

Persisted form:
    A JSON array with one object per entry, keyed
    ``id, clientName, date, location, description, hours, amount, materials``.
    ``date`` is an ISO-8601 calendar date; ``hours``/``amount`` are numbers.

Record policy when decoding:
    Array elements that are not objects, or that lack a usable ``id``,
    ``clientName`` or ``date``, are skipped with a warning; the rest of the
    blob still loads. Later duplicates of an already-seen ``id`` are skipped.
"""

import datetime as dt
import json
import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from worktracker.domain.entities import WorkEntry
from worktracker.domain.exceptions import MalformedPersistedDataError
from worktracker.domain.parsing import parse_calendar_date, parse_decimal

logger = logging.getLogger(__name__)

CSV_HEADER = ("Date", "Client", "Location", "Description", "Hours", "Amount", "Materials")


class _PersistedEntry(BaseModel):
    """One array element of the persisted blob, with per-field defaults."""

    id: str
    client_name: str = Field(alias="clientName")
    date: dt.date
    location: str = ""
    description: str = ""
    hours: float = 0.0
    amount: float = 0.0
    materials: str = ""

    model_config = {"populate_by_name": True}

    @field_validator("id", mode="before")
    @classmethod
    def _require_id(cls, value: Any) -> str:
        # Legacy blobs may carry numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            raise ValueError("id must be a non-empty string")
        return value

    @field_validator("client_name", mode="before")
    @classmethod
    def _require_client(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("clientName must be a string")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> dt.date:
        return parse_calendar_date(value)

    @field_validator("location", "description", "materials", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("hours", "amount", mode="before")
    @classmethod
    def _lenient_number(cls, value: Any) -> float:
        return parse_decimal(value)

    def to_entity(self) -> WorkEntry:
        return WorkEntry(
            id=self.id,
            client_name=self.client_name,
            date=self.date,
            location=self.location,
            description=self.description,
            hours=self.hours,
            amount=self.amount,
            materials=self.materials,
        )


def _entry_to_dict(entry: WorkEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "clientName": entry.client_name,
        "date": entry.date.isoformat(),
        "location": entry.location,
        "description": entry.description,
        "hours": float(entry.hours),
        "amount": float(entry.amount),
        "materials": entry.materials,
    }


def to_persisted(entries: Iterable[WorkEntry]) -> str:
    """Serialize entries into the persisted JSON blob.

    Raises ValueError if an hours or amount value is NaN or infinite.
    """
    return json.dumps(
        [_entry_to_dict(e) for e in entries], ensure_ascii=False, allow_nan=False
    )


def decode_persisted(blob: str | None) -> list[WorkEntry]:
    """Strictly decode a persisted blob.

    An absent or blank blob is an empty collection. Raises
    MalformedPersistedDataError when the blob is not a JSON array.
    """
    if blob is None or not blob.strip():
        return []

    try:
        raw = json.loads(blob)
    except (ValueError, RecursionError) as exc:
        raise MalformedPersistedDataError(f"not valid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise MalformedPersistedDataError(
            f"expected a JSON array, got {type(raw).__name__}"
        )

    entries: list[WorkEntry] = []
    seen: set[str] = set()
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning(
                "Skipping persisted entry #%d: expected an object, got %s",
                index, type(item).__name__,
            )
            continue
        try:
            record = _PersistedEntry.model_validate(item)
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(p) for p in err["loc"]) or "<root>" for err in exc.errors()
            )
            logger.warning("Skipping persisted entry #%d: invalid %s", index, fields)
            continue
        if record.id in seen:
            logger.warning(
                "Skipping persisted entry #%d: duplicate id '%s'", index, record.id
            )
            continue
        seen.add(record.id)
        entries.append(record.to_entity())
    return entries


def from_persisted(blob: str | None) -> list[WorkEntry]:
    """Decode a persisted blob, treating malformed data as an empty collection."""
    try:
        return decode_persisted(blob)
    except MalformedPersistedDataError as exc:
        logger.warning("Ignoring persisted entries: %s", exc.reason)
        return []


def escape_csv_field(value: str) -> str:
    """Quote a field iff it contains a comma, a double quote or a newline."""
    if "," in value or '"' in value or "\n" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def _format_number(value: float) -> str:
    return str(float(value))


def to_csv(entries: Iterable[WorkEntry]) -> str:
    """Render entries as CSV text, one row per entry in the given order."""
    lines = [",".join(CSV_HEADER)]
    for entry in entries:
        lines.append(
            ",".join(
                [
                    entry.date.isoformat(),
                    escape_csv_field(entry.client_name),
                    escape_csv_field(entry.location),
                    escape_csv_field(entry.description),
                    _format_number(entry.hours),
                    _format_number(entry.amount),
                    escape_csv_field(entry.materials),
                ]
            )
        )
    return "\n".join(lines) + "\n"
