"""Pydantic DTOs (Data Transfer Objects) for the WorkEntry feature.

Request bodies carry raw form input: numeric fields may arrive as text and
are parsed leniently (anything unusable becomes 0.0). The client name is
the only field that is rejected when blank.
"""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from worktracker.domain.parsing import parse_decimal


def parse_form_decimal(value: Any) -> float:
    """Lenient form parsing for hours/amount: invalid or negative input is 0.0."""
    number = parse_decimal(value)
    return number if number >= 0 else 0.0


class _FormFields(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client_name: str = Field(..., min_length=1, max_length=200, examples=["Smith & Sons"])
    date: dt.date = Field(default_factory=dt.date.today)
    location: str = Field("", examples=["12 Elm Street"])
    description: str = Field("", examples=["Two coats, living room walls"])
    hours: float = Field(0.0, examples=["4.5"])
    amount: float = Field(0.0, examples=["500"])
    materials: str = Field("", examples=["Emulsion 10L, masking tape"])

    @field_validator("client_name", "location", "description", "materials", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("hours", "amount", mode="before")
    @classmethod
    def _lenient_number(cls, value: Any) -> float:
        return parse_form_decimal(value)


class WorkEntryCreate(_FormFields):
    """Schema for recording a new work entry."""


class WorkEntryUpdate(_FormFields):
    """Schema for editing an entry — a full replacement of every field except id."""


class WorkEntryResponse(BaseModel):
    """Schema returned to the client."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    client_name: str
    date: dt.date
    location: str
    description: str
    hours: float
    amount: float
    materials: str


class TotalsResponse(BaseModel):
    """Totals over the full, unfiltered list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_hours: float
    total_amount: float
    entry_count: int
