"""Lenient parsing helpers shared by the codec and the request schemas."""

import math
from datetime import date, datetime
from typing import Any


def parse_decimal(value: Any, default: float = 0.0) -> float:
    """Parse a number or numeric text, falling back to ``default``.

    Anything that is not a finite decimal (blank text, ``"abc"``, ``None``,
    booleans, NaN, infinity, integers too large for a float) yields
    ``default`` instead of raising.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def parse_calendar_date(value: Any) -> date:
    """Parse an ISO-8601 date, truncating any time-of-day component.

    Accepts ``date``/``datetime`` instances and strings such as
    ``2024-01-01`` or ``2024-01-01T00:00:00.000``. Raises ValueError
    for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO-8601 date string, got {type(value).__name__}")
    text = value.strip()
    if "T" in text or " " in text:
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)
