from .work_entry import (
    TotalsResponse,
    WorkEntryCreate,
    WorkEntryResponse,
    WorkEntryUpdate,
    parse_form_decimal,
)

__all__ = [
    "TotalsResponse",
    "WorkEntryCreate",
    "WorkEntryResponse",
    "WorkEntryUpdate",
    "parse_form_decimal",
]
