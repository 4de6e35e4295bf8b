from .entry_store import EntryStore
from .work_entry_service import WorkEntryService

__all__ = [
    "EntryStore",
    "WorkEntryService",
]
