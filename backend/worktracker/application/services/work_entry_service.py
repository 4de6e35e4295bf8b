"""Application service (use case) for WorkEntry operations."""

import asyncio
import logging
from collections.abc import Callable

from worktracker.application.schemas import WorkEntryCreate, WorkEntryUpdate
from worktracker.application.services.entry_codec import to_csv
from worktracker.application.services.entry_store import EntryStore
from worktracker.domain.entities import WorkEntry
from worktracker.domain.exceptions import EntityNotFoundError
from worktracker.domain.ids import IdGenerator, uuid_id_generator

logger = logging.getLogger(__name__)


class WorkEntryService:
    """Orchestrates entry CRUD, search, totals and export over one EntryStore.

    Every mutation and the save that follows it run under a single lock;
    if the save fails the in-memory list is rolled back before the
    PersistenceWriteError propagates.
    """

    def __init__(self, store: EntryStore, id_generator: IdGenerator = uuid_id_generator):
        self._store = store
        self._id_generator = id_generator
        self._lock = asyncio.Lock()

    def list_entries(self, query: str = "") -> list[WorkEntry]:
        return self._store.search(query)

    def get_entry(self, entry_id: str) -> WorkEntry:
        entry = self._store.get(entry_id)
        if entry is None:
            raise EntityNotFoundError("WorkEntry", entry_id)
        return entry

    async def create_entry(self, data: WorkEntryCreate) -> WorkEntry:
        async with self._lock:
            entry = self._build_entry(self._id_generator(), data)
            await self._commit(lambda: self._store.upsert(entry))
        logger.info("Created entry %s for '%s'", entry.id, entry.client_name)
        return entry

    async def update_entry(self, entry_id: str, data: WorkEntryUpdate) -> WorkEntry:
        async with self._lock:
            self.get_entry(entry_id)
            entry = self._build_entry(entry_id, data)
            await self._commit(lambda: self._store.upsert(entry))
        logger.info("Updated entry %s", entry_id)
        return entry

    async def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry. Returns False (without error) if it did not exist."""
        async with self._lock:
            if self._store.get(entry_id) is None:
                return False
            await self._commit(lambda: self._store.delete(entry_id))
        logger.info("Deleted entry %s", entry_id)
        return True

    def totals(self) -> tuple[float, float, int]:
        """Return (total hours, total amount, entry count) over the full list."""
        return self._store.total_hours(), self._store.total_amount(), len(self._store)

    def export_csv(self, query: str = "") -> str:
        return to_csv(self._store.search(query))

    async def _commit(self, mutate: Callable[[], None]) -> None:
        snapshot = self._store.entries
        mutate()
        try:
            await self._store.save()
        except Exception:
            self._store.restore(snapshot)
            raise

    @staticmethod
    def _build_entry(entry_id: str, data: WorkEntryCreate | WorkEntryUpdate) -> WorkEntry:
        return WorkEntry(
            id=entry_id,
            client_name=data.client_name,
            date=data.date,
            location=data.location,
            description=data.description,
            hours=data.hours,
            amount=data.amount,
            materials=data.materials,
        )
