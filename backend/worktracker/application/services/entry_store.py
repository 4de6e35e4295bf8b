"""EntryStore — the authoritative, ordered collection of work entries.

The store owns one in-memory list and mirrors it to a single key of a
PreferencesStore. Reads are forgiving (a missing or corrupt blob loads as
an empty list); writes are not (a failed save raises PersistenceWriteError).

Ordering rules:
    - ``load()`` sorts by date, most recent first; equal dates keep their
      stored order.
    - ``upsert()`` replaces an existing entry in place and inserts a new one
      at the front, without re-sorting.
"""

import logging

from worktracker.application.interfaces import PreferencesStore
from worktracker.application.services.entry_codec import from_persisted, to_persisted
from worktracker.domain.entities import WorkEntry
from worktracker.domain.exceptions import PersistenceWriteError

logger = logging.getLogger("EntryStore")

DEFAULT_ENTRIES_KEY = "painter_entries_v1"


class EntryStore:
    """In-memory list of entries backed by one preferences key.

    Not thread-safe: callers with concurrent access must serialize
    ``upsert``/``delete``/``save`` themselves.
    """

    def __init__(self, preferences: PreferencesStore, key: str = DEFAULT_ENTRIES_KEY):
        self._preferences = preferences
        self._key = key
        self._entries: list[WorkEntry] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def entries(self) -> list[WorkEntry]:
        """Snapshot of the current list, in store order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ── Persistence ─────────────────────────────────────────────────

    async def load(self) -> list[WorkEntry]:
        """Replace the current list with the persisted one, newest first.

        Never raises: read failures and malformed blobs load as empty.
        """
        try:
            blob = await self._preferences.get(self._key)
        except Exception:
            logger.warning("Could not read '%s' — starting empty", self._key, exc_info=True)
            blob = None

        entries = from_persisted(blob)
        entries.sort(key=lambda e: e.date, reverse=True)
        self._entries = entries
        logger.info("Loaded %d entries from '%s'", len(entries), self._key)
        return list(entries)

    async def save(self) -> None:
        """Overwrite the persisted blob with the full current list."""
        try:
            blob = to_persisted(self._entries)
        except (ValueError, TypeError, OverflowError) as exc:
            logger.error("Encoding '%s' failed: %s", self._key, exc)
            raise PersistenceWriteError(self._key, f"unencodable entry ({exc})") from exc
        try:
            ok = await self._preferences.set(self._key, blob)
        except Exception as exc:
            logger.error("Saving '%s' failed: %s", self._key, exc)
            raise PersistenceWriteError(self._key, str(exc)) from exc
        if not ok:
            logger.error("Saving '%s' was rejected by the backend", self._key)
            raise PersistenceWriteError(self._key, "backend rejected the write")
        logger.info("Saved %d entries to '%s'", len(self._entries), self._key)

    # ── Mutations ───────────────────────────────────────────────────

    def upsert(self, entry: WorkEntry) -> None:
        """Replace the entry with the same id in place, or insert at the front.

        No validation happens here; whatever is passed in is stored.
        """
        for index, existing in enumerate(self._entries):
            if existing.id == entry.id:
                self._entries[index] = entry
                return
        self._entries.insert(0, entry)

    def delete(self, entry_id: str) -> None:
        """Remove the entry with ``entry_id``; absent ids are ignored."""
        self._entries = [e for e in self._entries if e.id != entry_id]

    def restore(self, entries: list[WorkEntry]) -> None:
        """Reset the in-memory list to a previous snapshot."""
        self._entries = list(entries)

    # ── Queries ─────────────────────────────────────────────────────

    def get(self, entry_id: str) -> WorkEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def search(self, query: str) -> list[WorkEntry]:
        """Case-insensitive substring search over client, location, description and materials."""
        needle = query.lower()
        if not needle:
            return list(self._entries)
        return [e for e in self._entries if e.matches(needle)]

    def total_hours(self) -> float:
        return sum((e.hours for e in self._entries), 0.0)

    def total_amount(self) -> float:
        return sum((e.amount for e in self._entries), 0.0)
