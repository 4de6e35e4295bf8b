"""Unit tests for the EntryStore."""

import json
from datetime import date

import pytest

from worktracker.application.interfaces import PreferencesStore
from worktracker.application.services import EntryStore
from worktracker.domain.entities import WorkEntry
from worktracker.domain.exceptions import PersistenceWriteError

KEY = "painter_entries_v1"


class FakePreferences(PreferencesStore):
    """In-memory fake preferences backend for unit testing."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})
        self.reject_writes = False
        self.set_calls = 0

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.set_calls += 1
        if self.reject_writes:
            return False
        self.values[key] = value
        return True


class ExplodingPreferences(PreferencesStore):
    """Backend whose every call raises."""

    async def get(self, key: str) -> str | None:
        raise OSError("disk unplugged")

    async def set(self, key: str, value: str) -> bool:
        raise OSError("disk unplugged")


def _entry(entry_id: str, client: str = "Bob", day: date = date(2024, 1, 1), **kw) -> WorkEntry:
    return WorkEntry(id=entry_id, client_name=client, date=day, **kw)


@pytest.fixture
def prefs() -> FakePreferences:
    return FakePreferences()


@pytest.fixture
def store(prefs: FakePreferences) -> EntryStore:
    return EntryStore(prefs, key=KEY)


# ── load ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_load_absent_blob_is_empty(store: EntryStore):
    assert await store.load() == []
    assert len(store) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("blob", ["", "not json", "{}", "[{]", "[" + "9" * 5000 + "]"])
async def test_load_malformed_blob_is_empty(blob):
    store = EntryStore(FakePreferences({KEY: blob}), key=KEY)
    assert await store.load() == []


@pytest.mark.asyncio
async def test_load_huge_number_defaults_to_zero():
    blob = '[{"id": "1", "clientName": "A", "date": "2024-01-01", "hours": ' + "9" * 400 + "}]"
    store = EntryStore(FakePreferences({KEY: blob}), key=KEY)
    [entry] = await store.load()
    assert entry.id == "1"
    assert entry.hours == 0.0


@pytest.mark.asyncio
async def test_load_swallows_backend_read_errors():
    store = EntryStore(ExplodingPreferences(), key=KEY)
    assert await store.load() == []


@pytest.mark.asyncio
async def test_load_sorts_newest_first_and_keeps_ties_stable():
    blob = json.dumps([
        {"id": "a", "clientName": "A", "date": "2024-01-01"},
        {"id": "b", "clientName": "B", "date": "2024-03-01"},
        {"id": "c", "clientName": "C", "date": "2024-01-01"},
        {"id": "d", "clientName": "D", "date": "2024-02-01"},
    ])
    store = EntryStore(FakePreferences({KEY: blob}), key=KEY)
    loaded = await store.load()
    assert [e.id for e in loaded] == ["b", "d", "a", "c"]
    assert [e.id for e in store.entries] == ["b", "d", "a", "c"]


@pytest.mark.asyncio
async def test_load_reads_only_its_own_key():
    blob = json.dumps([{"id": "a", "clientName": "A", "date": "2024-01-01"}])
    store = EntryStore(FakePreferences({"other_key": blob}), key=KEY)
    assert await store.load() == []


# ── upsert / delete ──────────────────────────────────────────────────


def test_upsert_new_entry_goes_to_front(store: EntryStore):
    store.upsert(_entry("1"))
    store.upsert(_entry("2"))
    assert [e.id for e in store.entries] == ["2", "1"]


def test_upsert_existing_entry_replaces_in_place(store: EntryStore):
    for entry_id in ("1", "2", "3"):
        store.upsert(_entry(entry_id))
    store.upsert(_entry("2", client="Renamed", day=date(1999, 1, 1)))

    assert len(store) == 3
    assert [e.id for e in store.entries] == ["3", "2", "1"]
    assert store.entries[1].client_name == "Renamed"


def test_upsert_does_not_validate(store: EntryStore):
    store.upsert(_entry("1", client="   ", hours=-3.0))
    assert store.get("1").client_name == "   "
    assert store.get("1").hours == -3.0


def test_delete_removes_entry(store: EntryStore):
    store.upsert(_entry("1"))
    store.upsert(_entry("2"))
    store.delete("1")
    assert [e.id for e in store.entries] == ["2"]


def test_delete_unknown_id_is_noop(store: EntryStore):
    store.upsert(_entry("1"))
    before = store.entries
    store.delete("missing")
    assert store.entries == before


def test_entries_is_a_snapshot(store: EntryStore):
    store.upsert(_entry("1"))
    snapshot = store.entries
    snapshot.clear()
    assert len(store) == 1


# ── save ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_save_overwrites_previous_blob(prefs: FakePreferences, store: EntryStore):
    prefs.values[KEY] = json.dumps([{"id": "old", "clientName": "Old", "date": "2020-01-01"}])
    store.upsert(_entry("new"))
    await store.save()

    saved = json.loads(prefs.values[KEY])
    assert [r["id"] for r in saved] == ["new"]


@pytest.mark.asyncio
async def test_save_rejected_write_raises(prefs: FakePreferences, store: EntryStore):
    prefs.reject_writes = True
    store.upsert(_entry("1"))
    with pytest.raises(PersistenceWriteError):
        await store.save()


@pytest.mark.asyncio
async def test_save_backend_exception_raises_persistence_error():
    store = EntryStore(ExplodingPreferences(), key=KEY)
    store.upsert(_entry("1"))
    with pytest.raises(PersistenceWriteError) as exc_info:
        await store.save()
    assert exc_info.value.key == KEY


@pytest.mark.asyncio
async def test_save_non_finite_number_raises_without_writing(
    prefs: FakePreferences, store: EntryStore
):
    store.upsert(_entry("1", hours=float("inf")))
    with pytest.raises(PersistenceWriteError):
        await store.save()
    assert prefs.set_calls == 0
    assert KEY not in prefs.values


@pytest.mark.asyncio
async def test_end_to_end_save_then_load(prefs: FakePreferences, store: EntryStore):
    assert await store.load() == []
    entry_a = WorkEntry(id="1", client_name="Bob", date=date(2024, 1, 1), hours=4, amount=500)
    store.upsert(entry_a)
    await store.save()

    reloaded = EntryStore(prefs, key=KEY)
    assert await reloaded.load() == [entry_a]


# ── search / totals ──────────────────────────────────────────────────


@pytest.fixture
def populated(store: EntryStore) -> EntryStore:
    store.upsert(_entry("1", client="ACME Corp", location="Leeds", description="Fence"))
    store.upsert(_entry("2", client="Jones", location="York", materials="acme primer"))
    store.upsert(_entry("3", client="Patel", location="Hull", description="Kitchen"))
    return store


def test_search_is_case_insensitive(populated: EntryStore):
    upper = populated.search("ACME")
    lower = populated.search("acme")
    assert upper == lower
    assert {e.id for e in upper} == {"1", "2"}


def test_search_matches_each_text_field(populated: EntryStore):
    assert [e.id for e in populated.search("york")] == ["2"]
    assert [e.id for e in populated.search("kitchen")] == ["3"]
    assert [e.id for e in populated.search("PRIMER")] == ["2"]
    assert populated.search("nowhere") == []


def test_search_empty_query_returns_full_list_in_order(populated: EntryStore):
    assert populated.search("") == populated.entries
    assert [e.id for e in populated.search("")] == ["3", "2", "1"]


def test_search_preserves_store_order(populated: EntryStore):
    assert [e.id for e in populated.search("o")] == ["2", "1"]


def test_totals_sum_full_list(store: EntryStore):
    store.upsert(_entry("1", client="A", hours=2.5, amount=100))
    store.upsert(_entry("2", client="B", hours=3.0, amount=200))
    assert store.total_hours() == 5.5
    assert store.total_amount() == 300


def test_totals_ignore_search(store: EntryStore):
    store.upsert(_entry("1", client="A", hours=2.5, amount=100))
    store.upsert(_entry("2", client="B", hours=3.0, amount=200))
    assert store.search("A") != store.entries
    assert store.total_hours() == 5.5


def test_totals_empty_store(store: EntryStore):
    assert store.total_hours() == 0.0
    assert store.total_amount() == 0.0
