"""Tests for django_schedule.feed.store -- the Django ORM store."""

from datetime import UTC, datetime

import pytest

from django_schedule.feed.batch import Batch, Delete, EntityKind, Insert
from django_schedule.feed.errors import StoreError
from django_schedule.feed.store import DjangoScheduleStore, StoredRecord
from django_schedule.schedule.models import Block, Room, Session, SessionTrack, Track, Vendor


@pytest.fixture
def store():
    return DjangoScheduleStore()


# ---------------------------------------------------------------------------
# get / get_block
# ---------------------------------------------------------------------------


@pytest.mark.django_db
def test_get_returns_none_for_absent_entity(store):
    assert store.get(EntityKind.SESSIONS, "missing") is None


@pytest.mark.django_db
def test_get_returns_updated_and_preserved_fields_for_session(store):
    Session.objects.create(id="keynote", title="Keynote", updated=123, starred=True)

    assert store.get(EntityKind.SESSIONS, "keynote") == StoredRecord(last_updated=123, preserved={"starred": True})


@pytest.mark.django_db
def test_get_for_vendor_preserves_starred(store):
    Vendor.objects.create(id="acme", name="Acme", starred=False)

    record = store.get(EntityKind.VENDORS, "acme")

    assert record.last_updated == -1
    assert record.preserved == {"starred": False}


@pytest.mark.django_db
def test_get_rejects_kinds_without_sync_metadata(store):
    with pytest.raises(StoreError, match="no sync metadata"):
        store.get(EntityKind.TRACKS, "android")


@pytest.mark.django_db
def test_get_block_returns_stored_span(store):
    start = datetime(2010, 5, 19, 17, 45, tzinfo=UTC)
    end = datetime(2010, 5, 19, 18, 45, tzinfo=UTC)
    Block.objects.create(id="b1", title="Breakout sessions", start=start, end=end)

    assert store.get_block("b1") == (start, end)
    assert store.get_block("b2") is None


# ---------------------------------------------------------------------------
# apply
# ---------------------------------------------------------------------------


@pytest.mark.django_db
def test_apply_runs_operations_in_order(store):
    Room.objects.create(id="room-6", name="Room Six")
    batch = Batch()
    batch.append(Delete(EntityKind.ROOMS, "room-6"))
    batch.append(Insert(EntityKind.ROOMS, {"id": "room-6", "name": "Room 6", "floor": "2"}))

    assert store.apply(batch) == 2

    room = Room.objects.get(pk="room-6")
    assert room.name == "Room 6"
    assert room.floor == "2"


@pytest.mark.django_db
def test_apply_deletes_junction_rows_by_owner(store):
    session = Session.objects.create(id="keynote", title="Keynote")
    other = Session.objects.create(id="other", title="Other")
    SessionTrack.objects.create(session=session, track_id="android")
    SessionTrack.objects.create(session=session, track_id="chrome")
    SessionTrack.objects.create(session=other, track_id="android")

    store.apply([Delete(EntityKind.SESSION_TRACKS, "keynote")])

    assert list(SessionTrack.objects.values_list("session_id", flat=True)) == ["other"]


@pytest.mark.django_db
def test_apply_deleting_an_absent_row_is_harmless(store):
    assert store.apply([Delete(EntityKind.TRACKS, "missing")]) == 1


@pytest.mark.django_db
def test_apply_is_all_or_nothing(store):
    Track.objects.create(id="android", name="Android")
    operations = [
        Insert(EntityKind.TRACKS, {"id": "chrome", "name": "Chrome"}),
        Delete(EntityKind.TRACKS, "android"),
        Insert(EntityKind.TRACKS, {"id": "chrome", "name": "Chrome again"}),
    ]

    with pytest.raises(StoreError, match="operation 2"):
        store.apply(operations)

    assert list(Track.objects.values_list("id", "name")) == [("android", "Android")]


@pytest.mark.django_db
def test_apply_empty_batch_is_a_no_op(store):
    assert store.apply(Batch()) == 0
