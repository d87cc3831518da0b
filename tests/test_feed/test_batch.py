"""Tests for django_schedule.feed.batch."""

from django_schedule.feed.batch import Batch, Delete, EntityKind, Insert


def test_batch_preserves_append_order():
    batch = Batch()
    batch.append(Delete(EntityKind.SESSIONS, "keynote"))
    batch.extend(
        [
            Delete(EntityKind.SESSION_TRACKS, "keynote"),
            Insert(EntityKind.SESSIONS, {"id": "keynote", "title": "Keynote"}),
        ]
    )

    assert [type(op).__name__ for op in batch] == ["Delete", "Delete", "Insert"]
    assert len(batch) == 3
    assert batch.operations[0] == Delete(EntityKind.SESSIONS, "keynote")


def test_empty_batch_is_falsy():
    batch = Batch()

    assert not batch
    assert repr(batch) == "<Batch operations=0>"


def test_queued_inserts_filters_by_kind():
    batch = Batch()
    batch.append(Insert(EntityKind.BLOCKS, {"id": "1-2"}))
    batch.append(Delete(EntityKind.BLOCKS, "3-4"))
    batch.append(Insert(EntityKind.ROOMS, {"id": "room-6"}))
    batch.append(Insert(EntityKind.BLOCKS, {"id": "5-6"}))

    assert [op.entity_id for op in batch.queued_inserts(EntityKind.BLOCKS)] == ["1-2", "5-6"]


def test_insert_entity_id_for_junction_rows_is_empty():
    op = Insert(EntityKind.SESSION_SPEAKERS, {"session_id": "keynote", "speaker_id": "bf"})

    assert op.entity_id == ""
