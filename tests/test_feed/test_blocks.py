"""Tests for django_schedule.feed.blocks -- block find-or-create."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from django_schedule.feed.batch import Batch, EntityKind, Insert
from django_schedule.feed.blocks import BlockResolver
from django_schedule.feed.errors import ReconciliationInvariantViolation
from django_schedule.feed.store import DjangoScheduleStore
from django_schedule.schedule.models import Block
from tests.test_feed.feeds import KEYNOTE_END, KEYNOTE_START

START = datetime.fromtimestamp(KEYNOTE_START, tz=UTC)
END = datetime.fromtimestamp(KEYNOTE_END, tz=UTC)
BLOCK_ID = f"{KEYNOTE_START}-{KEYNOTE_END}"


def _block_inserts(batch):
    return list(batch.queued_inserts(EntityKind.BLOCKS))


@pytest.mark.django_db
def test_new_span_stages_one_block_insert():
    batch = Batch()
    resolver = BlockResolver(DjangoScheduleStore(), batch)

    block_id = resolver.find_or_create("Breakout sessions", "session", START, END)

    assert block_id == BLOCK_ID
    [insert] = _block_inserts(batch)
    assert insert.values == {"id": BLOCK_ID, "title": "Breakout sessions", "kind": "session", "start": START, "end": END}
    assert resolver.created == 1


@pytest.mark.django_db
def test_repeated_span_in_one_pass_is_staged_once():
    batch = Batch()
    resolver = BlockResolver(DjangoScheduleStore(), batch)

    first = resolver.find_or_create("Breakout sessions", "session", START, END)
    second = resolver.find_or_create("Breakout sessions", "session", START, END)

    assert first == second == BLOCK_ID
    assert len(_block_inserts(batch)) == 1


def test_repeated_span_reads_the_store_once():
    store = MagicMock()
    store.get_block.return_value = None
    resolver = BlockResolver(store, Batch())

    resolver.find_or_create("Breakout sessions", "session", START, END)
    resolver.find_or_create("Breakout sessions", "session", START, END)

    store.get_block.assert_called_once_with(BLOCK_ID)


@pytest.mark.django_db
def test_sub_second_differences_collapse_to_one_block():
    batch = Batch()
    resolver = BlockResolver(DjangoScheduleStore(), batch)

    first = resolver.find_or_create("Breakout sessions", "session", START, END)
    second = resolver.find_or_create(
        "Breakout sessions",
        "session",
        START + timedelta(milliseconds=400),
        END + timedelta(milliseconds=900),
    )

    assert first == second
    assert len(_block_inserts(batch)) == 1


@pytest.mark.django_db
def test_distinct_second_level_spans_get_distinct_blocks():
    batch = Batch()
    resolver = BlockResolver(DjangoScheduleStore(), batch)

    first = resolver.find_or_create("Breakout sessions", "session", START, END)
    second = resolver.find_or_create("Breakout sessions", "session", START, END + timedelta(seconds=1))

    assert first != second
    assert len(_block_inserts(batch)) == 2


@pytest.mark.django_db
def test_block_already_in_store_is_not_recreated():
    Block.objects.create(id=BLOCK_ID, title="Existing", start=START, end=END, kind="session")
    batch = Batch()

    block_id = BlockResolver(DjangoScheduleStore(), batch).find_or_create("Breakout sessions", "session", START, END)

    assert block_id == BLOCK_ID
    assert len(batch) == 0


@pytest.mark.django_db
def test_block_already_queued_by_caller_is_not_recreated():
    batch = Batch()
    batch.append(
        Insert(EntityKind.BLOCKS, {"id": BLOCK_ID, "title": "Lunch", "kind": "food", "start": START, "end": END})
    )

    BlockResolver(DjangoScheduleStore(), batch).find_or_create("Breakout sessions", "session", START, END)

    assert len(_block_inserts(batch)) == 1


@pytest.mark.django_db
def test_stored_block_with_other_span_under_same_id_is_a_violation():
    Block.objects.create(id=BLOCK_ID, title="Corrupt", start=START, end=END + timedelta(minutes=5), kind="session")

    resolver = BlockResolver(DjangoScheduleStore(), Batch())

    with pytest.raises(ReconciliationInvariantViolation, match=BLOCK_ID):
        resolver.find_or_create("Breakout sessions", "session", START, END)
