import pytest

from django_schedule.feed.context import SyncPass
from django_schedule.feed.store import DjangoScheduleStore
from django_schedule.feed.timeparse import SpanParser


@pytest.fixture
def spans():
    return SpanParser(year=2010, utc_offset_minutes=-420)


@pytest.fixture
def sync_pass(spans):
    return SyncPass(
        store=DjangoScheduleStore(),
        spans=spans,
        track_aliases={"google-wave": "wave"},
    )
