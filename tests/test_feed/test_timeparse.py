"""Tests for django_schedule.feed.timeparse -- feed date and span parsing."""

from datetime import UTC, datetime, timedelta

import pytest

from django_schedule.feed.errors import FeedFormatError
from django_schedule.feed.timeparse import SpanParser, epoch_seconds, parse_updated
from tests.test_feed.feeds import KEYNOTE_END, KEYNOTE_START


@pytest.fixture
def parser():
    return SpanParser(year=2010, utc_offset_minutes=-420)


class TestParseSpan:
    @pytest.mark.unit
    def test_parses_start_and_end_at_fixed_offset(self, parser):
        start, end = parser.parse_span("Wednesday May 19", "10:45am-11:45am")

        assert start == datetime(2010, 5, 19, 17, 45, tzinfo=UTC)
        assert end == datetime(2010, 5, 19, 18, 45, tzinfo=UTC)
        assert start.utcoffset() == timedelta(hours=-7)
        assert epoch_seconds(start) == KEYNOTE_START
        assert epoch_seconds(end) == KEYNOTE_END

    @pytest.mark.unit
    def test_accepts_uppercase_meridiem_and_spacing(self, parser):
        start, end = parser.parse_span("Thursday  May 20", " 1:00PM - 2:30PM ")

        assert start == datetime(2010, 5, 20, 20, 0, tzinfo=UTC)
        assert end == datetime(2010, 5, 20, 21, 30, tzinfo=UTC)

    @pytest.mark.unit
    def test_accepts_abbreviated_month(self, parser):
        start, _ = parser.parse_span("Wednesday Sep 1", "9:00am-10:00am")

        assert start == datetime(2010, 9, 1, 16, 0, tzinfo=UTC)

    @pytest.mark.unit
    def test_missing_separator_is_fatal(self, parser):
        with pytest.raises(FeedFormatError, match="express a span"):
            parser.parse_span("Wednesday May 19", "1045am")

    @pytest.mark.unit
    def test_unparseable_token_is_fatal(self, parser):
        with pytest.raises(FeedFormatError, match="Problem parsing timestamp"):
            parser.parse_span("Wednesday May 19", "10:45am-noon")

    @pytest.mark.unit
    def test_unparseable_date_is_fatal(self, parser):
        with pytest.raises(FeedFormatError, match="Problem parsing timestamp"):
            parser.parse_span("Someday Maybe", "10:45am-11:45am")

    @pytest.mark.unit
    def test_span_ending_before_it_starts_is_fatal(self, parser):
        with pytest.raises(FeedFormatError, match="ends before it starts"):
            parser.parse_span("Wednesday May 19", "11:45am-10:45am")

    @pytest.mark.unit
    def test_year_and_offset_come_from_configuration(self):
        parser = SpanParser(year=2027, utc_offset_minutes=0)

        start, _ = parser.parse_span("Saturday May 1", "9:00am-9:30am")

        assert start == datetime(2027, 5, 1, 9, 0, tzinfo=UTC)


class TestEpochSeconds:
    @pytest.mark.unit
    def test_truncates_sub_second_precision(self):
        value = datetime(2010, 5, 19, 17, 45, 0, 999_999, tzinfo=UTC)

        assert epoch_seconds(value) == KEYNOTE_START


class TestParseUpdated:
    @pytest.mark.unit
    def test_parses_atom_timestamp_to_epoch_millis(self):
        assert parse_updated("2010-05-10T21:32:44.567Z") == 1273527164567

    @pytest.mark.unit
    def test_honours_explicit_offset(self):
        assert parse_updated("2010-05-10T14:32:44.567-07:00") == 1273527164567

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["", "   ", "yesterday", "2010-05-10T21:32:44"])
    def test_rejects_missing_malformed_or_naive_values(self, value):
        with pytest.raises(FeedFormatError):
            parse_updated(value)
