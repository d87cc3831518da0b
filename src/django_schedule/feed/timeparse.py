"""Timestamp parsing for spreadsheet-style schedule feeds.

Session rows describe their span with two loosely formatted cells, a day such
as ``"Wednesday May 19"`` and a range such as ``"10:45am-11:45am"``.  Neither
cell names a year or a time zone, so :class:`SpanParser` interprets them in a
configured reference year at a fixed UTC offset.  The offset is never
inferred; daylight-saving changes inside the event are not modelled.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone

from django_schedule.feed.errors import FeedFormatError

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

SPAN_SEPARATOR = "-"

_DATETIME_FORMATS = (
    "%A %B %d %Y %I:%M%p",
    "%A %b %d %Y %I:%M%p",
)


@dataclass(frozen=True, slots=True)
class SpanParser:
    """Parse feed date and time-range cells into absolute instants.

    Attributes:
        year: Reference year appended to every date cell.
        utc_offset_minutes: Fixed offset of the event's local time from UTC.
    """

    year: int
    utc_offset_minutes: int

    @property
    def tzinfo(self) -> timezone:
        """The fixed-offset zone every feed timestamp is read in."""
        return timezone(timedelta(minutes=self.utc_offset_minutes))

    def parse_span(self, date_text: str, time_range_text: str) -> tuple[datetime, datetime]:
        """Parse a date cell and a ``start-end`` time cell into two instants.

        Args:
            date_text: Day cell, e.g. ``"Wednesday May 19"``.
            time_range_text: Range cell, e.g. ``"10:45am-11:45am"``.

        Returns:
            A ``(start, end)`` tuple of timezone-aware datetimes.

        Raises:
            FeedFormatError: If the range has no separator, either half does
                not parse, or the span ends before it starts.
        """
        start_text, sep, end_text = time_range_text.partition(SPAN_SEPARATOR)
        if not sep:
            msg = f"Expecting time cell {time_range_text!r} to express a span"
            raise FeedFormatError(msg)

        start = self.parse_instant(date_text, start_text)
        end = self.parse_instant(date_text, end_text)
        if end < start:
            msg = f"Time span {time_range_text!r} on {date_text!r} ends before it starts"
            raise FeedFormatError(msg)
        return start, end

    def parse_instant(self, date_text: str, time_text: str) -> datetime:
        """Combine one date cell and one time token into an aware datetime.

        Raises:
            FeedFormatError: If the composed timestamp does not parse.
        """
        composed = " ".join(f"{date_text} {self.year} {time_text}".split())
        for fmt in _DATETIME_FORMATS:
            try:
                naive = datetime.strptime(composed, fmt)  # noqa: DTZ007
            except ValueError:
                continue
            return naive.replace(tzinfo=self.tzinfo)
        msg = f"Problem parsing timestamp {composed!r}"
        raise FeedFormatError(msg)


def epoch_seconds(value: datetime) -> int:
    """Return whole seconds since the epoch, truncating any sub-second part."""
    return (value - EPOCH) // timedelta(seconds=1)


def parse_updated(value: str) -> int:
    """Parse an Atom ``<updated>`` timestamp into epoch milliseconds.

    Raises:
        FeedFormatError: If *value* is empty, not RFC 3339, or has no offset.
    """
    text = value.strip()
    if not text:
        msg = "Feed entry is missing its updated timestamp"
        raise FeedFormatError(msg)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        msg = f"Problem parsing updated timestamp {text!r}"
        raise FeedFormatError(msg) from exc
    if parsed.tzinfo is None:
        msg = f"Updated timestamp {text!r} has no UTC offset"
        raise FeedFormatError(msg)
    return (parsed - EPOCH) // timedelta(milliseconds=1)
