"""Streaming reader for spreadsheet list feeds and typed row records.

A feed is an Atom document with one ``<entry>`` per spreadsheet row.  Each
entry carries an ``<updated>`` timestamp and one ``gsx:*`` element per
column, named by the column header with spaces and punctuation removed::

    <entry>
      <updated>2010-05-10T21:32:44.567Z</updated>
      <gsx:sessiondate>Wednesday May 19</gsx:sessiondate>
      <gsx:sessiontime>10:45am-11:45am</gsx:sessiontime>
      ...
    </entry>

:func:`iter_entries` walks the document once, yielding :class:`FeedEntry`
values.  The ``*Row.from_entry`` constructors validate an entry once and
return a typed record, so nothing downstream looks columns up by name.
"""

from __future__ import annotations

import enum
import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import IO

from django_schedule.feed.errors import FeedFormatError
from django_schedule.feed.normalization import normalize, split_comma
from django_schedule.feed.timeparse import SpanParser, parse_updated

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
GSX_NS = "http://schemas.google.com/spreadsheets/2006/extended"

_ENTRY_TAG = f"{{{ATOM_NS}}}entry"
_UPDATED_TAG = f"{{{ATOM_NS}}}updated"
_GSX_PREFIX = f"{{{GSX_NS}}}"


class SessionColumn(enum.StrEnum):
    """Column keys of the sessions spreadsheet."""

    DATE = "sessiondate"
    TIME = "sessiontime"
    ROOM = "room"
    PRODUCT = "product"
    TRACK = "track"
    TYPE = "sessiontype"
    TITLE = "sessiontitle"
    TAGS = "tags"
    SPEAKER_NAMES = "sessionspeakers"
    SPEAKER_HANDLES = "speakers"
    ABSTRACT = "sessionabstract"
    REQUIREMENTS = "sessionrequirements"
    LINK = "sessionlink"
    HASHTAG = "sessionhashtag"
    MODERATOR_LINK = "moderatorlink"
    WAVE_LINK = "wavelink"


class SpeakerColumn(enum.StrEnum):
    """Column keys of the speakers spreadsheet."""

    HANDLE = "speakerldap"
    NAME = "speakername"
    COMPANY = "speakercompany"
    ABSTRACT = "speakerabstract"


class VendorColumn(enum.StrEnum):
    """Column keys of the vendors spreadsheet."""

    NAME = "companyname"
    LOCATION = "location"
    DESCRIPTION = "companydescription"
    URL = "companyurl"
    PRODUCT_DESCRIPTION = "productdescription"
    LOGO = "companylogo"
    TRACK = "productpod"


@dataclass(frozen=True, slots=True)
class FeedEntry:
    """One raw feed row: its server timestamp and its string cells."""

    updated: int
    columns: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str:
        """Return the cell for *key*, or ``""`` when the column is absent."""
        return self.columns.get(key, "")

    def require(self, key: str) -> str:
        """Return the non-empty cell for *key*.

        Raises:
            FeedFormatError: If the cell is missing or blank.
        """
        value = self.get(key)
        if not value:
            msg = f"Feed entry is missing required column {key!r}"
            raise FeedFormatError(msg)
        return value


def iter_entries(stream: IO[bytes]) -> Iterator[FeedEntry]:
    """Lazily yield one :class:`FeedEntry` per ``<entry>`` in *stream*.

    The stream is consumed exactly once.  Every element read so far is
    detached from the document root once its entry has been mapped, so memory
    stays flat on large feeds.

    Raises:
        FeedFormatError: If the document is not well-formed XML or an entry
            has an unusable ``<updated>`` timestamp.
    """
    try:
        root = None
        for event, elem in ET.iterparse(stream, events=("start", "end")):
            if root is None:
                root = elem
            if event != "end" or elem.tag != _ENTRY_TAG:
                continue
            columns = {
                child.tag.removeprefix(_GSX_PREFIX): (child.text or "").strip()
                for child in elem
                if child.tag.startswith(_GSX_PREFIX)
            }
            entry = FeedEntry(updated=parse_updated(elem.findtext(_UPDATED_TAG, default="")), columns=columns)
            root.clear()
            yield entry
    except ET.ParseError as exc:
        msg = f"Malformed feed document: {exc}"
        raise FeedFormatError(msg) from exc


@dataclass(frozen=True, slots=True)
class SessionRow:
    """A validated session row, ready for reconciliation."""

    id: str
    updated: int
    title: str
    start: datetime
    end: datetime
    session_type: str = ""
    abstract: str = ""
    requirements: str = ""
    moderator_url: str = ""
    wave_url: str = ""
    keywords: str = ""
    hashtag: str = ""
    room_id: str = ""
    track_labels: list[str] = field(default_factory=list)
    speaker_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: FeedEntry, spans: SpanParser) -> SessionRow:
        """Map and validate one sessions-feed entry.

        The session id comes from the link slug, falling back to the title.
        Speaker ids come from the short-handle column when present, otherwise
        from the display names with parenthetical asides removed.

        Raises:
            FeedFormatError: If a required cell is missing or the time span
                does not parse.
        """
        title = entry.require(SessionColumn.TITLE)
        session_id = normalize(entry.get(SessionColumn.LINK)) or normalize(title)
        if not session_id:
            msg = f"Cannot derive a session id for {title!r}"
            raise FeedFormatError(msg)

        start, end = spans.parse_span(entry.require(SessionColumn.DATE), entry.require(SessionColumn.TIME))

        handles = split_comma(entry.get(SessionColumn.SPEAKER_HANDLES))
        if handles:
            speaker_ids = [normalize(handle) for handle in handles]
        else:
            speaker_ids = [
                normalize(name, strip_parens=True) for name in split_comma(entry.get(SessionColumn.SPEAKER_NAMES))
            ]

        return cls(
            id=session_id,
            updated=entry.updated,
            title=title,
            start=start,
            end=end,
            session_type=entry.get(SessionColumn.TYPE),
            abstract=entry.get(SessionColumn.ABSTRACT),
            requirements=entry.get(SessionColumn.REQUIREMENTS),
            moderator_url=entry.get(SessionColumn.MODERATOR_LINK),
            wave_url=entry.get(SessionColumn.WAVE_LINK),
            keywords=entry.get(SessionColumn.TAGS),
            hashtag=entry.get(SessionColumn.HASHTAG),
            room_id=normalize(entry.get(SessionColumn.ROOM)),
            track_labels=split_comma(entry.get(SessionColumn.TRACK)),
            speaker_ids=[speaker_id for speaker_id in speaker_ids if speaker_id],
        )


@dataclass(frozen=True, slots=True)
class SpeakerRow:
    """A validated speaker row."""

    id: str
    updated: int
    name: str
    company: str = ""
    abstract: str = ""

    @classmethod
    def from_entry(cls, entry: FeedEntry) -> SpeakerRow:
        """Map and validate one speakers-feed entry.

        Raises:
            FeedFormatError: If the speaker handle is missing.
        """
        handle = entry.require(SpeakerColumn.HANDLE)
        speaker_id = normalize(handle)
        if not speaker_id:
            msg = f"Cannot derive a speaker id from handle {handle!r}"
            raise FeedFormatError(msg)
        return cls(
            id=speaker_id,
            updated=entry.updated,
            name=entry.get(SpeakerColumn.NAME) or handle,
            company=entry.get(SpeakerColumn.COMPANY),
            abstract=entry.get(SpeakerColumn.ABSTRACT),
        )


@dataclass(frozen=True, slots=True)
class VendorRow:
    """A validated vendor row."""

    id: str
    updated: int
    name: str
    location: str = ""
    description: str = ""
    url: str = ""
    product_description: str = ""
    logo_url: str = ""
    track_label: str = ""

    @classmethod
    def from_entry(cls, entry: FeedEntry) -> VendorRow:
        """Map and validate one vendors-feed entry.

        Raises:
            FeedFormatError: If the company name is missing.
        """
        name = entry.require(VendorColumn.NAME)
        vendor_id = normalize(name)
        if not vendor_id:
            msg = f"Cannot derive a vendor id from {name!r}"
            raise FeedFormatError(msg)
        return cls(
            id=vendor_id,
            updated=entry.updated,
            name=name,
            location=entry.get(VendorColumn.LOCATION),
            description=entry.get(VendorColumn.DESCRIPTION),
            url=entry.get(VendorColumn.URL),
            product_description=entry.get(VendorColumn.PRODUCT_DESCRIPTION),
            logo_url=entry.get(VendorColumn.LOGO),
            track_label=entry.get(VendorColumn.TRACK),
        )
