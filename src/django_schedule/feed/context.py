"""Per-pass state for one schedule feed synchronization."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from django_schedule.feed.batch import Batch, EntityKind
from django_schedule.feed.blocks import BlockResolver
from django_schedule.feed.errors import FeedFormatError
from django_schedule.feed.normalization import normalize, translate_track_alias
from django_schedule.feed.store import ScheduleStore
from django_schedule.feed.timeparse import SpanParser
from django_schedule.settings import ScheduleConfig, get_config


@dataclass
class SyncPass:
    """Everything one pass over one feed document needs, and nothing global.

    A pass is built when a document is opened and thrown away once its batch
    has been applied (or the pass has failed).

    Attributes:
        store: Store read for existing sync metadata.
        spans: Parser for the feed's date and time-range cells.
        track_aliases: Legacy-to-canonical track ids, both normalized.
        session_block_title: Title given to blocks created for sessions.
        batch: Operations staged so far.
        blocks: Block resolver sharing this pass's batch.
        replaced: Entities queued for replacement.
        current: Entities skipped because the store is up to date.
    """

    store: ScheduleStore
    spans: SpanParser
    track_aliases: Mapping[str, str] = field(default_factory=dict)
    session_block_title: str = "Breakout sessions"
    batch: Batch = field(default_factory=Batch)
    blocks: BlockResolver = field(init=False)
    replaced: int = 0
    current: int = 0
    _seen: set[tuple[EntityKind, str]] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        self.blocks = BlockResolver(self.store, self.batch)
        self.track_aliases = {normalize(legacy): normalize(canonical) for legacy, canonical in self.track_aliases.items()}

    @classmethod
    def from_config(cls, store: ScheduleStore, config: ScheduleConfig | None = None) -> SyncPass:
        """Build a pass from the project configuration."""
        config = config or get_config()
        return cls(
            store=store,
            spans=SpanParser(year=config.feed.reference_year, utc_offset_minutes=config.feed.utc_offset_minutes),
            track_aliases=config.feed.track_aliases,
            session_block_title=config.session_block_title,
        )

    def track_id(self, label: str) -> str:
        """Normalize a track label and resolve legacy aliases."""
        return translate_track_alias(normalize(label), self.track_aliases)

    def claim(self, kind: EntityKind, entity_id: str) -> None:
        """Record that this pass has handled *entity_id*.

        Raises:
            FeedFormatError: If the document already produced this id.
        """
        key = (kind, entity_id)
        if key in self._seen:
            msg = f"Feed lists {kind} {entity_id!r} more than once"
            raise FeedFormatError(msg)
        self._seen.add(key)
