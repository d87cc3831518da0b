"""Find-or-create resolution of shared time blocks."""

import logging
from datetime import datetime

from django_schedule.feed.batch import Batch, EntityKind, Insert
from django_schedule.feed.errors import ReconciliationInvariantViolation
from django_schedule.feed.normalization import block_id as derive_block_id
from django_schedule.feed.store import ScheduleStore
from django_schedule.feed.timeparse import epoch_seconds

logger = logging.getLogger(__name__)


class BlockResolver:
    """Resolve spans to block ids, staging each missing block exactly once.

    One resolver lives for a single sync pass.  It remembers every span it
    has already confirmed, either in the store or staged in the batch, so
    repeated spans cost neither a store read nor a second insert.

    Args:
        store: Store consulted for blocks written by earlier passes.
        batch: The pass's pending batch; new blocks are appended here.
    """

    def __init__(self, store: ScheduleStore, batch: Batch) -> None:
        self.store = store
        self.batch = batch
        self._known: dict[str, tuple[int, int]] = {}
        self.created = 0

    def find_or_create(self, title: str, kind: str, start: datetime, end: datetime) -> str:
        """Return the block id for ``(start, end)``, staging an insert if needed.

        Spans are compared at whole-second precision.

        Raises:
            ReconciliationInvariantViolation: If the derived id is already
                taken by a block with a different span.
        """
        span = (epoch_seconds(start), epoch_seconds(end))
        block_id = derive_block_id(*span)

        known = self._known.get(block_id)
        if known is None:
            known = self._lookup(block_id)
        if known is not None:
            _check_span(block_id, known, span)
            self._known[block_id] = known
            return block_id

        logger.debug("Creating block %s (%s) for %s - %s", block_id, title, start, end)
        self.batch.append(
            Insert(
                EntityKind.BLOCKS,
                {"id": block_id, "title": title, "kind": kind, "start": start, "end": end},
            )
        )
        self._known[block_id] = span
        self.created += 1
        return block_id

    def _lookup(self, block_id: str) -> tuple[int, int] | None:
        """Find an existing span for *block_id* in the batch, then the store."""
        for insert in self.batch.queued_inserts(EntityKind.BLOCKS):
            if insert.entity_id == block_id:
                return epoch_seconds(insert.values["start"]), epoch_seconds(insert.values["end"])
        stored = self.store.get_block(block_id)
        if stored is None:
            return None
        return epoch_seconds(stored[0]), epoch_seconds(stored[1])


def _check_span(block_id: str, existing: tuple[int, int], span: tuple[int, int]) -> None:
    if existing != span:
        msg = f"Block id {block_id!r} already names span {existing}, not {span}"
        raise ReconciliationInvariantViolation(msg)
