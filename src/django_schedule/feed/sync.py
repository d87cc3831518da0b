"""Synchronization service for importing remote schedule feeds into the store.

Provides :class:`ScheduleSyncService`, which runs one reconciliation pass per
feed document.  A pass walks the document top to bottom, stages every change
in a :class:`~django_schedule.feed.batch.Batch`, and only hands that batch to
the store once the whole document has been read.  Any error during the walk
discards the batch, so a failed pass leaves the store exactly as it was.
"""

import enum
import io
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from django_schedule.feed.client import FeedClient
from django_schedule.feed.context import SyncPass
from django_schedule.feed.reconcile import reconcile_session, reconcile_speaker, reconcile_vendor
from django_schedule.feed.rows import FeedEntry, SessionRow, SpeakerRow, VendorRow, iter_entries
from django_schedule.feed.seed import load_schedule_seed, stage_seed
from django_schedule.feed.store import DjangoScheduleStore, ScheduleStore
from django_schedule.settings import get_config

logger = logging.getLogger(__name__)


class FeedKind(enum.StrEnum):
    """The remote feeds the service knows how to reconcile."""

    SESSIONS = "sessions"
    SPEAKERS = "speakers"
    VENDORS = "vendors"


def _session_step(entry: FeedEntry, ctx: SyncPass) -> bool:
    return reconcile_session(SessionRow.from_entry(entry, ctx.spans), ctx)


def _speaker_step(entry: FeedEntry, ctx: SyncPass) -> bool:
    return reconcile_speaker(SpeakerRow.from_entry(entry), ctx)


def _vendor_step(entry: FeedEntry, ctx: SyncPass) -> bool:
    return reconcile_vendor(VendorRow.from_entry(entry), ctx)


_STEPS: dict[FeedKind, Callable[[FeedEntry, SyncPass], bool]] = {
    FeedKind.SESSIONS: _session_step,
    FeedKind.SPEAKERS: _speaker_step,
    FeedKind.VENDORS: _vendor_step,
}


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of one applied sync pass.

    Attributes:
        replaced: Entities deleted and re-inserted (or inserted for the first time).
        current: Entities skipped because the store was already up to date.
        blocks_created: New blocks created for previously unseen spans.
        operations: Store operations applied.
    """

    replaced: int
    current: int
    blocks_created: int
    operations: int


def run_pass(kind: FeedKind, stream: IO[bytes], ctx: SyncPass) -> SyncPass:
    """Walk one feed document and stage its changes in ``ctx.batch``.

    Nothing is written to the store.  Errors propagate unchanged; the caller
    must then drop *ctx* and its batch.
    """
    step = _STEPS[kind]
    for entry in iter_entries(stream):
        step(entry, ctx)
    return ctx


class ScheduleSyncService:
    """Synchronizes sessions, speakers, and vendors from remote feeds.

    Builds a :class:`~django_schedule.feed.client.FeedClient` and reads feed
    URLs from the ``DJANGO_SCHEDULE`` configuration, then provides methods to
    sync each feed individually or all at once.

    Args:
        store: Store to reconcile against.  Defaults to the Django ORM store.
        client: Transport used to download feeds.
    """

    def __init__(self, *, store: ScheduleStore | None = None, client: FeedClient | None = None) -> None:
        self.config = get_config()
        self.store = store if store is not None else DjangoScheduleStore()
        self.client = client if client is not None else FeedClient(timeout=self.config.feed.timeout)
        self._urls: dict[FeedKind, str] = {
            FeedKind.SESSIONS: self.config.feed.sessions_url,
            FeedKind.SPEAKERS: self.config.feed.speakers_url,
            FeedKind.VENDORS: self.config.feed.vendors_url,
        }

    def new_pass(self) -> SyncPass:
        """Return a fresh pass context bound to this service's store."""
        return SyncPass.from_config(self.store, self.config)

    def sync_document(self, kind: FeedKind, stream: IO[bytes]) -> SyncResult:
        """Reconcile one already-opened feed document and apply the result.

        Raises:
            FeedFormatError: If any row is malformed; nothing is applied.
            ReconciliationInvariantViolation: If block ids collide.
            StoreError: If reading or applying fails; nothing is applied.
        """
        ctx = run_pass(kind, stream, self.new_pass())
        applied = self.store.apply(ctx.batch) if ctx.batch else 0
        result = SyncResult(
            replaced=ctx.replaced,
            current=ctx.current,
            blocks_created=ctx.blocks.created,
            operations=applied,
        )
        logger.info(
            "Synced %d %s (%d replaced, %d current, %d new blocks)",
            result.replaced + result.current,
            kind,
            result.replaced,
            result.current,
            result.blocks_created,
        )
        return result

    def sync_file(self, kind: FeedKind, path: str | Path) -> SyncResult:
        """Reconcile a feed document stored on disk."""
        with Path(path).open("rb") as fh:
            return self.sync_document(kind, fh)

    def sync_feed(self, kind: FeedKind) -> SyncResult:
        """Download the configured feed for *kind* and reconcile it.

        Raises:
            FeedFetchError: If no URL is configured or the download fails.
        """
        document = self.client.fetch(self._urls[kind])
        return self.sync_document(kind, io.BytesIO(document))

    def sync_sessions(self) -> int:
        """Fetch the sessions feed and reconcile it.

        Returns:
            The number of sessions replaced.
        """
        return self.sync_feed(FeedKind.SESSIONS).replaced

    def sync_speakers(self) -> int:
        """Fetch the speakers feed and reconcile it.

        Returns:
            The number of speakers replaced.
        """
        return self.sync_feed(FeedKind.SPEAKERS).replaced

    def sync_vendors(self) -> int:
        """Fetch the vendors feed and reconcile it.

        Returns:
            The number of vendors replaced.
        """
        return self.sync_feed(FeedKind.VENDORS).replaced

    def sync_all(self) -> dict[str, int]:
        """Sync every configured feed, speakers first.

        Feeds without a configured URL are skipped.  Each feed is its own
        atomic pass: a failure stops the run, but feeds already applied stay
        applied.

        Returns:
            A mapping of feed name to the number of entities replaced.
        """
        results: dict[str, int] = {}
        for kind in (FeedKind.SPEAKERS, FeedKind.SESSIONS, FeedKind.VENDORS):
            if not self._urls[kind]:
                logger.info("No %s feed URL configured; skipping", kind)
                continue
            results[str(kind)] = self.sync_feed(kind).replaced
        return results

    def load_seed(self, path: str | Path) -> dict[str, int]:
        """Load a schedule seed file and apply it as one atomic batch.

        Returns:
            Counts of seeded tracks, rooms, and newly created blocks.
        """
        seed = load_schedule_seed(path)
        ctx = self.new_pass()
        counts = stage_seed(seed, ctx)
        if ctx.batch:
            self.store.apply(ctx.batch)
        logger.info(
            "Loaded %d tracks, %d rooms, %d new blocks from %s",
            counts["tracks"],
            counts["rooms"],
            counts["blocks"],
            path,
        )
        return counts
