"""Replace-or-skip reconciliation of feed rows against the store.

For each row the store is read once.  If the stored row is at least as new
as the feed row nothing is staged.  Otherwise the stored row and all of its
junction rows are deleted and re-inserted from the feed, carrying forward
user-local fields such as ``starred``.  Rows are never patched field by
field.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from django_schedule.feed.batch import Delete, EntityKind, Insert, Operation
from django_schedule.feed.context import SyncPass
from django_schedule.feed.rows import SessionRow, SpeakerRow, VendorRow
from django_schedule.feed.store import StoredRecord
from django_schedule.schedule.models import UPDATED_NEVER, BlockKind

logger = logging.getLogger(__name__)

_SESSION_JUNCTIONS = (EntityKind.SESSION_TRACKS, EntityKind.SESSION_SPEAKERS)


def reconcile_session(row: SessionRow, ctx: SyncPass) -> bool:
    """Stage the replacement of one session if the feed copy is newer.

    Returns:
        ``True`` if operations were staged, ``False`` if the session is current.
    """
    stale, existing = _read_metadata(ctx, EntityKind.SESSIONS, row.id, row.updated)
    if not stale:
        return False

    block_id = ctx.blocks.find_or_create(ctx.session_block_title, BlockKind.SESSION, row.start, row.end)
    values: dict[str, Any] = {
        "id": row.id,
        "updated": row.updated,
        "session_type": row.session_type,
        "title": row.title,
        "abstract": row.abstract,
        "requirements": row.requirements,
        "moderator_url": row.moderator_url,
        "wave_url": row.wave_url,
        "keywords": row.keywords,
        "hashtag": row.hashtag,
        "block_id": block_id,
        "room_id": row.room_id or None,
    }

    operations = _replace(EntityKind.SESSIONS, values, existing, junctions=_SESSION_JUNCTIONS)
    track_ids = _unique(ctx.track_id(label) for label in row.track_labels)
    operations.extend(
        Insert(EntityKind.SESSION_TRACKS, {"session_id": row.id, "track_id": track_id}) for track_id in track_ids
    )
    operations.extend(
        Insert(EntityKind.SESSION_SPEAKERS, {"session_id": row.id, "speaker_id": speaker_id})
        for speaker_id in _unique(row.speaker_ids)
    )
    ctx.batch.extend(operations)
    ctx.replaced += 1
    return True


def reconcile_speaker(row: SpeakerRow, ctx: SyncPass) -> bool:
    """Stage the replacement of one speaker if the feed copy is newer."""
    stale, existing = _read_metadata(ctx, EntityKind.SPEAKERS, row.id, row.updated)
    if not stale:
        return False

    values = {
        "id": row.id,
        "updated": row.updated,
        "name": row.name,
        "company": row.company,
        "abstract": row.abstract,
    }
    ctx.batch.extend(_replace(EntityKind.SPEAKERS, values, existing))
    ctx.replaced += 1
    return True


def reconcile_vendor(row: VendorRow, ctx: SyncPass) -> bool:
    """Stage the replacement of one vendor if the feed copy is newer."""
    stale, existing = _read_metadata(ctx, EntityKind.VENDORS, row.id, row.updated)
    if not stale:
        return False

    values = {
        "id": row.id,
        "updated": row.updated,
        "name": row.name,
        "location": row.location,
        "description": row.description,
        "url": row.url,
        "product_description": row.product_description,
        "logo_url": row.logo_url,
        "track_id": ctx.track_id(row.track_label) or None,
    }
    ctx.batch.extend(_replace(EntityKind.VENDORS, values, existing))
    ctx.replaced += 1
    return True


def _read_metadata(
    ctx: SyncPass,
    kind: EntityKind,
    entity_id: str,
    server_updated: int,
) -> tuple[bool, StoredRecord | None]:
    """Read sync metadata and decide whether *entity_id* is stale.

    Returns:
        A ``(stale, existing)`` tuple; *existing* is ``None`` if the entity
        has never been synced.
    """
    ctx.claim(kind, entity_id)
    existing = ctx.store.get(kind, entity_id)
    local_updated = existing.last_updated if existing is not None else UPDATED_NEVER
    logger.debug("Found %s %s: local_updated=%d, server_updated=%d", kind, entity_id, local_updated, server_updated)
    if local_updated >= server_updated:
        ctx.current += 1
        return False, existing
    return True, existing


def _replace(
    kind: EntityKind,
    values: Mapping[str, Any],
    existing: StoredRecord | None,
    *,
    junctions: tuple[EntityKind, ...] = (),
) -> list[Operation]:
    """Build the delete-then-insert sequence for one entity.

    Deletes are only staged when the entity exists locally; junction rows
    never outlive their owner, so a new entity has none to remove.
    """
    operations: list[Operation] = []
    entity_id = str(values["id"])
    if existing is not None:
        operations.append(Delete(kind, entity_id))
        operations.extend(Delete(junction, entity_id) for junction in junctions)
    row = dict(values)
    if existing is not None:
        row.update(existing.preserved)
    operations.append(Insert(kind, row))
    return operations


def _unique(ids: Iterable[str]) -> list[str]:
    """Drop empty and repeated ids, keeping first-seen order."""
    return list(dict.fromkeys(i for i in ids if i))
