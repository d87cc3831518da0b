"""Store interface consumed by the sync engine, and its Django ORM implementation.

The engine needs exactly three things from a store: read one entity's sync
metadata, read one block's span, and apply an ordered batch all-or-nothing.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from django.db import DatabaseError, transaction

from django_schedule.feed.batch import Delete, EntityKind, Insert, Operation
from django_schedule.feed.errors import StoreError
from django_schedule.schedule.models import (
    Block,
    Room,
    Session,
    SessionSpeaker,
    SessionTrack,
    Speaker,
    Track,
    Vendor,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredRecord:
    """Sync metadata of an entity that already exists locally.

    Attributes:
        last_updated: Server timestamp (epoch ms) of the stored row, or the
            ``UPDATED_UNKNOWN`` sentinel for rows with no comparable time.
        preserved: User-local fields to carry into a replacement row.
    """

    last_updated: int
    preserved: Mapping[str, Any] = field(default_factory=dict)


class ScheduleStore(Protocol):
    """Read and atomic-write operations the sync engine relies on."""

    def get(self, kind: EntityKind, entity_id: str) -> StoredRecord | None: ...

    def get_block(self, block_id: str) -> tuple[datetime, datetime] | None: ...

    def apply(self, operations: Iterable[Operation]) -> int: ...


_MODELS = {
    EntityKind.BLOCKS: Block,
    EntityKind.TRACKS: Track,
    EntityKind.ROOMS: Room,
    EntityKind.SESSIONS: Session,
    EntityKind.SPEAKERS: Speaker,
    EntityKind.VENDORS: Vendor,
    EntityKind.SESSION_TRACKS: SessionTrack,
    EntityKind.SESSION_SPEAKERS: SessionSpeaker,
}

# Junction collections are deleted by their owner's id, not their own pk.
_DELETE_LOOKUPS = {
    EntityKind.SESSION_TRACKS: "session_id",
    EntityKind.SESSION_SPEAKERS: "session_id",
}

_PRESERVED_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.SESSIONS: ("starred",),
    EntityKind.VENDORS: ("starred",),
}

_SYNCED_KINDS = (EntityKind.SESSIONS, EntityKind.SPEAKERS, EntityKind.VENDORS)


class DjangoScheduleStore:
    """A :class:`ScheduleStore` backed by the ``schedule`` app's models."""

    def get(self, kind: EntityKind, entity_id: str) -> StoredRecord | None:
        """Return sync metadata for one entity, or ``None`` if it is absent.

        Raises:
            StoreError: If *kind* carries no sync metadata or the read fails.
        """
        if kind not in _SYNCED_KINDS:
            msg = f"Entity kind {kind!r} carries no sync metadata"
            raise StoreError(msg)
        preserved_fields = _PRESERVED_FIELDS.get(kind, ())
        try:
            row = _MODELS[kind].objects.filter(pk=entity_id).values("updated", *preserved_fields).first()
        except DatabaseError as exc:
            msg = f"Failed to read {kind} {entity_id!r}: {exc}"
            raise StoreError(msg) from exc
        if row is None:
            return None
        updated = row.pop("updated")
        return StoredRecord(last_updated=updated, preserved=row)

    def get_block(self, block_id: str) -> tuple[datetime, datetime] | None:
        """Return the stored ``(start, end)`` span for *block_id*, if any."""
        try:
            row = Block.objects.filter(pk=block_id).values_list("start", "end").first()
        except DatabaseError as exc:
            msg = f"Failed to read block {block_id!r}: {exc}"
            raise StoreError(msg) from exc
        return row

    def apply(self, operations: Iterable[Operation]) -> int:
        """Apply *operations* in order inside a single transaction.

        Either every operation becomes visible or none does.

        Returns:
            The number of operations applied.

        Raises:
            StoreError: If any operation fails; the transaction is rolled back.
        """
        applied = 0
        try:
            with transaction.atomic():
                for operation in operations:
                    _apply_one(operation)
                    applied += 1
        except DatabaseError as exc:
            msg = f"Failed to apply batch at operation {applied}: {exc}"
            raise StoreError(msg) from exc
        logger.debug("Applied %d store operations", applied)
        return applied


def _apply_one(operation: Operation) -> None:
    """Translate one batch operation into an ORM call."""
    model = _MODELS[operation.kind]
    if isinstance(operation, Delete):
        lookup = _DELETE_LOOKUPS.get(operation.kind, "pk")
        model.objects.filter(**{lookup: operation.entity_id}).delete()
    elif isinstance(operation, Insert):
        model.objects.create(**operation.values)
    else:
        msg = f"Unsupported store operation: {operation!r}"
        raise TypeError(msg)
