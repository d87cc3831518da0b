"""Ordered staging buffer of store mutations.

The sync engine never writes to the store directly.  It appends
:class:`Delete` and :class:`Insert` operations to a :class:`Batch`, and the
caller hands the finished batch to the store's atomic ``apply``.
"""

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias


class EntityKind(enum.StrEnum):
    """Every collection a batch operation can target.

    Junction kinds are addressed by their owning entity's id: deleting
    ``SESSION_TRACKS`` for ``"keynote"`` removes every track link of that
    session.
    """

    BLOCKS = "blocks"
    TRACKS = "tracks"
    ROOMS = "rooms"
    SESSIONS = "sessions"
    SPEAKERS = "speakers"
    VENDORS = "vendors"
    SESSION_TRACKS = "session_tracks"
    SESSION_SPEAKERS = "session_speakers"


@dataclass(frozen=True, slots=True)
class Delete:
    """Delete the row (or owned junction rows) identified by *entity_id*."""

    kind: EntityKind
    entity_id: str


@dataclass(frozen=True, slots=True)
class Insert:
    """Insert one row with the given field values."""

    kind: EntityKind
    values: Mapping[str, Any] = field(default_factory=dict)

    @property
    def entity_id(self) -> str:
        """The primary identifier carried in ``values``."""
        return str(self.values.get("id", ""))


Operation: TypeAlias = Delete | Insert


class Batch:
    """Append-only, ordered sequence of store operations for one sync pass."""

    def __init__(self) -> None:
        self._operations: list[Operation] = []

    def append(self, operation: Operation) -> None:
        self._operations.append(operation)

    def extend(self, operations: list[Operation]) -> None:
        self._operations.extend(operations)

    def queued_inserts(self, kind: EntityKind) -> Iterator[Insert]:
        """Yield inserts of *kind* staged so far, in order."""
        for operation in self._operations:
            if isinstance(operation, Insert) and operation.kind == kind:
                yield operation

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __bool__(self) -> bool:
        return bool(self._operations)

    def __repr__(self) -> str:
        return f"<Batch operations={len(self._operations)}>"
