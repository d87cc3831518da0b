"""TOML loader for static schedule data the remote feeds do not carry.

Tracks (with colors and abstracts), rooms (with floors), and fixed blocks such
as meals or office hours are described once in a seed file::

    [[tracks]]
    name = "App Engine"
    color = "#6f9b3c"

    [[rooms]]
    name = "Room 6"
    floor = "2"

    [[blocks]]
    title = "Lunch"
    kind = "food"
    date = "Wednesday May 19"
    time = "12:30pm-1:30pm"
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

from django_schedule.feed.batch import Delete, EntityKind, Insert
from django_schedule.feed.context import SyncPass
from django_schedule.feed.normalization import normalize
from django_schedule.schedule.models import BlockKind

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS: dict[str, set[str]] = {
    "tracks": {"name"},
    "rooms": {"name"},
    "blocks": {"title", "date", "time"},
}


def load_schedule_seed(path: str | Path) -> dict[str, list[dict[str, Any]]]:
    """Load and validate a schedule seed TOML file.

    Args:
        path: Filesystem path to the TOML file.

    Returns:
        A mapping with ``tracks``, ``rooms``, and ``blocks`` lists.  Missing
        tables yield empty lists; ``kind`` defaults to ``"other"`` on blocks.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not valid TOML, an item lacks a required
            field, or an item's name does not produce an identifier.
        TypeError: If a table is not a list of mappings.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Schedule seed file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as fh:
        try:
            data: dict[str, Any] = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise ValueError(msg) from exc

    seed: dict[str, list[dict[str, Any]]] = {}
    for key, required in _REQUIRED_FIELDS.items():
        items = data.get(key, [])
        if not isinstance(items, list):
            msg = f"{key} must be a list of tables, got {type(items).__name__}"
            raise TypeError(msg)
        for idx, item in enumerate(items):
            _validate_item(item, required, f"{key}[{idx}]")
        seed[key] = items

    for block in seed["blocks"]:
        kind = block.setdefault("kind", BlockKind.OTHER)
        if kind not in BlockKind.values:
            msg = f"blocks kind {kind!r} must be one of: {', '.join(BlockKind.values)}"
            raise ValueError(msg)

    return seed


def stage_seed(seed: dict[str, list[dict[str, Any]]], ctx: SyncPass) -> dict[str, int]:
    """Stage seed tracks, rooms, and blocks into the pass's batch.

    Tracks and rooms are replaced outright; track ids go through the alias
    table like every other track reference.  Blocks go through the block
    resolver, so a seeded span that already exists is left untouched.

    Returns:
        Counts of staged tracks, rooms, and newly created blocks.
    """
    for track in seed["tracks"]:
        track_id = ctx.track_id(track["name"])
        ctx.batch.append(Delete(EntityKind.TRACKS, track_id))
        ctx.batch.append(
            Insert(
                EntityKind.TRACKS,
                {
                    "id": track_id,
                    "name": track["name"],
                    "color": track.get("color", ""),
                    "abstract": track.get("abstract", ""),
                },
            )
        )

    for room in seed["rooms"]:
        room_id = normalize(room["name"])
        ctx.batch.append(Delete(EntityKind.ROOMS, room_id))
        ctx.batch.append(
            Insert(EntityKind.ROOMS, {"id": room_id, "name": room["name"], "floor": str(room.get("floor", ""))})
        )

    created_before = ctx.blocks.created
    for block in seed["blocks"]:
        start, end = ctx.spans.parse_span(block["date"], block["time"])
        ctx.blocks.find_or_create(block["title"], block["kind"], start, end)

    counts = {
        "tracks": len(seed["tracks"]),
        "rooms": len(seed["rooms"]),
        "blocks": ctx.blocks.created - created_before,
    }
    logger.debug("Staged seed data: %s", counts)
    return counts


def _validate_item(item: object, required: set[str], label: str) -> None:
    """Validate one seed item is a mapping with every *required* string field.

    Raises:
        TypeError: If *item* is not a dict.
        ValueError: If a required field is missing or blank, or the item's
            name does not normalize to an identifier.
    """
    if not isinstance(item, dict):
        msg = f"{label} must be a mapping, got {type(item).__name__}"
        raise TypeError(msg)
    missing = {key for key in required if not isinstance(item.get(key), str) or not item[key].strip()}
    if missing:
        msg = f"{label} is missing required fields: {', '.join(sorted(missing))}"
        raise ValueError(msg)
    if "name" in required and not normalize(item["name"]):
        msg = f"{label}.name {item['name']!r} does not produce an identifier"
        raise ValueError(msg)
