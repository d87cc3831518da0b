"""Identifier derivation for feed entities.

Identifiers are pure functions of an entity's natural key: lower-cased, with
every run of non-alphanumeric characters collapsed to a single hyphen and
trimmed.  Re-deriving an id from the same text always yields the same id,
which is what lets the sync engine replace a row in place.
"""

import re
from collections.abc import Mapping

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_PAREN_RE = re.compile(r"\(.*?\)")


def normalize(text: str, *, strip_parens: bool = False) -> str:
    """Turn free text into a canonical identifier.

    Args:
        text: The natural key, e.g. a title, room label, or link slug.
        strip_parens: Drop parenthetical asides such as ``"Ben (Google)"``
            before normalizing.

    Returns:
        The normalized identifier.  Empty input yields ``""``; callers decide
        whether that is acceptable.

    Raises:
        TypeError: If *text* is ``None`` or not a string.
    """
    if not isinstance(text, str):
        msg = f"Cannot derive an identifier from {type(text).__name__}"
        raise TypeError(msg)
    if strip_parens:
        text = _PAREN_RE.sub("", text)
    return _NON_ALNUM_RE.sub("-", text.lower()).strip("-")


def split_comma(value: str) -> list[str]:
    """Split a comma-delimited cell into trimmed, non-empty tokens."""
    return [token.strip() for token in value.split(",") if token.strip()]


def translate_track_alias(track_id: str, aliases: Mapping[str, str]) -> str:
    """Resolve a legacy track id to its canonical id.

    Only track ids go through the alias table; ids absent from it are
    returned unchanged.
    """
    return aliases.get(track_id, track_id)


def block_id(start_seconds: int, end_seconds: int) -> str:
    """Derive the block id for a span given in whole epoch seconds."""
    return normalize(f"{start_seconds}-{end_seconds}")
