"""Typed configuration for django-conference-schedule.

Reads a single ``DJANGO_SCHEDULE`` dict from Django settings and exposes it as
composed, frozen dataclasses with sensible defaults.

Usage::

    from django_schedule.settings import get_config

    config = get_config()
    config.feed.sessions_url
    config.feed.utc_offset_minutes
"""

import functools
from collections.abc import Mapping
from dataclasses import dataclass, field

from django.conf import settings
from django.test.signals import setting_changed

# Legacy track labels that older spreadsheets still use, keyed by their
# normalized form.
DEFAULT_TRACK_ALIASES: dict[str, str] = {
    "google-wave": "wave",
    "google-web-toolkit": "gwt",
    "geo-location": "geo",
}


@dataclass(frozen=True, slots=True)
class FeedConfig:
    """Remote schedule feed configuration.

    The feed timestamps carry no zone information, so every date/time cell is
    interpreted in ``reference_year`` at a fixed ``utc_offset_minutes``.
    """

    sessions_url: str = ""
    speakers_url: str = ""
    vendors_url: str = ""
    timeout: float = 30.0
    reference_year: int = 2010
    utc_offset_minutes: int = -420
    track_aliases: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_TRACK_ALIASES))


@dataclass(frozen=True, slots=True)
class ScheduleConfig:
    """Top-level django-conference-schedule configuration."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    session_block_title: str = "Breakout sessions"


@functools.lru_cache(maxsize=1)
def get_config() -> ScheduleConfig:
    """Build and return the schedule configuration.

    Reads ``settings.DJANGO_SCHEDULE`` (a plain dict) and returns a frozen
    :class:`ScheduleConfig`.  The result is cached; the cache is cleared
    automatically when Django's ``setting_changed`` signal fires (e.g. inside
    ``override_settings``).
    """
    raw = getattr(settings, "DJANGO_SCHEDULE", {})
    if not isinstance(raw, Mapping):
        msg = "DJANGO_SCHEDULE must be a mapping (dict-like object)"
        raise TypeError(msg)
    raw_data = dict(raw)

    feed_data = raw_data.pop("feed", {})
    if not isinstance(feed_data, Mapping):
        msg = "DJANGO_SCHEDULE['feed'] must be a mapping (dict-like object)"
        raise TypeError(msg)
    feed_data = dict(feed_data)
    aliases = feed_data.get("track_aliases")
    if aliases is not None:
        if not isinstance(aliases, Mapping):
            msg = "DJANGO_SCHEDULE['feed']['track_aliases'] must be a mapping (dict-like object)"
            raise TypeError(msg)
        feed_data["track_aliases"] = dict(aliases)

    config = ScheduleConfig(
        feed=FeedConfig(**feed_data),
        **raw_data,
    )
    _validate_schedule_config(config)
    return config


def _validate_schedule_config(config: ScheduleConfig) -> None:
    """Validate high-impact configuration values with clear error messages."""
    feed = config.feed
    if isinstance(feed.reference_year, bool) or not isinstance(feed.reference_year, int):
        msg = "DJANGO_SCHEDULE['feed']['reference_year'] must be an integer"
        raise TypeError(msg)
    if not 1970 <= feed.reference_year <= 9999:
        msg = "DJANGO_SCHEDULE['feed']['reference_year'] must be between 1970 and 9999"
        raise ValueError(msg)
    if isinstance(feed.utc_offset_minutes, bool) or not isinstance(feed.utc_offset_minutes, int):
        msg = "DJANGO_SCHEDULE['feed']['utc_offset_minutes'] must be an integer"
        raise TypeError(msg)
    if not -24 * 60 < feed.utc_offset_minutes < 24 * 60:
        msg = "DJANGO_SCHEDULE['feed']['utc_offset_minutes'] must be strictly within one day of UTC"
        raise ValueError(msg)
    if not isinstance(feed.timeout, (int, float)) or feed.timeout <= 0:
        msg = "DJANGO_SCHEDULE['feed']['timeout'] must be a positive number"
        raise ValueError(msg)
    for legacy, canonical in feed.track_aliases.items():
        if not isinstance(legacy, str) or not isinstance(canonical, str) or not legacy or not canonical:
            msg = "DJANGO_SCHEDULE['feed']['track_aliases'] must map non-empty strings to non-empty strings"
            raise ValueError(msg)
    if not isinstance(config.session_block_title, str) or not config.session_block_title.strip():
        msg = "DJANGO_SCHEDULE['session_block_title'] must be a non-empty string"
        raise ValueError(msg)


def _clear_config_cache(*, setting: str, **kwargs: object) -> None:  # noqa: ARG001
    """Clear the cached config when Django settings change during tests."""
    if setting == "DJANGO_SCHEDULE":
        get_config.cache_clear()


setting_changed.connect(_clear_config_cache, dispatch_uid="django_schedule.settings.clear_config_cache")
