"""Block, Track, Room, Session, Speaker, and Vendor models for the synced schedule.

Every entity is keyed by a content-addressed identifier derived from its
natural key (see :mod:`django_schedule.feed.normalization`) rather than a
surrogate integer.  References between entities are foreign keys without
database constraints: a session may point at a track, room, or speaker id
that has not been loaded yet, and the sync engine replaces rows by deleting
and re-inserting them under the same id.
"""

from django.db import models
from django.db.models import Count, Exists, OuterRef

# Sync metadata sentinels stored in the ``updated`` column.  Both sort below
# any real epoch-millisecond timestamp, so either one loses to a feed row.
UPDATED_NEVER = -2
UPDATED_UNKNOWN = -1


class BlockKind(models.TextChoices):
    """The kind of activity a time block holds."""

    SESSION = "session", "Session"
    FOOD = "food", "Food"
    OFFICE_HOURS = "officehours", "Office hours"
    KEYNOTE = "keynote", "Keynote"
    OTHER = "other", "Other"


class BlockQuerySet(models.QuerySet):
    """Query shapes used by schedule views."""

    def between(self, start, end):
        """Return blocks that start within ``[start, end)``."""
        return self.filter(start__gte=start, start__lt=end)

    def with_session_stats(self):
        """Annotate ``sessions_count`` and ``contains_starred`` on each block."""
        starred = Session.objects.filter(block_id=OuterRef("pk"), starred=True)
        return self.annotate(
            sessions_count=Count("sessions", distinct=True),
            contains_starred=Exists(starred),
        )


class Block(models.Model):
    """A time span shared by every session or event that occupies it.

    The id is derived from the whole-second start and end instants, so two
    rows describing the same span always resolve to the same block.
    """

    id = models.CharField(primary_key=True, max_length=64)
    title = models.CharField(max_length=300)
    start = models.DateTimeField()
    end = models.DateTimeField()
    kind = models.CharField(max_length=50, choices=BlockKind.choices, default=BlockKind.SESSION)

    objects = BlockQuerySet.as_manager()

    class Meta:
        ordering = ["start", "end"]

    def __str__(self) -> str:
        return self.title


class TrackQuerySet(models.QuerySet):
    """Query shapes used by track views."""

    def with_counts(self):
        """Annotate ``sessions_count`` and ``vendors_count`` on each track."""
        return self.annotate(
            sessions_count=Count("session_tracks", distinct=True),
            vendors_count=Count("vendors", distinct=True),
        )


class Track(models.Model):
    """A topical track grouping sessions and vendors."""

    id = models.CharField(primary_key=True, max_length=200)
    name = models.CharField(max_length=300)
    color = models.CharField(max_length=20, blank=True, default="")
    abstract = models.TextField(blank=True, default="")

    objects = TrackQuerySet.as_manager()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Room(models.Model):
    """A room or venue space, identified by its normalized label."""

    id = models.CharField(primary_key=True, max_length=200)
    name = models.CharField(max_length=300)
    floor = models.CharField(max_length=50, blank=True, default="")

    class Meta:
        ordering = ["floor", "name"]

    def __str__(self) -> str:
        return self.name


class Speaker(models.Model):
    """A speaker profile keyed by the speaker's short handle."""

    id = models.CharField(primary_key=True, max_length=200)
    updated = models.BigIntegerField(default=UPDATED_UNKNOWN)
    name = models.CharField(max_length=300)
    company = models.CharField(max_length=300, blank=True, default="")
    abstract = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class SessionQuerySet(models.QuerySet):
    """Query shapes used by schedule views."""

    def starred(self):
        """Return sessions the attendee has starred."""
        return self.filter(starred=True)

    def at(self, instant):
        """Return sessions whose block is running at *instant*."""
        return self.filter(block__start__lte=instant, block__end__gte=instant)

    def for_track(self, track_id: str):
        """Return sessions linked to the given track id."""
        return self.filter(session_tracks__track_id=track_id)

    def for_room(self, room_id: str):
        """Return sessions held in the given room id."""
        return self.filter(room_id=room_id)


class Session(models.Model):
    """A scheduled session synced from the remote sessions feed.

    ``starred`` is attendee-local state.  The feed never carries it, and the
    sync engine copies it into every replacement row written for this id.
    """

    id = models.CharField(primary_key=True, max_length=200)
    updated = models.BigIntegerField(default=UPDATED_UNKNOWN)
    session_type = models.CharField(max_length=100, blank=True, default="")
    title = models.CharField(max_length=500)
    abstract = models.TextField(blank=True, default="")
    requirements = models.TextField(blank=True, default="")
    moderator_url = models.URLField(max_length=500, blank=True, default="")
    wave_url = models.URLField(max_length=500, blank=True, default="")
    keywords = models.TextField(blank=True, default="")
    hashtag = models.CharField(max_length=100, blank=True, default="")
    starred = models.BooleanField(default=False)
    block = models.ForeignKey(
        Block,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="sessions",
    )
    room = models.ForeignKey(
        Room,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="sessions",
    )
    tracks = models.ManyToManyField(Track, through="SessionTrack", related_name="sessions", blank=True)
    speakers = models.ManyToManyField(Speaker, through="SessionSpeaker", related_name="sessions", blank=True)

    objects = SessionQuerySet.as_manager()

    class Meta:
        ordering = ["block__start", "title"]

    def __str__(self) -> str:
        return self.title


class SessionTrack(models.Model):
    """Junction row linking a session to one of its tracks."""

    session = models.ForeignKey(
        Session,
        on_delete=models.CASCADE,
        db_constraint=False,
        related_name="session_tracks",
    )
    track = models.ForeignKey(
        Track,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="session_tracks",
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["session", "track"], name="uniq_session_track"),
        ]

    def __str__(self) -> str:
        return f"{self.session_id} / {self.track_id}"


class SessionSpeaker(models.Model):
    """Junction row linking a session to one of its speakers."""

    session = models.ForeignKey(
        Session,
        on_delete=models.CASCADE,
        db_constraint=False,
        related_name="session_speakers",
    )
    speaker = models.ForeignKey(
        Speaker,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="session_speakers",
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["session", "speaker"], name="uniq_session_speaker"),
        ]

    def __str__(self) -> str:
        return f"{self.session_id} / {self.speaker_id}"


class VendorQuerySet(models.QuerySet):
    """Query shapes used by vendor views."""

    def starred(self):
        """Return vendors the attendee has starred."""
        return self.filter(starred=True)

    def for_track(self, track_id: str):
        """Return vendors exhibiting under the given track id."""
        return self.filter(track_id=track_id)


class Vendor(models.Model):
    """An exhibiting company synced from the remote vendors feed.

    Like :class:`Session`, ``starred`` is attendee-local and survives every
    replacement.
    """

    id = models.CharField(primary_key=True, max_length=200)
    updated = models.BigIntegerField(default=UPDATED_UNKNOWN)
    name = models.CharField(max_length=300)
    location = models.CharField(max_length=300, blank=True, default="")
    description = models.TextField(blank=True, default="")
    url = models.URLField(max_length=500, blank=True, default="")
    product_description = models.TextField(blank=True, default="")
    logo_url = models.URLField(max_length=500, blank=True, default="")
    starred = models.BooleanField(default=False)
    track = models.ForeignKey(
        Track,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="vendors",
    )

    objects = VendorQuerySet.as_manager()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

