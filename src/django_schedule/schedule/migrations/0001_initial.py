import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Block",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=300)),
                ("start", models.DateTimeField()),
                ("end", models.DateTimeField()),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("session", "Session"),
                            ("food", "Food"),
                            ("officehours", "Office hours"),
                            ("keynote", "Keynote"),
                            ("other", "Other"),
                        ],
                        default="session",
                        max_length=50,
                    ),
                ),
            ],
            options={
                "ordering": ["start", "end"],
            },
        ),
        migrations.CreateModel(
            name="Track",
            fields=[
                ("id", models.CharField(max_length=200, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=300)),
                ("color", models.CharField(blank=True, default="", max_length=20)),
                ("abstract", models.TextField(blank=True, default="")),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.CharField(max_length=200, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=300)),
                ("floor", models.CharField(blank=True, default="", max_length=50)),
            ],
            options={
                "ordering": ["floor", "name"],
            },
        ),
        migrations.CreateModel(
            name="Speaker",
            fields=[
                ("id", models.CharField(max_length=200, primary_key=True, serialize=False)),
                ("updated", models.BigIntegerField(default=-1)),
                ("name", models.CharField(max_length=300)),
                ("company", models.CharField(blank=True, default="", max_length=300)),
                ("abstract", models.TextField(blank=True, default="")),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Session",
            fields=[
                ("id", models.CharField(max_length=200, primary_key=True, serialize=False)),
                ("updated", models.BigIntegerField(default=-1)),
                ("session_type", models.CharField(blank=True, default="", max_length=100)),
                ("title", models.CharField(max_length=500)),
                ("abstract", models.TextField(blank=True, default="")),
                ("requirements", models.TextField(blank=True, default="")),
                ("moderator_url", models.URLField(blank=True, default="", max_length=500)),
                ("wave_url", models.URLField(blank=True, default="", max_length=500)),
                ("keywords", models.TextField(blank=True, default="")),
                ("hashtag", models.CharField(blank=True, default="", max_length=100)),
                ("starred", models.BooleanField(default=False)),
                (
                    "block",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="sessions",
                        to="schedule.block",
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="sessions",
                        to="schedule.room",
                    ),
                ),
            ],
            options={
                "ordering": ["block__start", "title"],
            },
        ),
        migrations.CreateModel(
            name="SessionSpeaker",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "session",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="session_speakers",
                        to="schedule.session",
                    ),
                ),
                (
                    "speaker",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="session_speakers",
                        to="schedule.speaker",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("session", "speaker"), name="uniq_session_speaker"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SessionTrack",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "session",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="session_tracks",
                        to="schedule.session",
                    ),
                ),
                (
                    "track",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="session_tracks",
                        to="schedule.track",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("session", "track"), name="uniq_session_track"),
                ],
            },
        ),
        migrations.AddField(
            model_name="session",
            name="speakers",
            field=models.ManyToManyField(
                blank=True,
                related_name="sessions",
                through="schedule.SessionSpeaker",
                to="schedule.speaker",
            ),
        ),
        migrations.AddField(
            model_name="session",
            name="tracks",
            field=models.ManyToManyField(
                blank=True,
                related_name="sessions",
                through="schedule.SessionTrack",
                to="schedule.track",
            ),
        ),
        migrations.CreateModel(
            name="Vendor",
            fields=[
                ("id", models.CharField(max_length=200, primary_key=True, serialize=False)),
                ("updated", models.BigIntegerField(default=-1)),
                ("name", models.CharField(max_length=300)),
                ("location", models.CharField(blank=True, default="", max_length=300)),
                ("description", models.TextField(blank=True, default="")),
                ("url", models.URLField(blank=True, default="", max_length=500)),
                ("product_description", models.TextField(blank=True, default="")),
                ("logo_url", models.URLField(blank=True, default="", max_length=500)),
                ("starred", models.BooleanField(default=False)),
                (
                    "track",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="vendors",
                        to="schedule.track",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
    ]
