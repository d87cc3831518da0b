"""Management command to load static tracks, rooms, and blocks from a TOML seed file.

Usage::

    manage.py load_schedule_seed schedule.toml
"""

import argparse

from django.core.management.base import BaseCommand, CommandError

from django_schedule.feed.errors import FeedSyncError
from django_schedule.feed.sync import ScheduleSyncService


class Command(BaseCommand):
    """Load static tracks, rooms, and blocks from a TOML seed file."""

    help = "Load static tracks, rooms, and blocks from a TOML seed file"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Register command-line arguments.

        Args:
            parser: The argument parser to add arguments to.
        """
        parser.add_argument("path", help="Path to the schedule seed TOML file.")

    def handle(self, **options: object) -> None:
        """Execute the seed load."""
        path = str(options["path"])
        try:
            counts = ScheduleSyncService().load_seed(path)
        except (FeedSyncError, FileNotFoundError, TypeError, ValueError) as exc:
            msg = f"Could not load schedule seed: {exc}"
            raise CommandError(msg) from exc

        self.stdout.write(
            self.style.SUCCESS(f"Loaded {counts['tracks']} tracks, {counts['rooms']} rooms, {counts['blocks']} new blocks")
        )
