"""Management command to sync sessions, speakers, and vendors from remote feeds.

Usage::

    # Sync every configured feed
    manage.py sync_schedule

    # Sync only sessions
    manage.py sync_schedule --sessions

    # Reconcile a feed document saved on disk
    manage.py sync_schedule --sessions --file sessions.xml
"""

import argparse

from django.core.management.base import BaseCommand, CommandError

from django_schedule.feed.errors import FeedSyncError
from django_schedule.feed.sync import FeedKind, ScheduleSyncService


class Command(BaseCommand):
    """Sync sessions, speakers, and vendors from remote schedule feeds."""

    help = "Sync sessions, speakers, and vendors from remote schedule feeds"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Register command-line arguments.

        Args:
            parser: The argument parser to add arguments to.
        """
        parser.add_argument(
            "--sessions",
            action="store_true",
            default=False,
            help="Sync sessions only.",
        )
        parser.add_argument(
            "--speakers",
            action="store_true",
            default=False,
            help="Sync speakers only.",
        )
        parser.add_argument(
            "--vendors",
            action="store_true",
            default=False,
            help="Sync vendors only.",
        )
        parser.add_argument(
            "--file",
            default="",
            help="Read the feed document from this path instead of its URL. Requires exactly one feed flag.",
        )

    def handle(self, **options: object) -> None:
        """Execute the sync command.

        Runs the requested feeds, or every configured feed when no specific
        flag is given.  Any sync failure is reported as a ``CommandError``
        and leaves the store unchanged for the failing feed.
        """
        selected = [kind for kind in FeedKind if options[str(kind)]]
        path = str(options["file"] or "")

        if path and len(selected) != 1:
            msg = "--file requires exactly one of --sessions, --speakers, or --vendors"
            raise CommandError(msg)

        service = ScheduleSyncService()

        try:
            if path:
                result = service.sync_file(selected[0], path)
                self.stdout.write(
                    self.style.SUCCESS(
                        f"Synced {result.replaced} {selected[0]} from {path} "
                        f"({result.current} current, {result.blocks_created} new blocks)"
                    )
                )
                return

            if not selected:
                results = service.sync_all()
                summary = ", ".join(f"{count} {name}" for name, count in results.items()) or "nothing"
                self.stdout.write(self.style.SUCCESS(f"Synced {summary}"))
                return

            for kind in selected:
                result = service.sync_feed(kind)
                self.stdout.write(self.style.SUCCESS(f"Synced {result.replaced} {kind}"))
        except (FeedSyncError, FileNotFoundError) as exc:
            msg = f"Schedule sync failed: {exc}"
            raise CommandError(msg) from exc
