"""Django app configuration for the schedule feed sync app."""

from django.apps import AppConfig


class DjangoScheduleFeedConfig(AppConfig):
    """Configuration for the schedule feed sync app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_schedule.feed"
    label = "schedule_feed"
    verbose_name = "Schedule Feed Sync"
