"""Django app configuration for the schedule app."""

from django.apps import AppConfig


class DjangoScheduleScheduleConfig(AppConfig):
    """Configuration for the schedule app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_schedule.schedule"
    label = "schedule"
    verbose_name = "Conference Schedule"
