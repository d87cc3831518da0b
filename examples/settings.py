"""Django settings for the example schedule project.

Extends the test settings pattern with a persistent SQLite database and reads
the feed URLs from the environment (or a local ``.env`` file) so the sync
command can run against a real spreadsheet.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = "example-dev-key-not-for-production"
DEBUG = True

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django_schedule.schedule",
    "django_schedule.feed",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {
        "django_schedule": {
            "handlers": ["console"],
            "level": os.environ.get("SCHEDULE_LOG_LEVEL", "INFO"),
        },
    },
}

DJANGO_SCHEDULE = {
    "feed": {
        "sessions_url": os.environ.get("SCHEDULE_SESSIONS_URL", ""),
        "speakers_url": os.environ.get("SCHEDULE_SPEAKERS_URL", ""),
        "vendors_url": os.environ.get("SCHEDULE_VENDORS_URL", ""),
    },
}
