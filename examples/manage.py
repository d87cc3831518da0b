#!/usr/bin/env python
"""Django management entrypoint for the example schedule project.

Typical session::

    ./manage.py migrate
    ./manage.py load_schedule_seed schedule.toml
    ./manage.py sync_schedule
"""

import os
import sys


def main() -> None:
    """Run administrative tasks."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "settings")
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
