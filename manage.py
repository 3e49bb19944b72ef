#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Rental Board Management Script
==============================

Usage Examples:
===============

Development:
  python manage.py migrate                      # Create the local store table
  python manage.py runserver                    # Start development server

Rental Board Specific Commands:
  python manage.py load_sample_properties       # Seed sample listings
  python manage.py import_properties <file.csv> # Import listings from CSV
  python manage.py export_properties            # Dump the listing collection as JSON

Testing:
  python manage.py test                         # Run tests
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Set the default Django settings module
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'rentalboard.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        error_msg = (
            "Couldn't import Django. This usually means:\n"
            "  1. Django is not installed - run: pip install -e .\n"
            "  2. Virtual environment is not activated\n\n"
            f"Current Python path: {sys.executable}\n"
            f"Current working directory: {os.getcwd()}\n"
        )
        raise ImportError(error_msg) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
