"""
CSV import management command for rental listings.

Usage:
    python manage.py import_properties /path/to/file.csv
    python manage.py import_properties /path/to/file.csv --clear
"""

from django.core.management.base import BaseCommand, CommandError

from properties.exceptions import StorageError
from properties.import_utils import process_csv_import


class Command(BaseCommand):
    help = 'Import rental listings from a CSV file'

    def add_arguments(self, parser):
        parser.add_argument('csv_file', type=str, help='Path to CSV file')
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Remove all existing listings before import',
        )

    def handle(self, *args, **options):
        csv_file = options['csv_file']

        self.stdout.write(f"Reading CSV file: {csv_file}")
        try:
            with open(csv_file, 'r', encoding='utf-8-sig') as f:
                file_content = f.read()
        except OSError as e:
            raise CommandError(f"Failed to read file: {str(e)}") from e

        try:
            result = process_csv_import(file_content, clear_existing=options['clear'])
        except StorageError as e:
            raise CommandError(f"Import failed: {str(e)}") from e

        if result['cleared']:
            self.stdout.write(self.style.WARNING(f"Removed {result['cleared']} existing listings"))

        self.stdout.write("=" * 60)
        self.stdout.write(self.style.SUCCESS("Import Complete!"))
        self.stdout.write("=" * 60)
        self.stdout.write(f"Rows Processed: {result['rows_processed']}")
        self.stdout.write(f"Listings Created: {result['created']}")
        self.stdout.write(f"Rows Skipped: {result['skipped']}")

        if result['errors']:
            self.stdout.write(self.style.WARNING(f"\nErrors: {len(result['errors'])}"))
            for error in result['errors']:
                self.stdout.write(f"  - {error}")
