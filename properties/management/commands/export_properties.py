"""
Export the stored listing collection as JSON.

Usage:
    python manage.py export_properties
    python manage.py export_properties --output listings.json
"""

import json

from django.core.management.base import BaseCommand, CommandError

from properties.storage import load_properties


class Command(BaseCommand):
    help = 'Write the stored rental listings as a JSON array'

    def add_arguments(self, parser):
        parser.add_argument(
            '--output',
            type=str,
            default=None,
            help='File to write (defaults to stdout)',
        )
        parser.add_argument('--indent', type=int, default=2, help='JSON indent')

    def handle(self, *args, **options):
        properties = load_properties()
        payload = json.dumps([p.to_dict() for p in properties], indent=options['indent'])

        output = options['output']
        if not output:
            self.stdout.write(payload)
            return

        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(payload)
        except OSError as e:
            raise CommandError(f"Failed to write {output}: {str(e)}") from e

        self.stdout.write(self.style.SUCCESS(f"Exported {len(properties)} listings to {output}"))
