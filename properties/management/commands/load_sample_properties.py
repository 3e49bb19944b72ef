"""
Seed the board with a few sample rental listings.

Usage:
    python manage.py load_sample_properties
    python manage.py load_sample_properties --clear
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from properties.exceptions import StorageError
from properties.import_utils import import_rows
from properties.storage import property_storage


SAMPLE_PROPERTIES = [
    {
        'image': 'https://images.unsplash.com/photo-1522708323590-d24dbb6b0267',
        'title': 'Beautiful 2BR apartment downtown',
        'address': '123 Main Street, Springfield, IL',
        'rent': '1500',
        'bedrooms': '2',
        'bathrooms': '1',
        'area': '950',
        'description': 'Bright corner unit close to shops and transit.',
    },
    {
        'image': 'https://images.unsplash.com/photo-1502672260266-1c1ef2d93688',
        'title': 'Cozy studio near the park',
        'address': '48 Elm Avenue, Springfield, IL',
        'rent': '950',
        'bathrooms': '1',
        'area': '450',
        'description': 'Quiet building, laundry on site.',
    },
    {
        'image': 'https://images.unsplash.com/photo-1568605114967-8130f3a36994',
        'title': 'Family house with garden',
        'address': '7 Oak Lane, Springfield, IL',
        'rent': '2600',
        'bedrooms': '3',
        'bathrooms': '2.5',
        'area': '1800',
        'description': 'Fenced garden and a two-car garage.',
    },
]


class Command(BaseCommand):
    help = 'Load sample rental listings'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Remove all existing listings first',
        )

    def handle(self, *args, **options):
        cleared = None
        try:
            # Clear and load together so a failed load keeps the old listings
            with transaction.atomic():
                if options['clear']:
                    cleared = property_storage.clear_properties()

                result = import_rows(enumerate(SAMPLE_PROPERTIES, start=1))
        except StorageError as e:
            raise CommandError(f"Loading sample listings failed: {str(e)}") from e

        if cleared is not None:
            self.stdout.write(self.style.WARNING(f"Removed {cleared} existing listings"))
        self.stdout.write(self.style.SUCCESS(f"Loaded {result['created']} sample listings"))
