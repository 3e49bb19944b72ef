"""
Reusable CSV import utilities for Rental Board.
Shared by the import_properties and load_sample_properties commands.

CSV columns map directly to the listing form fields:
    image, title, address, rent, bedrooms, bathrooms, area, description

Every row goes through the same validation as the listing form; rows that
fail are skipped and reported, valid rows are appended in file order.
"""

import csv
import logging
from io import StringIO

from django.db import transaction

from .records import FORM_FIELDS
from .serializers import PropertyFormSerializer, first_errors
from .storage import property_storage

logger = logging.getLogger(__name__)

# Columns that may carry thousands separators or a currency sign
NUMERIC_COLUMNS = ['rent', 'bedrooms', 'bathrooms', 'area']


def clean_row(row):
    """
    Map a CSV row to form input.

    Unknown columns are dropped, values are stripped, and "$1,500" style
    numbers lose their formatting.
    """
    cleaned = {}
    for name in FORM_FIELDS:
        value = row.get(name)
        if value is None:
            continue
        value = str(value).strip()
        if name in NUMERIC_COLUMNS:
            value = value.replace(',', '').replace('$', '')
        cleaned[name] = value
    return cleaned


def import_rows(rows, storage=None):
    """
    Validate and add listing rows.

    Args:
        rows: iterable of dicts keyed by form field name
        storage: PropertyStorage to write to (shared instance by default)

    Returns:
        Dictionary with import statistics:
        {
            'created': int,
            'skipped': int,
            'errors': list,
            'rows_processed': int,
            'created_ids': list
        }
    """
    storage = storage or property_storage
    stats = {
        'created': 0,
        'skipped': 0,
        'errors': [],
        'rows_processed': 0,
        'created_ids': [],
    }

    with transaction.atomic():
        for row_num, row in rows:
            stats['rows_processed'] += 1
            serializer = PropertyFormSerializer(data=clean_row(row))

            if not serializer.is_valid():
                stats['skipped'] += 1
                messages = '; '.join(
                    f"{field}: {message}"
                    for field, message in first_errors(serializer.errors).items()
                )
                stats['errors'].append(f"Row {row_num}: {messages}")
                continue

            new_property = storage.add_property(serializer.validated_data)
            stats['created'] += 1
            stats['created_ids'].append(new_property.id)

    logger.info(
        f"Import complete: {stats['created']} created, {stats['skipped']} skipped "
        f"of {stats['rows_processed']} rows"
    )
    return stats


def process_csv_import(csv_content, clear_existing=False, storage=None):
    """
    Process CSV import from file content (string).

    Args:
        csv_content: String content of CSV file
        clear_existing: Boolean, whether to clear all listings first
        storage: PropertyStorage to write to (shared instance by default)

    Returns:
        Import statistics from import_rows, plus 'cleared'
    """
    storage = storage or property_storage
    reader = csv.DictReader(StringIO(csv_content))

    # A failed import leaves the previous collection in place
    with transaction.atomic():
        cleared = 0
        if clear_existing:
            cleared = storage.clear_properties()

        # Start at 2 (header is row 1)
        stats = import_rows(enumerate(reader, start=2), storage=storage)
    stats['cleared'] = cleared
    return stats
