"""
Properties Admin - Rental Board
Django admin configuration for the local key-value store.
"""

import json

from django.contrib import admin

from .models import StorageEntry


@admin.register(StorageEntry)
class StorageEntryAdmin(admin.ModelAdmin):
    """
    Admin interface for store entries.

    Entries are inspected here but edited through the listing pages, so
    the serialized value stays valid.
    """

    list_display = [
        'key',
        'item_count',
        'size_display',
        'updated_at',
    ]

    search_fields = ['key']
    readonly_fields = ['key', 'value', 'updated_at']

    def has_add_permission(self, request):
        return False

    def item_count(self, obj):
        """Number of elements when the value is a JSON array."""
        try:
            data = json.loads(obj.value)
        except ValueError:
            return '-'
        if isinstance(data, list):
            return len(data)
        return '-'
    item_count.short_description = 'Items'

    def size_display(self, obj):
        return f"{obj.size:,} chars"
    size_display.short_description = 'Size'
