"""
Properties models for Rental Board.

The listing collection is not spread over relational rows. It lives as one
serialized value in a small local key-value store:
- StorageEntry: a single key/value pair
- LocalStore: get/set/remove access to entries, shaped like browser storage

Design Philosophy: the store knows nothing about listings. Serialization
and validation happen in properties.storage and properties.serializers.
"""

from typing import List, Optional
import logging

from django.db import models

logger = logging.getLogger(__name__)


# =============================================================================
# STORAGE ENTRY MODEL
# =============================================================================

class StorageEntry(models.Model):
    """
    One key/value pair of the local store.

    Values are opaque text; callers decide how to encode them.
    """

    key = models.CharField(
        max_length=255,
        primary_key=True,
        help_text="Store key, e.g. 'rental-properties'"
    )
    value = models.TextField(
        blank=True,
        default='',
        help_text="Serialized value"
    )

    # Metadata
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'storage_entries'
        ordering = ['key']
        verbose_name = 'Storage Entry'
        verbose_name_plural = 'Storage Entries'

    def __str__(self):
        return self.key

    def __repr__(self):
        return f"<StorageEntry: {self.key}>"

    @property
    def size(self):
        """Length of the stored value in characters."""
        return len(self.value)


# =============================================================================
# LOCAL STORE
# =============================================================================

class LocalStore:
    """
    Key-value access to StorageEntry rows.

    Mirrors the browser storage API: missing keys read as None and
    set_item overwrites whatever was there.
    """

    def get_item(self, key: str) -> Optional[str]:
        entry = StorageEntry.objects.filter(key=key).first()
        if entry is None:
            return None
        return entry.value

    def set_item(self, key: str, value: str) -> None:
        StorageEntry.objects.update_or_create(key=key, defaults={'value': value})
        logger.debug(f"Stored {len(value)} characters under '{key}'")

    def remove_item(self, key: str) -> bool:
        """Delete a key. Returns True if it existed."""
        deleted, _ = StorageEntry.objects.filter(key=key).delete()
        return deleted > 0

    def keys(self) -> List[str]:
        return list(StorageEntry.objects.values_list('key', flat=True))

    def __contains__(self, key):
        return StorageEntry.objects.filter(key=key).exists()
