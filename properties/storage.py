"""
Property persistence for Rental Board.

The whole listing collection is stored as one JSON array under a single key
of the local store (settings.PROPERTY_STORAGE_KEY, 'rental-properties' by
default). Every mutation is a full read-modify-write of that array:

    load -> change the list in memory -> save

Failure handling:
- Reads never fail loudly: a missing key is an empty collection, and a
  corrupt value is logged and treated as empty.
- Entries that are not objects, lack an id or carry non-numeric numbers
  are skipped with a warning.
- Writes raise StorageError so the caller can report the failure.
"""

import json
import logging
import time
from datetime import timezone as dt_timezone
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from .exceptions import StorageError
from .models import LocalStore
from .records import Property

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = 'rental-properties'


def generate_property_id(existing_ids) -> str:
    """
    Millisecond timestamp id, bumped until it is unused.

    Two adds within the same millisecond would otherwise collide.
    """
    candidate = int(time.time() * 1000)
    while str(candidate) in existing_ids:
        candidate += 1
    return str(candidate)


def current_timestamp() -> str:
    """UTC timestamp in the stored format, e.g. 2024-06-10T16:00:00.000Z"""
    now = timezone.now().astimezone(dt_timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class PropertyStorage:
    """
    Load/save/add/update/delete of the listing collection.

    Stateless apart from the store handle and key; every call reads the
    current collection from the store.
    """

    def __init__(self, store: Optional[LocalStore] = None, key: Optional[str] = None):
        self.store = store or LocalStore()
        self._key = key

    @property
    def key(self) -> str:
        # Resolved lazily so override_settings applies to the shared instance
        if self._key:
            return self._key
        return getattr(settings, 'PROPERTY_STORAGE_KEY', DEFAULT_STORAGE_KEY)

    # =========================================================================
    # COLLECTION ACCESS
    # =========================================================================

    def load_properties(self) -> List[Property]:
        """
        Return the stored collection in insertion order.

        Returns an empty list when the key is missing or unreadable.
        """
        try:
            stored = self.store.get_item(self.key)
        except DatabaseError as e:
            logger.error(f"Error loading properties: {str(e)}")
            return []

        if not stored:
            return []

        try:
            data = json.loads(stored)
        except ValueError as e:
            logger.error(f"Error loading properties: {str(e)}")
            return []

        if not isinstance(data, list):
            logger.error(
                f"Error loading properties: expected a list under '{self.key}', "
                f"found {type(data).__name__}"
            )
            return []

        properties = []
        for position, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning(f"Skipping malformed property entry at position {position}")
                continue
            try:
                properties.append(Property.from_dict(item))
            except ValueError as e:
                logger.warning(f"Skipping invalid property entry at position {position}: {str(e)}")

        return properties

    def save_properties(self, properties: List[Property]) -> None:
        """
        Serialize and write the whole collection.

        Raises:
            StorageError: if the collection cannot be encoded or written
        """
        try:
            payload = json.dumps([p.to_dict() for p in properties])
            self.store.set_item(self.key, payload)
        except (TypeError, ValueError, DatabaseError) as e:
            logger.error(f"Error saving properties: {str(e)}")
            raise StorageError(f"Could not save properties: {str(e)}") from e

    def get_property(self, property_id: str) -> Optional[Property]:
        for prop in self.load_properties():
            if prop.id == str(property_id):
                return prop
        return None

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add_property(self, form_data: Dict[str, Any]) -> Property:
        """
        Append a new listing built from validated form data.

        Assigns the id and created_at timestamp.
        """
        with transaction.atomic():
            properties = self.load_properties()
            new_property = Property.from_dict({
                **form_data,
                'id': generate_property_id({p.id for p in properties}),
                'createdAt': current_timestamp(),
            })
            properties.append(new_property)
            self.save_properties(properties)

        logger.info(f"Added property {new_property.id}: {new_property.title}")
        return new_property

    def update_property(self, property_id: str, updates: Dict[str, Any]) -> Optional[Property]:
        """
        Merge ``updates`` onto an existing listing, keeping its position.

        Returns:
            The updated Property, or None if the id is unknown
        """
        with transaction.atomic():
            properties = self.load_properties()
            index = next(
                (i for i, p in enumerate(properties) if p.id == str(property_id)),
                None
            )
            if index is None:
                return None

            updated = properties[index].merged(updates)
            properties[index] = updated
            self.save_properties(properties)

        logger.info(f"Updated property {updated.id}")
        return updated

    def delete_property(self, property_id: str) -> bool:
        """
        Remove a listing.

        Returns:
            False (without writing) if nothing matched, True otherwise
        """
        with transaction.atomic():
            properties = self.load_properties()
            remaining = [p for p in properties if p.id != str(property_id)]

            if len(remaining) == len(properties):
                return False

            self.save_properties(remaining)

        logger.info(f"Deleted property {property_id}")
        return True

    def clear_properties(self) -> int:
        """Drop the whole collection. Returns how many listings were removed."""
        count = len(self.load_properties())
        try:
            self.store.remove_item(self.key)
        except DatabaseError as e:
            logger.error(f"Error clearing properties: {str(e)}")
            raise StorageError(f"Could not clear properties: {str(e)}") from e

        logger.info(f"Cleared {count} properties")
        return count


# Singleton instance
property_storage = PropertyStorage()


def load_properties() -> List[Property]:
    return property_storage.load_properties()


def save_properties(properties: List[Property]) -> None:
    property_storage.save_properties(properties)


def get_property(property_id: str) -> Optional[Property]:
    return property_storage.get_property(property_id)


def add_property(form_data: Dict[str, Any]) -> Property:
    return property_storage.add_property(form_data)


def update_property(property_id: str, updates: Dict[str, Any]) -> Optional[Property]:
    return property_storage.update_property(property_id, updates)


def delete_property(property_id: str) -> bool:
    return property_storage.delete_property(property_id)


def clear_properties() -> int:
    return property_storage.clear_properties()
