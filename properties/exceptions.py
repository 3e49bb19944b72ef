"""
Exceptions raised by the property persistence layer.
"""


class PropertyStorageError(Exception):
    """Base class for property store failures."""


class StorageError(PropertyStorageError):
    """
    The listing collection could not be serialized or written.

    Raised by save operations so callers can report the failed
    add/update/delete to the user instead of pretending it succeeded.
    """
