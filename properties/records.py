"""
Rental property records.

A Property is the unit stored in the listing collection. Records are plain
dataclasses rather than ORM rows: the whole collection is serialized as one
JSON array under a single store key (see properties.storage).

Wire format (one element of the stored array):
    {
        "id": "1718035200000",
        "image": "https://example.com/image.jpg",
        "title": "Beautiful 2BR apartment downtown",
        "address": "123 Main Street, City, State",
        "rent": 1500,
        "bedrooms": 2,
        "bathrooms": 1.5,
        "area": 1200,
        "description": "Bright corner unit",
        "createdAt": "2024-06-10T16:00:00.000Z"
    }
"""

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional


# Form fields in display order (everything except id and created_at)
FORM_FIELDS = [
    'image',
    'title',
    'address',
    'rent',
    'bedrooms',
    'bathrooms',
    'area',
    'description',
]

OPTIONAL_NUMBER_FIELDS = ['bedrooms', 'bathrooms', 'area']

# Fields an update may never overwrite
PROTECTED_FIELDS = ['id', 'created_at']


def format_number(value) -> str:
    """
    Render a number the way the listing cards show it.

    Whole floats drop their decimal part (2.0 -> "2"), halves keep it
    (1.5 -> "1.5").
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}"


def coerce_number(value, cast, name):
    """
    Read a stored number as ``cast`` (int or float).

    None and blank strings are absent. Numeric strings such as "1500" are
    converted; anything else raises ValueError.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")

    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    if cast is int:
        if not number.is_integer():
            raise ValueError(f"{name} must be a whole number, got {value!r}")
        return int(number)
    return number


@dataclass
class Property:
    """A rental listing."""
    id: str
    image: str
    title: str
    address: str
    rent: int
    created_at: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    area: Optional[int] = None
    description: str = field(default='')

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Property':
        """
        Build a record from a stored wire object.

        Accepts both the stored ``createdAt`` key and ``created_at``.
        Missing text fields become empty strings and a missing rent becomes 0.
        Numeric strings are converted.

        Raises:
            ValueError: if the id is missing or a number field is not numeric
        """
        property_id = data.get('id')
        if property_id is None or not str(property_id).strip():
            raise ValueError("Property entry has no id")

        created_at = data.get('createdAt', data.get('created_at', ''))
        return cls(
            id=str(property_id).strip(),
            image=data.get('image') or '',
            title=data.get('title') or '',
            address=data.get('address') or '',
            rent=coerce_number(data.get('rent'), int, 'rent') or 0,
            created_at=created_at or '',
            bedrooms=coerce_number(data.get('bedrooms'), int, 'bedrooms'),
            bathrooms=coerce_number(data.get('bathrooms'), float, 'bathrooms'),
            area=coerce_number(data.get('area'), int, 'area'),
            description=data.get('description') or '',
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire object, omitting absent optional numbers."""
        data = {
            'id': self.id,
            'image': self.image,
            'title': self.title,
            'address': self.address,
            'rent': self.rent,
        }
        for name in OPTIONAL_NUMBER_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        data['description'] = self.description
        data['createdAt'] = self.created_at
        return data

    def form_data(self) -> Dict[str, Any]:
        """Return the editable fields, used to prefill the edit form."""
        return {name: getattr(self, name) for name in FORM_FIELDS}

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def merged(self, updates: Dict[str, Any]) -> 'Property':
        """
        Return a copy with ``updates`` applied.

        Unknown keys are ignored; id and created_at are never overwritten.
        """
        known = {f.name for f in fields(self)}
        changes = {
            key: value for key, value in updates.items()
            if key in known and key not in PROTECTED_FIELDS
        }
        return replace(self, **changes)

    # -------------------------------------------------------------------------
    # Display helpers
    # -------------------------------------------------------------------------

    @property
    def rent_label(self) -> str:
        """Rent badge text, e.g. "$1,500/mo"."""
        return f"${self.rent:,}/mo"

    def features(self) -> List[str]:
        """
        Card feature labels for bedrooms, bathrooms and area.

        Zero or absent values are skipped.
        """
        labels = []
        if self.bedrooms:
            labels.append(f"{format_number(self.bedrooms)} bed")
        if self.bathrooms:
            labels.append(f"{format_number(self.bathrooms)} bath")
        if self.area:
            labels.append(f"{format_number(self.area)} sqft")
        return labels

    def __str__(self):
        return f"{self.title} ({self.id})"
