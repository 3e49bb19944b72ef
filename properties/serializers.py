"""
API Serializers for Rental Board properties.

This module defines the validation and rendering layer for listings:
- PropertyFormSerializer: validates add/edit form input (HTML form and API)
- PropertySerializer: renders stored listings for the API

Validation rules follow the listing form:
- title, address and image are required and may not be whitespace only
- rent must be a whole number greater than 0
- bedrooms, bathrooms and area are optional; blank or 0 means "not given"
- description is optional free text

Every failing field is reported at once, keyed by field name.
"""

from collections.abc import Mapping

from rest_framework import serializers
import logging

from .records import OPTIONAL_NUMBER_FIELDS

logger = logging.getLogger(__name__)


TITLE_REQUIRED = 'Title is required'
ADDRESS_REQUIRED = 'Address is required'
IMAGE_REQUIRED = 'Image URL is required'
RENT_INVALID = 'Rent must be greater than 0'
BATHROOMS_INVALID = 'Bathrooms must be in steps of 0.5'


def _required_messages(message):
    return {'required': message, 'null': message, 'blank': message}


def _is_blank_or_zero(value):
    """True for values the form treats as 'not given' (None, '', 0, '0')."""
    if value is None:
        return True
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return True
        try:
            return float(value) == 0
        except ValueError:
            # Let the field report the bad number
            return False
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    return False


def first_errors(errors):
    """
    Flatten a serializer error map to field -> first message.

    Used by the HTML form, which shows one message under each field.
    """
    flattened = {}
    for field_name, messages in errors.items():
        if isinstance(messages, (list, tuple)) and messages:
            flattened[field_name] = str(messages[0])
        else:
            flattened[field_name] = str(messages)
    return flattened


class NumberOnlyMixin:
    """Refuse JSON booleans, which Python would otherwise read as 1 and 0."""

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail('invalid')
        return super().to_internal_value(data)


class NumberIntegerField(NumberOnlyMixin, serializers.IntegerField):
    pass


class NumberFloatField(NumberOnlyMixin, serializers.FloatField):
    pass


# =============================================================================
# FORM SERIALIZER
# =============================================================================

class PropertyFormSerializer(serializers.Serializer):
    """
    Listing form validation.

    Used for the add/edit pages and for API create/update. With
    ``partial=True`` (PATCH) only the supplied fields are checked.
    """

    image = serializers.CharField(
        max_length=2048,
        allow_blank=True,
        error_messages=_required_messages(IMAGE_REQUIRED),
    )
    title = serializers.CharField(
        max_length=255,
        allow_blank=True,
        error_messages=_required_messages(TITLE_REQUIRED),
    )
    address = serializers.CharField(
        max_length=500,
        allow_blank=True,
        error_messages=_required_messages(ADDRESS_REQUIRED),
    )
    rent = NumberIntegerField(
        error_messages={
            'required': RENT_INVALID,
            'null': RENT_INVALID,
            'invalid': RENT_INVALID,
        },
    )
    bedrooms = NumberIntegerField(required=False, allow_null=True, min_value=0)
    bathrooms = NumberFloatField(required=False, allow_null=True, min_value=0)
    area = NumberIntegerField(required=False, allow_null=True, min_value=1)
    description = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
    )

    def to_internal_value(self, data):
        """
        Normalize optional numbers before field validation.

        Blank or zero optional numbers become None. On a full submission a
        missing optional number also becomes None, so saving the form
        clears a value the user removed.
        """
        if hasattr(data, 'dict'):
            data = data.dict()
        elif isinstance(data, Mapping):
            data = dict(data)
        else:
            return super().to_internal_value(data)

        for name in OPTIONAL_NUMBER_FIELDS:
            if name in data:
                if _is_blank_or_zero(data[name]):
                    data[name] = None
            elif not self.partial:
                data[name] = None

        return super().to_internal_value(data)

    def validate_title(self, value):
        """Validate title."""
        if not value or not value.strip():
            raise serializers.ValidationError(TITLE_REQUIRED)
        return value.strip()

    def validate_address(self, value):
        """Validate address."""
        if not value or not value.strip():
            raise serializers.ValidationError(ADDRESS_REQUIRED)
        return value.strip()

    def validate_image(self, value):
        """Validate image URL."""
        if not value or not value.strip():
            raise serializers.ValidationError(IMAGE_REQUIRED)
        return value.strip()

    def validate_rent(self, value):
        """Validate monthly rent."""
        if value is None or value <= 0:
            raise serializers.ValidationError(RENT_INVALID)
        return value

    def validate_bathrooms(self, value):
        """Bathrooms come in half steps (1, 1.5, 2, ...)."""
        if value is not None and (value * 2) % 1 != 0:
            raise serializers.ValidationError(BATHROOMS_INVALID)
        return value


# =============================================================================
# OUTPUT SERIALIZER
# =============================================================================

class PropertySerializer(serializers.Serializer):
    """
    Read-only rendering of a stored listing.

    Field names match the stored wire format (``createdAt``).
    """

    id = serializers.CharField(read_only=True)
    image = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    address = serializers.CharField(read_only=True)
    rent = serializers.IntegerField(read_only=True)
    bedrooms = serializers.IntegerField(read_only=True, allow_null=True)
    bathrooms = serializers.FloatField(read_only=True, allow_null=True)
    area = serializers.IntegerField(read_only=True, allow_null=True)
    description = serializers.CharField(read_only=True)
    createdAt = serializers.CharField(source='created_at', read_only=True)

    # Computed fields for display
    rent_label = serializers.CharField(read_only=True)
    features = serializers.SerializerMethodField()

    def get_features(self, obj):
        """Card feature labels, e.g. ["2 bed", "1.5 bath"]."""
        return obj.features()
