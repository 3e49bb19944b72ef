# ===== PROPERTIES APP TEST SUITE =====
"""
Test suite for properties app functionality
File: properties/tests.py

Test Coverage:
- Property records (wire format, merging, display helpers)
- Local key-value store
- Persistence layer (load/save/add/update/delete, failure handling)
- Form validation rules
- REST API endpoints
- Listing pages and user messages
- Management commands and admin helpers
"""

import json
import os
import tempfile
from io import StringIO
from unittest.mock import patch

from django.contrib.admin.sites import AdminSite
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.http import QueryDict
from django.test import TestCase, override_settings
from django.urls import reverse

from rest_framework import status
from rest_framework.test import APITestCase

from .admin import StorageEntryAdmin
from .exceptions import StorageError
from .import_utils import process_csv_import
from .models import LocalStore, StorageEntry
from .records import Property
from .serializers import PropertyFormSerializer, first_errors
from .storage import PropertyStorage, generate_property_id, property_storage


def sample_form_data(**overrides):
    data = {
        'image': 'https://example.com/house.jpg',
        'title': 'Beautiful 2BR apartment downtown',
        'address': '123 Main Street, Springfield, IL',
        'rent': 1500,
        'bedrooms': 2,
        'bathrooms': 1.5,
        'area': 950,
        'description': 'Bright corner unit',
    }
    data.update(overrides)
    return data


# =============================================================================
# PROPERTY RECORD TESTS
# =============================================================================

class PropertyRecordTest(TestCase):
    """Test Property dataclass serialization and helpers"""

    def setUp(self):
        self.prop = Property.from_dict({
            'id': '1700000000000',
            'image': 'https://example.com/house.jpg',
            'title': 'Garden flat',
            'address': '7 Oak Lane',
            'rent': 1500,
            'bedrooms': 2,
            'bathrooms': 2.0,
            'description': '',
            'createdAt': '2024-06-10T16:00:00.000Z',
        })

    def test_from_dict_reads_created_at(self):
        """Test the stored createdAt key maps to created_at"""
        self.assertEqual(self.prop.created_at, '2024-06-10T16:00:00.000Z')
        self.assertIsNone(self.prop.area)

    def test_from_dict_converts_numeric_strings(self):
        """Test hand-edited numbers stored as text are read as numbers"""
        prop = Property.from_dict({
            'id': 42,
            'title': 'Text numbers',
            'rent': '1500',
            'bedrooms': '2',
            'bathrooms': '1.5',
            'area': ' ',
        })

        self.assertEqual(prop.id, '42')
        self.assertEqual(prop.rent, 1500)
        self.assertEqual(prop.bedrooms, 2)
        self.assertEqual(prop.bathrooms, 1.5)
        self.assertIsNone(prop.area)

    def test_from_dict_rejects_invalid_entries(self):
        """Test entries without an id or with non-numeric numbers are refused"""
        base = {'id': '1', 'title': 'Bad', 'rent': 1000}

        for entry in [
            {'title': 'No id', 'rent': 1000},
            {**base, 'id': ''},
            {**base, 'rent': 'cheap'},
            {**base, 'rent': True},
            {**base, 'bedrooms': 1.5},
            {**base, 'bathrooms': [1]},
            {**base, 'area': 'big'},
        ]:
            with self.subTest(entry=entry):
                with self.assertRaises(ValueError):
                    Property.from_dict(entry)

    def test_to_dict_omits_absent_numbers(self):
        """Test absent optional numbers are left out of the wire object"""
        data = self.prop.to_dict()

        self.assertNotIn('area', data)
        self.assertEqual(data['bedrooms'], 2)
        self.assertEqual(data['createdAt'], '2024-06-10T16:00:00.000Z')
        self.assertNotIn('created_at', data)

    def test_merged_protects_identity(self):
        """Test updates never overwrite id or created_at"""
        updated = self.prop.merged({
            'id': 'other',
            'created_at': 'yesterday',
            'rent': 1800,
            'unknown': 'ignored',
        })

        self.assertEqual(updated.id, '1700000000000')
        self.assertEqual(updated.created_at, '2024-06-10T16:00:00.000Z')
        self.assertEqual(updated.rent, 1800)
        self.assertEqual(self.prop.rent, 1500)  # Original untouched

    def test_rent_label(self):
        """Test rent badge uses thousands separators"""
        self.assertEqual(self.prop.rent_label, '$1,500/mo')

    def test_features_skip_missing_values(self):
        """Test feature labels skip absent values and drop .0"""
        self.assertEqual(self.prop.features(), ['2 bed', '2 bath'])

        half_bath = self.prop.merged({'bathrooms': 1.5, 'bedrooms': 0, 'area': 1200})
        self.assertEqual(half_bath.features(), ['1.5 bath', '1200 sqft'])


# =============================================================================
# LOCAL STORE TESTS
# =============================================================================

class LocalStoreTest(TestCase):
    """Test the key-value store shaped like browser storage"""

    def setUp(self):
        self.store = LocalStore()

    def test_missing_key_reads_none(self):
        self.assertIsNone(self.store.get_item('nothing-here'))

    def test_set_item_overwrites(self):
        """Test set_item replaces the previous value"""
        self.store.set_item('greeting', 'hello')
        self.store.set_item('greeting', 'goodbye')

        self.assertEqual(self.store.get_item('greeting'), 'goodbye')
        self.assertEqual(StorageEntry.objects.count(), 1)

    def test_remove_item(self):
        """Test removing a key reports whether it existed"""
        self.store.set_item('greeting', 'hello')

        self.assertTrue(self.store.remove_item('greeting'))
        self.assertFalse(self.store.remove_item('greeting'))
        self.assertNotIn('greeting', self.store)

    def test_keys(self):
        self.store.set_item('b', '2')
        self.store.set_item('a', '1')
        self.assertEqual(self.store.keys(), ['a', 'b'])


# =============================================================================
# PERSISTENCE LAYER TESTS
# =============================================================================

class PropertyStorageTest(TestCase):
    """Test load/save/add/update/delete against the local store"""

    def setUp(self):
        self.storage = PropertyStorage()
        self.store = LocalStore()

    def test_load_without_stored_value(self):
        """Test a missing key is an empty collection"""
        self.assertEqual(self.storage.load_properties(), [])

    def test_load_corrupt_value(self):
        """Test malformed JSON is logged and treated as empty"""
        self.store.set_item('rental-properties', '{not json')

        with self.assertLogs('properties.storage', level='ERROR'):
            self.assertEqual(self.storage.load_properties(), [])

    def test_load_non_list_value(self):
        """Test a JSON object under the key is treated as empty"""
        self.store.set_item('rental-properties', '{"id": "1"}')

        with self.assertLogs('properties.storage', level='ERROR'):
            self.assertEqual(self.storage.load_properties(), [])

    def test_load_skips_malformed_entries(self):
        """Test non-object entries are skipped with a warning"""
        stored = [
            {'id': '1', 'title': 'Kept', 'address': 'A', 'image': 'x', 'rent': 900},
            'garbage',
            42,
        ]
        self.store.set_item('rental-properties', json.dumps(stored))

        with self.assertLogs('properties.storage', level='WARNING'):
            properties = self.storage.load_properties()

        self.assertEqual([p.title for p in properties], ['Kept'])

    def test_load_skips_entries_with_invalid_fields(self):
        """Test entries missing an id or with a non-numeric rent are skipped"""
        stored = [
            {'id': '1', 'title': 'Kept', 'address': 'A', 'image': 'x', 'rent': '900'},
            {'title': 'No id', 'address': 'B', 'image': 'y', 'rent': 800},
            {'id': '3', 'title': 'Text rent', 'address': 'C', 'image': 'z', 'rent': 'a lot'},
        ]
        self.store.set_item('rental-properties', json.dumps(stored))

        with self.assertLogs('properties.storage', level='WARNING') as logs:
            properties = self.storage.load_properties()

        self.assertEqual([p.title for p in properties], ['Kept'])
        self.assertEqual(properties[0].rent, 900)
        self.assertEqual(len(logs.records), 2)

    def test_add_property(self):
        """Test adding assigns id and timestamp and persists the record"""
        new_property = self.storage.add_property(sample_form_data())

        self.assertTrue(new_property.id.isdigit())
        self.assertRegex(
            new_property.created_at,
            r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$'
        )

        stored = json.loads(self.store.get_item('rental-properties'))
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0]['id'], new_property.id)
        self.assertEqual(stored[0]['title'], 'Beautiful 2BR apartment downtown')
        self.assertEqual(stored[0]['createdAt'], new_property.created_at)

    def test_add_preserves_insertion_order(self):
        """Test new listings are appended"""
        titles = ['First', 'Second', 'Third']
        for title in titles:
            self.storage.add_property(sample_form_data(title=title))

        self.assertEqual([p.title for p in self.storage.load_properties()], titles)

    def test_ids_unique_within_same_millisecond(self):
        """Test colliding timestamp ids are bumped"""
        with patch('properties.storage.time') as mock_time:
            mock_time.time.return_value = 1700000000.0
            first = self.storage.add_property(sample_form_data(title='First'))
            second = self.storage.add_property(sample_form_data(title='Second'))

        self.assertEqual(first.id, '1700000000000')
        self.assertEqual(second.id, '1700000000001')

    def test_generate_property_id(self):
        with patch('properties.storage.time') as mock_time:
            mock_time.time.return_value = 1.5
            self.assertEqual(generate_property_id(set()), '1500')
            self.assertEqual(generate_property_id({'1500', '1501'}), '1502')

    def test_update_property(self):
        """Test update merges fields and keeps position and identity"""
        first = self.storage.add_property(sample_form_data(title='First'))
        second = self.storage.add_property(sample_form_data(title='Second'))

        updated = self.storage.update_property(first.id, {'rent': 2100, 'title': 'First, renovated'})

        self.assertEqual(updated.id, first.id)
        self.assertEqual(updated.created_at, first.created_at)
        self.assertEqual(updated.rent, 2100)
        self.assertEqual(updated.address, first.address)

        properties = self.storage.load_properties()
        self.assertEqual([p.id for p in properties], [first.id, second.id])
        self.assertEqual(properties[0].title, 'First, renovated')

    def test_update_missing_property(self):
        """Test updating an unknown id returns None and writes nothing"""
        self.assertIsNone(self.storage.update_property('missing', {'rent': 10}))
        self.assertIsNone(self.store.get_item('rental-properties'))

    def test_update_cannot_change_id(self):
        prop = self.storage.add_property(sample_form_data())
        updated = self.storage.update_property(prop.id, {'id': 'hijacked'})

        self.assertEqual(updated.id, prop.id)
        self.assertIsNotNone(self.storage.get_property(prop.id))

    def test_delete_property(self):
        """Test delete removes only the matching listing"""
        keep = self.storage.add_property(sample_form_data(title='Keep'))
        drop = self.storage.add_property(sample_form_data(title='Drop'))

        self.assertTrue(self.storage.delete_property(drop.id))
        self.assertEqual([p.id for p in self.storage.load_properties()], [keep.id])

    def test_delete_missing_property_does_not_write(self):
        """Test deleting an unknown id returns False without saving"""
        self.storage.add_property(sample_form_data())

        with patch.object(PropertyStorage, 'save_properties') as mock_save:
            self.assertFalse(self.storage.delete_property('missing'))
            mock_save.assert_not_called()

    def test_save_failure_raises_storage_error(self):
        """Test write failures are logged and raised"""
        with patch.object(LocalStore, 'set_item', side_effect=DatabaseError('disk full')):
            with self.assertLogs('properties.storage', level='ERROR'):
                with self.assertRaises(StorageError):
                    self.storage.add_property(sample_form_data())

        self.assertEqual(self.storage.load_properties(), [])

    def test_clear_properties(self):
        self.storage.add_property(sample_form_data())
        self.storage.add_property(sample_form_data())

        self.assertEqual(self.storage.clear_properties(), 2)
        self.assertEqual(self.storage.load_properties(), [])
        self.assertIsNone(self.store.get_item('rental-properties'))

    @override_settings(PROPERTY_STORAGE_KEY='test-listings')
    def test_storage_key_from_settings(self):
        """Test the shared instance honours PROPERTY_STORAGE_KEY"""
        property_storage.add_property(sample_form_data())

        self.assertIsNotNone(self.store.get_item('test-listings'))
        self.assertIsNone(self.store.get_item('rental-properties'))


# =============================================================================
# FORM VALIDATION TESTS
# =============================================================================

class PropertyFormSerializerTest(TestCase):
    """Test listing form validation rules"""

    def test_valid_form(self):
        serializer = PropertyFormSerializer(data=sample_form_data())

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data['rent'], 1500)
        self.assertEqual(serializer.validated_data['bathrooms'], 1.5)

    def test_empty_form_reports_every_required_field(self):
        """Test all required field errors are collected at once"""
        serializer = PropertyFormSerializer(data={})

        self.assertFalse(serializer.is_valid())
        self.assertEqual(first_errors(serializer.errors), {
            'image': 'Image URL is required',
            'title': 'Title is required',
            'address': 'Address is required',
            'rent': 'Rent must be greater than 0',
        })

    def test_whitespace_only_text_is_required_error(self):
        serializer = PropertyFormSerializer(data=sample_form_data(title='   ', address='\t'))

        self.assertFalse(serializer.is_valid())
        errors = first_errors(serializer.errors)
        self.assertEqual(errors['title'], 'Title is required')
        self.assertEqual(errors['address'], 'Address is required')

    def test_text_fields_are_trimmed(self):
        serializer = PropertyFormSerializer(data=sample_form_data(title='  Loft  '))

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data['title'], 'Loft')

    def test_rent_must_be_positive(self):
        """Test zero, negative and non-numeric rent share one message"""
        for rent in [0, -5, '0', 'abc', '']:
            serializer = PropertyFormSerializer(data=sample_form_data(rent=rent))
            self.assertFalse(serializer.is_valid(), rent)
            self.assertEqual(
                first_errors(serializer.errors)['rent'],
                'Rent must be greater than 0'
            )

    def test_blank_or_zero_optional_numbers_are_absent(self):
        """Test blank/zero bedrooms, bathrooms and area become None"""
        serializer = PropertyFormSerializer(
            data=sample_form_data(bedrooms='', bathrooms=0, area='0')
        )

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertIsNone(serializer.validated_data['bedrooms'])
        self.assertIsNone(serializer.validated_data['bathrooms'])
        self.assertIsNone(serializer.validated_data['area'])

    def test_missing_optional_numbers_on_full_submission(self):
        data = sample_form_data()
        del data['bedrooms']
        serializer = PropertyFormSerializer(data=data)

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertIsNone(serializer.validated_data['bedrooms'])

    def test_bathrooms_half_steps(self):
        self.assertTrue(PropertyFormSerializer(data=sample_form_data(bathrooms='2.5')).is_valid())

        serializer = PropertyFormSerializer(data=sample_form_data(bathrooms=1.25))
        self.assertFalse(serializer.is_valid())
        self.assertEqual(
            first_errors(serializer.errors)['bathrooms'], 'Bathrooms must be in steps of 0.5'
        )

    def test_boolean_numbers_rejected(self):
        """Test JSON true/false are not read as 1 and 0"""
        for name in ['bedrooms', 'bathrooms', 'area']:
            with self.subTest(field=name):
                serializer = PropertyFormSerializer(data=sample_form_data(**{name: True}))
                self.assertFalse(serializer.is_valid())
                self.assertIn(name, serializer.errors)

        serializer = PropertyFormSerializer(data=sample_form_data(rent=True))
        self.assertFalse(serializer.is_valid())
        self.assertEqual(serializer.errors['rent'], ['Rent must be greater than 0'])

    def test_negative_bedrooms_rejected(self):
        serializer = PropertyFormSerializer(data=sample_form_data(bedrooms=-1))

        self.assertFalse(serializer.is_valid())
        self.assertIn('bedrooms', serializer.errors)

    def test_partial_validation(self):
        """Test partial validation only checks supplied fields"""
        serializer = PropertyFormSerializer(data={'rent': 2000}, partial=True)

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(dict(serializer.validated_data), {'rent': 2000})

        serializer = PropertyFormSerializer(data={'title': ' '}, partial=True)
        self.assertFalse(serializer.is_valid())

    def test_query_dict_input(self):
        """Test HTML form posts validate the same way"""
        form = QueryDict(mutable=True)
        form.update({
            'image': 'https://example.com/a.jpg',
            'title': 'Loft',
            'address': '1 River Road',
            'rent': '1200',
            'bedrooms': '',
            'bathrooms': '1',
            'area': '',
            'description': '',
        })
        serializer = PropertyFormSerializer(data=form)

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data['rent'], 1200)
        self.assertEqual(serializer.validated_data['description'], '')


# =============================================================================
# API ENDPOINT TESTS
# =============================================================================

class PropertyAPITest(APITestCase):
    """Test listing API endpoints"""

    def setUp(self):
        self.prop = property_storage.add_property(sample_form_data(title='API Test Flat'))

    def test_list_properties(self):
        url = reverse('property-list')
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['title'], 'API Test Flat')
        self.assertEqual(response.data[0]['createdAt'], self.prop.created_at)

    def test_create_property(self):
        """Test creating a listing via API"""
        url = reverse('property-list')
        payload = sample_form_data(title='New Listing', bathrooms=2.5, area=None)
        response = self.client.post(url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['title'], 'New Listing')
        self.assertEqual(response.data['rent_label'], '$1,500/mo')
        self.assertEqual(response.data['features'], ['2 bed', '2.5 bath'])
        self.assertEqual(len(property_storage.load_properties()), 2)

    def test_create_invalid_property(self):
        """Test validation errors come back as a field map"""
        url = reverse('property-list')
        response = self.client.post(url, {'title': '', 'rent': 0}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['title'], ['Title is required'])
        self.assertEqual(response.data['rent'], ['Rent must be greater than 0'])
        self.assertIn('image', response.data)
        self.assertEqual(len(property_storage.load_properties()), 1)

    def test_create_storage_failure(self):
        url = reverse('property-list')
        with patch.object(LocalStore, 'set_item', side_effect=DatabaseError('locked')):
            response = self.client.post(url, sample_form_data(), format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'Failed to add property'})

    def test_retrieve_property(self):
        url = reverse('property-detail', kwargs={'pk': self.prop.id})
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.prop.id)

    def test_retrieve_missing_property(self):
        url = reverse('property-detail', kwargs={'pk': '999'})
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_full_update_clears_omitted_numbers(self):
        """Test PUT replaces the editable fields"""
        url = reverse('property-detail', kwargs={'pk': self.prop.id})
        payload = sample_form_data(title='Renamed')
        del payload['bedrooms']
        response = self.client.put(url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'Renamed')
        self.assertIsNone(response.data['bedrooms'])
        self.assertEqual(response.data['createdAt'], self.prop.created_at)

    def test_partial_update(self):
        url = reverse('property-detail', kwargs={'pk': self.prop.id})
        response = self.client.patch(url, {'rent': 1750}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['rent'], 1750)
        self.assertEqual(response.data['bedrooms'], 2)

    def test_update_missing_property(self):
        url = reverse('property-detail', kwargs={'pk': '999'})
        response = self.client.patch(url, {'rent': 1750}, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_property(self):
        url = reverse('property-detail', kwargs={'pk': self.prop.id})

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_storage_failure(self):
        url = reverse('property-detail', kwargs={'pk': self.prop.id})
        with patch('properties.storage.update_property', side_effect=StorageError('locked')):
            response = self.client.put(url, sample_form_data(rent=1900), format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'Failed to update property'})
        self.assertEqual(property_storage.get_property(self.prop.id).rent, 1500)

    def test_partial_update_storage_failure(self):
        url = reverse('property-detail', kwargs={'pk': self.prop.id})
        with patch.object(LocalStore, 'set_item', side_effect=DatabaseError('locked')):
            response = self.client.patch(url, {'rent': 1750}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'Failed to update property'})

    def test_delete_storage_failure(self):
        url = reverse('property-detail', kwargs={'pk': self.prop.id})
        with patch('properties.storage.delete_property', side_effect=StorageError('locked')):
            response = self.client.delete(url)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'Failed to delete property'})
        self.assertIsNotNone(property_storage.get_property(self.prop.id))

    def test_invalid_stored_entries_do_not_break_endpoints(self):
        """Test a hand-edited entry with a text rent or no id is left out"""
        stored = json.loads(LocalStore().get_item('rental-properties'))
        stored.append({**stored[0], 'id': '2', 'rent': 'call us'})
        stored.append({key: value for key, value in stored[0].items() if key != 'id'})
        LocalStore().set_item('rental-properties', json.dumps(stored))

        with self.assertLogs('properties.storage', level='WARNING'):
            response = self.client.get(reverse('property-stats'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

        with self.assertLogs('properties.storage', level='WARNING'):
            response = self.client.get(reverse('property-list'))
        self.assertEqual([p['id'] for p in response.data], [self.prop.id])

    def test_stats(self):
        """Test portfolio statistics endpoint"""
        property_storage.add_property(sample_form_data(rent=1000, area=None))
        url = reverse('property-stats')
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {
            'count': 2,
            'average_rent': 1250,
            'average_area': 475,
        })


# =============================================================================
# PROJECT ENDPOINT TESTS
# =============================================================================

class ProjectEndpointTest(TestCase):
    """Test API info and health check endpoints"""

    def test_health_check(self):
        response = self.client.get(reverse('health-check'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'healthy')

    def test_api_info_counts_properties(self):
        property_storage.add_property(sample_form_data())
        response = self.client.get(reverse('api-info'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data_stats']['total_properties'], 1)


# =============================================================================
# PAGE VIEW TESTS
# =============================================================================

class PropertyPageTest(TestCase):
    """Test the listing board, form and delete pages"""

    def form_post(self, **overrides):
        data = sample_form_data(**overrides)
        return {key: '' if value is None else str(value) for key, value in data.items()}

    def test_index_empty_state(self):
        response = self.client.get(reverse('properties:index'))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'No Properties Yet')
        self.assertContains(response, 'Add Your First Property')
        self.assertEqual(response.context['stats'].count, 0)

    def test_index_lists_properties(self):
        property_storage.add_property(sample_form_data(title='Sunny loft'))
        response = self.client.get(reverse('properties:index'))

        self.assertContains(response, 'Sunny loft')
        self.assertContains(response, '$1,500/mo')
        self.assertContains(response, '1 property found')
        self.assertContains(response, '1.5 bath')
        self.assertNotContains(response, 'No Properties Yet')

    def test_create_form_renders(self):
        response = self.client.get(reverse('properties:create'))

        self.assertContains(response, 'Add New Property')
        self.assertContains(response, 'Add Property')

    def test_create_property(self):
        """Test a valid submission adds the listing and shows a message"""
        response = self.client.post(
            reverse('properties:create'), self.form_post(title='Form Listing'), follow=True
        )

        self.assertRedirects(response, reverse('properties:index'))
        self.assertContains(response, 'Property added successfully')
        self.assertEqual(
            [p.title for p in property_storage.load_properties()], ['Form Listing']
        )

    def test_create_invalid_property(self):
        """Test an invalid submission re-renders with field errors"""
        response = self.client.post(
            reverse('properties:create'), self.form_post(title='', rent='0')
        )

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Title is required')
        self.assertContains(response, 'Rent must be greater than 0')
        self.assertContains(response, '123 Main Street, Springfield, IL')  # Values kept
        self.assertEqual(property_storage.load_properties(), [])

    def test_create_storage_failure(self):
        with patch.object(LocalStore, 'set_item', side_effect=DatabaseError('locked')):
            response = self.client.post(reverse('properties:create'), self.form_post())

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Failed to add property')

    def test_edit_form_prefilled(self):
        prop = property_storage.add_property(sample_form_data(title='Prefilled'))
        response = self.client.get(reverse('properties:edit', args=[prop.id]))

        self.assertContains(response, 'Edit Property')
        self.assertContains(response, 'Update Property')
        self.assertContains(response, 'value="Prefilled"')

    def test_edit_property(self):
        prop = property_storage.add_property(sample_form_data())
        response = self.client.post(
            reverse('properties:edit', args=[prop.id]),
            self.form_post(rent='1900', bedrooms=''),
            follow=True
        )

        self.assertContains(response, 'Property updated successfully')
        updated = property_storage.get_property(prop.id)
        self.assertEqual(updated.rent, 1900)
        self.assertIsNone(updated.bedrooms)

    def test_edit_storage_failure(self):
        """Test a failed save keeps the form open with the submitted values"""
        prop = property_storage.add_property(sample_form_data())

        with patch('properties.storage.update_property', side_effect=StorageError('locked')):
            response = self.client.post(
                reverse('properties:edit', args=[prop.id]), self.form_post(title='Renamed')
            )

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Failed to update property')
        self.assertContains(response, 'Update Property')
        self.assertContains(response, 'value="Renamed"')
        self.assertEqual(property_storage.get_property(prop.id).title, sample_form_data()['title'])

    def test_index_skips_invalid_stored_entries(self):
        """Test the board still renders when a stored entry is unusable"""
        property_storage.add_property(sample_form_data(title='Good listing'))
        stored = json.loads(LocalStore().get_item('rental-properties'))
        stored.append({**stored[0], 'id': '2', 'title': 'Text rent', 'rent': '1,500'})
        stored.append({key: value for key, value in stored[0].items() if key != 'id'})
        LocalStore().set_item('rental-properties', json.dumps(stored))

        with self.assertLogs('properties.storage', level='WARNING'):
            response = self.client.get(reverse('properties:index'))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Good listing')
        self.assertNotContains(response, 'Text rent')
        self.assertContains(response, '1 property found')

    def test_edit_unknown_property(self):
        response = self.client.get(reverse('properties:edit', args=['missing']))
        self.assertEqual(response.status_code, 404)

    def test_delete_requires_confirmation(self):
        """Test GET only asks, POST deletes"""
        prop = property_storage.add_property(sample_form_data())
        url = reverse('properties:delete', args=[prop.id])

        response = self.client.get(url)
        self.assertContains(response, 'Are you sure you want to delete this property?')
        self.assertIsNotNone(property_storage.get_property(prop.id))

        response = self.client.post(url, follow=True)
        self.assertContains(response, 'Property deleted successfully')
        self.assertIsNone(property_storage.get_property(prop.id))

    def test_delete_storage_failure(self):
        prop = property_storage.add_property(sample_form_data())

        with patch.object(LocalStore, 'set_item', side_effect=DatabaseError('locked')):
            response = self.client.post(
                reverse('properties:delete', args=[prop.id]), follow=True
            )

        self.assertContains(response, 'Failed to delete property')
        self.assertIsNotNone(property_storage.get_property(prop.id))

    def test_delete_unknown_property(self):
        response = self.client.post(reverse('properties:delete', args=['missing']))
        self.assertEqual(response.status_code, 404)


# =============================================================================
# MANAGEMENT COMMAND TESTS
# =============================================================================

class ManagementCommandTest(TestCase):
    """Test import, export and sample data commands"""

    def write_csv(self, content):
        handle = tempfile.NamedTemporaryFile('w', suffix='.csv', delete=False, encoding='utf-8')
        handle.write(content)
        handle.close()
        self.addCleanup(os.unlink, handle.name)
        return handle.name

    def test_import_properties(self):
        """Test valid rows are added and invalid rows reported"""
        path = self.write_csv(
            "title,address,image,rent,bedrooms,bathrooms,area,description\n"
            "Loft,1 River Road,https://example.com/1.jpg,\"$1,200\",1,1,600,Open plan\n"
            ",2 River Road,https://example.com/2.jpg,900,,,,\n"
            "Cottage,3 River Road,https://example.com/3.jpg,1750,2,1.5,,\n"
        )
        out = StringIO()
        call_command('import_properties', path, stdout=out)

        properties = property_storage.load_properties()
        self.assertEqual([p.title for p in properties], ['Loft', 'Cottage'])
        self.assertEqual(properties[0].rent, 1200)
        self.assertIsNone(properties[1].area)
        self.assertIn('Row 3: title: Title is required', out.getvalue())

    def test_import_with_clear(self):
        property_storage.add_property(sample_form_data(title='Old'))
        path = self.write_csv(
            "title,address,image,rent\n"
            "New,1 River Road,https://example.com/1.jpg,1000\n"
        )
        call_command('import_properties', path, '--clear', stdout=StringIO())

        self.assertEqual([p.title for p in property_storage.load_properties()], ['New'])

    def test_failed_import_with_clear_keeps_existing(self):
        """Test a write failure during import rolls back the clear"""
        property_storage.add_property(sample_form_data(title='Old'))
        csv_content = (
            "title,address,image,rent\n"
            "New,1 River Road,https://example.com/1.jpg,1000\n"
        )

        with patch.object(LocalStore, 'set_item', side_effect=DatabaseError('disk full')):
            with self.assertRaises(StorageError):
                process_csv_import(csv_content, clear_existing=True)

        self.assertEqual([p.title for p in property_storage.load_properties()], ['Old'])

    def test_import_command_failure_keeps_existing(self):
        property_storage.add_property(sample_form_data(title='Old'))
        path = self.write_csv(
            "title,address,image,rent\n"
            "New,1 River Road,https://example.com/1.jpg,1000\n"
        )

        with patch.object(LocalStore, 'set_item', side_effect=DatabaseError('disk full')):
            with self.assertRaises(CommandError):
                call_command('import_properties', path, '--clear', stdout=StringIO())

        self.assertEqual([p.title for p in property_storage.load_properties()], ['Old'])

    def test_failed_sample_load_with_clear_keeps_existing(self):
        property_storage.add_property(sample_form_data(title='Old'))

        with patch.object(LocalStore, 'set_item', side_effect=DatabaseError('disk full')):
            with self.assertRaises(CommandError):
                call_command('load_sample_properties', '--clear', stdout=StringIO())

        self.assertEqual([p.title for p in property_storage.load_properties()], ['Old'])

    def test_export_properties(self):
        prop = property_storage.add_property(sample_form_data())
        out = StringIO()
        call_command('export_properties', stdout=out)

        exported = json.loads(out.getvalue())
        self.assertEqual(exported[0]['id'], prop.id)
        self.assertEqual(exported[0]['createdAt'], prop.created_at)

    def test_load_sample_properties(self):
        call_command('load_sample_properties', stdout=StringIO())
        self.assertEqual(len(property_storage.load_properties()), 3)

        call_command('load_sample_properties', '--clear', stdout=StringIO())
        self.assertEqual(len(property_storage.load_properties()), 3)


# =============================================================================
# ADMIN TESTS
# =============================================================================

class StorageEntryAdminTest(TestCase):
    """Test store entry admin helpers"""

    def setUp(self):
        self.admin = StorageEntryAdmin(StorageEntry, AdminSite())

    def test_item_count(self):
        property_storage.add_property(sample_form_data())
        entry = StorageEntry.objects.get(key='rental-properties')

        self.assertEqual(self.admin.item_count(entry), 1)

    def test_item_count_for_non_list(self):
        entry = StorageEntry.objects.create(key='other', value='not json')
        self.assertEqual(self.admin.item_count(entry), '-')
