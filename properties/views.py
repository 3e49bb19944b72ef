"""
Views for the properties app.

This module defines two front doors onto the same listing store:
- PropertyViewSet: JSON API under /api/v1/properties/
- Page views: the listing board, the add/edit form and delete confirmation

Both validate with PropertyFormSerializer and persist through
properties.storage. Storage write failures become a user-facing
"Failed to ..." message (pages) or a 500 response (API).
"""

import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from services.business_logic import calculate_portfolio_stats, describe_result_count

from . import storage
from .exceptions import StorageError
from .records import FORM_FIELDS
from .serializers import PropertyFormSerializer, PropertySerializer, first_errors

logger = logging.getLogger(__name__)


# =============================================================================
# PROPERTY VIEWSET
# =============================================================================

class PropertyViewSet(viewsets.ViewSet):
    """
    API endpoint for rental listings.

    Supports:
    - List all listings (insertion order, no pagination)
    - Create new listing
    - Retrieve specific listing
    - Update listing (PUT full, PATCH partial)
    - Delete listing
    - Portfolio statistics
    """

    def _not_found(self):
        return Response({'error': 'Property not found'}, status=status.HTTP_404_NOT_FOUND)

    def _storage_failed(self, verb):
        return Response(
            {'error': f'Failed to {verb} property'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    def list(self, request):
        properties = storage.load_properties()
        return Response(PropertySerializer(properties, many=True).data)

    def create(self, request):
        serializer = PropertyFormSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            new_property = storage.add_property(serializer.validated_data)
        except StorageError:
            return self._storage_failed('add')

        return Response(PropertySerializer(new_property).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        prop = storage.get_property(pk)
        if prop is None:
            return self._not_found()
        return Response(PropertySerializer(prop).data)

    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    def _update(self, request, pk, partial):
        if storage.get_property(pk) is None:
            return self._not_found()

        serializer = PropertyFormSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            updated = storage.update_property(pk, serializer.validated_data)
        except StorageError:
            return self._storage_failed('update')

        # Deleted between the lookup and the write
        if updated is None:
            return self._not_found()

        return Response(PropertySerializer(updated).data)

    def destroy(self, request, pk=None):
        try:
            deleted = storage.delete_property(pk)
        except StorageError:
            return self._storage_failed('delete')

        if not deleted:
            return self._not_found()

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """
        Portfolio statistics.

        GET /api/v1/properties/stats/

        Response:
        {
            "count": 3,
            "average_rent": 1833,
            "average_area": 967
        }
        """
        stats = calculate_portfolio_stats(storage.load_properties())
        return Response(stats.to_dict())


# =============================================================================
# PAGE VIEWS
# =============================================================================

def _submitted_values(request):
    """Echo the posted form values back into the re-rendered form."""
    return {name: request.POST.get(name, '') for name in FORM_FIELDS}


def _render_form(request, form_data, errors=None, prop=None):
    context = {
        'form_data': form_data,
        'errors': errors or {},
        'property': prop,
        'is_edit': prop is not None,
    }
    return render(request, 'properties/property_form.html', context)


@require_http_methods(["GET"])
def property_index(request):
    """Listing board: hero, portfolio stats and the property cards."""
    properties = storage.load_properties()
    context = {
        'properties': properties,
        'stats': calculate_portfolio_stats(properties),
        'result_count_label': describe_result_count(len(properties)),
    }
    return render(request, 'properties/index.html', context)


@require_http_methods(["GET", "POST"])
def property_create(request):
    """Add New Property form."""
    if request.method == 'GET':
        return _render_form(request, {name: '' for name in FORM_FIELDS})

    serializer = PropertyFormSerializer(data=request.POST)
    if not serializer.is_valid():
        return _render_form(request, _submitted_values(request), first_errors(serializer.errors))

    try:
        storage.add_property(serializer.validated_data)
    except StorageError:
        messages.error(request, 'Failed to add property')
        return _render_form(request, _submitted_values(request))

    messages.success(request, 'Property added successfully')
    return redirect('properties:index')


@require_http_methods(["GET", "POST"])
def property_edit(request, property_id):
    """Edit Property form, prefilled with the stored values."""
    prop = storage.get_property(property_id)
    if prop is None:
        raise Http404("Property not found")

    if request.method == 'GET':
        return _render_form(request, prop.form_data(), prop=prop)

    serializer = PropertyFormSerializer(data=request.POST)
    if not serializer.is_valid():
        return _render_form(
            request, _submitted_values(request), first_errors(serializer.errors), prop=prop
        )

    try:
        updated = storage.update_property(property_id, serializer.validated_data)
    except StorageError:
        messages.error(request, 'Failed to update property')
        return _render_form(request, _submitted_values(request), prop=prop)

    if updated is None:
        raise Http404("Property not found")

    messages.success(request, 'Property updated successfully')
    return redirect('properties:index')


@require_http_methods(["GET", "POST"])
def property_delete(request, property_id):
    """Ask for confirmation on GET, delete on POST."""
    prop = storage.get_property(property_id)
    if prop is None:
        raise Http404("Property not found")

    if request.method == 'GET':
        return render(request, 'properties/property_confirm_delete.html', {'property': prop})

    try:
        deleted = storage.delete_property(property_id)
    except StorageError:
        messages.error(request, 'Failed to delete property')
        return redirect('properties:index')

    if deleted:
        messages.success(request, 'Property deleted successfully')
    return redirect('properties:index')
