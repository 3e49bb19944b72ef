"""
URL configuration for rentalboard project.

- /                      listing pages (properties.urls_pages)
- /api/v1/               API info
- /api/v1/health/        health check
- /api/v1/properties/    listing API (properties.urls)
- /admin/                Django admin
"""

import sys

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.urls import include, path
from django.utils import timezone
from django.views.decorators.cache import cache_control
from django.views.decorators.http import require_http_methods

import logging

logger = logging.getLogger(__name__)


# =============================================================================
# HEALTH CHECK ENDPOINT
# =============================================================================

@require_http_methods(["GET"])
@cache_control(no_cache=True, must_revalidate=True, no_store=True)
def health_check(request):
    """
    Health check endpoint.

    Returns:
        JSON response with system status and database connectivity
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        response_data = {
            "status": "healthy",
            "database": "connected",
            "python_version": f"{sys.version_info.major}.{sys.version_info.minor}",
            "timestamp": timezone.now().isoformat(),
        }
        return JsonResponse(response_data, status=200)

    except DatabaseError as e:
        logger.error(f"Health check failed: {str(e)}")
        error_response = {
            "status": "unhealthy",
            "database": "error",
            "error": str(e) if settings.DEBUG else "Database connection failed"
        }
        return JsonResponse(error_response, status=503)


# =============================================================================
# API INFO ENDPOINT
# =============================================================================

@require_http_methods(["GET"])
def api_info(request):
    """
    API information endpoint.

    Returns:
        JSON response with API version, available endpoints and record count
    """
    from properties.apps import get_app_config
    from properties.storage import load_properties

    app_config = get_app_config()
    api_info_data = {
        "api_name": "Rental Board API",
        "version": app_config['version'],
        "description": app_config['description'],
        "endpoints": {
            "properties": {
                "list_create": "/api/v1/properties/",
                "detail_update_delete": "/api/v1/properties/{id}/",
                "stats": "/api/v1/properties/stats/",
            },
            "utilities": {
                "health": "/api/v1/health/",
            }
        },
        "data_stats": {
            "total_properties": len(load_properties()),
        }
    }

    return JsonResponse(api_info_data)


# =============================================================================
# URL PATTERNS
# =============================================================================

urlpatterns = [
    path('admin/', admin.site.urls),

    # API
    path('api/v1/', api_info, name='api-info'),
    path('api/v1/health/', health_check, name='health-check'),
    path('api/v1/properties/', include('properties.urls')),

    # Pages
    path('', include('properties.urls_pages')),
]
