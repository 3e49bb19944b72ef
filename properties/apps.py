"""
Properties App Configuration - Rental Board
Django app configuration for the properties application.
"""

from django.apps import AppConfig


class PropertiesConfig(AppConfig):
    """
    Configuration for the Properties app.

    This app manages:
    - The local key-value store holding the listing collection
    - Listing validation and persistence
    - Listing pages and REST endpoints
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'properties'
    verbose_name = 'Rental Properties'


# =============================================================================
# APP METADATA AND CONFIGURATION
# =============================================================================

APP_CONFIG = {
    'version': '1.0.0',
    'description': 'Rental property listing manager',
    'features': {
        'local_store': True,
        'form_validation': True,
        'portfolio_stats': True,
        'search': False,
        'pagination': False,
    },
}


def get_app_config():
    """Return app configuration for API info endpoint"""
    return APP_CONFIG
