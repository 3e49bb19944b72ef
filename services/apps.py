"""
Django application configuration for the services app.

The services app provides the portfolio calculations used by the Rental
Board pages and API. It has no models.
"""

from django.apps import AppConfig


class ServicesConfig(AppConfig):
    """Application configuration for the services app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'services'
    verbose_name = 'Services'
