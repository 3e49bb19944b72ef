"""
WSGI config for rentalboard project.

It exposes the WSGI callable as a module-level variable named ``application``.
Django's ``runserver`` discovers it through the ``WSGI_APPLICATION`` setting;
production servers point at ``rentalboard.wsgi:application``.
"""

import os

from django.core.wsgi import get_wsgi_application

# Set the default settings module for the 'rentalboard' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'rentalboard.settings')

application = get_wsgi_application()
