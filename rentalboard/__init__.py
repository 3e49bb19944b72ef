"""
Rental Board project package.

Holds the Django settings, root URL configuration and WSGI entry point.
"""
