"""
Properties app for Rental Board.

This app manages the rental listing collection: the local key-value store,
the persistence layer on top of it, form validation, the listing pages and
the REST API endpoints.
"""
