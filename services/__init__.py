"""
Business services for Rental Board.

Calculations shared by the listing pages and the API live here so views
stay thin.
"""
