"""
API URL configuration for the properties app.

Uses Django REST Framework's SimpleRouter for the listing ViewSet (no API root
view, so the list endpoint can own the empty path).

URL Structure Generated:
========================
- /                 - listing list/create (GET, POST)
- /{id}/            - listing detail/update/delete (GET, PUT, PATCH, DELETE)
- /stats/           - portfolio statistics (GET)

This URLs file gets included by the main project URLs at:
/api/v1/properties/ -> properties.urls
"""

from rest_framework.routers import SimpleRouter

from .views import PropertyViewSet


# =============================================================================
# ROUTER CONFIGURATION
# =============================================================================

router = SimpleRouter()

# Registered at root '' since this URL config is included at /api/v1/properties/
router.register(r'', PropertyViewSet, basename='property')

# Router generated names:
# ^$ [name='property-list']                   - GET (list), POST (create)
# ^stats/$ [name='property-stats']            - GET
# ^(?P<pk>[^/.]+)/$ [name='property-detail']  - GET, PUT, PATCH, DELETE

urlpatterns = router.urls
