"""
Page URL configuration for the properties app.

- /                        - listing board
- /properties/new/         - Add New Property form
- /properties/{id}/edit/   - Edit Property form
- /properties/{id}/delete/ - delete confirmation
"""

from django.urls import path

from . import views

app_name = 'properties'

urlpatterns = [
    path('', views.property_index, name='index'),
    path('properties/new/', views.property_create, name='create'),
    path('properties/<str:property_id>/edit/', views.property_edit, name='edit'),
    path('properties/<str:property_id>/delete/', views.property_delete, name='delete'),
]
