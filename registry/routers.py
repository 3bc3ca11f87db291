"""
URL mappings for the posyandu admin API.

Routes have no trailing slash (``APPEND_SLASH`` is off).
"""
from django.urls import path, include

from .views import health
from .views.dashboard import admin_dashboard
from .views.members import member_delete, member_detail, member_update, members


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Dashboard
    path('api/admin/<str:admin_id>/dashboard', admin_dashboard, name='admin_dashboard'),
    # Members (guardians)
    path('api/members', members, name='members'),
    path('api/members/<int:member_id>', member_detail, name='member_detail'),
    path('api/members/<int:member_id>/update', member_update, name='member_update'),
    path('api/members/<int:member_id>/delete', member_delete, name='member_delete'),
]
