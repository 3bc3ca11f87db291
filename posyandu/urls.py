"""
URL configuration for the posyandu administrative API.

The `urlpatterns` list routes URLs to views.  All API routes live in the
registry app.  OpenAPI documentation is exposed at ``/swagger/`` and
``/redoc/``.
"""
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Posyandu Admin API",
    default_version='v1',
    description="Guardian/child registry and growth dashboard backed by Supabase.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('', include('registry.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
