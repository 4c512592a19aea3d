"""
API v1 URL Configuration.

All API endpoints for version 1.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views.bom import (
    BOMGraphViewSet,
    SampleBOMViewSet,
)
from .views.planning import PlanningViewSet

# Create router
router = DefaultRouter()

# BOM
router.register(r'bom-graph', BOMGraphViewSet, basename='bom-graph')
router.register(r'samples', SampleBOMViewSet, basename='samples')

# Planning (EOQ / MRP)
router.register(r'planning', PlanningViewSet, basename='planning')

urlpatterns = [
    path('', include(router.urls)),
]
