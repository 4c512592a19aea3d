"""
Serializers Package.

All API serializers for the BOM Planner.
"""

from .base import RecursiveSerializer

from .bom import (
    ComponentAttributesSerializer,
    BOMTreeSerializer,
    PositionSerializer,
    GraphComponentSerializer,
    GraphNodeSerializer,
    GraphEdgeSerializer,
    BOMGraphSerializer,
    BOMExpandSerializer,
)

from .planning import (
    EOQRequestSerializer,
    MRPRequestSerializer,
)

__all__ = [
    'RecursiveSerializer',
    'ComponentAttributesSerializer',
    'BOMTreeSerializer',
    'PositionSerializer',
    'GraphComponentSerializer',
    'GraphNodeSerializer',
    'GraphEdgeSerializer',
    'BOMGraphSerializer',
    'BOMExpandSerializer',
    'EOQRequestSerializer',
    'MRPRequestSerializer',
]
