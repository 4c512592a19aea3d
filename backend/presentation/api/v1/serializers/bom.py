"""
BOM Serializers.

Input shapes of the two BOM boundaries:
- the nested tree record stored by "Save BOM"
- the node/edge graph exchanged with the editor
"""

from rest_framework import serializers

from .base import RecursiveSerializer


class ComponentAttributesSerializer(serializers.Serializer):
    """Planning attributes of a component."""

    unit_cost = serializers.FloatField(min_value=0, required=False, default=0)
    ordering_cost = serializers.FloatField(min_value=0, required=False, default=0)
    carrying_cost = serializers.FloatField(min_value=0, required=False, default=0)
    number_on_hand = serializers.IntegerField(min_value=0, required=False, default=0)
    # Values below 1 are accepted and clamped to 1 by the domain.
    lead_time = serializers.IntegerField(required=False, default=1)
    lot_size = serializers.IntegerField(required=False, default=1)


class BOMTreeSerializer(serializers.Serializer):
    """Serializer for BOM trees (nested records with children arrays)."""

    component = serializers.CharField(max_length=300)
    component_id = serializers.CharField(
        max_length=100,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    attributes = ComponentAttributesSerializer(required=False)
    badge_value = serializers.FloatField(required=False, allow_null=True)
    children = RecursiveSerializer(many=True, required=False)


# =============================================================================
# GRAPH
# =============================================================================

class PositionSerializer(serializers.Serializer):
    x = serializers.FloatField(required=False, default=0)
    y = serializers.FloatField(required=False, default=0)


class GraphComponentSerializer(ComponentAttributesSerializer):
    """Denormalized component carried by a graph node."""

    id = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    name = serializers.CharField(max_length=300)
    folder_id = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    ghost = serializers.BooleanField(required=False, default=False)


class GraphNodeDataSerializer(serializers.Serializer):
    component = GraphComponentSerializer()
    badge_value = serializers.FloatField(required=False, allow_null=True)


class GraphNodeSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=200)
    type = serializers.CharField(required=False)
    position = PositionSerializer(required=False)
    data = GraphNodeDataSerializer()


class GraphEdgeDataSerializer(serializers.Serializer):
    qty = serializers.FloatField(required=False, allow_null=True)


class GraphEdgeSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=500, required=False, allow_blank=True)
    source = serializers.CharField(max_length=200)
    target = serializers.CharField(max_length=200)
    data = GraphEdgeDataSerializer(required=False)


class BOMGraphSerializer(serializers.Serializer):
    """Serializer for the editor's graph (nodes + edges)."""

    nodes = GraphNodeSerializer(many=True)
    edges = GraphEdgeSerializer(many=True, required=False, default=list)


class BOMExpandSerializer(serializers.Serializer):
    """Request to lay a saved tree out on the canvas."""

    tree = BOMTreeSerializer()
    origin = PositionSerializer(required=False)
    folder_id = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
