"""
BOM Views.

API views for the BOM editor boundary: validation of the drawn graph,
conversion of the graph into a saved tree and expansion of a saved tree
back onto the canvas.
"""

import logging

from django.conf import settings
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from domain.bom.aggregates import BOMGraph
from domain.bom.entities import BOMTreeNode
from domain.bom.layout import LayoutOptions
from domain.bom.samples import get_sample, get_sample_orders, sample_names
from domain.shared.value_objects import Position
from ..serializers.bom import (
    BOMGraphSerializer,
    BOMExpandSerializer,
)

logger = logging.getLogger(__name__)


def layout_options() -> LayoutOptions:
    return LayoutOptions(**getattr(settings, 'BOM_LAYOUT', {}))


class BOMGraphViewSet(viewsets.ViewSet):
    """
    ViewSet for BOM graphs drawn in the editor.

    Endpoints:
    - POST /bom-graph/validate/ - check structural rules, never fails with 4xx on a bad BOM
    - POST /bom-graph/collapse/ - validate then convert the graph into a tree
    - POST /bom-graph/expand/ - lay a saved tree out as fresh graph nodes
    """

    @action(detail=False, methods=['post'])
    def validate(self, request):
        """Validate a BOM graph."""
        serializer = BOMGraphSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        graph = BOMGraph.from_dict(serializer.validated_data)
        result = graph.validate()
        return Response(result.to_dict())

    @action(detail=False, methods=['post'])
    def collapse(self, request):
        """Validate a BOM graph and return it as a tree ready to be saved."""
        serializer = BOMGraphSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        graph = BOMGraph.from_dict(serializer.validated_data)
        tree = graph.to_valid_tree()
        return Response({
            'tree': tree.to_dict(),
            'signature': tree.signature(),
        })

    @action(detail=False, methods=['post'])
    def expand(self, request):
        """Expand a saved tree into positioned graph nodes and edges."""
        serializer = BOMExpandSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        tree = BOMTreeNode.from_dict(data['tree'])
        origin = data.get('origin') or {}
        graph = BOMGraph.from_tree(
            tree,
            origin=Position(origin.get('x', 0), origin.get('y', 0)),
            folder_id=data.get('folder_id'),
            options=layout_options(),
        )
        logger.debug(f"Expanded {tree.component_name} into {len(graph.nodes)} nodes")
        return Response(graph.to_dict())


class SampleBOMViewSet(viewsets.ViewSet):
    """
    Read-only access to the demonstration BOMs.

    Endpoints:
    - GET /samples/ - list sample BOMs
    - GET /samples/{name}/ - sample tree with its demand orders
    """

    lookup_field = 'name'

    def list(self, request):
        data = []
        for name in sample_names():
            tree = get_sample(name)
            data.append({
                'name': name,
                'components': tree.component_names_top_down(),
                'nodes_count': tree.count_nodes(),
            })
        return Response(data)

    def retrieve(self, request, name=None):
        tree = get_sample(name or '')
        if tree is None:
            return Response(
                {'detail': f"Sample BOM '{name}' not found", 'error': 'not_found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response({
            'name': tree.component_name,
            'tree': tree.to_dict(),
            'orders': get_sample_orders(tree.component_name),
            'signature': tree.signature(),
        })
