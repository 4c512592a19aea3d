"""
Shared fixtures for the BOM Planner tests.
"""

import pytest
from django.core.cache import cache

from domain.bom.entities import BOMTreeNode, GraphComponent, GraphEdge, GraphNode
from domain.bom.identity import SequentialIdentityGenerator
from domain.bom.samples import build_alpha_bom, build_skate_bom
from domain.shared.value_objects import ComponentAttributes


def make_node(node_id, name=None, component_id='', badge_value=1, **attributes):
    """Graph node whose component identity defaults to the node id."""
    return GraphNode(
        id=node_id,
        component=GraphComponent(
            id=component_id,
            name=name or node_id,
            attributes=ComponentAttributes(**attributes),
        ),
        badge_value=badge_value,
    )


def make_edge(source, target, qty=None):
    return GraphEdge(id=f"{source}->{target}", source=source, target=target, quantity=qty)


def node_payload(node_id, name=None, **attributes):
    """Graph node in the editor's wire shape."""
    return {
        'id': node_id,
        'type': 'componentNode',
        'position': {'x': 0, 'y': 0},
        'data': {
            'component': {'id': '', 'name': name or node_id, **attributes},
            'badge_value': 1,
        },
    }


def edge_payload(source, target, qty=1):
    return {
        'id': f"{source}->{target}",
        'source': source,
        'target': target,
        'data': {'qty': qty},
    }


def leaf(name, multiplicity=1, **attributes):
    return BOMTreeNode(
        component_name=name,
        attributes=ComponentAttributes(**attributes),
        multiplicity=multiplicity,
    )


def shape(tree):
    """Everything but identities: (depth, name, multiplicity, attributes) in pre-order."""
    return [
        (depth, node.component_name, node.multiplicity, node.attributes)
        for node, depth in tree.walk_with_depth()
    ]


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def alpha():
    return build_alpha_bom()


@pytest.fixture
def skate():
    return build_skate_bom()


@pytest.fixture
def identities():
    return SequentialIdentityGenerator()


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()
