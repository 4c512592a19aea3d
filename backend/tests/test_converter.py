"""
Graph <-> tree conversion tests.
"""

import pytest

from domain.bom.aggregates import BOMGraph
from domain.bom.entities import BOMTreeNode
from domain.bom.layout import LayoutOptions, expand_tree
from domain.shared.exceptions import SelfReferenceException, ValidationException
from domain.shared.value_objects import ComponentAttributes, Position

from conftest import leaf, make_edge, make_node, node_payload, shape


class TestRoundTrip:

    @pytest.mark.parametrize('fixture_name', ['alpha', 'skate'])
    def test_expand_then_collapse_keeps_names_attributes_and_multiplicities(
        self, request, fixture_name
    ):
        tree = request.getfixturevalue(fixture_name)
        collapsed = BOMGraph.from_tree(tree).to_tree()
        assert shape(collapsed) == shape(tree)
        assert collapsed.signature() == tree.signature()

    def test_round_trip_through_wire_shape(self, skate, identities):
        graph = BOMGraph.from_tree(skate, identities=identities)
        restored = BOMGraph.from_dict(graph.to_dict())
        assert shape(restored.to_valid_tree()) == shape(skate)

    def test_stored_component_ids_survive(self):
        tree = BOMTreeNode(
            component_name='Cart',
            component_id='cmp-cart',
            children=[leaf('Wheel', 4)],
        )
        graph = BOMGraph.from_tree(tree)
        root, wheel = graph.nodes
        assert root.component.id == 'cmp-cart'
        assert not root.component.ghost
        assert wheel.component.ghost

        collapsed = graph.to_tree()
        assert collapsed.component_id == 'cmp-cart'
        assert collapsed.children[0].component_id is None


class TestExpand:

    def test_deterministic_ids(self, skate, identities):
        nodes, edges = expand_tree(skate, identities=identities)
        assert [node.id for node in nodes] == [
            'bom1-root', 'bom1-0', 'bom1-1', 'bom1-2',
            'bom1-2-0', 'bom1-2-1', 'bom1-2-2', 'bom1-3',
        ]
        assert edges[0].id == 'bom1-root->bom1-0'
        assert nodes[0].component.id == 'ghost-1'

        second, _ = expand_tree(skate, identities=identities)
        assert second[0].id == 'bom2-root'

    def test_children_centred_under_parent(self, skate, identities):
        nodes, _ = expand_tree(skate, origin=Position(100, 50), identities=identities)
        by_id = {node.id: node.position for node in nodes}
        assert by_id['bom1-root'] == Position(100, 50)
        assert [by_id[f'bom1-{i}'].x for i in range(4)] == [-230, -10, 210, 430]
        assert {by_id[f'bom1-{i}'].y for i in range(4)} == {190}
        # Wheels (x=210) has three children
        assert [by_id[f'bom1-2-{i}'].x for i in range(3)] == [-10, 210, 430]
        assert by_id['bom1-2-0'].y == 330

    def test_colliding_positions_are_nudged(self, identities):
        tree = leaf('R')
        tree.children = [leaf('A'), leaf('B')]
        tree.children[0].children = [leaf('A1'), leaf('A2')]
        tree.children[1].children = [leaf('B1'), leaf('B2')]

        nodes, _ = expand_tree(tree, identities=identities)
        positions = {node.component_name: node.position for node in nodes}
        assert positions['A2'] == Position(0, 280)
        assert positions['B1'] == Position(18, 298)
        assert positions['B2'] == Position(220, 280)

    def test_custom_spacing(self, identities):
        tree = leaf('R')
        tree.children = [leaf('A'), leaf('B')]
        nodes, _ = expand_tree(
            tree,
            identities=identities,
            options=LayoutOptions(dx=100, dy=10, stack_offset=5),
        )
        assert [node.position for node in nodes[1:]] == [Position(-50, 10), Position(50, 10)]

    def test_multiplicity_on_badge_and_edge(self, skate, identities):
        nodes, edges = expand_tree(skate, folder_id='folder-7', identities=identities)
        trucks = nodes[2]
        assert trucks.component_name == 'Trucks'
        assert trucks.badge_value == 2
        assert trucks.component.folder_id == 'folder-7'
        assert trucks.component.attributes == skate.children[1].attributes
        edge = next(e for e in edges if e.target == trucks.id)
        assert edge.quantity == 2
        assert edge.to_dict()['data'] == {'qty': 2}

    def test_no_deduplication(self, alpha):
        nodes, edges = expand_tree(alpha)
        assert len(nodes) == alpha.count_nodes()
        assert len(edges) == len(nodes) - 1


class TestCollapse:

    def test_children_in_edge_order_with_quantities(self):
        graph = BOMGraph(
            nodes=[make_node('R', badge_value=3), make_node('A'), make_node('B'), make_node('C')],
            edges=[make_edge('R', 'B', 2.5), make_edge('R', 'A'), make_edge('R', 'C', 0)],
        )
        tree = graph.to_tree()
        assert tree.multiplicity == 3
        assert [(c.component_name, c.multiplicity) for c in tree.children] == [
            ('B', 2.5), ('A', 1), ('C', 1),
        ]

    def test_attributes_copied(self):
        graph = BOMGraph(
            nodes=[make_node('R'), make_node('A', lead_time=4, unit_cost=2.5)],
            edges=[make_edge('R', 'A', 3)],
        )
        child = graph.to_tree().children[0]
        assert child.attributes == ComponentAttributes(lead_time=4, unit_cost=2.5)

    def test_no_root(self):
        graph = BOMGraph(
            nodes=[make_node('A'), make_node('B')],
            edges=[make_edge('A', 'B'), make_edge('B', 'A')],
        )
        assert graph.find_root() is None
        assert graph.to_tree() is None

    def test_unvalidated_shared_child_placed_once(self):
        graph = BOMGraph(
            nodes=[make_node('R'), make_node('A'), make_node('C')],
            edges=[make_edge('R', 'A'), make_edge('R', 'C'), make_edge('A', 'C')],
        )
        assert graph.to_tree().count_nodes() == 3

    def test_to_valid_tree_raises(self):
        graph = BOMGraph(nodes=[make_node('A')], edges=[make_edge('A', 'A')])
        with pytest.raises(SelfReferenceException):
            graph.to_valid_tree()


class TestWireShape:

    def test_node_without_component_rejected(self):
        with pytest.raises(ValidationException):
            BOMGraph.from_dict({'nodes': [{'id': 'n1', 'data': {}}]})

    def test_edge_without_target_rejected(self):
        with pytest.raises(ValidationException):
            BOMGraph.from_dict({
                'nodes': [node_payload('A')],
                'edges': [{'id': 'e1', 'source': 'A'}],
            })

    def test_missing_name_falls_back_to_node_id(self):
        graph = BOMGraph.from_dict({
            'nodes': [{'id': 'n1', 'data': {'component': {'lead_time': 2}}}],
        })
        node = graph.get_node('n1')
        assert node.component_name == 'n1'
        assert node.component.attributes.lead_time == 2
