"""
HTTP API tests.
"""

import pytest

from domain.bom.samples import build_alpha_bom, build_skate_bom

from conftest import edge_payload, node_payload

ALPHA_ORDERS = [
    {'demand': 100},
    {'offset': 2, 'demand': 50},
    {'offset': 3, 'demand': 50},
]


class TestBOMGraphEndpoints:

    def test_validate_reports_unconnected_components(self, api_client):
        response = api_client.post(
            '/api/v1/bom-graph/validate/',
            {'nodes': [node_payload('A'), node_payload('B')], 'edges': []},
            format='json',
        )
        assert response.status_code == 200
        assert response.data['valid'] is False
        assert response.data['error']['code'] == 'UNCONNECTED_COMPONENTS'
        assert response.data['error']['message'] == 'Multiple unconnected components.'

    def test_validate_accepts_a_tree(self, api_client):
        response = api_client.post(
            '/api/v1/bom-graph/validate/',
            {
                'nodes': [node_payload('Cart'), node_payload('Wheel')],
                'edges': [edge_payload('Cart', 'Wheel', 4)],
            },
            format='json',
        )
        assert response.status_code == 200
        assert response.data == {'valid': True, 'error': None}

    def test_validate_rejects_malformed_payload(self, api_client):
        response = api_client.post(
            '/api/v1/bom-graph/validate/',
            {'nodes': [{'id': 'A'}]},
            format='json',
        )
        assert response.status_code == 400
        assert 'nodes' in response.data

    def test_collapse_returns_tree(self, api_client):
        response = api_client.post(
            '/api/v1/bom-graph/collapse/',
            {
                'nodes': [node_payload('Cart'), node_payload('Wheel', lead_time=2)],
                'edges': [edge_payload('Cart', 'Wheel', 4)],
            },
            format='json',
        )
        assert response.status_code == 200
        tree = response.data['tree']
        assert tree['component'] == 'Cart'
        assert tree['children'][0]['component'] == 'Wheel'
        assert tree['children'][0]['badge_value'] == 4
        assert tree['children'][0]['attributes']['lead_time'] == 2
        assert len(response.data['signature']) == 64

    def test_collapse_self_loop_is_bad_request(self, api_client):
        response = api_client.post(
            '/api/v1/bom-graph/collapse/',
            {'nodes': [node_payload('A')], 'edges': [edge_payload('A', 'A')]},
            format='json',
        )
        assert response.status_code == 400
        assert response.data['error'] == 'SELF_REFERENCE'
        assert response.data['details'] == {'path': ['A', 'A'], 'component': 'A'}

    def test_expand_lays_out_tree(self, api_client):
        response = api_client.post(
            '/api/v1/bom-graph/expand/',
            {
                'tree': build_alpha_bom().to_dict(),
                'origin': {'x': 10, 'y': 20},
                'folder_id': 'f1',
            },
            format='json',
        )
        assert response.status_code == 200
        nodes = response.data['nodes']
        assert len(nodes) == 9
        assert len(response.data['edges']) == 8
        assert nodes[0]['position'] == {'x': 10, 'y': 20}
        assert nodes[0]['id'].endswith('-root')
        assert nodes[0]['data']['component']['folder_id'] == 'f1'
        assert nodes[0]['data']['component']['ghost'] is True

    def test_expanded_graph_collapses_back(self, api_client):
        skate = build_skate_bom()
        graph = api_client.post(
            '/api/v1/bom-graph/expand/', {'tree': skate.to_dict()}, format='json'
        ).data
        response = api_client.post('/api/v1/bom-graph/collapse/', graph, format='json')
        assert response.status_code == 200
        assert response.data['signature'] == skate.signature()


class TestPlanningEndpoints:

    def test_eoq(self, api_client):
        response = api_client.post(
            '/api/v1/planning/eoq/',
            {'tree': build_skate_bom().to_dict(), 'annual_demand': 1000},
            format='json',
        )
        assert response.status_code == 200
        rows = response.data['rows']
        assert [row['name'] for row in rows][0] == 'Skate'
        board = next(row for row in rows if row['name'] == 'Board')
        assert board['eoq'] == pytest.approx(158.11, abs=0.01)

    def test_eoq_zero_demand(self, api_client):
        response = api_client.post(
            '/api/v1/planning/eoq/',
            {'tree': build_skate_bom().to_dict(), 'annual_demand': 0},
            format='json',
        )
        assert response.status_code == 200
        assert response.data['rows'] == []

    def test_eoq_negative_attribute_rejected(self, api_client):
        response = api_client.post(
            '/api/v1/planning/eoq/',
            {'tree': {'component': 'X', 'attributes': {'unit_cost': -1}}, 'annual_demand': 10},
            format='json',
        )
        assert response.status_code == 400

    def test_mrp(self, api_client):
        response = api_client.post(
            '/api/v1/planning/mrp/',
            {'tree': build_alpha_bom().to_dict(), 'orders': ALPHA_ORDERS},
            format='json',
        )
        assert response.status_code == 200
        data = response.data
        assert data['planning_periods'][0] == -12
        assert data['order'] == ['Alpha', 'B', 'C', 'D', 'E', 'F']
        assert data['order_times'] == [0, -2, -5]
        assert set(data['results']) == set(data['order'])

    def test_mrp_is_cached(self, api_client):
        payload = {'tree': build_alpha_bom().to_dict(), 'orders': ALPHA_ORDERS}
        first = api_client.post('/api/v1/planning/mrp/', payload, format='json')
        second = api_client.post('/api/v1/planning/mrp/', payload, format='json')
        assert first.data == second.data

    def test_mrp_invalid_schedule(self, api_client):
        response = api_client.post(
            '/api/v1/planning/mrp/',
            {'tree': build_alpha_bom().to_dict(), 'orders': [{'demand': 'lots'}]},
            format='json',
        )
        assert response.status_code == 400
        assert response.data['error'] == 'INVALID_SCHEDULE'
        assert response.data['detail'] == 'Offsets and demands must be integers.'

    def test_mrp_order_not_an_object(self, api_client):
        response = api_client.post(
            '/api/v1/planning/mrp/',
            {'tree': build_alpha_bom().to_dict(), 'orders': [{'demand': 10}, 5]},
            format='json',
        )
        assert response.status_code == 400

    def test_mrp_horizon_too_long(self, api_client):
        response = api_client.post(
            '/api/v1/planning/mrp/',
            {
                'tree': build_alpha_bom().to_dict(),
                'orders': [{'demand': 10}, {'offset': 10 ** 9, 'demand': 5}],
            },
            format='json',
        )
        assert response.status_code == 400
        assert response.data['error'] == 'VALIDATION_ERROR'
        assert response.data['details']['field'] == 'orders'

    def test_mrp_requires_orders(self, api_client):
        response = api_client.post(
            '/api/v1/planning/mrp/',
            {'tree': build_alpha_bom().to_dict(), 'orders': []},
            format='json',
        )
        assert response.status_code == 400
        assert 'orders' in response.data


class TestSampleEndpoints:

    def test_list(self, api_client):
        response = api_client.get('/api/v1/samples/')
        assert response.status_code == 200
        assert [sample['name'] for sample in response.data] == ['Alpha', 'Skate']
        assert response.data[1]['nodes_count'] == 8

    def test_retrieve_is_case_insensitive(self, api_client):
        response = api_client.get('/api/v1/samples/skate/')
        assert response.status_code == 200
        assert response.data['name'] == 'Skate'
        assert response.data['orders'][0] == {'demand': 900}
        assert response.data['tree']['children'][2]['component'] == 'Wheels'

    def test_unknown_sample(self, api_client):
        response = api_client.get('/api/v1/samples/nope/')
        assert response.status_code == 404
        assert response.data['error'] == 'not_found'
