"""
Celery planning task tests (eager mode).
"""

from application.tasks.planning_tasks import (
    compute_eoq_task,
    compute_mrp_task,
    validate_bom_graph_task,
)
from domain.bom.aggregates import BOMGraph
from domain.bom.identity import SequentialIdentityGenerator

from conftest import edge_payload, node_payload


def test_validate_returns_tree_when_valid(skate):
    graph = BOMGraph.from_tree(skate, identities=SequentialIdentityGenerator()).to_dict()
    result = validate_bom_graph_task(graph)
    assert result['valid'] is True
    assert result['error'] is None
    assert result['tree']['component'] == 'Skate'


def test_validate_reports_first_violation():
    graph = {
        'nodes': [node_payload('A'), node_payload('B')],
        'edges': [edge_payload('A', 'B'), edge_payload('B', 'A')],
    }
    result = validate_bom_graph_task(graph)
    assert result['valid'] is False
    assert result['error']['code'] == 'CIRCULAR_REFERENCE'
    assert 'tree' not in result


def test_validate_malformed_graph():
    result = validate_bom_graph_task({'nodes': [{'id': 'n1'}]})
    assert result['valid'] is False
    assert result['error']['code'] == 'VALIDATION_ERROR'


def test_eoq_task_via_delay(skate):
    result = compute_eoq_task.delay(skate.to_dict(), 1000).get()
    assert result['bom'] == 'Skate'
    assert result['signature'] == skate.signature()
    assert len(result['rows']) == 7


def test_eoq_task_bad_tree():
    result = compute_eoq_task({'component': ''}, 1000)
    assert result['error']['code'] == 'VALIDATION_ERROR'


def test_mrp_task(alpha):
    result = compute_mrp_task(alpha.to_dict(), [{'demand': 100}, {'offset': 2, 'demand': 50}])
    assert result['bom'] == 'Alpha'
    assert result['order'] == ['Alpha', 'B', 'C', 'D', 'E', 'F']
    assert result['results']['Alpha']['table']['GR'][-1] == 100


def test_mrp_task_bad_schedule(alpha):
    result = compute_mrp_task(alpha.to_dict(), [{'demand': 'x'}])
    assert result['error']['code'] == 'INVALID_SCHEDULE'


def test_mrp_task_order_not_a_mapping():
    result = compute_mrp_task({'component': 'P'}, [100])
    assert result['error']['code'] == 'INVALID_SCHEDULE'
    assert result['error']['details']['field'] == 'order'


def test_mrp_task_horizon_limit(alpha, settings):
    settings.MAX_PLANNING_PERIODS = 20
    result = compute_mrp_task(alpha.to_dict(), [{'demand': 1}, {'offset': 15, 'demand': 1}])
    assert result['error']['code'] == 'VALIDATION_ERROR'
