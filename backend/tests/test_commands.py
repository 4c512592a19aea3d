"""
compute_plan management command tests.
"""

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from domain.bom.aggregates import BOMGraph
from infrastructure.management.commands.compute_plan import parse_order_argument

from conftest import edge_payload, node_payload


def run(*args):
    out = StringIO()
    call_command('compute_plan', *args, stdout=out)
    return out.getvalue()


def test_sample_runs_mrp_with_sample_orders():
    output = run('--sample', 'alpha')
    assert 'BOM: Alpha' in output
    assert 'orders at periods [0, -2, -5]' in output
    for name in ('Alpha', 'B', 'C', 'D', 'E', 'F'):
        assert f"{name}  (on hand" in output
    assert output.index('B  (on hand') < output.index('D  (on hand')


def test_eoq_only():
    output = run('--sample', 'Skate', '--eoq', '1000')
    assert 'EOQ (annual demand 1000)' in output
    assert 'Screws' in output
    assert 'MRP' not in output


def test_tree_file_with_orders(tmp_path, skate):
    path = tmp_path / 'tree.json'
    path.write_text(json.dumps(skate.to_dict()))
    output = run('--file', str(path), '--orders', '900', '3:800')
    assert 'orders at periods [0, -3]' in output
    assert 'POL' in output


def test_validate_graph_then_plan(tmp_path, alpha):
    path = tmp_path / 'graph.json'
    path.write_text(json.dumps(BOMGraph.from_tree(alpha).to_dict()))
    output = run('--validate-graph', str(path), '--eoq', '100')
    assert 'BOM graph is valid (9 nodes)' in output
    assert 'EOQ (annual demand 100)' in output


def test_invalid_graph_reported(tmp_path):
    path = tmp_path / 'graph.json'
    path.write_text(json.dumps({'nodes': [node_payload('A')], 'edges': [edge_payload('A', 'A')]}))
    output = run('--validate-graph', str(path))
    assert 'cannot be its own sub-component' in output


def test_unknown_sample():
    with pytest.raises(CommandError, match='Unknown sample'):
        run('--sample', 'Bike')


def test_bom_required():
    with pytest.raises(CommandError):
        run('--eoq', '10')


def test_bad_orders():
    with pytest.raises(CommandError, match='must be integers'):
        run('--sample', 'Alpha', '--orders', '100', 'two:50')


def test_unreadable_file(tmp_path):
    with pytest.raises(CommandError, match='Cannot read'):
        run('--file', str(tmp_path / 'missing.json'))


def test_parse_order_argument():
    assert parse_order_argument('100') == {'offset': 0, 'demand': '100'}
    assert parse_order_argument('2:50') == {'offset': '2', 'demand': '50'}
