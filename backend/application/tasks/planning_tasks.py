"""
Planning Tasks.

Celery tasks wrapping BOM validation, EOQ and MRP for callers that run
them in the background (large BOMs, batch recomputation). Payloads and
results are plain JSON-compatible dicts.
"""

from celery import shared_task
from django.conf import settings
import logging

from domain.bom.aggregates import BOMGraph
from domain.bom.entities import BOMTreeNode
from domain.planning.entities import DemandSchedule
from domain.planning.eoq import compute_eoq
from domain.planning.mrp import MAX_PLANNING_PERIODS, compute_mrp
from domain.shared.exceptions import DomainException

logger = logging.getLogger(__name__)


@shared_task(bind=True)
def validate_bom_graph_task(self, graph: dict):
    """
    Validate a BOM graph in editor shape.

    Returns ``{"valid": bool, "error": {...} | None}`` and, when valid,
    the collapsed ``tree``.
    """
    try:
        bom_graph = BOMGraph.from_dict(graph)
    except DomainException as e:
        logger.warning(f"Malformed BOM graph payload: {e.message}")
        return {'valid': False, 'error': e.to_dict()}

    result = bom_graph.validate()
    payload = result.to_dict()
    if result.valid:
        payload['tree'] = bom_graph.to_tree().to_dict()

    logger.info(
        f"BOM graph validation: {len(bom_graph.nodes)} nodes, "
        f"valid={result.valid}"
    )
    return payload


@shared_task(bind=True)
def compute_eoq_task(self, tree: dict, annual_demand: int):
    """Compute EOQ rows for a saved BOM tree."""
    try:
        bom = BOMTreeNode.from_dict(tree)
    except DomainException as e:
        logger.error(f"Cannot compute EOQ: {e.message}")
        return {'error': e.to_dict()}

    rows = compute_eoq(bom, annual_demand)
    logger.info(f"EOQ for {bom.component_name}: {len(rows)} components")
    return {
        'bom': bom.component_name,
        'signature': bom.signature(),
        'rows': [row.to_dict() for row in rows],
    }


@shared_task(bind=True)
def compute_mrp_task(self, tree: dict, orders: list):
    """Compute the MRP ledgers of a saved BOM tree for a demand schedule."""
    try:
        bom = BOMTreeNode.from_dict(tree)
        schedule = DemandSchedule.parse(orders)
        result = compute_mrp(
            bom,
            schedule,
            getattr(settings, 'MAX_PLANNING_PERIODS', MAX_PLANNING_PERIODS),
        )
    except DomainException as e:
        logger.error(f"Cannot compute MRP: {e.message}")
        return {'error': e.to_dict()}

    logger.info(
        f"MRP for {bom.component_name}: {len(result.entries)} components, "
        f"{len(result.periods)} periods"
    )
    return {
        'bom': bom.component_name,
        'signature': bom.signature(),
        **result.to_dict(),
    }
