"""
Planning Domain - Economic Order Quantity.

Propagates the final product's annual demand down the BOM and computes the
classic EOQ figures for every component.
"""

from __future__ import annotations
import logging
import math
from typing import Dict, List, Tuple

from domain.bom.entities import BOMTreeNode
from domain.shared.value_objects import ComponentAttributes, Number

from .entities import EOQRow

logger = logging.getLogger(__name__)

# Modeling assumption: carrying costs are expressed per working day and a
# year holds 200 of them.
WORKING_DAYS_PER_YEAR = 200


def propagate_annual_demand(
    tree: BOMTreeNode,
    annual_demand: Number,
) -> Tuple[Dict[str, Number], Dict[str, ComponentAttributes]]:
    """
    Annual demand per component name.

    Demand reaching the same component through several paths is summed.
    Attributes are taken from the first occurrence met.
    """
    demands: Dict[str, Number] = {}
    attributes: Dict[str, ComponentAttributes] = {}

    stack = [(tree, annual_demand)]
    while stack:
        node, demand = stack.pop()
        name = node.component_name
        demands[name] = demands.get(name, 0) + demand
        attributes.setdefault(name, node.attributes)
        for child in node.children:
            stack.append((child, demand * child.multiplicity))

    return demands, attributes


def economic_order_quantity(
    demand: Number,
    ordering_cost: float,
    carrying_cost: float,
) -> Tuple[float, float, float]:
    """
    Return ``(eoq, orders_per_year, time_between_orders)``.

    Undefined cases (any input <= 0) yield zeros.
    """
    if demand <= 0 or ordering_cost <= 0 or carrying_cost <= 0:
        return 0.0, 0.0, 0.0
    eoq = math.sqrt(2 * demand * ordering_cost / carrying_cost)
    orders_per_year = demand / eoq
    time_between_orders = WORKING_DAYS_PER_YEAR / orders_per_year
    return eoq, orders_per_year, time_between_orders


def compute_eoq(tree: BOMTreeNode, annual_demand: Number) -> List[EOQRow]:
    """
    EOQ rows for every component of the tree.

    The root comes first, the other components follow alphabetically.
    A non-positive annual demand gives no rows.
    """
    if annual_demand <= 0:
        return []

    demands, attributes = propagate_annual_demand(tree, annual_demand)
    rows = []
    for name, demand in demands.items():
        attrs = attributes[name]
        eoq, orders_per_year, time_between = economic_order_quantity(
            demand, attrs.ordering_cost, attrs.carrying_cost
        )
        rows.append(EOQRow(
            name=name,
            demand=demand,
            unit_cost=attrs.unit_cost,
            ordering_cost=attrs.ordering_cost,
            carrying_cost=attrs.carrying_cost,
            eoq=eoq,
            orders_per_year=orders_per_year,
            time_between_orders=time_between,
        ))

    root_name = tree.component_name
    rows.sort(key=lambda row: (row.name != root_name, row.name))
    logger.debug(f"EOQ computed for {len(rows)} components of {root_name}")
    return rows
