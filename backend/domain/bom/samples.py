"""
BOM Domain - Sample BOMs.

Two demonstration products with their component catalogs and demand
schedules: "Alpha" (a component shared between two parents) and "Skate"
(a part used both inside a sub-assembly and directly).
"""

from __future__ import annotations
from typing import Dict, List, Optional

from domain.shared.value_objects import ComponentAttributes

from .entities import BOMTreeNode


ALPHA_COMPONENTS: Dict[str, ComponentAttributes] = {
    "Alpha": ComponentAttributes(lead_time=1, number_on_hand=10),
    "B": ComponentAttributes(lead_time=2, number_on_hand=20),
    "C": ComponentAttributes(lead_time=3, number_on_hand=0),
    "D": ComponentAttributes(lead_time=1, number_on_hand=100),
    "E": ComponentAttributes(lead_time=1, number_on_hand=10),
    "F": ComponentAttributes(lead_time=1, number_on_hand=50),
}

SKATE_COMPONENTS: Dict[str, ComponentAttributes] = {
    "Skate": ComponentAttributes(lead_time=2, number_on_hand=650),
    "Board": ComponentAttributes(
        lead_time=1, number_on_hand=550, unit_cost=20, ordering_cost=50, carrying_cost=4
    ),
    "Trucks": ComponentAttributes(
        lead_time=2, number_on_hand=15, lot_size=100, unit_cost=20, ordering_cost=65, carrying_cost=5
    ),
    "Wheels": ComponentAttributes(
        lead_time=3, number_on_hand=120, lot_size=40, unit_cost=5, ordering_cost=100, carrying_cost=1
    ),
    "Screws": ComponentAttributes(
        lead_time=2, number_on_hand=0, lot_size=100, unit_cost=0.05, ordering_cost=50, carrying_cost=0.01
    ),
    "Tire": ComponentAttributes(
        lead_time=1, number_on_hand=150, lot_size=50, unit_cost=10, ordering_cost=80, carrying_cost=2
    ),
    "Rim": ComponentAttributes(
        lead_time=1, number_on_hand=200, lot_size=20, unit_cost=40, ordering_cost=100, carrying_cost=6
    ),
}

# (offset, demand); the first order sits at period 0.
SAMPLE_ORDERS: Dict[str, List[Dict[str, int]]] = {
    "Alpha": [
        {"demand": 100},
        {"offset": 2, "demand": 50},
        {"offset": 3, "demand": 50},
    ],
    "Skate": [
        {"demand": 900},
        {"offset": 3, "demand": 800},
        {"offset": 2, "demand": 700},
        {"offset": 1, "demand": 600},
    ],
}


def _node(
    catalog: Dict[str, ComponentAttributes],
    name: str,
    multiplicity=1,
    children: Optional[List[BOMTreeNode]] = None,
) -> BOMTreeNode:
    return BOMTreeNode(
        component_name=name,
        attributes=catalog[name],
        multiplicity=multiplicity,
        children=children or [],
    )


def build_alpha_bom() -> BOMTreeNode:
    """Alpha -> B(1), C(1); B -> D(2), C(2); C -> E(1), F(1)."""
    def component_c(multiplicity):
        return _node(ALPHA_COMPONENTS, "C", multiplicity, [
            _node(ALPHA_COMPONENTS, "E", 1),
            _node(ALPHA_COMPONENTS, "F", 1),
        ])

    return _node(ALPHA_COMPONENTS, "Alpha", 1, [
        _node(ALPHA_COMPONENTS, "B", 1, [
            _node(ALPHA_COMPONENTS, "D", 2),
            component_c(2),
        ]),
        component_c(1),
    ])


def build_skate_bom() -> BOMTreeNode:
    """Skate -> Board(1), Trucks(2), Wheels(4), Screws(8); Wheels -> Tire, Rim, Screws(4)."""
    return _node(SKATE_COMPONENTS, "Skate", 1, [
        _node(SKATE_COMPONENTS, "Board", 1),
        _node(SKATE_COMPONENTS, "Trucks", 2),
        _node(SKATE_COMPONENTS, "Wheels", 4, [
            _node(SKATE_COMPONENTS, "Tire", 1),
            _node(SKATE_COMPONENTS, "Rim", 1),
            _node(SKATE_COMPONENTS, "Screws", 4),
        ]),
        _node(SKATE_COMPONENTS, "Screws", 8),
    ])


SAMPLE_BUILDERS = {
    "Alpha": build_alpha_bom,
    "Skate": build_skate_bom,
}


def sample_names() -> List[str]:
    return list(SAMPLE_BUILDERS)


def get_sample(name: str) -> Optional[BOMTreeNode]:
    """Fresh copy of a sample tree, matched case-insensitively."""
    for key, builder in SAMPLE_BUILDERS.items():
        if key.lower() == name.lower():
            return builder()
    return None


def get_sample_orders(name: str) -> List[Dict[str, int]]:
    for key, orders in SAMPLE_ORDERS.items():
        if key.lower() == name.lower():
            return [dict(order) for order in orders]
    return []
