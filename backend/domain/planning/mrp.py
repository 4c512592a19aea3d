"""
Planning Domain - Material Requirements Planning.

Builds the period-by-period ledger (gross/net requirements, projected on
hand, planned receipts and releases, costs) of every component of a BOM over
a shared planning horizon.

Demand for a component reached through several parents is merged: the
second visit adds its gross requirements to the stored ones, recomputes the
ledger and only pushes the change in planned releases down to the children.
"""

from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Sequence

from domain.bom.entities import BOMTreeNode
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import ComponentAttributes, Number

from .entities import DemandSchedule, MRPEntry, MRPResult, MRPTable

logger = logging.getLogger(__name__)

# Longest horizon (in periods) a single run may cover.
MAX_PLANNING_PERIODS = 1000


# =============================================================================
# TIME AXIS
# =============================================================================

def planning_periods(
    tree: BOMTreeNode,
    schedule: DemandSchedule,
    max_periods: int = MAX_PLANNING_PERIODS,
) -> List[int]:
    """
    Every period from the horizon start to 0 inclusive.

    The horizon starts at the earliest order time minus the longest
    cumulative lead time of the BOM. A horizon longer than ``max_periods``
    raises ``ValidationException``.
    """
    times = schedule.order_times()
    if not times:
        raise ValidationException("At least one demand order is required", "orders")
    horizon_start = min(times) - tree.max_cumulative_lead_time()
    if 1 - horizon_start > max_periods:
        raise ValidationException(
            f"Planning horizon of {1 - horizon_start} periods exceeds the limit of {max_periods}",
            "orders",
            1 - horizon_start,
        )
    return list(range(horizon_start, 1))


def root_gross_requirements(periods: Sequence[int], schedule: DemandSchedule) -> List[int]:
    """Demand of the order placed at each period, 0 elsewhere."""
    by_time: Dict[int, int] = {}
    for time, demand in zip(schedule.order_times(), schedule.demands()):
        by_time.setdefault(time, demand)
    return [by_time.get(period, 0) for period in periods]


# =============================================================================
# LEDGER
# =============================================================================

def compute_mrp_table(
    attributes: ComponentAttributes,
    periods: Sequence[int],
    gross: Sequence[Number],
) -> MRPTable:
    """
    Requirements ledger of one component for the given gross requirements.

    Net requirements are covered lot-for-lot, rounded up to a multiple of
    the lot size. Planned releases are receipts moved ``lead_time`` periods
    earlier; a release falling before the first period is dropped.
    """
    n = len(periods)
    if len(gross) != n:
        raise ValueError(f"Expected {n} gross requirements, got {len(gross)}")

    GR = list(gross)
    SR = [0] * n
    POH = [0] * n
    NR = [0] * n
    POR = [0] * n

    lot = attributes.lot_size
    for i in range(n):
        previous = attributes.number_on_hand if i == 0 else POH[i - 1]
        available = previous + SR[i]
        if available >= GR[i]:
            POH[i] = available - GR[i]
        else:
            NR[i] = GR[i] - available
            POR[i] = math.ceil(NR[i] / lot) * lot
            POH[i] = available + POR[i] - GR[i]

    index_of = {period: i for i, period in enumerate(periods)}
    POL = [0] * n
    for i, period in enumerate(periods):
        if not POR[i]:
            continue
        j = index_of.get(period - attributes.lead_time)
        if j is None:
            logger.debug(
                f"Release of {POR[i]} units due at period {period} falls outside the horizon"
            )
            continue
        POL[j] += POR[i]

    ordering = [attributes.ordering_cost if POR[i] > 0 else 0 for i in range(n)]
    carrying = [attributes.carrying_cost * POH[i] for i in range(n)]
    cost = [ordering[i] + attributes.unit_cost * POR[i] + carrying[i] for i in range(n)]

    cumulated = []
    running = 0
    for value in cost:
        running += value
        cumulated.append(running)

    return MRPTable(
        GR=GR,
        SR=SR,
        POH=POH,
        NR=NR,
        POR=POR,
        POL=POL,
        OrderingCost=ordering,
        CarryingCost=carrying,
        Cost=cost,
        CumulatedCost=cumulated,
    )


def _entry(node: BOMTreeNode, table: MRPTable) -> MRPEntry:
    return MRPEntry(
        table=table,
        on_hand=node.attributes.number_on_hand,
        lead_time=node.attributes.lead_time,
        substructure=node.substructure(),
    )


def _scaled(series: Sequence[Number], factor: Number) -> List[Number]:
    return [value * factor for value in series]


# =============================================================================
# PROPAGATION
# =============================================================================

def propagate_requirements(
    tree: BOMTreeNode,
    root_gross: Sequence[Number],
    periods: Sequence[int],
    ledger: Optional[Dict[str, MRPEntry]] = None,
) -> Dict[str, MRPEntry]:
    """
    Compute the ledger of every component below ``tree``.

    ``ledger`` holds entries already computed (by component name); it is
    not modified. The returned mapping contains those entries updated with
    the demand flowing from ``tree``.

    Nodes are processed depth-first, parents before children. On a
    component's first visit its incoming gross requirements give its
    ledger and each child receives ``POL * multiplicity``. When the same
    component is met again, the incoming requirements are added to the
    stored ones, the ledger is recomputed and children only receive
    ``(new POL - old POL) * multiplicity``.
    """
    out: Dict[str, MRPEntry] = dict(ledger or {})

    stack = [(tree, list(root_gross))]
    while stack:
        node, incoming = stack.pop()
        name = node.component_name
        previous = out.get(name)

        if previous is None:
            table = compute_mrp_table(node.attributes, periods, incoming)
            released = table.POL
        else:
            merged = [old + new for old, new in zip(previous.table.GR, incoming)]
            table = compute_mrp_table(node.attributes, periods, merged)
            released = [new - old for new, old in zip(table.POL, previous.table.POL)]

        out[name] = _entry(node, table)

        for child in reversed(node.children):
            stack.append((child, _scaled(released, child.multiplicity)))

    return out


def display_order(tree: BOMTreeNode, names) -> List[str]:
    """Top-down breadth-first order, alphabetical for anything not found."""
    names = set(names)
    top_down = [name for name in tree.component_names_top_down() if name in names]
    rest = sorted(names.difference(top_down))
    return top_down + rest


def compute_mrp(
    tree: BOMTreeNode,
    schedule: DemandSchedule,
    max_periods: int = MAX_PLANNING_PERIODS,
) -> MRPResult:
    """Full MRP run of a tree against a demand schedule for its root."""
    periods = planning_periods(tree, schedule, max_periods)
    root_gross = root_gross_requirements(periods, schedule)
    entries = propagate_requirements(tree, root_gross, periods)
    logger.debug(
        f"MRP computed for {tree.component_name}: {len(entries)} components "
        f"over periods {periods[0]}..{periods[-1]}"
    )
    return MRPResult(
        entries=entries,
        periods=periods,
        order=display_order(tree, entries),
    )
