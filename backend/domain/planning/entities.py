"""
Planning Domain - Entities.

Inputs and results of the EOQ and MRP computations.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from domain.shared.exceptions import ScheduleFormatException
from domain.shared.value_objects import Number


# =============================================================================
# DEMAND SCHEDULE
# =============================================================================

def _parse_integer(value: Any, position: int, field_name: str, default: int = 0) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ScheduleFormatException(position, field_name, value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ScheduleFormatException(position, field_name, value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ScheduleFormatException(position, field_name, value)
    raise ScheduleFormatException(position, field_name, value)


@dataclass(frozen=True)
class DemandOrder:
    """One demand of the final product; ``offset`` periods before the previous order."""

    demand: int
    offset: int = 0


@dataclass(frozen=True)
class DemandSchedule:
    """
    Ordered demand orders for the root component.

    The first order sits at period 0; each following order lies
    ``offset`` periods before the previous one.
    """

    orders: Tuple[DemandOrder, ...]

    def __post_init__(self):
        object.__setattr__(self, "orders", tuple(self.orders))

    @classmethod
    def parse(cls, raw_orders: Iterable[Mapping[str, Any]]) -> DemandSchedule:
        """
        Parse raw ``{"offset", "demand"}`` records.

        Integers and integer strings are accepted; anything else, a record
        that is not a mapping or a negative offset raises a single
        ``ScheduleFormatException`` before any order is kept. The first
        record's offset is ignored, so every order time is <= 0.
        """
        orders = []
        for position, record in enumerate(raw_orders):
            if not isinstance(record, Mapping):
                raise ScheduleFormatException(position, "order", record)
            demand = _parse_integer(record.get("demand"), position, "demand")
            offset = 0
            if position > 0:
                offset = _parse_integer(record.get("offset"), position, "offset")
                if offset < 0:
                    raise ScheduleFormatException(
                        position, "offset", offset, "Offsets cannot be negative."
                    )
            orders.append(DemandOrder(demand=demand, offset=offset))
        return cls(orders=tuple(orders))

    def order_times(self) -> List[int]:
        """Absolute period of each order, by cumulative subtraction from 0."""
        times: List[int] = []
        for position, order in enumerate(self.orders):
            times.append(0 if position == 0 else times[-1] - order.offset)
        return times

    def demands(self) -> List[int]:
        return [order.demand for order in self.orders]

    def to_list(self) -> List[Dict[str, int]]:
        return [asdict(order) for order in self.orders]


# =============================================================================
# EOQ
# =============================================================================

@dataclass(frozen=True)
class EOQRow:
    """EOQ figures for one component."""

    name: str
    demand: Number
    unit_cost: float
    ordering_cost: float
    carrying_cost: float
    eoq: float
    orders_per_year: float
    time_between_orders: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# MRP
# =============================================================================

LEDGER_ROWS = (
    "GR",
    "SR",
    "POH",
    "NR",
    "POR",
    "POL",
    "OrderingCost",
    "CarryingCost",
    "Cost",
    "CumulatedCost",
)


@dataclass(frozen=True)
class MRPTable:
    """Period-by-period requirements ledger of one component."""

    GR: List[Number]
    SR: List[Number]
    POH: List[Number]
    NR: List[Number]
    POR: List[Number]
    POL: List[Number]
    OrderingCost: List[float]
    CarryingCost: List[float]
    Cost: List[float]
    CumulatedCost: List[float]

    def __len__(self) -> int:
        return len(self.GR)

    def to_dict(self) -> Dict[str, List[Number]]:
        return {row: list(getattr(self, row)) for row in LEDGER_ROWS}

    @property
    def total_cost(self) -> float:
        return self.CumulatedCost[-1] if self.CumulatedCost else 0.0


@dataclass(frozen=True)
class MRPEntry:
    """Ledger plus display bookkeeping for one component."""

    table: MRPTable
    on_hand: int
    lead_time: int
    substructure: List[Tuple[str, Number]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": self.table.to_dict(),
            "on_hand": self.on_hand,
            "lead_time": self.lead_time,
            "substructure": [list(pair) for pair in self.substructure],
        }


@dataclass(frozen=True)
class MRPResult:
    """Ledgers of every component over the shared planning periods."""

    entries: Dict[str, MRPEntry]
    periods: List[int]
    order: List[str]

    def ordered_entries(self) -> List[Tuple[str, MRPEntry]]:
        return [(name, self.entries[name]) for name in self.order]

    def get(self, name: str) -> Optional[MRPEntry]:
        return self.entries.get(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "planning_periods": list(self.periods),
            "order": list(self.order),
            "results": {name: entry.to_dict() for name, entry in self.ordered_entries()},
        }
