"""
Shared Value Objects used across multiple domains.

Value Objects are immutable objects that describe characteristics of a thing.
Two value objects are equal if all their properties are equal.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .exceptions import ValidationException


Number = Union[int, float]


def _coerce_number(value: Any, field: str, default: Number) -> float:
    if value is None or value == "":
        return float(default)
    if isinstance(value, bool):
        raise ValidationException(f"{field} must be a number", field, value)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationException(f"{field} must be a number", field, value)


def _coerce_int(value: Any, field: str, default: int) -> int:
    number = _coerce_number(value, field, default)
    if not number.is_integer():
        raise ValidationException(f"{field} must be an integer", field, value)
    return int(number)


def coerce_multiplicity(value: Any) -> Number:
    """
    Normalize a multiplicity (badge value / edge quantity).

    Missing, non-numeric and non-positive values fall back to 1.
    Integral values are kept as ``int``.
    """
    if value is None or isinstance(value, bool):
        return 1
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 1
    if not number > 0:
        return 1
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class ComponentAttributes:
    """
    Planning attributes of a component, snapshotted onto every BOM node.

    Costs and on-hand stock must be non-negative. Lead time and lot size
    are clamped to at least one period / one unit.
    """

    unit_cost: float = 0.0          # currency / unit
    ordering_cost: float = 0.0      # currency / order
    carrying_cost: float = 0.0      # currency / unit / period
    number_on_hand: int = 0         # initial inventory
    lead_time: int = 1              # periods
    lot_size: int = 1               # units

    def __post_init__(self):
        for name in ("unit_cost", "ordering_cost", "carrying_cost"):
            value = getattr(self, name)
            if value < 0:
                raise ValidationException(f"{name} cannot be negative", name, value)
            object.__setattr__(self, name, float(value))
        if self.number_on_hand < 0:
            raise ValidationException(
                "number_on_hand cannot be negative", "number_on_hand", self.number_on_hand
            )
        if self.lead_time < 1:
            object.__setattr__(self, "lead_time", 1)
        if self.lot_size < 1:
            object.__setattr__(self, "lot_size", 1)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> ComponentAttributes:
        """Build from a storage record; missing fields take their defaults."""
        data = data or {}
        return cls(
            unit_cost=_coerce_number(data.get("unit_cost"), "unit_cost", 0),
            ordering_cost=_coerce_number(data.get("ordering_cost"), "ordering_cost", 0),
            carrying_cost=_coerce_number(data.get("carrying_cost"), "carrying_cost", 0),
            number_on_hand=_coerce_int(data.get("number_on_hand"), "number_on_hand", 0),
            lead_time=_coerce_int(data.get("lead_time"), "lead_time", 1),
            lot_size=_coerce_int(data.get("lot_size"), "lot_size", 1),
        )

    def to_dict(self) -> Dict[str, Number]:
        return asdict(self)

    def signature(self) -> Tuple[Number, ...]:
        """Field values in declaration order, for content hashing."""
        return (
            self.unit_cost,
            self.ordering_cost,
            self.carrying_cost,
            self.number_on_hand,
            self.lead_time,
            self.lot_size,
        )


@dataclass(frozen=True)
class Position:
    """
    Value object representing a point on the editor canvas.
    """

    x: float = 0.0
    y: float = 0.0

    def offset(self, dx: float, dy: float) -> Position:
        return Position(self.x + dx, self.y + dy)

    @property
    def rounded(self) -> Tuple[int, int]:
        """Pixel-rounded coordinates, used to detect overlapping nodes."""
        return (int(round(self.x)), int(round(self.y)))

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}
