"""
BOM Domain - Entities.

BOMTreeNode is one occurrence of a component in the canonical product tree.
GraphNode / GraphEdge are the editable node-and-edge form produced by the
interactive editor.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
import hashlib
import json
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import (
    ComponentAttributes,
    Number,
    Position,
    coerce_multiplicity,
)


@dataclass
class BOMTreeNode:
    """
    A single node of a BOM tree.

    The root represents the final product. Each child holds the quantity
    consumed per one unit of its parent (``multiplicity``); the root's
    multiplicity is kept for display only.
    """

    component_name: str
    attributes: ComponentAttributes = field(default_factory=ComponentAttributes)
    multiplicity: Number = 1
    component_id: Optional[str] = None
    children: List[BOMTreeNode] = field(default_factory=list)

    def __post_init__(self):
        if not self.component_name:
            raise ValidationException("Component name is required", "component")
        self.multiplicity = coerce_multiplicity(self.multiplicity)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    # =========================================================================
    # TRAVERSAL
    # =========================================================================

    def walk(self) -> Iterator[BOMTreeNode]:
        """Depth-first pre-order traversal (root, then children left to right)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def walk_with_depth(self) -> Iterator[Tuple[BOMTreeNode, int]]:
        stack = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            stack.extend((child, depth + 1) for child in reversed(node.children))

    def component_names_top_down(self) -> List[str]:
        """
        Breadth-first component names, root first.

        Each name appears once, at its first appearance.
        """
        seen = set()
        order = []
        queue = deque([self])
        while queue:
            node = queue.popleft()
            if node.component_name not in seen:
                seen.add(node.component_name)
                order.append(node.component_name)
            queue.extend(node.children)
        return order

    def max_cumulative_lead_time(self) -> int:
        """Longest root-to-leaf sum of (clamped) lead times."""
        longest = 0
        stack = [(self, 0)]
        while stack:
            node, above = stack.pop()
            total = above + node.attributes.lead_time
            if node.children:
                stack.extend((child, total) for child in node.children)
            else:
                longest = max(longest, total)
        return longest

    def substructure(self) -> List[Tuple[str, Number]]:
        """Immediate children as ``(name, multiplicity)`` sorted by name."""
        return sorted(
            ((child.component_name, child.multiplicity) for child in self.children),
            key=lambda pair: pair[0],
        )

    def count_nodes(self) -> int:
        return sum(1 for _ in self.walk())

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Nested storage record (children arrays)."""
        def shallow(node: BOMTreeNode) -> Dict[str, Any]:
            record = {
                "component": node.component_name,
                "attributes": node.attributes.to_dict(),
                "badge_value": node.multiplicity,
                "children": [],
            }
            if node.component_id is not None:
                record["component_id"] = node.component_id
            return record

        root = shallow(self)
        stack = [(self, root)]
        while stack:
            node, record = stack.pop()
            for child in node.children:
                child_record = shallow(child)
                record["children"].append(child_record)
                stack.append((child, child_record))
        return root

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BOMTreeNode:
        """Build a tree from its nested storage record."""
        def shallow(record: Mapping[str, Any]) -> BOMTreeNode:
            if not isinstance(record, Mapping):
                raise ValidationException("BOM node must be an object", "children", record)
            component_id = record.get("component_id", record.get("componentId"))
            return cls(
                component_name=record.get("component") or "",
                attributes=ComponentAttributes.from_dict(record.get("attributes")),
                multiplicity=record.get("badge_value"),
                component_id=str(component_id) if component_id else None,
            )

        root = shallow(data)
        stack = [(data, root)]
        while stack:
            record, node = stack.pop()
            for child_record in record.get("children") or []:
                child = shallow(child_record)
                node.children.append(child)
                stack.append((child_record, child))
        return root

    def signature(self) -> str:
        """
        Stable content hash of names, multiplicities and attributes.

        Children order is significant. Component ids and display data
        are not part of the signature.
        """
        def pick(node: BOMTreeNode) -> List[Any]:
            return [node.component_name, node.multiplicity, list(node.attributes.signature())]

        flat = [(depth, pick(node)) for node, depth in self.walk_with_depth()]
        payload = json.dumps(flat, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class GraphComponent:
    """
    Denormalized component carried by a graph node.

    ``ghost`` marks components that have no stored definition behind them
    (their ``id`` is generated and must not be persisted as a reference).
    """

    id: str
    name: str
    attributes: ComponentAttributes = field(default_factory=ComponentAttributes)
    folder_id: str = ""
    ghost: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "folder_id": self.folder_id,
            "ghost": self.ghost,
            **self.attributes.to_dict(),
        }


@dataclass(frozen=True)
class GraphNode:
    """A node of the editable BOM graph."""

    id: str
    component: GraphComponent
    position: Position = field(default_factory=Position)
    badge_value: Number = 1

    @property
    def component_name(self) -> str:
        return self.component.name or self.id

    @property
    def component_identity(self) -> str:
        """Identity of the underlying component, falling back to the node id."""
        return self.component.id or self.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "componentNode",
            "position": self.position.to_dict(),
            "data": {
                "component": self.component.to_dict(),
                "badge_value": self.badge_value,
            },
        }


@dataclass(frozen=True)
class GraphEdge:
    """A directed parent -> child link carrying the child's quantity."""

    id: str
    source: str
    target: str
    quantity: Optional[Number] = None

    @property
    def multiplicity(self) -> Number:
        return coerce_multiplicity(self.quantity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "data": {"qty": self.quantity},
        }
