"""
BOM Domain - Tree expansion.

Unfolds a saved BOM tree into positioned graph nodes and edges for the
editor canvas. Every occurrence in the tree becomes its own node; nothing
is deduplicated.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from domain.shared.value_objects import Position

from .entities import BOMTreeNode, GraphComponent, GraphEdge, GraphNode
from .identity import IdentityGenerator, RandomIdentityGenerator


@dataclass(frozen=True)
class LayoutOptions:
    """Spacing of the generated layout, in canvas pixels."""

    dx: float = 220         # horizontal spacing between siblings
    dy: float = 140         # vertical spacing between levels
    stack_offset: float = 18  # diagonal nudge for overlapping nodes


class _PositionAllocator:
    """Nudges nodes that would land on an already occupied pixel."""

    def __init__(self, stack_offset: float):
        self.stack_offset = stack_offset
        self._occupied: Dict[Tuple[int, int], int] = {}

    def place(self, position: Position) -> Position:
        key = position.rounded
        count = self._occupied.get(key, 0)
        self._occupied[key] = count + 1
        if not count:
            return position
        shift = count * self.stack_offset
        return position.offset(shift, shift)


def expand_tree(
    tree: BOMTreeNode,
    origin: Position = Position(),
    folder_id: Optional[str] = None,
    identities: Optional[IdentityGenerator] = None,
    options: Optional[LayoutOptions] = None,
) -> Tuple[List[GraphNode], List[GraphEdge]]:
    """
    Lay a tree out as graph nodes and edges.

    The node at ``origin`` is the root; children are centred under their
    parent, one level ``dy`` lower, ``dx`` apart. Node ids are
    ``{namespace}-root`` and ``{namespace}-{i}-{j}...`` by child index path,
    with a namespace drawn fresh for every call.
    """
    identities = identities or RandomIdentityGenerator()
    options = options or LayoutOptions()
    namespace = identities.namespace()
    allocator = _PositionAllocator(options.stack_offset)

    nodes: List[GraphNode] = []
    edges: List[GraphEdge] = []

    def node_id(path: Tuple[int, ...]) -> str:
        suffix = "-".join(str(i) for i in path) if path else "root"
        return f"{namespace}-{suffix}"

    def component_for(tree_node: BOMTreeNode) -> GraphComponent:
        ghost = tree_node.component_id is None
        return GraphComponent(
            id=identities.ghost_component_id() if ghost else tree_node.component_id,
            name=tree_node.component_name,
            attributes=tree_node.attributes,
            folder_id=folder_id or "",
            ghost=ghost,
        )

    # (tree node, index path, intended position, parent graph id)
    stack: List[Tuple[BOMTreeNode, Tuple[int, ...], Position, Optional[str]]] = [
        (tree, (), origin, None)
    ]
    while stack:
        tree_node, path, intended, parent_id = stack.pop()
        current_id = node_id(path)
        nodes.append(GraphNode(
            id=current_id,
            component=component_for(tree_node),
            position=allocator.place(intended),
            badge_value=tree_node.multiplicity,
        ))
        if parent_id is not None:
            edges.append(GraphEdge(
                id=f"{parent_id}->{current_id}",
                source=parent_id,
                target=current_id,
                quantity=tree_node.multiplicity,
            ))

        children = tree_node.children
        total_width = (len(children) - 1) * options.dx
        for idx in reversed(range(len(children))):
            child_position = Position(
                intended.x - total_width / 2 + idx * options.dx,
                intended.y + options.dy,
            )
            stack.append((children[idx], path + (idx,), child_position, current_id))

    return nodes, edges
