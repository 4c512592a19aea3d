"""
BOM Domain - Aggregates.

BOMGraph is the aggregate root for the editable form of a BOM: the set of
component nodes and parent -> child edges drawn in the editor. It converts
to and from the canonical BOMTreeNode used for storage and planning.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import ComponentAttributes, Position

from .entities import BOMTreeNode, GraphComponent, GraphEdge, GraphNode
from .identity import IdentityGenerator
from .layout import LayoutOptions, expand_tree
from .validation import ValidationResult, ensure_valid_bom_graph, validate_bom_graph


@dataclass
class BOMGraph:
    """
    Aggregate root for a BOM drawn as a graph.

    Key responsibilities:
    - Hold the nodes and edges exactly as the editor declared them
    - Validate structural invariants (see ``domain.bom.validation``)
    - Collapse into a canonical tree / expand a tree back into a graph
    """

    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    # =========================================================================
    # TREE NAVIGATION
    # =========================================================================

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def outgoing_edges(self, node_id: str) -> List[GraphEdge]:
        """Edges leaving a node, in declaration order."""
        return [edge for edge in self.edges if edge.source == node_id]

    def find_root(self) -> Optional[GraphNode]:
        """First node that is not the target of any edge."""
        targets = {edge.target for edge in self.edges}
        for node in self.nodes:
            if node.id not in targets:
                return node
        return None

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate(self) -> ValidationResult:
        return validate_bom_graph(self.nodes, self.edges)

    def ensure_valid(self) -> GraphNode:
        return ensure_valid_bom_graph(self.nodes, self.edges)

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def to_tree(self) -> Optional[BOMTreeNode]:
        """
        Collapse the graph into a canonical tree.

        Does not re-validate: callers validate first. Returns ``None`` when
        no root exists.
        """
        root = self.find_root()
        if root is None:
            return None

        by_id = {node.id: node for node in self.nodes}
        outgoing: Dict[str, List[GraphEdge]] = {}
        for edge in self.edges:
            outgoing.setdefault(edge.source, []).append(edge)

        def shallow(node: GraphNode, multiplicity) -> BOMTreeNode:
            component = node.component
            return BOMTreeNode(
                component_name=node.component_name,
                component_id=None if component.ghost else (component.id or None),
                attributes=component.attributes,
                multiplicity=multiplicity,
            )

        tree = shallow(root, root.badge_value)
        placed = {root.id}
        stack = [(root, tree)]
        while stack:
            node, tree_node = stack.pop()
            for edge in outgoing.get(node.id, []):
                child = by_id.get(edge.target)
                # Unvalidated graphs may hold cycles or shared nodes.
                if child is None or child.id in placed:
                    continue
                placed.add(child.id)
                child_tree = shallow(child, edge.multiplicity)
                tree_node.children.append(child_tree)
                stack.append((child, child_tree))
        return tree

    def to_valid_tree(self) -> BOMTreeNode:
        """Validate, then collapse. Raises on the first violation."""
        self.ensure_valid()
        return self.to_tree()

    @classmethod
    def from_tree(
        cls,
        tree: BOMTreeNode,
        origin: Position = Position(),
        folder_id: Optional[str] = None,
        identities: Optional[IdentityGenerator] = None,
        options: Optional[LayoutOptions] = None,
    ) -> BOMGraph:
        """Expand a saved tree into fresh, positioned graph nodes."""
        nodes, edges = expand_tree(tree, origin, folder_id, identities, options)
        return cls(nodes=nodes, edges=edges)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BOMGraph:
        """Build from the editor's wire shape (see ``GraphNode.to_dict``)."""
        nodes = [_node_from_dict(record) for record in data.get("nodes") or []]
        edges = [_edge_from_dict(record) for record in data.get("edges") or []]
        return cls(nodes=nodes, edges=edges)


def _node_from_dict(record: Mapping[str, Any]) -> GraphNode:
    node_id = record.get("id")
    if not node_id:
        raise ValidationException("Graph node id is required", "id")
    node_data = record.get("data") or {}
    component_data = node_data.get("component")
    if not isinstance(component_data, Mapping):
        raise ValidationException(
            f"Component with node id {node_id} is malformed", "component", node_id
        )
    position_data = record.get("position") or {}
    component = GraphComponent(
        id=str(component_data.get("id") or ""),
        name=str(component_data.get("name") or ""),
        attributes=ComponentAttributes.from_dict(component_data),
        folder_id=str(component_data.get("folder_id") or ""),
        ghost=bool(component_data.get("ghost", False)),
    )
    return GraphNode(
        id=str(node_id),
        component=component,
        position=Position(
            float(position_data.get("x") or 0),
            float(position_data.get("y") or 0),
        ),
        badge_value=node_data.get("badge_value") or 1,
    )


def _edge_from_dict(record: Mapping[str, Any]) -> GraphEdge:
    source = record.get("source")
    target = record.get("target")
    if not source or not target:
        raise ValidationException("Edge source and target are required", "edges", record.get("id"))
    edge_data = record.get("data") or {}
    return GraphEdge(
        id=str(record.get("id") or f"{source}->{target}"),
        source=str(source),
        target=str(target),
        quantity=edge_data.get("qty"),
    )
