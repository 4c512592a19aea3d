"""
BOM Domain - Graph validation.

Structural checks run over the editable graph (nodes + edges) before it is
collapsed into a canonical tree or saved. Checks run in a fixed order and
stop at the first violation, which is reported as a specific
``BOMValidationException`` subclass.

All checks are pure: the graph is never modified.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from domain.shared.exceptions import (
    BOMValidationException,
    CircularReferenceException,
    DuplicateSiblingException,
    EmptyBOMException,
    InconsistentStructureException,
    MultipleParentsException,
    OrphanComponentException,
    RootCountException,
    SelfReferenceException,
    UnconnectedComponentsException,
)

from .entities import GraphEdge, GraphNode

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation run."""

    valid: bool
    error: Optional[BOMValidationException] = None

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "error": self.error.to_dict() if self.error else None,
        }


class _GraphIndex:
    """Adjacency lookups built once per validation run."""

    def __init__(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]):
        self.nodes = nodes
        self.edges = edges
        self.by_id: Dict[str, GraphNode] = {node.id: node for node in nodes}
        self.children: Dict[str, List[str]] = {}
        self.parents: Dict[str, List[str]] = {}
        for edge in edges:
            self.children.setdefault(edge.source, []).append(edge.target)
            self.parents.setdefault(edge.target, []).append(edge.source)

    def name(self, node_id: str) -> str:
        node = self.by_id.get(node_id)
        return node.component_name if node else node_id

    def identity(self, node_id: str) -> str:
        node = self.by_id.get(node_id)
        return node.component_identity if node else node_id


def find_cycle(children: Dict[str, List[str]], start_ids: Iterable[str]) -> Optional[List[str]]:
    """
    Iterative DFS tracking the active path.

    Returns the node ids of the first cycle found, closed on its first
    node (``[a, b, a]``), or ``None``.
    """
    visited = set()
    for start in start_ids:
        if start in visited:
            continue
        visited.add(start)
        path = [start]
        on_path = {start}
        iterators = [iter(children.get(start, ()))]
        while iterators:
            child = next(iterators[-1], _EXHAUSTED)
            if child is _EXHAUSTED:
                iterators.pop()
                on_path.discard(path.pop())
                continue
            if child in on_path:
                return path[path.index(child):] + [child]
            if child in visited:
                continue
            visited.add(child)
            on_path.add(child)
            path.append(child)
            iterators.append(iter(children.get(child, ())))
    return None


# =============================================================================
# CHECKS
# =============================================================================

def _check_not_empty(index: _GraphIndex) -> None:
    if not index.nodes:
        raise EmptyBOMException()


def _check_self_references(index: _GraphIndex) -> None:
    for edge in index.edges:
        if edge.source == edge.target:
            raise SelfReferenceException(index.name(edge.source))
        if index.identity(edge.source) == index.identity(edge.target):
            raise SelfReferenceException(index.name(edge.source))


def _check_cycles(index: _GraphIndex) -> None:
    cycle = find_cycle(index.children, (node.id for node in index.nodes))
    if cycle:
        raise CircularReferenceException([index.name(node_id) for node_id in cycle])


def _find_root(index: _GraphIndex) -> GraphNode:
    roots = [node for node in index.nodes if node.id not in index.parents]
    if len(roots) != 1:
        raise RootCountException(len(roots))
    return roots[0]


def _check_single_parent(index: _GraphIndex, root: GraphNode) -> None:
    for node in index.nodes:
        if node.id == root.id:
            continue
        parents = index.parents.get(node.id, [])
        if len(parents) != 1:
            raise MultipleParentsException(node.component_name, len(parents))


def _check_cycles_from_root(index: _GraphIndex, root: GraphNode) -> None:
    cycle = find_cycle(index.children, [root.id])
    if cycle:
        raise CircularReferenceException(
            [index.name(node_id) for node_id in cycle],
            code="CIRCULAR_REFERENCE_FROM_ROOT",
        )


def _check_structural_consistency(index: _GraphIndex) -> None:
    composition: Dict[str, List[str]] = {}
    for node in index.nodes:
        name = node.component_name
        child_names = sorted(
            index.by_id[child_id].component_name
            for child_id in index.children.get(node.id, [])
            if child_id in index.by_id
        )
        if name in composition:
            if composition[name] != child_names:
                raise InconsistentStructureException(name)
        else:
            composition[name] = child_names


def _check_unique_siblings(index: _GraphIndex) -> None:
    for child_ids in index.children.values():
        counts = Counter(
            index.by_id[child_id].component_name
            for child_id in child_ids
            if child_id in index.by_id
        )
        for name, count in counts.items():
            if count > 1:
                raise DuplicateSiblingException(name)


def _check_has_links(index: _GraphIndex) -> None:
    # A graph without edges is valid only as a single component.
    if not index.edges and len(index.nodes) != 1:
        raise UnconnectedComponentsException(len(index.nodes))


def _check_connectivity(index: _GraphIndex) -> None:
    if not index.edges:
        return

    connected = set()
    for edge in index.edges:
        connected.add(edge.source)
        connected.add(edge.target)
    for node in index.nodes:
        if node.id not in connected:
            raise OrphanComponentException(node.component_name)


# =============================================================================
# ENTRY POINTS
# =============================================================================

def ensure_valid_bom_graph(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> GraphNode:
    """
    Run every structural check and return the root node.

    Raises the first ``BOMValidationException`` encountered.
    """
    index = _GraphIndex(nodes, edges)

    _check_not_empty(index)
    _check_self_references(index)
    # A cycle leaves no root: report it before counting roots.
    _check_cycles(index)
    # Unlinked nodes are all roots.
    _check_has_links(index)
    root = _find_root(index)
    _check_single_parent(index, root)
    _check_cycles_from_root(index, root)
    _check_structural_consistency(index)
    _check_unique_siblings(index)
    _check_connectivity(index)

    return root


def validate_bom_graph(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> ValidationResult:
    """Validate a graph and report the outcome instead of raising."""
    try:
        ensure_valid_bom_graph(nodes, edges)
    except BOMValidationException as exc:
        logger.info(f"BOM graph rejected [{exc.code}]: {exc.message}")
        return ValidationResult(valid=False, error=exc)
    return ValidationResult(valid=True)
