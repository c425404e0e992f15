"""In-memory graph store used by an interactive host.

The store holds one current graph, applies edits through the pure helpers
in :mod:`graph.editing` and notifies listeners after every change. The
``create_node`` and ``connect_nodes`` operations refuse nodes that fail
their own consistency checks and edges that close a dependency cycle.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from graph import editing
from graph.algos import find_path
from graph.model import ArchitectureGraph, EdgeType, ensure_graph
from rules.naming import validate_node

if TYPE_CHECKING:
    from graph.model import GraphEdge, GraphNode, LayerType, NodeType, Position
    from rules.config import ArchGraphConfig

logger = logging.getLogger(__name__)

Listener = Callable[[ArchitectureGraph], None]


class ArchitectureViolationError(ValueError):
    """Raised when an edit is rejected because it breaks an architecture rule."""


class InMemoryGraphStore:
    def __init__(
        self,
        initial: ArchitectureGraph | None = None,
        config: ArchGraphConfig | None = None,
    ) -> None:
        if initial is None:
            initial = ArchitectureGraph.empty()
        self._graph = ensure_graph(initial)
        self._config = config
        self._listeners: list[Listener] = []

    @property
    def graph(self) -> ArchitectureGraph:
        return self._graph

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _replace(self, graph: ArchitectureGraph) -> None:
        self._graph = graph
        for listener in list(self._listeners):
            listener(graph)

    def add_node(self, node: GraphNode) -> None:
        self._replace(editing.add_node(self._graph, node))

    def remove_node(self, node_id: str) -> None:
        self._replace(editing.remove_node(self._graph, node_id))

    def update_node(self, node: GraphNode) -> None:
        self._replace(editing.update_node(self._graph, node))

    def add_edge(self, edge: GraphEdge) -> None:
        self._replace(editing.add_edge(self._graph, edge))

    def remove_edge(self, edge_id: str) -> None:
        self._replace(editing.remove_edge(self._graph, edge_id))

    def create_node(
        self,
        node_type: NodeType | str,
        position: Position | None = None,
        *,
        name: str | None = None,
        layer: LayerType | str | None = None,
        description: str | None = None,
    ) -> GraphNode:
        """Add a new node unless it fails its own consistency checks."""
        node = editing.new_node(
            node_type, position, name=name, layer=layer, description=description
        )
        naming = self._config.naming if self._config else None
        errors = [issue for issue in validate_node(node, naming) if issue.is_error]
        if errors:
            msg = f"Architecture violation: {errors[0].message}"
            raise ArchitectureViolationError(msg)
        self._replace(editing.add_node(self._graph, node))
        return node

    def connect_nodes(
        self,
        source_id: str,
        target_id: str,
        edge_type: EdgeType | str,
    ) -> GraphEdge:
        """Add a new edge unless it closes a dependency cycle.

        Only a cycle through the new edge blocks it. A dependency from a
        node to itself counts as such a cycle.
        """
        edge = editing.new_edge(source_id, target_id, edge_type)
        candidate = editing.add_edge(self._graph, edge)
        if edge.type == EdgeType.DEPENDENCY:
            if source_id == target_id:
                back: list[str] | None = [target_id]
            else:
                back = find_path(self._graph, target_id, source_id)
            if back is not None:
                logger.debug("rejected edge %s -> %s", source_id, target_id)
                cycle = " → ".join([source_id, *back])
                msg = f"Circular dependency detected: {cycle}"
                raise ArchitectureViolationError(msg)
        self._replace(candidate)
        return edge


__all__ = ["ArchitectureViolationError", "InMemoryGraphStore", "Listener"]
