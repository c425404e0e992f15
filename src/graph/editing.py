"""Pure editing helpers.

Each helper returns a new graph snapshot with ``metadata.modified`` bumped;
the input graph is never changed.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from graph.model import (
    CANONICAL_LAYER,
    EdgeType,
    GraphEdge,
    GraphNode,
    LayerType,
    NodeType,
    Position,
)

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph


class GraphEditError(ValueError):
    """Raised when an edit refers to a missing or duplicated id."""


def _touch(graph: ArchitectureGraph, **changes: object) -> ArchitectureGraph:
    metadata = graph.metadata.model_copy(
        update={"modified": datetime.now(timezone.utc)}
    )
    return graph.model_copy(update={**changes, "metadata": metadata})


def new_node(
    node_type: NodeType | str,
    position: Position | None = None,
    *,
    name: str | None = None,
    layer: LayerType | str | None = None,
    description: str | None = None,
) -> GraphNode:
    """Create a node with a fresh id, defaulting to ``New<Type>`` in its canonical layer."""
    node_type = NodeType(node_type)
    return GraphNode(
        id=f"node_{uuid.uuid4().hex[:12]}",
        name=name if name is not None else f"New{node_type.value.capitalize()}",
        type=node_type,
        layer=LayerType(layer) if layer is not None else CANONICAL_LAYER[node_type],
        position=position or Position(),
        description=description,
    )


def new_edge(source: str, target: str, edge_type: EdgeType | str) -> GraphEdge:
    return GraphEdge(
        id=f"edge_{uuid.uuid4().hex[:12]}",
        source=source,
        target=target,
        type=EdgeType(edge_type),
    )


def add_node(graph: ArchitectureGraph, node: GraphNode) -> ArchitectureGraph:
    if any(existing.id == node.id for existing in graph.nodes):
        msg = f"Node with id {node.id} already exists"
        raise GraphEditError(msg)
    return _touch(graph, nodes=(*graph.nodes, node))


def remove_node(graph: ArchitectureGraph, node_id: str) -> ArchitectureGraph:
    """Drop a node and every edge touching it."""
    nodes = tuple(node for node in graph.nodes if node.id != node_id)
    edges = tuple(
        edge
        for edge in graph.edges
        if edge.source != node_id and edge.target != node_id
    )
    return _touch(graph, nodes=nodes, edges=edges)


def update_node(graph: ArchitectureGraph, node: GraphNode) -> ArchitectureGraph:
    if not any(existing.id == node.id for existing in graph.nodes):
        msg = f"Node with id {node.id} not found"
        raise GraphEditError(msg)
    nodes = tuple(node if existing.id == node.id else existing for existing in graph.nodes)
    return _touch(graph, nodes=nodes)


def add_edge(graph: ArchitectureGraph, edge: GraphEdge) -> ArchitectureGraph:
    if any(existing.id == edge.id for existing in graph.edges):
        msg = f"Edge with id {edge.id} already exists"
        raise GraphEditError(msg)
    return _touch(graph, edges=(*graph.edges, edge))


def remove_edge(graph: ArchitectureGraph, edge_id: str) -> ArchitectureGraph:
    edges = tuple(edge for edge in graph.edges if edge.id != edge_id)
    return _touch(graph, edges=edges)


__all__ = [
    "GraphEditError",
    "add_edge",
    "add_node",
    "new_edge",
    "new_node",
    "remove_edge",
    "remove_node",
    "update_node",
]
