"""Dependency resolution shared by the generators.

All lookups follow edge-list order and ignore edges whose endpoints are
missing, so generation succeeds on graphs that fail validation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from graph.model import EdgeType, NodeType

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph, GraphNode, Method

# Emission order of node kinds within a generated file.
SECTION_ORDER: tuple[NodeType, ...] = (
    NodeType.ENTITY,
    NodeType.PORT,
    NodeType.ADAPTER,
    NodeType.USECASE,
    NodeType.CONTROLLER,
)


def outgoing(
    graph: ArchitectureGraph,
    node: GraphNode,
    edge_type: EdgeType,
) -> list[GraphNode]:
    """Distinct targets of ``node``'s outgoing edges of one type, in edge order."""
    nodes = graph.node_index()
    targets: list[GraphNode] = []
    seen: set[str] = {node.id}
    for edge in graph.edges:
        if edge.type != edge_type or edge.source != node.id:
            continue
        target = nodes.get(edge.target)
        if target is None or target.id in seen:
            continue
        seen.add(target.id)
        targets.append(target)
    return targets


def usecase_ports(graph: ArchitectureGraph, usecase: GraphNode) -> list[GraphNode]:
    """Constructor dependencies of a use case: the ports it depends on."""
    return [
        target
        for target in outgoing(graph, usecase, EdgeType.DEPENDENCY)
        if target.type == NodeType.PORT
    ]


def controller_dependencies(
    graph: ArchitectureGraph, controller: GraphNode
) -> list[GraphNode]:
    """Constructor dependencies of a controller: every dependency target."""
    return outgoing(graph, controller, EdgeType.DEPENDENCY)


def implemented_ports(graph: ArchitectureGraph, adapter: GraphNode) -> list[GraphNode]:
    return [
        target
        for target in outgoing(graph, adapter, EdgeType.IMPLEMENTS)
        if target.type == NodeType.PORT
    ]


def adapter_methods(graph: ArchitectureGraph, adapter: GraphNode) -> list[Method]:
    """Declared methods followed by inherited port methods; first name wins."""
    methods: list[Method] = []
    names: set[str] = set()
    candidates = list(adapter.methods)
    for port in implemented_ports(graph, adapter):
        candidates.extend(port.methods)
    for method in candidates:
        if method.name in names:
            continue
        names.add(method.name)
        methods.append(method)
    return methods


def implementing_adapter(graph: ArchitectureGraph, port: GraphNode) -> GraphNode | None:
    """First adapter with an implements edge into ``port``, in edge order."""
    nodes = graph.node_index()
    for edge in graph.edges:
        if edge.type != EdgeType.IMPLEMENTS or edge.target != port.id:
            continue
        source = nodes.get(edge.source)
        if source is not None and source.type == NodeType.ADAPTER:
            return source
    return None


def unique_nodes(graph: ArchitectureGraph, node_type: NodeType) -> list[GraphNode]:
    """Nodes of one kind in graph order, skipping repeated ids."""
    index = graph.node_index()
    return [
        node
        for node in graph.nodes_of_type(node_type)
        if index[node.id] is node
    ]


__all__ = [
    "SECTION_ORDER",
    "adapter_methods",
    "controller_dependencies",
    "implemented_ports",
    "implementing_adapter",
    "outgoing",
    "unique_nodes",
    "usecase_ports",
]
