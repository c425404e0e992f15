"""Architecture graph model and traversal algorithms."""

from graph.algos import (
    build_dependency_graph,
    dependency_depths,
    detect_cycles,
    find_self_loops,
    max_dependency_depth,
)
from graph.model import (
    CANONICAL_LAYER,
    GRAPH_SCHEMA_VERSION,
    ArchitectureGraph,
    EdgeType,
    GraphEdge,
    GraphMetadata,
    GraphNode,
    GraphStructureError,
    LayerType,
    Method,
    NodeType,
    Parameter,
    Position,
    SchemaVersionError,
    check_schema_version,
    ensure_graph,
    ensure_node,
)

__all__ = [
    "CANONICAL_LAYER",
    "GRAPH_SCHEMA_VERSION",
    "ArchitectureGraph",
    "EdgeType",
    "GraphEdge",
    "GraphMetadata",
    "GraphNode",
    "GraphStructureError",
    "LayerType",
    "Method",
    "NodeType",
    "Parameter",
    "Position",
    "SchemaVersionError",
    "build_dependency_graph",
    "check_schema_version",
    "dependency_depths",
    "detect_cycles",
    "ensure_graph",
    "ensure_node",
    "find_self_loops",
    "max_dependency_depth",
]
