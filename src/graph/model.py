"""Architecture graph models.

The graph is an immutable snapshot: nodes and edges are frozen pydantic
models held in tuples. The persisted form uses camelCase keys (``returnType``)
and is the interchange schema shared with the editor.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

# Schema version written into new graphs and accepted (by major) on load.
GRAPH_SCHEMA_VERSION = "1.0.0"

_VERSION_RE = re.compile(r"^(?P<major>\d+)(?:\.\d+){0,2}$")


class NodeType(str, Enum):
    """Closed set of component kinds."""

    PORT = "port"
    ADAPTER = "adapter"
    USECASE = "usecase"
    CONTROLLER = "controller"
    ENTITY = "entity"


class LayerType(str, Enum):
    """Architectural layers, innermost first."""

    DOMAIN = "domain"
    APPLICATION = "application"
    INFRASTRUCTURE = "infrastructure"
    INTERFACE = "interface"


class EdgeType(str, Enum):
    DEPENDENCY = "dependency"
    IMPLEMENTS = "implements"


class GraphStructureError(TypeError):
    """Raised when a graph or node does not match the interchange schema."""


class SchemaVersionError(ValueError):
    """Raised when a persisted graph uses an incompatible schema version."""


def require_exhaustive(table: Mapping[Any, Any], members: type[Enum], label: str) -> None:
    """Fail at import time if ``table`` is missing a member of ``members``."""
    missing = [member.value for member in members if member not in table]
    if missing:
        msg = f"{label} is missing entries for: {', '.join(missing)}"
        raise RuntimeError(msg)


CANONICAL_LAYER: dict[NodeType, LayerType] = {
    NodeType.ENTITY: LayerType.DOMAIN,
    NodeType.PORT: LayerType.DOMAIN,
    NodeType.USECASE: LayerType.APPLICATION,
    NodeType.ADAPTER: LayerType.INFRASTRUCTURE,
    NodeType.CONTROLLER: LayerType.INTERFACE,
}
require_exhaustive(CANONICAL_LAYER, NodeType, "CANONICAL_LAYER")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _graph_id() -> str:
    return f"graph_{uuid.uuid4().hex[:12]}"


class _GraphModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Position(_GraphModel):
    x: float = 0.0
    y: float = 0.0


class Parameter(_GraphModel):
    name: str
    type: str = ""


class Method(_GraphModel):
    """A method signature, used only by code generation."""

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: str = "void"


class GraphNode(_GraphModel):
    """A typed architectural component."""

    id: str
    name: str
    type: NodeType
    layer: LayerType
    position: Position = Field(default_factory=Position)
    description: str | None = None
    methods: tuple[Method, ...] = ()
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def canonical_layer(self) -> LayerType:
        return CANONICAL_LAYER[self.type]


class GraphEdge(_GraphModel):
    """A dependency (consumer -> provider) or implements (adapter -> port) edge."""

    id: str
    source: str
    target: str
    type: EdgeType


class GraphMetadata(_GraphModel):
    id: str = Field(default_factory=_graph_id)
    name: str = "New Project"
    version: str = GRAPH_SCHEMA_VERSION
    language: str = "typescript"
    created: datetime = Field(default_factory=_utcnow)
    modified: datetime = Field(default_factory=_utcnow)
    description: str | None = None


class ArchitectureGraph(_GraphModel):
    """Ordered nodes, ordered edges and metadata.

    Edge order is significant: cycle reporting and generated constructor
    parameter order both follow it.
    """

    nodes: tuple[GraphNode, ...]
    edges: tuple[GraphEdge, ...]
    metadata: GraphMetadata = Field(default_factory=GraphMetadata)

    @classmethod
    def empty(cls, **metadata: Any) -> ArchitectureGraph:
        return cls(nodes=(), edges=(), metadata=GraphMetadata(**metadata))

    def node_index(self) -> dict[str, GraphNode]:
        """Map node id to node; the first occurrence of a duplicated id wins."""
        index: dict[str, GraphNode] = {}
        for node in self.nodes:
            index.setdefault(node.id, node)
        return index

    def edges_of_type(self, edge_type: EdgeType) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.type == edge_type]

    def nodes_of_type(self, node_type: NodeType) -> list[GraphNode]:
        return [node for node in self.nodes if node.type == node_type]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def ensure_graph(obj: object) -> ArchitectureGraph:
    """Return ``obj`` as an :class:`ArchitectureGraph` or fail fast.

    Mappings are validated against the interchange schema. ``None``, other
    types, missing ``nodes``/``edges`` and nodes or edges missing required
    fields raise :class:`GraphStructureError`.
    """
    if isinstance(obj, ArchitectureGraph):
        return obj
    if not isinstance(obj, Mapping):
        msg = f"Expected an architecture graph, got {type(obj).__name__}"
        raise GraphStructureError(msg)
    for key in ("nodes", "edges"):
        if obj.get(key) is None:
            msg = f"Architecture graph is missing required '{key}' list"
            raise GraphStructureError(msg)
    try:
        return ArchitectureGraph.model_validate(obj)
    except ValidationError as exc:
        msg = f"Malformed architecture graph: {_describe(exc)}"
        raise GraphStructureError(msg) from exc


def ensure_node(obj: object) -> GraphNode:
    if isinstance(obj, GraphNode):
        return obj
    if not isinstance(obj, Mapping):
        msg = f"Expected a graph node, got {type(obj).__name__}"
        raise GraphStructureError(msg)
    try:
        return GraphNode.model_validate(obj)
    except ValidationError as exc:
        msg = f"Malformed graph node: {_describe(exc)}"
        raise GraphStructureError(msg) from exc


def check_schema_version(version: str) -> None:
    """Reject graphs whose major schema version differs from ours."""
    match = _VERSION_RE.match(version.strip())
    if match is None:
        msg = f"Unrecognized graph schema version '{version}'"
        raise SchemaVersionError(msg)
    supported = GRAPH_SCHEMA_VERSION.split(".", 1)[0]
    if match.group("major") != supported:
        msg = (
            f"Graph schema version '{version}' is not compatible with "
            f"supported version {GRAPH_SCHEMA_VERSION}"
        )
        raise SchemaVersionError(msg)


def graph_from_parts(
    nodes: Iterable[GraphNode],
    edges: Iterable[GraphEdge],
    metadata: GraphMetadata | None = None,
) -> ArchitectureGraph:
    return ArchitectureGraph(
        nodes=tuple(nodes),
        edges=tuple(edges),
        metadata=metadata if metadata is not None else GraphMetadata(),
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
    "check_schema_version",
    "ensure_graph",
    "ensure_node",
    "graph_from_parts",
    "require_exhaustive",
]
