"""Layer dependency rules and violation detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.issues import IssueType, Severity, ValidationIssue
from graph.model import EdgeType, LayerType, NodeType, ensure_graph, require_exhaustive

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph, GraphEdge, GraphNode
    from rules.config import LayersConfig

# Source layer -> layers it may depend on. Dependencies point toward the domain.
ALLOWED_DEPENDENCIES: dict[LayerType, frozenset[LayerType]] = {
    LayerType.DOMAIN: frozenset(),
    LayerType.APPLICATION: frozenset({LayerType.DOMAIN}),
    LayerType.INFRASTRUCTURE: frozenset({LayerType.DOMAIN}),
    LayerType.INTERFACE: frozenset({LayerType.APPLICATION, LayerType.DOMAIN}),
}
require_exhaustive(ALLOWED_DEPENDENCIES, LayerType, "ALLOWED_DEPENDENCIES")

RELAXED_EXTRAS: dict[LayerType, frozenset[LayerType]] = {
    LayerType.INFRASTRUCTURE: frozenset({LayerType.APPLICATION}),
}


def build_allowed_deps(
    layers_config: LayersConfig | None = None,
) -> dict[LayerType, frozenset[LayerType]]:
    """Build a mapping of layer -> set of allowed dependency layers.

    Starts from the canonical table, adds the relaxed extras when the policy
    asks for them, then applies explicit rules (the last rule for a layer
    wins). With ``allow_same_layer`` set, each layer may also depend on itself.
    """
    allowed = dict(ALLOWED_DEPENDENCIES)
    policy = layers_config.policy if layers_config else "strict"
    allow_same_layer = layers_config.allow_same_layer if layers_config else False

    if policy == "relaxed":
        for layer, extras in RELAXED_EXTRAS.items():
            allowed[layer] = allowed[layer] | extras

    if layers_config is not None:
        for rule in layers_config.rules:
            allowed[rule.from_layer] = frozenset(rule.to)

    if allow_same_layer:
        allowed = {layer: targets | {layer} for layer, targets in allowed.items()}
    return allowed


def is_violation(
    from_layer: LayerType,
    to_layer: LayerType,
    allowed_deps: dict[LayerType, frozenset[LayerType]],
) -> bool:
    """Check if a dependency from one layer to another is a violation."""
    return to_layer not in allowed_deps.get(from_layer, frozenset())


def _layer_issue(edge: GraphEdge, source: GraphNode, target: GraphNode) -> ValidationIssue:
    return ValidationIssue(
        id=f"layer:{edge.id}",
        type=IssueType.LAYER_VIOLATION,
        message=(
            f"Layer violation: '{source.name}' ({source.layer.value}) must not "
            f"depend on '{target.name}' ({target.layer.value}); dependencies "
            "must point toward the domain"
        ),
        severity=Severity.ERROR,
        node_id=source.id,
        edge_id=edge.id,
    )


def _implements_issue(
    edge: GraphEdge, source: GraphNode, target: GraphNode
) -> ValidationIssue:
    return ValidationIssue(
        id=f"implements:{edge.id}",
        type=IssueType.VALIDATION_ERROR,
        message=(
            f"'implements' must be adapter → port, got '{source.name}' "
            f"({source.type.value}) → '{target.name}' ({target.type.value})"
        ),
        severity=Severity.ERROR,
        node_id=source.id,
        edge_id=edge.id,
    )


def check_layer_violations(
    graph: ArchitectureGraph,
    allowed_deps: dict[LayerType, frozenset[LayerType]] | None = None,
) -> list[ValidationIssue]:
    """Check dependency direction and implements direction for every edge.

    Edges with a missing endpoint are skipped; the consistency rules report
    them.
    """
    graph = ensure_graph(graph)
    if allowed_deps is None:
        allowed_deps = build_allowed_deps()
    nodes = graph.node_index()

    issues: list[ValidationIssue] = []
    for edge in graph.edges:
        source = nodes.get(edge.source)
        target = nodes.get(edge.target)
        if source is None or target is None:
            continue

        if edge.type == EdgeType.DEPENDENCY:
            if edge.source == edge.target:
                continue
            if is_violation(source.layer, target.layer, allowed_deps):
                issues.append(_layer_issue(edge, source, target))
        elif edge.type == EdgeType.IMPLEMENTS:
            if source.type != NodeType.ADAPTER or target.type != NodeType.PORT:
                issues.append(_implements_issue(edge, source, target))

    return issues


__all__ = [
    "ALLOWED_DEPENDENCIES",
    "RELAXED_EXTRAS",
    "build_allowed_deps",
    "check_layer_violations",
    "is_violation",
]
