"""Graph-wide consistency checks: duplicate ids, dangling edges, self-loops."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.issues import IssueType, Severity, ValidationIssue
from graph.algos import find_self_loops

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph


def _error(issue_id: str, message: str, **refs: str) -> ValidationIssue:
    return ValidationIssue(
        id=issue_id,
        type=IssueType.VALIDATION_ERROR,
        message=message,
        severity=Severity.ERROR,
        **refs,
    )


def check_graph_consistency(graph: ArchitectureGraph) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    seen_nodes: set[str] = set()
    reported: set[str] = set()
    for node in graph.nodes:
        if node.id in seen_nodes and node.id not in reported:
            reported.add(node.id)
            issues.append(
                _error(
                    f"duplicate_node:{node.id}",
                    f"Node id '{node.id}' is used more than once",
                    node_id=node.id,
                )
            )
        seen_nodes.add(node.id)

    seen_edges: set[str] = set()
    reported.clear()
    for edge in graph.edges:
        if edge.id in seen_edges and edge.id not in reported:
            reported.add(edge.id)
            issues.append(
                _error(
                    f"duplicate_edge:{edge.id}",
                    f"Edge id '{edge.id}' is used more than once",
                    edge_id=edge.id,
                )
            )
        seen_edges.add(edge.id)

    for edge in graph.edges:
        missing = [end for end in (edge.source, edge.target) if end not in seen_nodes]
        if missing:
            issues.append(
                _error(
                    f"dangling_edge:{edge.id}",
                    (
                        f"Edge '{edge.id}' references missing node(s): "
                        f"{', '.join(sorted(set(missing)))}"
                    ),
                    edge_id=edge.id,
                )
            )

    reported.clear()
    for edge in find_self_loops(graph):
        if edge.source not in seen_nodes or edge.id in reported:
            continue
        reported.add(edge.id)
        issues.append(
            _error(
                f"self_loop:{edge.id}",
                f"Node '{edge.source}' depends on itself",
                node_id=edge.source,
                edge_id=edge.id,
            )
        )

    return issues


__all__ = ["check_graph_consistency"]
