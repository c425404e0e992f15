"""Whole-graph validation pass."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.issues import IssueType, Severity, ValidationIssue, ValidationResult
from graph.algos import detect_cycles
from graph.model import ensure_graph
from rules.consistency import check_graph_consistency
from rules.layers import build_allowed_deps, check_layer_violations
from rules.naming import validate_node

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph
    from rules.config import ArchGraphConfig

logger = logging.getLogger(__name__)


def _cycle_issue(cycle: list[str], names: dict[str, str]) -> ValidationIssue:
    readable = " → ".join(names.get(node_id, node_id) for node_id in cycle)
    return ValidationIssue(
        id=f"cycle:{'->'.join(cycle)}",
        type=IssueType.CIRCULAR_DEPENDENCY,
        message=f"Circular dependency detected: {readable}",
        severity=Severity.ERROR,
        node_id=cycle[0],
    )


def validate_graph(
    graph: ArchitectureGraph,
    config: ArchGraphConfig | None = None,
) -> ValidationResult:
    """Validate the whole graph.

    Runs, in order: consistency checks, cycle detection, layer rules and
    per-node naming rules. Every run re-examines the full graph; findings
    are collected, never raised.

    Raises:
        GraphStructureError: If ``graph`` does not match the interchange schema.
    """
    graph = ensure_graph(graph)
    result = ValidationResult()

    result.add(check_graph_consistency(graph))

    names = {node.id: node.name for node in graph.nodes}
    result.add([_cycle_issue(cycle, names) for cycle in detect_cycles(graph)])

    allowed_deps = build_allowed_deps(config.layers if config else None)
    result.add(check_layer_violations(graph, allowed_deps))

    naming = config.naming if config else None
    for node in graph.nodes:
        result.add(validate_node(node, naming))

    logger.debug(
        "validated graph %s: %d error(s), %d warning(s)",
        graph.metadata.id,
        len(result.errors),
        len(result.warnings),
    )
    return result


__all__ = ["validate_graph"]
