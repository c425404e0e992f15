"""Derived architecture metrics."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from contract.issues import IssueType
from contract.validation import validate_graph
from graph.algos import build_dependency_graph, detect_cycles, max_dependency_depth
from graph.model import LayerType, ensure_graph

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph
    from rules.config import ArchGraphConfig


class ArchitectureMetrics(BaseModel):
    """Summary metrics for one graph snapshot."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_nodes: int
    total_edges: int
    complexity: float
    max_depth: int
    cycle_count: int
    layer_violations: int
    layer_distribution: dict[LayerType, int] = Field(default_factory=dict)
    fan_in: dict[str, int] = Field(default_factory=dict)
    fan_out: dict[str, int] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


def compute_fan_stats(adjacency: dict[str, list[str]]) -> tuple[dict[str, int], dict[str, int]]:
    """Count distinct dependency targets (fan-out) and consumers (fan-in) per node."""
    fan_in: dict[str, int] = dict.fromkeys(adjacency, 0)
    fan_out: dict[str, int] = {}
    for source, targets in adjacency.items():
        distinct = set(targets)
        fan_out[source] = len(distinct)
        for target in distinct:
            fan_in[target] += 1
    return dict(sorted(fan_in.items())), dict(sorted(fan_out.items()))


def calculate_metrics(
    graph: ArchitectureGraph,
    config: ArchGraphConfig | None = None,
) -> ArchitectureMetrics:
    graph = ensure_graph(graph)

    total_nodes = len(graph.nodes)
    total_edges = len(graph.edges)
    complexity = total_edges / total_nodes if total_nodes else 0.0

    validation = validate_graph(graph, config)
    layer_violations = sum(
        1 for issue in validation.errors if issue.type == IssueType.LAYER_VIOLATION
    )

    counts = Counter(node.layer for node in graph.nodes)
    fan_in, fan_out = compute_fan_stats(build_dependency_graph(graph))

    return ArchitectureMetrics(
        total_nodes=total_nodes,
        total_edges=total_edges,
        complexity=complexity,
        max_depth=max_dependency_depth(graph),
        cycle_count=len(detect_cycles(graph)),
        layer_violations=layer_violations,
        layer_distribution={layer: counts.get(layer, 0) for layer in LayerType},
        fan_in=fan_in,
        fan_out=fan_out,
    )


__all__ = ["ArchitectureMetrics", "calculate_metrics", "compute_fan_stats"]
