"""Host-facing engine implementing the validation, metrics and generation ports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from codegen.write import generate
from contract.validation import validate_graph
from graph.algos import detect_cycles
from metrics.calculator import calculate_metrics
from rules.naming import validate_node

if TYPE_CHECKING:
    from contract.artifacts import CodeTarget
    from contract.issues import ValidationIssue, ValidationResult
    from graph.model import ArchitectureGraph, GraphNode
    from metrics.calculator import ArchitectureMetrics
    from rules.config import ArchGraphConfig


class ArchitectureEngine:
    """Stateless facade over the rule, metrics and generation passes.

    Holds only configuration; every call re-examines the graph it is given.
    """

    def __init__(self, config: ArchGraphConfig | None = None) -> None:
        self.config = config

    def validate_graph(self, graph: ArchitectureGraph) -> ValidationResult:
        return validate_graph(graph, self.config)

    def detect_cycles(self, graph: ArchitectureGraph) -> list[list[str]]:
        return detect_cycles(graph)

    def validate_node(self, node: GraphNode) -> list[ValidationIssue]:
        return validate_node(node, self.config.naming if self.config else None)

    def calculate(self, graph: ArchitectureGraph) -> ArchitectureMetrics:
        return calculate_metrics(graph, self.config)

    def generate(self, graph: ArchitectureGraph, target: CodeTarget | str) -> str:
        return generate(graph, target)


__all__ = ["ArchitectureEngine"]
