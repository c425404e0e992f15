"""Capability contracts between the engine and its host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from contract.artifacts import CodeTarget
    from contract.issues import ValidationIssue, ValidationResult
    from graph.model import ArchitectureGraph, GraphNode
    from metrics.calculator import ArchitectureMetrics
    from store.files import GraphSummary


@runtime_checkable
class ValidationPort(Protocol):
    def validate_graph(self, graph: ArchitectureGraph) -> ValidationResult: ...

    def detect_cycles(self, graph: ArchitectureGraph) -> list[list[str]]: ...

    def validate_node(self, node: GraphNode) -> list[ValidationIssue]: ...


@runtime_checkable
class MetricsPort(Protocol):
    def calculate(self, graph: ArchitectureGraph) -> ArchitectureMetrics: ...


@runtime_checkable
class CodeGenerationPort(Protocol):
    def generate(self, graph: ArchitectureGraph, target: CodeTarget | str) -> str: ...


@runtime_checkable
class GraphRepositoryPort(Protocol):
    """Persistence consumed by the host; the engine never calls it."""

    def save(self, graph: ArchitectureGraph) -> None: ...

    def load(self, graph_id: str) -> ArchitectureGraph: ...

    def list(self) -> list[GraphSummary]: ...

    def delete(self, graph_id: str) -> None: ...


__all__ = [
    "CodeGenerationPort",
    "GraphRepositoryPort",
    "MetricsPort",
    "ValidationPort",
]
