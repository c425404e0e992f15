"""Composition root that wires adapters, use cases and controllers together."""

from __future__ import annotations

from typing import TYPE_CHECKING

from codegen.resolve import (
    controller_dependencies,
    implementing_adapter,
    unique_nodes,
    usecase_ports,
)
from codegen.text import header, quote_single
from graph.model import NodeType
from utils import type_name

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph, GraphNode

# Controller dependencies of these kinds are registered instances.
_MANAGED = frozenset({NodeType.ADAPTER, NodeType.USECASE})


def _lookup(node: GraphNode) -> str:
    return f"this.get<{type_name(node.name)}>({quote_single(node.id)})"


def _placeholder(reason: str) -> str:
    return f"undefined as never /* unresolved: {reason.replace('*/', '* /')} */"


def _resolve_port(graph: ArchitectureGraph, port: GraphNode) -> str:
    adapter = implementing_adapter(graph, port)
    if adapter is None:
        return _placeholder(f"no adapter implements {type_name(port.name)}")
    return _lookup(adapter)


def _resolve_any(graph: ArchitectureGraph, dependency: GraphNode) -> str:
    if dependency.type == NodeType.PORT:
        return _resolve_port(graph, dependency)
    if dependency.type in _MANAGED:
        return _lookup(dependency)
    return _placeholder(
        f"{type_name(dependency.name)} ({dependency.type.value}) "
        "is not managed by the container"
    )


def _register(node: GraphNode, arguments: list[str]) -> list[str]:
    symbol = type_name(node.name)
    if not arguments:
        return [f"    this.register({quote_single(node.id)}, new {symbol}());"]
    lines = [f"    this.register({quote_single(node.id)}, new {symbol}("]
    lines.extend(f"      {argument}," for argument in arguments)
    lines.append("    ));")
    return lines


def _builder(name: str, body: list[str]) -> list[str]:
    return [f"  private {name}(): void {{", *body, "  }"]


class DependencyGraphGenerator:
    """Generator for the TypeScript dependency-injection composition root."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "dependency-graph"

    def generate(self, graph: ArchitectureGraph) -> str:
        adapters = unique_nodes(graph, NodeType.ADAPTER)
        usecases = unique_nodes(graph, NodeType.USECASE)
        controllers = unique_nodes(graph, NodeType.CONTROLLER)

        adapter_lines: list[str] = []
        for adapter in adapters:
            adapter_lines.extend(_register(adapter, []))

        usecase_lines: list[str] = []
        for usecase in usecases:
            arguments = [_resolve_port(graph, port) for port in usecase_ports(graph, usecase)]
            usecase_lines.extend(_register(usecase, arguments))

        controller_lines: list[str] = []
        for controller in controllers:
            arguments = [
                _resolve_any(graph, dependency)
                for dependency in controller_dependencies(graph, controller)
            ]
            controller_lines.extend(_register(controller, arguments))

        symbols: list[str] = []
        for node in (*adapters, *usecases, *controllers):
            symbol = type_name(node.name)
            if symbol not in symbols:
                symbols.append(symbol)

        lines = header(graph, "Auto-generated dependency graph (composition root)", "//")
        if symbols:
            lines.extend([f"import {{ {', '.join(symbols)} }} from './architecture';", ""])

        lines.extend(
            [
                "export class DependencyGraph {",
                "  private readonly instances = new Map<string, unknown>();",
                "",
                "  constructor() {",
                "    this.buildAdapters();",
                "    this.buildUseCases();",
                "    this.buildControllers();",
                "  }",
                "",
                "  get<T>(id: string): T {",
                "    if (!this.instances.has(id)) {",
                "      throw new Error(`No component registered with id '${id}'`);",
                "    }",
                "    return this.instances.get(id) as T;",
                "  }",
                "",
                "  private register(id: string, instance: unknown): void {",
                "    this.instances.set(id, instance);",
                "  }",
                "",
                *_builder("buildAdapters", adapter_lines),
                "",
                *_builder("buildUseCases", usecase_lines),
                "",
                *_builder("buildControllers", controller_lines),
                "}",
            ]
        )
        return "\n".join(lines) + "\n"


__all__ = ["DependencyGraphGenerator"]
