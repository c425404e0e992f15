"""TypeScript stubs for every node in the graph."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from codegen.resolve import (
    SECTION_ORDER,
    adapter_methods,
    controller_dependencies,
    implemented_ports,
    unique_nodes,
    usecase_ports,
)
from codegen.text import banner, header, one_line
from graph.model import Method, NodeType, Parameter, require_exhaustive
from utils import camel_field_name, member_name, type_name

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph, GraphNode

EXECUTE = Method(
    name="execute",
    parameters=(Parameter(name="request", type="unknown"),),
    return_type="void",
)
HANDLE = Method(
    name="handle",
    parameters=(Parameter(name="request", type="unknown"),),
    return_type="void",
)


def _params(method: Method) -> str:
    return ", ".join(
        f"{member_name(param.name)}: {param.type or 'unknown'}"
        for param in method.parameters
    )


def _promise(return_type: str) -> str:
    return_type = return_type or "void"
    if return_type.startswith("Promise<"):
        return return_type
    return f"Promise<{return_type}>"


def _doc(node: GraphNode) -> list[str]:
    if not node.description:
        return []
    return [f"/** {one_line(node.description).replace('*/', '* /')} */"]


def _stub(method: Method) -> list[str]:
    return [
        f"  async {member_name(method.name)}({_params(method)}): "
        f"{_promise(method.return_type)} {{",
        "    throw new Error('Not implemented');",
        "  }",
    ]


def _class_body(
    constructor: list[str],
    methods: list[Method],
) -> list[str]:
    body = list(constructor)
    for method in methods:
        body.append("")
        body.extend(_stub(method))
    return body


def _constructor(dependencies: list[GraphNode]) -> list[str]:
    if not dependencies:
        return ["  constructor() {}"]
    lines = ["  constructor("]
    for dependency in dependencies:
        lines.append(
            f"    private readonly {camel_field_name(dependency.name)}: "
            f"{type_name(dependency.name)},"
        )
    lines.append("  ) {}")
    return lines


def _with_default(methods: tuple[Method, ...], default: Method) -> list[Method]:
    if any(method.name == default.name for method in methods):
        return list(methods)
    return [default, *methods]


def _emit_entity(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    lines = [*_doc(node), f"export class {type_name(node.name)} {{"]
    for index, method in enumerate(node.methods):
        if index:
            lines.append("")
        lines.extend(
            [
                f"  {member_name(method.name)}({_params(method)}): "
                f"{method.return_type or 'void'} {{",
                "    throw new Error('Not implemented');",
                "  }",
            ]
        )
    lines.append("}")
    return lines


def _emit_port(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    lines = [*_doc(node), f"export interface {type_name(node.name)} {{"]
    for method in node.methods:
        lines.append(
            f"  {member_name(method.name)}({_params(method)}): "
            f"{method.return_type or 'void'};"
        )
    lines.append("}")
    return lines


def _emit_adapter(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    ports = [type_name(port.name) for port in implemented_ports(graph, node)]
    clause = f" implements {', '.join(ports)}" if ports else ""
    return [
        *_doc(node),
        f"export class {type_name(node.name)}{clause} {{",
        *_class_body(["  constructor() {}"], adapter_methods(graph, node)),
        "}",
    ]


def _emit_usecase(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    return [
        *_doc(node),
        f"export class {type_name(node.name)} {{",
        *_class_body(
            _constructor(usecase_ports(graph, node)),
            _with_default(node.methods, EXECUTE),
        ),
        "}",
    ]


def _emit_controller(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    return [
        *_doc(node),
        f"export class {type_name(node.name)} {{",
        *_class_body(
            _constructor(controller_dependencies(graph, node)),
            _with_default(node.methods, HANDLE),
        ),
        "}",
    ]


_EMITTERS: dict[NodeType, Callable[[ArchitectureGraph, GraphNode], list[str]]] = {
    NodeType.ENTITY: _emit_entity,
    NodeType.PORT: _emit_port,
    NodeType.ADAPTER: _emit_adapter,
    NodeType.USECASE: _emit_usecase,
    NodeType.CONTROLLER: _emit_controller,
}
require_exhaustive(_EMITTERS, NodeType, "TypeScript emitters")


class TypeScriptGenerator:
    """Generator for TypeScript interface and class stubs."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "typescript"

    def generate(self, graph: ArchitectureGraph) -> str:
        lines = header(graph, "Auto-generated TypeScript code", "//")
        for node_type in SECTION_ORDER:
            nodes = unique_nodes(graph, node_type)
            if not nodes:
                continue
            lines.extend(banner(node_type, "//"))
            for node in nodes:
                lines.extend(_EMITTERS[node_type](graph, node))
                lines.append("")
        return "\n".join(lines).rstrip("\n") + "\n"


__all__ = ["TypeScriptGenerator"]
