"""Python stubs: Protocols for ports, plain classes for everything else."""

from __future__ import annotations

import re
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
from codegen.text import banner, header, one_line, quote_double
from graph.model import Method, NodeType, Parameter, require_exhaustive
from utils import member_name, snake_field_name, type_name

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph, GraphNode

# Annotations that parse as Python expressions are emitted bare, others quoted.
_BARE_ANNOTATION = re.compile(r"[A-Za-z_][\w.]*(\[[\w., |\[\]]*\w[\w., |\[\]]*\])?")

INDENT = "    "

EXECUTE = Method(
    name="execute",
    parameters=(Parameter(name="request", type="Any"),),
    return_type="None",
)
HANDLE = Method(
    name="handle",
    parameters=(Parameter(name="request", type="Any"),),
    return_type="None",
)

_DEFAULT_DOCS: dict[NodeType, str] = {
    NodeType.ENTITY: "Generated entity.",
    NodeType.PORT: "Generated port interface.",
    NodeType.ADAPTER: "Generated adapter.",
    NodeType.USECASE: "Generated use case.",
    NodeType.CONTROLLER: "Generated controller.",
}
require_exhaustive(_DEFAULT_DOCS, NodeType, "Python docstrings")


def _annotation(type_expr: str) -> str:
    balanced = type_expr.count("[") == type_expr.count("]")
    if balanced and _BARE_ANNOTATION.fullmatch(type_expr):
        return type_expr
    return quote_double(type_expr)


def _return(type_expr: str) -> str:
    if not type_expr or type_expr == "void":
        return "None"
    return _annotation(type_expr)


def _signature(method: Method, *, is_async: bool = False) -> str:
    params = ["self"]
    for param in method.parameters:
        name = member_name(param.name, python=True)
        params.append(f"{name}: {_annotation(param.type)}" if param.type else name)
    prefix = "async def" if is_async else "def"
    return (
        f"{INDENT}{prefix} {member_name(method.name, python=True)}"
        f"({', '.join(params)}) -> {_return(method.return_type)}:"
    )


def _docstring(node: GraphNode) -> str:
    text = one_line(node.description) if node.description else _DEFAULT_DOCS[node.type]
    text = text.replace("\\", "\\\\").replace('"', "'")
    return f'{INDENT}"""{text}"""'


def _stubs(methods: list[Method], *, is_async: bool = False) -> list[str]:
    lines: list[str] = []
    for method in methods:
        lines.extend(
            [
                "",
                _signature(method, is_async=is_async),
                f"{INDENT * 2}raise NotImplementedError",
            ]
        )
    return lines


def _init(dependencies: list[GraphNode]) -> list[str]:
    if not dependencies:
        return []
    params = ", ".join(
        f"{snake_field_name(dep.name)}: {type_name(dep.name, python=True)}"
        for dep in dependencies
    )
    lines = ["", f"{INDENT}def __init__(self, {params}) -> None:"]
    for dep in dependencies:
        field = snake_field_name(dep.name)
        lines.append(f"{INDENT * 2}self._{field.rstrip('_')} = {field}")
    return lines


def _with_default(methods: tuple[Method, ...], default: Method) -> list[Method]:
    if any(method.name == default.name for method in methods):
        return list(methods)
    return [default, *methods]


def _emit_entity(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    return [
        f"class {type_name(node.name, python=True)}:",
        _docstring(node),
        *_stubs(list(node.methods)),
    ]


def _emit_port(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    lines = [f"class {type_name(node.name, python=True)}(Protocol):", _docstring(node)]
    if node.methods:
        lines.append("")
    lines.extend(f"{_signature(method)} ..." for method in node.methods)
    return lines


def _emit_adapter(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    bases = [
        type_name(port.name, python=True) for port in implemented_ports(graph, node)
    ]
    clause = f"({', '.join(bases)})" if bases else ""
    return [
        f"class {type_name(node.name, python=True)}{clause}:",
        _docstring(node),
        *_stubs(adapter_methods(graph, node)),
    ]


def _emit_usecase(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    return [
        f"class {type_name(node.name, python=True)}:",
        _docstring(node),
        *_init(usecase_ports(graph, node)),
        *_stubs(_with_default(node.methods, EXECUTE), is_async=True),
    ]


def _emit_controller(graph: ArchitectureGraph, node: GraphNode) -> list[str]:
    return [
        f"class {type_name(node.name, python=True)}:",
        _docstring(node),
        *_init(controller_dependencies(graph, node)),
        *_stubs(_with_default(node.methods, HANDLE), is_async=True),
    ]


_EMITTERS: dict[NodeType, Callable[[ArchitectureGraph, GraphNode], list[str]]] = {
    NodeType.ENTITY: _emit_entity,
    NodeType.PORT: _emit_port,
    NodeType.ADAPTER: _emit_adapter,
    NodeType.USECASE: _emit_usecase,
    NodeType.CONTROLLER: _emit_controller,
}
require_exhaustive(_EMITTERS, NodeType, "Python emitters")


class PythonGenerator:
    """Generator for Python protocol and class stubs."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "python"

    def generate(self, graph: ArchitectureGraph) -> str:
        lines = header(graph, "Auto-generated Python code", "#")
        lines.extend(
            [
                "from __future__ import annotations",
                "",
                "from typing import Any, Protocol",
                "",
            ]
        )
        for node_type in SECTION_ORDER:
            nodes = unique_nodes(graph, node_type)
            if not nodes:
                continue
            lines.append("")
            lines.extend(banner(node_type, "#"))
            for node in nodes:
                lines.append("")
                lines.extend(_EMITTERS[node_type](graph, node))
                lines.append("")
        return "\n".join(lines).rstrip("\n") + "\n"


__all__ = ["PythonGenerator"]
