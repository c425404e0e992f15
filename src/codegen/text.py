"""Small text helpers shared by the generators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graph.model import NodeType, require_exhaustive

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph

RULE = "=" * 77

SECTION_TITLES: dict[NodeType, str] = {
    NodeType.ENTITY: "DOMAIN LAYER - ENTITIES",
    NodeType.PORT: "DOMAIN LAYER - PORTS",
    NodeType.ADAPTER: "INFRASTRUCTURE LAYER - ADAPTERS",
    NodeType.USECASE: "APPLICATION LAYER - USE CASES",
    NodeType.CONTROLLER: "INTERFACE LAYER - CONTROLLERS",
}
require_exhaustive(SECTION_TITLES, NodeType, "SECTION_TITLES")


def header(graph: ArchitectureGraph, title: str, comment: str) -> list[str]:
    """Deterministic file header; no timestamps."""
    metadata = graph.metadata
    return [
        f"{comment} {title}",
        f"{comment} Architecture: {metadata.name} (schema {metadata.version})",
        "",
    ]


def banner(node_type: NodeType, comment: str) -> list[str]:
    return [
        f"{comment} {RULE}",
        f"{comment} {SECTION_TITLES[node_type]}",
        f"{comment} {RULE}",
        "",
    ]


def one_line(text: str) -> str:
    return " ".join(text.split())


def quote_single(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def quote_double(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


__all__ = [
    "RULE",
    "SECTION_TITLES",
    "banner",
    "header",
    "one_line",
    "quote_double",
    "quote_single",
]
