"""Graphviz rendering of the architecture, clustered by layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from codegen.text import quote_double
from graph.model import EdgeType, LayerType

if TYPE_CHECKING:
    from graph.model import ArchitectureGraph


class DotGenerator:
    """Generator for a DOT digraph of nodes and edges."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "dot"

    def generate(self, graph: ArchitectureGraph) -> str:
        nodes = graph.node_index()
        lines = [
            f"digraph {quote_double(graph.metadata.name)} {{",
            "  rankdir=LR;",
            '  node [shape=box, fontname="Helvetica"];',
        ]

        for layer in LayerType:
            members = [
                node
                for node in graph.nodes
                if node.layer == layer and nodes[node.id] is node
            ]
            if not members:
                continue
            lines.extend(
                [
                    "",
                    f"  subgraph cluster_{layer.value} {{",
                    f"    label={quote_double(layer.value)};",
                ]
            )
            for node in members:
                label = quote_double(f"{node.name}\n({node.type.value})").replace("\n", "\\n")
                lines.append(f"    {quote_double(node.id)} [label={label}];")
            lines.append("  }")

        edge_lines: list[str] = []
        for edge in graph.edges:
            if edge.source not in nodes or edge.target not in nodes:
                continue
            arrow = f"  {quote_double(edge.source)} -> {quote_double(edge.target)}"
            if edge.type == EdgeType.IMPLEMENTS:
                arrow += ' [style=dashed, label="implements"]'
            edge_lines.append(f"{arrow};")
        if edge_lines:
            lines.append("")
            lines.extend(edge_lines)

        lines.append("}")
        return "\n".join(lines) + "\n"


__all__ = ["DotGenerator"]
