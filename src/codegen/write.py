from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from codegen.generators import (
    DependencyGraphGenerator,
    DotGenerator,
    PythonGenerator,
    TypeScriptGenerator,
)
from contract.artifacts import TARGET_SPECS, CodeTarget, parse_target
from graph.model import ensure_graph, require_exhaustive

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from graph.model import ArchitectureGraph

logger = logging.getLogger(__name__)


class SourceGenerator(Protocol):
    @property
    def name(self) -> str: ...

    def generate(self, graph: ArchitectureGraph) -> str: ...


GENERATORS: dict[CodeTarget, SourceGenerator] = {
    CodeTarget.TYPESCRIPT: TypeScriptGenerator(),
    CodeTarget.PYTHON: PythonGenerator(),
    CodeTarget.DEPENDENCY_GRAPH: DependencyGraphGenerator(),
    CodeTarget.DOT: DotGenerator(),
}
require_exhaustive(GENERATORS, CodeTarget, "GENERATORS")


def generate(graph: ArchitectureGraph, target: CodeTarget | str) -> str:
    """Render ``graph`` as source text for one target.

    Output depends only on the graph value, so repeated calls return
    identical strings. Generation does not require a valid graph.

    Raises:
        UnsupportedTargetError: If ``target`` is not a known target.
        GraphStructureError: If ``graph`` does not match the interchange schema.
    """
    code_target = parse_target(target)
    graph = ensure_graph(graph)
    generator = GENERATORS[code_target]
    logger.debug("generating %s for graph %s", generator.name, graph.metadata.id)
    return generator.generate(graph)


def write_generated(
    *,
    graph: ArchitectureGraph,
    out_dir: Path,
    targets: Iterable[CodeTarget | str] | None = None,
) -> dict[str, object]:
    """Write one file per target into ``out_dir``.

    Args:
        graph: Graph to generate from
        out_dir: Output directory, created if missing
        targets: Targets to generate (default: all)

    Returns:
        Dictionary with the graph id and the list of written paths.
    """
    code_targets = [parse_target(target) for target in (targets or list(CodeTarget))]
    graph = ensure_graph(graph)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[str] = []
    for code_target in code_targets:
        path = out_dir / TARGET_SPECS[code_target].filename
        path.write_text(generate(graph, code_target), encoding="utf-8")
        written.append(str(path))

    logger.info("wrote %d generated file(s) to %s", len(written), out_dir)
    return {"graph_id": graph.metadata.id, "files": written}


__all__ = ["GENERATORS", "SourceGenerator", "generate", "write_generated"]
