"""Code generation target contract.

This module defines the stable set of generation targets and the file each
one is written to.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

TYPESCRIPT_FILE = "architecture.ts"
PYTHON_FILE = "architecture.py"
DEPENDENCY_GRAPH_FILE = "dependency_graph.ts"
DOT_FILE = "architecture.dot"


class CodeTarget(str, Enum):
    TYPESCRIPT = "typescript"
    PYTHON = "python"
    DEPENDENCY_GRAPH = "dependency-graph"
    DOT = "dot"


class UnsupportedTargetError(ValueError):
    """Raised for a target identifier outside :class:`CodeTarget`."""


@dataclass(frozen=True)
class TargetSpec:
    """Output file and language for one generation target."""

    filename: str
    language: str


TARGET_SPECS: dict[CodeTarget, TargetSpec] = {
    CodeTarget.TYPESCRIPT: TargetSpec(filename=TYPESCRIPT_FILE, language="typescript"),
    CodeTarget.PYTHON: TargetSpec(filename=PYTHON_FILE, language="python"),
    CodeTarget.DEPENDENCY_GRAPH: TargetSpec(
        filename=DEPENDENCY_GRAPH_FILE, language="typescript"
    ),
    CodeTarget.DOT: TargetSpec(filename=DOT_FILE, language="dot"),
}


def parse_target(target: CodeTarget | str) -> CodeTarget:
    if isinstance(target, CodeTarget):
        return target
    try:
        return CodeTarget(target)
    except ValueError as exc:
        valid = ", ".join(member.value for member in CodeTarget)
        msg = f"Unsupported target language '{target}'. Valid targets: {valid}"
        raise UnsupportedTargetError(msg) from exc


__all__ = [
    "DEPENDENCY_GRAPH_FILE",
    "DOT_FILE",
    "PYTHON_FILE",
    "TARGET_SPECS",
    "TYPESCRIPT_FILE",
    "CodeTarget",
    "TargetSpec",
    "UnsupportedTargetError",
    "parse_target",
]
