"""Per-node naming and consistency rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.issues import IssueType, Severity, ValidationIssue
from graph.model import CANONICAL_LAYER, ensure_node
from rules.config import DEFAULT_SUFFIXES

if TYPE_CHECKING:
    from graph.model import GraphNode, NodeType
    from rules.config import NamingConfig


def _suffix_issue(node: GraphNode, suffix: str) -> ValidationIssue:
    return ValidationIssue(
        id=f"naming:{node.id}",
        type=IssueType.NAMING_VIOLATION,
        message=(
            f"{node.type.value.capitalize()} '{node.name}' should end with '{suffix}'"
        ),
        severity=Severity.WARNING,
        node_id=node.id,
    )


def validate_node(
    node: GraphNode,
    naming: NamingConfig | None = None,
) -> list[ValidationIssue]:
    """Run the naming and layer-consistency checks for a single node.

    Suffix mismatches are warnings. A blank name and a declared layer that
    disagrees with the node type's canonical layer are errors.
    """
    node = ensure_node(node)
    suffixes: dict[NodeType, str] = naming.suffixes if naming else DEFAULT_SUFFIXES
    check_suffixes = naming.enabled if naming else True

    issues: list[ValidationIssue] = []
    if not node.name.strip():
        issues.append(
            ValidationIssue(
                id=f"empty_name:{node.id}",
                type=IssueType.VALIDATION_ERROR,
                message=f"Node '{node.id}' has an empty name",
                severity=Severity.ERROR,
                node_id=node.id,
            )
        )
    elif check_suffixes:
        suffix = suffixes.get(node.type)
        if suffix and not node.name.endswith(suffix):
            issues.append(_suffix_issue(node, suffix))

    expected = CANONICAL_LAYER[node.type]
    if node.layer != expected:
        issues.append(
            ValidationIssue(
                id=f"layer_mismatch:{node.id}",
                type=IssueType.VALIDATION_ERROR,
                message=(
                    f"{node.type.value.capitalize()} '{node.name}' is declared in the "
                    f"{node.layer.value} layer but belongs in {expected.value}"
                ),
                severity=Severity.ERROR,
                node_id=node.id,
            )
        )

    return issues


__all__ = ["validate_node"]
