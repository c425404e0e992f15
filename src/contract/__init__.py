"""Stable engine↔host contract surface for archgraph-core.

Issue records and generation targets are imported eagerly; the validation
pass and the port protocols load on first access so that the rule modules
can depend on the issue types without an import cycle.
"""

from contract.artifacts import (
    TARGET_SPECS,
    CodeTarget,
    TargetSpec,
    UnsupportedTargetError,
    parse_target,
)
from contract.issues import IssueType, Severity, ValidationIssue, ValidationResult


def __getattr__(name: str) -> object:
    if name == "validate_graph":
        from contract.validation import validate_graph

        return validate_graph

    if name in {
        "CodeGenerationPort",
        "GraphRepositoryPort",
        "MetricsPort",
        "ValidationPort",
    }:
        from contract import ports

        return getattr(ports, name)

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "TARGET_SPECS",
    "CodeGenerationPort",
    "CodeTarget",
    "GraphRepositoryPort",
    "IssueType",
    "MetricsPort",
    "Severity",
    "TargetSpec",
    "UnsupportedTargetError",
    "ValidationIssue",
    "ValidationPort",
    "ValidationResult",
    "parse_target",
    "validate_graph",
]
