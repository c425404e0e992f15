"""Validation issue records returned to the host."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IssueType(str, Enum):
    CIRCULAR_DEPENDENCY = "circular_dependency"
    LAYER_VIOLATION = "layer_violation"
    NAMING_VIOLATION = "naming_violation"
    VALIDATION_ERROR = "validation_error"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """One architectural finding.

    ``id`` is derived from the offending node or edge so that a UI can diff
    results between edits.
    """

    id: str
    type: IssueType
    message: str
    severity: Severity
    node_id: str | None = None
    edge_id: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": self.id,
            "type": self.type.value,
            "message": self.message,
            "severity": self.severity.value,
        }
        if self.node_id is not None:
            payload["nodeId"] = self.node_id
        if self.edge_id is not None:
            payload["edgeId"] = self.edge_id
        return payload


@dataclass
class ValidationResult:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, issues: list[ValidationIssue]) -> None:
        for issue in issues:
            if issue.is_error:
                self.errors.append(issue)
            else:
                self.warnings.append(issue)

    def of_type(self, issue_type: IssueType) -> list[ValidationIssue]:
        return [issue for issue in (*self.errors, *self.warnings) if issue.type == issue_type]

    def to_dict(self) -> dict[str, object]:
        return {
            "isValid": self.is_valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }


__all__ = ["IssueType", "Severity", "ValidationIssue", "ValidationResult"]
