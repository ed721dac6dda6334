"""Audit result entities.

- ProjectMaintainers: project name -> ordered list of maintainer aliases
- ValidationIssue: a single validation violation
- ValidationResult: aggregate pass/fail plus all violations
- AuditResult: the report and its validation for one run
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ProjectMaintainers = dict[str, list[str]]

OwnershipShare = dict[str, float]


class IssueKind(Enum):
    """Kind of validation violation."""

    NO_MAINTAINERS = "no-maintainers"
    UNKNOWN_MAINTAINER = "unknown-maintainer"


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation violation.

    Attributes:
        kind: Violation kind
        project: Project the violation was found in
        maintainer: Offending alias (unknown-maintainer only)
    """

    kind: IssueKind
    project: str
    maintainer: str | None = None

    @property
    def message(self) -> str:
        """Human-readable diagnostic."""
        if self.kind is IssueKind.NO_MAINTAINERS:
            return f"project has no maintainers: {self.project}"
        return f"project '{self.project}' has an unknown maintainer: {self.maintainer}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "project": self.project,
            "maintainer": self.maintainer,
            "message": self.message,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a ProjectMaintainers mapping.

    Attributes:
        failed: True if any violation was found
        issues: Every violation, in detection order
    """

    failed: bool = False
    issues: tuple[ValidationIssue, ...] = ()

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> "ValidationResult":
        return cls(failed=bool(issues), issues=tuple(issues))

    @property
    def passed(self) -> bool:
        return not self.failed

    @property
    def messages(self) -> list[str]:
        """Diagnostic messages, one per violation."""
        return [issue.message for issue in self.issues]

    @property
    def exit_code(self) -> int:
        """Process exit status for this result."""
        return 1 if self.failed else 0


@dataclass
class AuditResult:
    """Assembled maintainers mapping and its validation for one run.

    Attributes:
        org: Audited organization
        maintainers: Project -> maintainer aliases
        validation: Validation outcome
        skipped: Repositories skipped (archived)
    """

    org: str
    maintainers: ProjectMaintainers = field(default_factory=dict)
    validation: ValidationResult = field(default_factory=ValidationResult)
    skipped: list[str] = field(default_factory=list)

    def to_report(self) -> ProjectMaintainers:
        """The ownership report as emitted on stdout."""
        return {project: list(aliases) for project, aliases in self.maintainers.items()}
