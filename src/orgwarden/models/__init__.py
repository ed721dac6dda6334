"""orgwarden data models.

- AliasTable: Bidirectional identifier/alias mapping
- Repository: A repository in the audited organization
- ValidationIssue / ValidationResult: Validation outcome
- AuditResult: Report plus validation for one run
"""

from orgwarden.models.aliases import AliasTable, load_alias_table
from orgwarden.models.report import (
    AuditResult,
    IssueKind,
    OwnershipShare,
    ProjectMaintainers,
    ValidationIssue,
    ValidationResult,
)
from orgwarden.models.repository import Repository

__all__ = [
    "AliasTable",
    "AuditResult",
    "IssueKind",
    "OwnershipShare",
    "ProjectMaintainers",
    "Repository",
    "ValidationIssue",
    "ValidationResult",
    "load_alias_table",
]
