"""Validation of the assembled project -> maintainers mapping.

Two independent checks run for every project and all violations are
collected:
1. Every project lists at least one maintainer.
2. Every maintainer is a known alias. Only runs when an alias table was
   supplied; an empty table means no identity policy is configured.
"""

import logging

from orgwarden.models.aliases import AliasTable
from orgwarden.models.report import (
    IssueKind,
    ProjectMaintainers,
    ValidationIssue,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def validate_maintainers(
    mapping: ProjectMaintainers,
    aliases: AliasTable,
) -> ValidationResult:
    """Validate every project's maintainer list.

    Args:
        mapping: Project -> maintainer aliases
        aliases: Alias table the maintainers were resolved against

    Returns:
        ValidationResult listing every violation found
    """
    issues: list[ValidationIssue] = []
    check_identity = aliases.enabled

    if not check_identity:
        logger.debug("No aliases configured, skipping unknown-maintainer check")

    for project, maintainers in mapping.items():
        if not maintainers:
            issues.append(ValidationIssue(kind=IssueKind.NO_MAINTAINERS, project=project))

        if check_identity:
            issues.extend(
                ValidationIssue(
                    kind=IssueKind.UNKNOWN_MAINTAINER,
                    project=project,
                    maintainer=maintainer,
                )
                for maintainer in maintainers
                if not aliases.is_known(maintainer)
            )

    for issue in issues:
        logger.warning(issue.message)

    return ValidationResult.from_issues(issues)
