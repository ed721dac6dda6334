"""Ownership share aggregation.

Each project is worth one unit of ownership, split equally between its
listed maintainers. A maintainer's share is the sum of their splits across
all projects, e.g. {"p1": ["a", "b"], "p2": ["a"]} gives a=1.5, b=0.5.
"""

import json
import logging
from pathlib import Path

from orgwarden.errors import ConfigError
from orgwarden.models.report import OwnershipShare, ProjectMaintainers

logger = logging.getLogger(__name__)


def aggregate_ownership(mapping: ProjectMaintainers) -> OwnershipShare:
    """Compute each maintainer's share of the organization.

    A maintainer listed twice on one project receives two splits. Projects
    without maintainers contribute nothing.

    Args:
        mapping: Project -> maintainer aliases

    Returns:
        Alias -> summed share, for every alias listed at least once
    """
    shares: OwnershipShare = {}
    for project, maintainers in mapping.items():
        if not maintainers:
            logger.debug("Project %s has no maintainers, no share assigned", project)
            continue
        split = 1.0 / len(maintainers)
        for maintainer in maintainers:
            shares[maintainer] = shares.get(maintainer, 0.0) + split
    return shares


def load_report(path: Path) -> ProjectMaintainers:
    """Load an ownership report written by the audit command.

    Args:
        path: Report JSON file

    Returns:
        Project -> maintainer aliases

    Raises:
        ConfigError: If the file cannot be read or is not a report
    """
    try:
        data = json.loads(path.read_text())
    except OSError as e:
        raise ConfigError(f"failed to read report {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"malformed report {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"report must contain a JSON object: {path}")

    for project, maintainers in data.items():
        if not isinstance(maintainers, list) or not all(
            isinstance(m, str) for m in maintainers
        ):
            raise ConfigError(
                f"report entry for '{project}' must be a list of strings: {path}"
            )

    return data


def sorted_shares(shares: OwnershipShare) -> list[tuple[str, float]]:
    """Order shares largest first, ties broken by alias."""
    return sorted(shares.items(), key=lambda item: (-item[1], item[0]))
