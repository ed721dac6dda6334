"""Repository entity as returned by the organization listing."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Repository:
    """A repository in the audited organization.

    Attributes:
        name: Repository name (unique within the organization, used as project name)
        default_branch: Branch the maintainers file is read from
        archived: Whether the repository is archived
    """

    name: str
    default_branch: str = "master"
    archived: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Repository":
        """Create a Repository from a GitHub REST API repository object."""
        return cls(
            name=data["name"],
            default_branch=data.get("default_branch") or "master",
            archived=bool(data.get("archived", False)),
        )
