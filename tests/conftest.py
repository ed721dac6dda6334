"""Shared pytest fixtures for orgwarden tests.

Fixtures are organized by category:
- Alias fixtures: alias tables and alias files
- GitHub fixtures: an in-memory stand-in for the GitHub client
- Report fixtures: ownership reports written by the audit command
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from orgwarden.models import AliasTable, Repository


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Detach handlers installed by CLI runs so caplog sees every record."""
    yield
    logger = logging.getLogger("orgwarden")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Alias Fixtures
# =============================================================================


@pytest.fixture
def aliases() -> AliasTable:
    """Return a small alias table."""
    return AliasTable.from_mapping(
        {
            "jdoe": "john.doe@example.org",
            "asmith": "a.smith@example.org",
        }
    )


@pytest.fixture
def alias_file(tmp_path: Path) -> Path:
    """Write an alias file with a single entry."""
    path = tmp_path / "aliases.json"
    path.write_text(json.dumps({"jdoe": "john.doe@example.org"}))
    return path


# =============================================================================
# GitHub Fixtures
# =============================================================================


class FakeGitHubClient:
    """In-memory GitHub client.

    Attributes:
        repositories: Repositories returned by list_repositories
        files: Repository name -> maintainers file contents
        fetched: Repository names fetched, in call order
        listed: Organizations listed, in call order
        closed: Whether close() was called
    """

    def __init__(self, repositories: list[Repository], files: dict[str, str]) -> None:
        self.repositories = repositories
        self.files = files
        self.fetched: list[str] = []
        self.listed: list[str] = []
        self.closed = False

    def list_repositories(self, org: str) -> list[Repository]:
        self.listed.append(org)
        return list(self.repositories)

    def fetch_maintainers_file(self, org: str, repository: Repository) -> str:
        self.fetched.append(repository.name)
        return self.files.get(repository.name, "")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    """Return a client for an organization with three active repos and one archived."""
    return FakeGitHubClient(
        repositories=[
            Repository(name="X", default_branch="master"),
            Repository(name="journal", default_branch="develop"),
            Repository(name="empty-repo", default_branch="main"),
            Repository(name="old-thing", default_branch="master", archived=True),
        ],
        files={
            "X": "jdoe\n#general\nalice",
            "journal": "jdoe\n",
            "old-thing": "nobody",
        },
    )


# =============================================================================
# Report Fixtures
# =============================================================================


@pytest.fixture
def report_file(tmp_path: Path) -> Path:
    """Write a report where a owns 1.5 projects and b owns 0.5."""
    path = tmp_path / "report.json"
    path.write_text(
        json.dumps(
            {
                "p1": ["a", "b"],
                "p2": ["a"],
                "p3": [],
            },
            indent=2,
        )
    )
    return path
