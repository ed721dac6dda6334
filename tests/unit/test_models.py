"""Unit tests for core models."""

from orgwarden.models import AuditResult, IssueKind, Repository, ValidationIssue, ValidationResult


class TestRepository:
    """Tests for Repository entity."""

    def test_from_api(self) -> None:
        """Test creating a repository from an API object."""
        repo = Repository.from_api(
            {"name": "journal", "default_branch": "develop", "archived": True, "id": 1}
        )

        assert repo == Repository(name="journal", default_branch="develop", archived=True)

    def test_from_api_defaults(self) -> None:
        """Test defaults for missing fields."""
        repo = Repository.from_api({"name": "empty", "default_branch": None})

        assert repo.default_branch == "master"
        assert repo.archived is False


class TestValidationIssue:
    """Tests for ValidationIssue messages."""

    def test_no_maintainers_message(self) -> None:
        """Test the no-maintainers diagnostic."""
        issue = ValidationIssue(kind=IssueKind.NO_MAINTAINERS, project="journal")

        assert issue.message == "project has no maintainers: journal"

    def test_unknown_maintainer_message(self) -> None:
        """Test the unknown-maintainer diagnostic."""
        issue = ValidationIssue(
            kind=IssueKind.UNKNOWN_MAINTAINER, project="X", maintainer="alice"
        )

        assert issue.message == "project 'X' has an unknown maintainer: alice"


class TestAuditResult:
    """Tests for AuditResult."""

    def test_to_report_copies_lists(self) -> None:
        """Test that the report does not share lists with the result."""
        result = AuditResult(org="acme", maintainers={"a": ["x", "x"]})

        report = result.to_report()
        report["a"].append("y")

        assert result.maintainers == {"a": ["x", "x"]}

    def test_default_validation_passes(self) -> None:
        """Test that a fresh result has a passing validation."""
        result = AuditResult(org="acme")

        assert result.validation == ValidationResult()
        assert result.validation.exit_code == 0
