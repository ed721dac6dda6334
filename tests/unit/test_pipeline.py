"""Unit tests for the audit pipeline."""

from pathlib import Path

import pytest

from orgwarden.config import WardenConfig, load_config_from_dict
from orgwarden.errors import GitHubAPIError
from orgwarden.models import AliasTable, Repository
from orgwarden.pipeline import AuditOptions, AuditPipeline, audit_organization


class TestAuditPipeline:
    """Tests for AuditPipeline."""

    def test_end_to_end_unknown_maintainer(self) -> None:
        """Test the alias-file example: alice is not a known maintainer."""
        aliases = AliasTable.from_mapping({"jdoe": "john.doe@example.org"})
        pipeline = AuditPipeline(aliases, {"X": "jdoe\n#general\nalice"}.__getitem__)

        result = pipeline.run("elifesciences", ["X"])

        assert result.maintainers == {"X": ["john.doe@example.org", "alice"]}
        assert result.validation.failed is True
        assert result.validation.messages == [
            "project 'X' has an unknown maintainer: alice"
        ]
        assert result.validation.exit_code == 1

    def test_passes_without_aliases(self) -> None:
        """Test that every maintained project passes without an alias table."""
        files = {"a": "alice", "b": "bob\ncarol"}
        pipeline = AuditPipeline(AliasTable(), files.__getitem__)

        result = pipeline.run("acme", files)

        assert result.to_report() == {"a": ["alice"], "b": ["bob", "carol"]}
        assert result.validation.passed is True

    def test_failed_fetch_is_an_empty_project(self) -> None:
        """Test that an empty fetch result becomes a no-maintainers failure."""
        pipeline = AuditPipeline(AliasTable(), lambda project: "")

        result = pipeline.run("acme", ["broken"])

        assert result.maintainers == {"broken": []}
        assert result.validation.messages == ["project has no maintainers: broken"]

    def test_collects_every_file_before_parsing(self) -> None:
        """Test that collection visits projects in the given order."""
        seen: list[str] = []

        def fetch(project: str) -> str:
            seen.append(project)
            return project

        AuditPipeline(AliasTable(), fetch).run("acme", ["b", "a", "c"])

        assert seen == ["b", "a", "c"]


class TestAuditOrganization:
    """Tests for audit_organization."""

    @pytest.fixture
    def config(self, tmp_path: Path) -> WardenConfig:
        """Return a config caching into a temporary directory."""
        return load_config_from_dict({"cache": {"dir": str(tmp_path / "cache")}})

    def test_skips_archived(self, config, fake_client) -> None:
        """Test that archived repositories are not audited."""
        result = audit_organization(config, "token", AliasTable(), client=fake_client)

        assert set(result.maintainers) == {"X", "journal", "empty-repo"}
        assert result.skipped == ["old-thing"]
        assert "old-thing" not in fake_client.fetched
        assert fake_client.listed == ["elifesciences"]

    def test_include_archived(self, config, fake_client) -> None:
        """Test that archived repositories can be included."""
        options = AuditOptions(include_archived=True)

        result = audit_organization(config, "token", AliasTable(), options, client=fake_client)

        assert result.maintainers["old-thing"] == ["nobody"]
        assert result.skipped == []

    def test_org_override(self, config, fake_client) -> None:
        """Test that the organization can be overridden per run."""
        result = audit_organization(
            config, "token", AliasTable(), AuditOptions(org="acme"), client=fake_client
        )

        assert result.org == "acme"
        assert fake_client.listed == ["acme"]

    def test_validation_with_aliases(self, config, fake_client) -> None:
        """Test validation over the whole organization."""
        aliases = AliasTable.from_mapping({"jdoe": "john.doe@example.org"})

        result = audit_organization(config, "token", aliases, client=fake_client)

        assert result.maintainers == {
            "X": ["john.doe@example.org", "alice"],
            "journal": ["john.doe@example.org"],
            "empty-repo": [],
        }
        assert sorted(result.validation.messages) == [
            "project 'X' has an unknown maintainer: alice",
            "project has no maintainers: empty-repo",
        ]

    def test_uses_cache(self, config, fake_client, tmp_path: Path) -> None:
        """Test that cached files are preferred and fetched files cached."""
        cache_dir = tmp_path / "cache"
        cache_dir.mkdir()
        (cache_dir / "X--maintainers.txt").write_text("cached-person")

        result = audit_organization(config, "token", AliasTable(), client=fake_client)

        assert result.maintainers["X"] == ["cached-person"]
        assert "X" not in fake_client.fetched
        assert (cache_dir / "journal--maintainers.txt").read_text() == "jdoe\n"
        assert (cache_dir / "empty-repo--maintainers.txt").read_text() == ""

    def test_no_cache(self, config, fake_client, tmp_path: Path) -> None:
        """Test that the cache can be bypassed."""
        result = audit_organization(
            config, "token", AliasTable(), AuditOptions(use_cache=False), client=fake_client
        )

        assert result.maintainers["X"] == ["jdoe", "alice"]
        assert not (tmp_path / "cache").exists()

    def test_listing_failure_propagates(self, config, fake_client) -> None:
        """Test that a failed listing aborts the audit."""

        def fail(org: str) -> list[Repository]:
            raise GitHubAPIError("failed listing repositories", status_code=500)

        fake_client.list_repositories = fail

        with pytest.raises(GitHubAPIError):
            audit_organization(config, "token", AliasTable(), client=fake_client)

    def test_closes_client_it_builds(
        self, config, fake_client, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a client built from config is closed after the audit."""
        monkeypatch.setattr("orgwarden.pipeline.GitHubClient", lambda token, **kwargs: fake_client)

        audit_organization(config, "token", AliasTable())

        assert fake_client.closed is True

    def test_closes_client_when_listing_fails(
        self, config, fake_client, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a built client is closed even when the audit aborts."""

        def fail(org: str) -> list[Repository]:
            raise GitHubAPIError("failed listing repositories", status_code=502)

        fake_client.list_repositories = fail
        monkeypatch.setattr("orgwarden.pipeline.GitHubClient", lambda token, **kwargs: fake_client)

        with pytest.raises(GitHubAPIError):
            audit_organization(config, "token", AliasTable())

        assert fake_client.closed is True

    def test_leaves_passed_client_open(self, config, fake_client) -> None:
        """Test that a caller-supplied client is not closed."""
        audit_organization(config, "token", AliasTable(), client=fake_client)

        assert fake_client.closed is False
