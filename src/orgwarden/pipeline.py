"""Audit pipeline orchestrator.

Runs the stages of an ownership audit in sequence:
1. Repository discovery (GitHub organization listing)
2. Raw maintainers file collection (cache, then network)
3. Parsing with alias substitution
4. Validation

Every raw file is collected before parsing starts, and the full mapping is
built before validation runs.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from orgwarden.auditors.maintainers import parse_maintainers_file
from orgwarden.auditors.validation import validate_maintainers
from orgwarden.config import WardenConfig
from orgwarden.models.aliases import AliasTable
from orgwarden.models.report import AuditResult, ProjectMaintainers
from orgwarden.models.repository import Repository
from orgwarden.sources.cache import MaintainersCache
from orgwarden.sources.github import GitHubClient
from orgwarden.utils.logging import get_logger

logger = get_logger(__name__)

Fetcher = Callable[[str], str]


@dataclass
class AuditOptions:
    """Options for controlling an organization audit.

    Attributes:
        org: Organization override (config value if None)
        use_cache: Read/write the maintainers file cache
        include_archived: Audit archived repositories too (config value if None)
    """

    org: str | None = None
    use_cache: bool = True
    include_archived: bool | None = None


class AuditPipeline:
    """Turns raw maintainers files into a validated ownership report.

    The pipeline only sees raw text through `fetch`; whether that text came
    from the cache or the network is up to the fetcher.
    """

    def __init__(self, aliases: AliasTable, fetch: Fetcher) -> None:
        """Initialize the pipeline.

        Args:
            aliases: Alias table used for substitution and validation
            fetch: Returns a project's raw maintainers file ("" if unavailable)
        """
        self.aliases = aliases
        self._fetch = fetch

    def collect(self, projects: Iterable[str]) -> dict[str, str]:
        """Fetch the raw maintainers file of every project."""
        raw: dict[str, str] = {}
        for project in projects:
            raw[project] = self._fetch(project)
            logger.debug("Collected maintainers file for %s (%d bytes)", project, len(raw[project]))
        return raw

    def parse(self, raw: dict[str, str]) -> ProjectMaintainers:
        """Parse every collected file into a project -> aliases mapping."""
        return {
            project: parse_maintainers_file(contents, self.aliases)
            for project, contents in raw.items()
        }

    def run(self, org: str, projects: Iterable[str]) -> AuditResult:
        """Execute collection, parsing and validation.

        Args:
            org: Organization being audited
            projects: Project (repository) names

        Returns:
            AuditResult with the report mapping and its validation
        """
        logger.info("Collecting maintainers files")
        raw = self.collect(projects)

        maintainers = self.parse(raw)
        validation = validate_maintainers(maintainers, self.aliases)

        logger.structured(
            logging.INFO,
            f"Audited {len(maintainers)} projects ({len(validation.issues)} issues)",
            org=org,
            projects=len(maintainers),
            issues=len(validation.issues),
        )
        return AuditResult(org=org, maintainers=maintainers, validation=validation)


def audit_organization(
    config: WardenConfig,
    token: str,
    aliases: AliasTable,
    options: AuditOptions | None = None,
    client: GitHubClient | None = None,
) -> AuditResult:
    """Audit every repository of the configured organization.

    Args:
        config: Loaded configuration
        token: GitHub bearer token
        aliases: Alias table
        options: Per-run overrides
        client: GitHub client (built from config and closed afterwards if None)

    Returns:
        AuditResult

    Raises:
        GitHubAPIError: If the organization listing fails
    """
    options = options or AuditOptions()
    org = options.org or config.github.org
    include_archived = (
        config.github.include_archived
        if options.include_archived is None
        else options.include_archived
    )

    owns_client = client is None
    if client is None:
        client = GitHubClient(
            token,
            api_url=config.github.api_url,
            raw_host=config.github.raw_host,
            timeout=config.github.timeout,
        )

    try:
        return _audit_with_client(config, client, org, aliases, options, include_archived)
    finally:
        if owns_client:
            client.close()


def _audit_with_client(
    config: WardenConfig,
    client: GitHubClient,
    org: str,
    aliases: AliasTable,
    options: AuditOptions,
    include_archived: bool,
) -> AuditResult:
    logger.info("Listing repositories for %s", org)
    repositories: dict[str, Repository] = {}
    skipped: list[str] = []
    for repository in client.list_repositories(org):
        if repository.archived and not include_archived:
            skipped.append(repository.name)
            continue
        repositories[repository.name] = repository

    if skipped:
        logger.info("Skipping %d archived repositories", len(skipped))

    fetch = MaintainersCache(
        Path(config.cache.dir),
        lambda name: client.fetch_maintainers_file(org, repositories[name]),
        enabled=config.cache.enabled and options.use_cache,
    )

    result = AuditPipeline(aliases, fetch).run(org, repositories)
    result.skipped = skipped
    return result
