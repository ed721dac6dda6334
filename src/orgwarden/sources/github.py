"""GitHub REST API client.

Lists an organization's repositories and fetches raw maintainers.txt files.
The listing is required for an audit, so its failures raise GitHubAPIError.
Fetching a single maintainers file never raises: any failure yields "".
"""

import logging
import re

import requests

from orgwarden import __version__
from orgwarden.errors import GitHubAPIError
from orgwarden.models.repository import Repository

logger = logging.getLogger(__name__)

PAGE_SIZE = 100
MAINTAINERS_FILE = "maintainers.txt"

_NEXT_LINK_RE = re.compile(r'<([^>]+)>;\s*rel="next"')


def next_page_url(link_header: str | None) -> str | None:
    """Extract the rel="next" URL from a Link header."""
    if not link_header:
        return None
    for part in link_header.split(","):
        match = _NEXT_LINK_RE.search(part)
        if match:
            return match.group(1)
    return None


class GitHubClient:
    """Minimal GitHub client authenticated with a bearer token.

    Attributes:
        api_url: REST API base URL
        raw_host: Host serving raw file contents
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        raw_host: str = "raw.githubusercontent.com",
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: Bearer token
            api_url: REST API base URL
            raw_host: Host serving raw file contents
            timeout: Per-request timeout in seconds
            session: Session to use (a new one is created if None)
        """
        self.api_url = api_url.rstrip("/")
        self.raw_host = raw_host
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "User-Agent": f"orgwarden/{__version__}",
        })

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def list_repositories(self, org: str) -> list[Repository]:
        """List every repository of `org`, following pagination.

        Args:
            org: Organization name

        Returns:
            Repositories in API order (oldest first)

        Raises:
            GitHubAPIError: On transport failure or non-success status
        """
        url: str | None = f"{self.api_url}/orgs/{org}/repos"
        params: dict[str, str | int] | None = {
            "type": "all",
            "sort": "created",
            "per_page": PAGE_SIZE,
        }
        repositories: list[Repository] = []

        while url:
            try:
                response = self._session.get(url, params=params, timeout=self.timeout)
            except requests.RequestException as e:
                raise GitHubAPIError(f"failed listing repositories for {org}: {e}", url=url) from e

            if not response.ok:
                raise GitHubAPIError(
                    f"failed listing repositories for {org}: HTTP {response.status_code}",
                    url=url,
                    status_code=response.status_code,
                )

            try:
                repositories.extend(Repository.from_api(item) for item in response.json())
            except (ValueError, KeyError, TypeError) as e:
                raise GitHubAPIError(
                    f"unexpected repository listing for {org}: {e!r}",
                    url=url,
                    status_code=response.status_code,
                ) from e

            url = next_page_url(response.headers.get("Link"))
            # the next link already carries the query string
            params = None

        logger.info("Found %d repositories in %s", len(repositories), org)
        return repositories

    def maintainers_url(self, org: str, repository: Repository) -> str:
        """Raw-content URL of a repository's maintainers file."""
        return (
            f"https://{self.raw_host}/{org}/{repository.name}/"
            f"{repository.default_branch}/{MAINTAINERS_FILE}"
        )

    def fetch_maintainers_file(self, org: str, repository: Repository) -> str:
        """Fetch a repository's maintainers file.

        Args:
            org: Organization name
            repository: Repository to read from

        Returns:
            File contents, or "" if the file could not be fetched
        """
        url = self.maintainers_url(org, repository)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("failed to read URL contents: %s (%s)", url, e)
            return ""

        if response.status_code == 404:
            logger.debug("no maintainers file: %s", url)
            return ""
        if response.status_code != 200:
            logger.warning("non-200 response from URL: %s (%d)", url, response.status_code)
            return ""

        return response.text
