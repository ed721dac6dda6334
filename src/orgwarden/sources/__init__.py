"""Sources of raw maintainers files.

- github: Organization listing and raw file fetching over the REST API
- cache: On-disk cache wrapped around any fetcher
"""

from orgwarden.sources.cache import MaintainersCache
from orgwarden.sources.github import GitHubClient

__all__ = ["GitHubClient", "MaintainersCache"]
