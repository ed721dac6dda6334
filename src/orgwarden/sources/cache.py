"""File cache in front of the maintainers file fetcher.

Fetched files are stored as <cache_dir>/<repo>--maintainers.txt. A cached
file is used as-is on later runs, including empty ones; delete it to
force a refetch.
"""

import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

CACHE_SUFFIX = "--maintainers.txt"


class MaintainersCache:
    """Callable `project -> raw text` that reads the cache before fetching.

    Attributes:
        cache_dir: Directory holding cached files
        enabled: When False every call goes straight to the fetcher
    """

    def __init__(
        self,
        cache_dir: Path,
        fetch: Callable[[str], str],
        enabled: bool = True,
    ) -> None:
        """Initialize the cache.

        Args:
            cache_dir: Directory holding cached files
            fetch: Fetches a project's raw maintainers file
            enabled: Read from and write to the cache
        """
        self.cache_dir = cache_dir
        self.enabled = enabled
        self._fetch = fetch

    def path_for(self, project: str) -> Path:
        """Cache file path for `project`."""
        return self.cache_dir / f"{project}{CACHE_SUFFIX}"

    def __call__(self, project: str) -> str:
        if not self.enabled:
            return self._fetch(project)

        path = self.path_for(project)
        if path.exists():
            try:
                return path.read_text()
            except OSError as e:
                logger.warning("failed to read file contents: %s (%s)", path, e)
                return ""

        contents = self._fetch(project)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents)
        except OSError as e:
            logger.warning("failed to write file: %s (%s)", path, e)
        return contents
