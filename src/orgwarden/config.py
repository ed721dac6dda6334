"""orgwarden configuration system.

Configuration is YAML-based with minimal CLI overrides (--org, --no-cache).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.orgwarden/config.yaml
3. ./orgwarden.yaml

The GitHub token is never read implicitly: callers resolve it with
resolve_token() and hand it to the collaborators that need it.
"""

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from orgwarden.errors import ConfigError

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class GitHubConfig:
    """GitHub organization settings.

    Attributes:
        org: Organization whose repositories are audited
        api_url: REST API base URL
        raw_host: Host serving raw file contents
        token_env: Environment variable holding the bearer token
        include_archived: Whether archived repositories are audited
        timeout: HTTP timeout in seconds
    """

    org: str = "elifesciences"
    api_url: str = "https://api.github.com"
    raw_host: str = "raw.githubusercontent.com"
    token_env: str = "GITHUB_TOKEN"
    include_archived: bool = False
    timeout: int = 30

    def __post_init__(self) -> None:
        """Validate GitHub configuration."""
        if not self.org:
            raise ValueError("GitHub organization must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"GitHub timeout must be positive (got {self.timeout})")
        self.api_url = self.api_url.rstrip("/")


@dataclass
class CacheConfig:
    """On-disk cache for fetched maintainers files.

    Attributes:
        dir: Directory holding <repo>--maintainers.txt files
        enabled: Read from and write to the cache
    """

    dir: str = "."
    enabled: bool = True


@dataclass
class ChartConfig:
    """Ownership chart settings.

    Attributes:
        report: Report JSON consumed by the graph command
        output: SVG file written by the graph command
        width: Chart width in pixels
        height: Chart height in pixels
    """

    report: str = "report.json"
    output: str = "output.svg"
    width: int = 512
    height: int = 512

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Chart size must be positive (got {self.width}x{self.height})")


@dataclass
class WardenConfig:
    """Top-level orgwarden configuration.

    Attributes:
        github: Organization and API settings
        cache: Maintainers file cache
        chart: Ownership chart settings
    """

    github: GitHubConfig = field(default_factory=GitHubConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute ${VAR} references in config values.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is None:
                raise ValueError(f"Environment variable not set: {match.group(1)}")
            return env_value

        return _ENV_VAR_PATTERN.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    start_path = (start_path or Path.cwd()).resolve()

    for candidate in (
        start_path / ".orgwarden" / "config.yaml",
        start_path / "orgwarden.yaml",
    ):
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section


def load_config_from_dict(data: dict[str, Any]) -> WardenConfig:
    """Load configuration from a dictionary.

    Unknown keys inside a section are ignored.

    Args:
        data: Configuration dictionary

    Returns:
        WardenConfig instance

    Raises:
        ValueError: If a value is invalid or an env var is missing
    """
    data = substitute_env_vars(data)
    config = WardenConfig()

    github = _section(data, "github")
    if github:
        defaults = config.github
        config.github = GitHubConfig(
            org=github.get("org", defaults.org),
            api_url=github.get("api_url", defaults.api_url),
            raw_host=github.get("raw_host", defaults.raw_host),
            token_env=github.get("token_env", defaults.token_env),
            include_archived=github.get("include_archived", defaults.include_archived),
            timeout=github.get("timeout", defaults.timeout),
        )

    cache = _section(data, "cache")
    if cache:
        config.cache = CacheConfig(
            dir=str(cache.get("dir", config.cache.dir)),
            enabled=cache.get("enabled", config.cache.enabled),
        )

    chart = _section(data, "chart")
    if chart:
        defaults_chart = config.chart
        config.chart = ChartConfig(
            report=chart.get("report", defaults_chart.report),
            output=chart.get("output", defaults_chart.output),
            width=chart.get("width", defaults_chart.width),
            height=chart.get("height", defaults_chart.height),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> WardenConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        WardenConfig instance (defaults when no file is found)

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        found_path: Path | None = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is None:
        return WardenConfig()

    try:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")
        config = load_config_from_dict(data)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        raise ConfigError(f"Invalid config file {found_path}: {e}") from e

    config._config_path = found_path
    return config


def resolve_token(config: WardenConfig, environ: Mapping[str, str] | None = None) -> str:
    """Read the GitHub bearer token from the environment.

    Args:
        config: Loaded configuration (names the variable)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The token

    Raises:
        ConfigError: If the variable is unset or empty
    """
    env = os.environ if environ is None else environ
    token = env.get(config.github.token_env)
    if not token:
        raise ConfigError(f"envvar {config.github.token_env} not set.")
    return token


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# orgwarden configuration

github:
  org: "elifesciences"
  api_url: "https://api.github.com"
  raw_host: "raw.githubusercontent.com"
  token_env: "GITHUB_TOKEN"   # bearer token is read from this variable
  include_archived: false
  timeout: 30

# Fetched maintainers.txt files are cached as <repo>--maintainers.txt
cache:
  dir: "."
  enabled: true

chart:
  report: "report.json"
  output: "output.svg"
  width: 512
  height: 512
'''
