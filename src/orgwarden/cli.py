"""orgwarden CLI interface.

Commands:
- audit: Audit maintainers across the organization and print the report
- shares: Print each maintainer's ownership share from a report
- graph: Render ownership shares from a report as an SVG pie chart
- init: Write a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit

Logs go to stderr; stdout carries only command output.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from orgwarden import __version__
from orgwarden.config import WardenConfig, create_default_config, load_config
from orgwarden.errors import ConfigError, GitHubAPIError
from orgwarden.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="orgwarden",
    help="Maintainer ownership auditor for GitHub organizations",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: WardenConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"orgwarden {__version__}")
        raise typer.Exit()


def _get_config() -> WardenConfig:
    return _config if _config is not None else WardenConfig()


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON log lines"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """orgwarden - audit who maintains what across a GitHub organization."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    # init must be able to replace a broken config
    if ctx.invoked_subcommand == "init":
        return

    try:
        _config = load_config(config_path=config)
    except ConfigError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    if _config.config_path:
        _logger.debug(f"Loaded config from: {_config.config_path}")


# =============================================================================
# audit command
# =============================================================================


@app.command()
def audit(
    alias_file: Annotated[
        Path | None,
        typer.Argument(
            help="JSON file mapping maintainer identifiers to aliases; "
            "enables the unknown-maintainer check",
        ),
    ] = None,
    org: Annotated[
        str | None,
        typer.Option("--org", "-o", help="GitHub organization (overrides config)"),
    ] = None,
    no_cache: Annotated[
        bool,
        typer.Option("--no-cache", help="Ignore cached maintainers files and refetch"),
    ] = False,
) -> None:
    """Audit maintainers.txt files across the organization.

    Prints the project -> maintainers report as JSON, even when validation
    fails.

    Exit codes:
        0: Every project has at least one known maintainer
        1: Validation failed, or a configuration/API error occurred
    """
    from orgwarden.config import resolve_token
    from orgwarden.models import load_alias_table
    from orgwarden.pipeline import AuditOptions, audit_organization

    config = _get_config()

    try:
        token = resolve_token(config)
        aliases = load_alias_table(alias_file)
    except ConfigError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    if alias_file is None:
        _logger.info("No alias file given, maintainer identities will not be validated")
    elif not aliases.enabled:
        _logger.info(
            f"Alias table in {alias_file} is empty, maintainer identities will not be validated"
        )

    options = AuditOptions(
        org=org,
        use_cache=not no_cache,
    )

    try:
        result = audit_organization(config, token, aliases, options)
    except GitHubAPIError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    typer.echo(json.dumps(result.to_report(), indent=2, sort_keys=True))

    if result.validation.failed:
        _logger.error(f"Validation failed with {len(result.validation.issues)} issue(s)")
    raise typer.Exit(result.validation.exit_code)


# =============================================================================
# shares / graph commands
# =============================================================================


def _load_shares(report: Path | None) -> tuple[Path, dict[str, float]]:
    from orgwarden.auditors import aggregate_ownership, load_report

    report_path = report or Path(_get_config().chart.report)
    try:
        mapping = load_report(report_path)
    except ConfigError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    return report_path, aggregate_ownership(mapping)


@app.command()
def shares(
    report: Annotated[
        Path | None,
        typer.Option("--report", "-r", help="Report JSON written by `audit` (overrides config)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output shares as JSON"),
    ] = False,
) -> None:
    """Print each maintainer's ownership share, largest first."""
    from orgwarden.auditors import sorted_shares

    _, ownership = _load_shares(report)
    ordered = sorted_shares(ownership)

    if json_output:
        typer.echo(json.dumps(dict(ordered), indent=2))
        return

    total = sum(value for _, value in ordered)
    for alias, value in ordered:
        percent = (value / total * 100) if total else 0.0
        typer.echo(f"{value:8.3f}  {percent:5.1f}%  {alias}")


@app.command()
def graph(
    report: Annotated[
        Path | None,
        typer.Option("--report", "-r", help="Report JSON written by `audit` (overrides config)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="SVG file to write (overrides config)"),
    ] = None,
) -> None:
    """Render ownership shares as an SVG pie chart."""
    from orgwarden.renderers import render_ownership_chart

    chart_config = _get_config().chart
    report_path, ownership = _load_shares(report)
    output_path = output or Path(chart_config.output)

    _logger.info(f"Rendering {len(ownership)} maintainers from {report_path}")
    try:
        written = render_ownership_chart(
            ownership,
            output_path,
            width=chart_config.width,
            height=chart_config.height,
        )
    except (ValueError, OSError) as e:
        _logger.error(f"Rendering failed: {e}")
        raise typer.Exit(1)

    typer.echo(f"wrote {written}")


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Write a default configuration to .orgwarden/config.yaml."""
    config_file = Path(".orgwarden") / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.parent.mkdir(exist_ok=True)
    config_file.write_text(create_default_config())
    typer.echo(f"Created config: {config_file}")


if __name__ == "__main__":
    app()
