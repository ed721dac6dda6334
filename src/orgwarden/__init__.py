"""orgwarden - Maintainer ownership auditor for GitHub organizations.

orgwarden collects the maintainers.txt file of every repository in a GitHub
organization, resolves maintainer identifiers to canonical aliases, validates
that every project has at least one known maintainer, and prints a JSON
ownership report. A companion command turns that report into a pie chart of
each maintainer's share of the organization.

Core principles:
- Report-First: The full report is always printed, even when validation fails
- CI/CD Compatibility: No interactive prompts, meaningful exit codes
- Degrade, don't abort: A repository that cannot be fetched counts as empty
"""

__version__ = "0.1.0"
__author__ = "orgwarden Contributors"
