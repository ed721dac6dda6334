"""orgwarden auditors - the decision logic of an ownership audit.

- maintainers: maintainers.txt parsing and alias substitution
- validation: empty/unknown maintainer checks
- ownership: per-maintainer ownership share aggregation
"""

from orgwarden.auditors.maintainers import parse_maintainers_file
from orgwarden.auditors.ownership import aggregate_ownership, load_report, sorted_shares
from orgwarden.auditors.validation import validate_maintainers

__all__ = [
    "aggregate_ownership",
    "load_report",
    "parse_maintainers_file",
    "sorted_shares",
    "validate_maintainers",
]
