"""Exception hierarchy for orgwarden.

Validation failures are not exceptions: they are collected into a
ValidationResult so the report can still be emitted.
"""


class OrgwardenError(Exception):
    """Base class for orgwarden errors."""


class ConfigError(OrgwardenError):
    """Fatal configuration problem detected before any processing.

    Raised for a missing credential, a missing/empty/malformed alias file,
    a malformed report file or an invalid configuration file.
    """


class GitHubAPIError(OrgwardenError):
    """Listing the organization's repositories failed.

    Attributes:
        url: Request URL that failed
        status_code: HTTP status code, if a response was received
    """

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        """Initialize the error.

        Args:
            message: Error description
            url: Request URL that failed
            status_code: HTTP status code, if any
        """
        super().__init__(message)
        self.url = url
        self.status_code = status_code
