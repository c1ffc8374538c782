"""Custom exceptions for the blog search application."""


class BlogSearchError(Exception):
    """Base exception for the blog search application."""

    pass


class SearchFailed(BlogSearchError):
    """A search could not produce a payload.

    Covers network failures, error statuses from the API and bodies that
    do not parse into a blog payload.
    """

    def __init__(self, reason: str, status_code: int = 0):
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)


class ConfigurationError(BlogSearchError):
    """Exception raised for configuration errors."""

    pass
