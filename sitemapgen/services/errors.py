"""Errors that abort a sitemap build."""


class SitemapError(Exception):
    """Base class for fatal sitemap build errors."""


class QueryError(SitemapError):
    """The data layer answered a query with a non-empty error list."""

    def __init__(self, errors: list) -> None:
        self.errors = errors
        super().__init__(", ".join(_error_message(e) for e in errors))


class MissingSlugError(SitemapError):
    """A content record has no slug, so its URL cannot be determined."""


class ConfigurationError(SitemapError):
    """Options or query results are unusable (e.g. no site URL)."""


def _error_message(error) -> str:
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(error)
