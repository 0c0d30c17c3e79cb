"""Error types raised by the catalog pipeline and the query layer."""


class CatalogError(Exception):
    """Base class for failures while loading the venue catalog."""


class FetchError(CatalogError):
    """Catalog source unreachable or answered with an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(CatalogError):
    """A row in the fetched CSV could not be turned into a Venue.

    The whole refresh attempt is aborted; no partial catalog is installed.
    """

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class StartupError(Exception):
    """Initial catalog load failed; the service must not start serving."""


class QueryValidationError(ValueError):
    """Missing or malformed coordinates in a query."""
