# analytics_reporting/core/exceptions.py
"""Error taxonomy for report data retrieval."""

from pymongo.errors import PyMongoError

# Driver failures are surfaced unchanged; callers catch them under this name.
StoreExecutionError = PyMongoError


class ReportingError(Exception):
    """Base class for all report data source errors."""


class InvalidRequest(ReportingError):
    """The report query is missing or malformed."""


class FilterResolutionError(ReportingError):
    """A filter attached to the request could not be applied."""


class UnsupportedFilterKind(FilterResolutionError):
    """No filter implementation is registered for the requested kind."""

    def __init__(self, kind: str, filter_name: str = ""):
        self.kind = kind
        self.filter_name = filter_name
        label = f" for filter '{filter_name}'" if filter_name else ""
        super().__init__(f"Unsupported filter kind '{kind}'{label}")


class ConfigurationError(ReportingError):
    """Required configuration, such as a connection string, is missing."""
