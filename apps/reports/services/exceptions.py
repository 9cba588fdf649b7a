"""
Domain exceptions for reports app.

Report builders are read-only; the only failure they report is a
project that cannot be found.
"""


class ReportsServiceError(Exception):
    """Base exception for all reports service errors."""
    pass


class ReportProjectNotFoundError(ReportsServiceError):
    """Raised when the project to report on does not exist."""
    pass
