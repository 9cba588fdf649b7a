"""
Domain exceptions for exports app.

These exceptions represent failures of external collaborators and should
be caught in views and converted to appropriate HTTP responses.
"""


class ExportsServiceError(Exception):
    """Base exception for export service errors."""
    pass


class ExportDependencyError(ExportsServiceError):
    """Raised when an external service needed for an export fails."""
    pass


class SpreadsheetSyncError(ExportDependencyError):
    """Raised when pushing tables to Google Sheets fails."""
    pass
