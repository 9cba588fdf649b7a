"""
Domain exceptions for purchases app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class PurchaseServiceError(Exception):
    """Base exception for purchase service errors."""
    pass


class PurchaseValidationError(PurchaseServiceError):
    """Raised when purchase input violates a business rule."""
    pass


class ReferenceNotFoundError(PurchaseServiceError):
    """Raised when a unit or partner is not part of the purchase's project."""
    pass


class InvalidSplitError(PurchaseServiceError):
    """Raised when split calculation does not add up to the total."""
    pass
