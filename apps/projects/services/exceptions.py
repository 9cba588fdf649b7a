"""
Domain-specific exceptions for projects app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ProjectsServiceError(Exception):
    """Base exception for all projects service errors."""
    pass


class ProjectNotFoundError(ProjectsServiceError):
    """Raised when a project does not exist or belongs to another user."""
    pass


class PartnerNotFoundError(ProjectsServiceError):
    """Raised when a partner does not exist within the project."""
    pass


class ProjectValidationError(ProjectsServiceError):
    """Raised when project data violates a business rule."""
    pass
