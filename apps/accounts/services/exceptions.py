"""Errors raised by account registration and login."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class EmailAlreadyRegisteredError(AccountsServiceError):
    """Raised when an account already uses the email (case-insensitive)."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when the email/password pair does not match an account."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when a deactivated owner tries to log in."""
    pass
