"""
Accounts app services layer.

Project owners register and log in with email and password. Every
other app scopes its data to the owner resolved here.
"""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
)

from .user_registration import register_user
from .user_authentication import authenticate_user


__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyRegisteredError',
    'InvalidCredentialsError',
    'InactiveAccountError',

    # Registration & Login
    'register_user',
    'authenticate_user',
]
