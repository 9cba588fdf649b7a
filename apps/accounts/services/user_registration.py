"""Owner account registration."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import EmailAlreadyRegisteredError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = ""
) -> User:
    """
    Register a new project owner account.

    The email is normalized first, and an address that differs from an
    existing one only by letter case counts as taken.

    Raises:
        EmailAlreadyRegisteredError: If the email is already registered
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegisteredError("An account with this email already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name
        )
    except IntegrityError as e:
        # Lost a race with a concurrent registration
        raise EmailAlreadyRegisteredError("An account with this email already exists") from e

    logger.info("Registered user %s", user.id)
    return user
