"""User registration service."""

import logging

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from .exceptions import EmailAlreadyRegisteredError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(*, email: str, password: str, display_name: str = '') -> User:
    """
    Create a new account.

    Args:
        email: Login email, normalized before storage
        password: Raw password, already validated by the caller
        display_name: Optional public name

    Returns:
        The created User

    Raises:
        EmailAlreadyRegisteredError: If the email is already taken
    """
    email = User.objects.normalize_email(email)

    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegisteredError()

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                display_name=display_name or '',
            )
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        raise EmailAlreadyRegisteredError()

    logger.info("Registered user %s", user.id)
    return user
