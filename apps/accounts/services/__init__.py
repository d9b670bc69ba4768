"""
Accounts app services layer.

Registration and authentication; scoring fields on User are owned by the completions app.
"""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    EmailAlreadyRegisteredError,
)

from .user_authentication import authenticate_user
from .user_registration import register_user


__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'EmailAlreadyRegisteredError',

    # Authentication
    'authenticate_user',

    # Registration
    'register_user',
]
