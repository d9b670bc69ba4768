"""Domain-specific exceptions for accounts services."""

from rest_framework import status

from config.exceptions import ConflictError, InsufficientPermissionsError, ServiceError


class AccountsServiceError(ServiceError):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid email or password.'
    default_code = 'invalid_credentials'


class InactiveAccountError(InsufficientPermissionsError, AccountsServiceError):
    """Raised when account is deactivated."""
    default_detail = 'Account is deactivated.'
    default_code = 'inactive_account'


class EmailAlreadyRegisteredError(ConflictError, AccountsServiceError):
    """Raised when registering an email that already has an account."""
    default_detail = 'An account with this email already exists.'
    default_code = 'email_already_registered'
