"""
Error taxonomy shared by all apps and the DRF exception handler.

Every domain exception raised by a service belongs to one of the kinds below.
Views let them propagate; ``api_exception_handler`` renders them as
``{"error": ..., "code": ...}``. Constraint violations become
``ConflictError`` and other database failures ``TransientStoreError``, so
storage error text never reaches the client. Model-level validation errors
(such as a malformed UUID reaching a query) become ``InvalidRequestError``.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class ServiceError(APIException):
    """Base class for domain errors raised by service functions."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'The request could not be completed.'
    default_code = 'service_error'


class InvalidRequestError(ServiceError):
    """Missing or malformed input. Client fault, do not retry."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'validation_error'


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class ConflictError(ServiceError):
    """Request conflicts with current state. Retrying unchanged fails again."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Request conflicts with the current state.'
    default_code = 'conflict'


class InsufficientPermissionsError(ServiceError):
    """Caller is not allowed to perform the operation."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'insufficient_permissions'


class TransientStoreError(ServiceError):
    """Connection or transaction failure. Safe to retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Storage is temporarily unavailable, please retry.'
    default_code = 'transient_store_error'


def api_exception_handler(exc, context):
    """
    DRF exception handler.

    Args:
        exc: Exception raised while handling the request
        context: DRF handler context (view, request, ...)

    Returns:
        Response, or None to let Django produce a 500
    """
    if isinstance(exc, DjangoValidationError):
        exc = InvalidRequestError('; '.join(exc.messages))

    elif isinstance(exc, IntegrityError):
        logger.warning("Constraint violation: %s", exc.__class__.__name__, exc_info=exc)
        exc = ConflictError()

    elif isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(
            "Store failure in %s: %s",
            view.__class__.__name__ if view else 'unknown view',
            exc.__class__.__name__,
            exc_info=exc,
        )
        exc = TransientStoreError()

    if isinstance(exc, ServiceError):
        set_rollback()
        return Response(
            {'error': str(exc.detail), 'code': exc.get_codes()},
            status=exc.status_code,
        )

    return exception_handler(exc, context)
