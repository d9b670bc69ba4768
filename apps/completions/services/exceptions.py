"""
Domain exceptions for challenge completions.

Every exception subclasses one of the error kinds in ``config.exceptions``
(validation, not found, conflict, permission), which fixes the HTTP status.
"""

from config.exceptions import (
    ConflictError,
    InsufficientPermissionsError,
    InvalidRequestError,
    NotFoundError,
)


class MissingFieldError(InvalidRequestError):
    """A required identifier was not supplied."""
    default_detail = 'Group ID, User ID, and Challenge ID are required.'
    default_code = 'missing_field'


class CompletionNotFoundError(NotFoundError):
    """Completion does not exist."""
    default_detail = 'Completion not found.'
    default_code = 'completion_not_found'


class UserNotFoundError(NotFoundError):
    """Referenced user does not exist."""
    default_detail = 'User not found.'
    default_code = 'user_not_found'


class ChallengeNotSelectedError(ConflictError):
    """Challenge is not part of the group's challenge set."""
    default_detail = 'This challenge is not available in this group.'
    default_code = 'challenge_not_selected'


class DuplicateNonRepeatableError(ConflictError):
    """Non-repeatable challenge already has a completion for this user and group."""
    default_detail = 'This challenge has already been completed and is not repeatable.'
    default_code = 'duplicate_non_repeatable'


class AlreadyApprovedError(ConflictError):
    """Completion was approved before; approving again would double-credit."""
    default_detail = 'Completion is already approved.'
    default_code = 'already_approved'


class SelfApprovalForbiddenError(ConflictError):
    """Submitter tried to approve their own completion."""
    default_detail = 'You cannot approve your own completion.'
    default_code = 'self_approval_forbidden'


class AlreadySettledError(ConflictError):
    """Points for this completion were already applied to balances."""
    default_detail = 'Completion points were already settled.'
    default_code = 'already_settled'


class ApproverNotMemberError(InsufficientPermissionsError):
    """Approver does not belong to the completion's group."""
    default_detail = 'Only members of the group can approve its completions.'
    default_code = 'approver_not_member'


class CompletionDeleteForbiddenError(InsufficientPermissionsError):
    """Only the submitter or a group admin may delete a completion."""
    default_detail = 'Only the submitter or a group admin can delete this completion.'
    default_code = 'completion_delete_forbidden'


class InvalidIdentifierError(InvalidRequestError):
    """An id is not a well-formed UUID."""
    default_detail = 'Identifier is not a valid UUID.'
    default_code = 'invalid_identifier'


class ApproverIdentityMismatchError(InsufficientPermissionsError):
    """Approver in the request body is not the authenticated user."""
    default_detail = 'You can only approve completions as yourself.'
    default_code = 'approver_identity_mismatch'
