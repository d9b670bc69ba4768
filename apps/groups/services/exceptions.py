"""
Domain-specific exceptions for groups app.

Each exception belongs to one of the error kinds in ``config.exceptions``,
which decides the HTTP status the client sees.
"""

from config.exceptions import ConflictError, InvalidRequestError, NotFoundError


class GroupNotFoundError(NotFoundError):
    """Raised when a group does not exist."""
    default_detail = 'Group not found.'
    default_code = 'group_not_found'


class InvalidInviteCodeError(NotFoundError):
    """Raised when no group matches an invite code."""
    default_detail = 'Invalid invite code.'
    default_code = 'invalid_invite_code'


class AlreadyMemberError(ConflictError):
    """Raised when a user tries to join a group they're already in."""
    default_detail = 'User is already a member of this group.'
    default_code = 'already_member'


class MembershipNotFoundError(NotFoundError):
    """Raised when a user is not a member of the group an action targets."""
    default_detail = 'User is not a member of this group.'
    default_code = 'membership_not_found'


class EmptyChallengeSetError(InvalidRequestError):
    """Raised when a group's challenge set would be replaced by nothing."""
    default_detail = 'At least one challenge must be selected.'
    default_code = 'empty_challenge_set'
