"""
Completions app services layer.

The ledger records and removes completions; settlement is the single place
where point balances change.
"""

from .exceptions import (
    MissingFieldError,
    CompletionNotFoundError,
    UserNotFoundError,
    ChallengeNotSelectedError,
    DuplicateNonRepeatableError,
    AlreadyApprovedError,
    SelfApprovalForbiddenError,
    AlreadySettledError,
    ApproverNotMemberError,
    CompletionDeleteForbiddenError,
    InvalidIdentifierError,
    ApproverIdentityMismatchError,
)

from .settlement import (
    approve_completion,
    settle,
    reverse_settlement,
)

from .ledger import (
    submit_completion,
    list_group_completions,
    list_user_group_completions,
    delete_completion,
)


__all__ = [
    # Exceptions
    'MissingFieldError',
    'CompletionNotFoundError',
    'UserNotFoundError',
    'ChallengeNotSelectedError',
    'DuplicateNonRepeatableError',
    'AlreadyApprovedError',
    'SelfApprovalForbiddenError',
    'AlreadySettledError',
    'ApproverNotMemberError',
    'CompletionDeleteForbiddenError',
    'InvalidIdentifierError',
    'ApproverIdentityMismatchError',

    # Settlement
    'approve_completion',
    'settle',
    'reverse_settlement',

    # Ledger
    'submit_completion',
    'list_group_completions',
    'list_user_group_completions',
    'delete_completion',
]
