"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    GroupNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
    MembershipNotFoundError,
    EmptyChallengeSetError,
)

from .group_management import (
    create_group,
    get_group_by_id,
)

from .membership_management import (
    join_group,
    get_membership,
    get_group_leaderboard,
)

from .challenge_selection import (
    get_group_challenge_set,
    replace_group_challenges,
)


__all__ = [
    # Exceptions
    'GroupNotFoundError',
    'InvalidInviteCodeError',
    'AlreadyMemberError',
    'MembershipNotFoundError',
    'EmptyChallengeSetError',

    # Group Management
    'create_group',
    'get_group_by_id',

    # Membership Management
    'join_group',
    'get_membership',
    'get_group_leaderboard',

    # Challenge Selection
    'get_group_challenge_set',
    'replace_group_challenges',
]
