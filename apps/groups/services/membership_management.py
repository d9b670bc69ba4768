"""
Membership management service.

Handles joining groups and reading the roster. Per-group point balances are
only read here; the completions settlement service writes them.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole

from .exceptions import (
    GroupNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
    MembershipNotFoundError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def join_group(*, invite_code: str, user: User) -> GroupMembership:
    """
    Join a group using its invite code.

    Uses row-level locking to prevent race conditions when checking
    and creating memberships.

    Args:
        invite_code: Code shared by a group member
        user: User joining the group

    Returns:
        Created GroupMembership instance

    Raises:
        InvalidInviteCodeError: If no group has this code
        AlreadyMemberError: If user is already a member (caught from IntegrityError)
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(invite_code=invite_code.strip().upper())
        )
    except Group.DoesNotExist:
        raise InvalidInviteCodeError("Invalid invite code")

    if group.has_member(user.id):
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    try:
        # Savepoint so the outer transaction stays usable after a duplicate
        with transaction.atomic():
            membership = GroupMembership.objects.create(
                user=user,
                group=group,
                role=GroupRole.MEMBER
            )
    except IntegrityError:
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    logger.info("User %s joined group %s", user.id, group.id)
    return membership


def get_membership(*, group_id: UUID, user_id: UUID, for_update: bool = False) -> GroupMembership:
    """
    Get a user's membership row in a group.

    Args:
        group_id: UUID of the group
        user_id: UUID of the user
        for_update: Lock the row until the surrounding transaction ends

    Raises:
        MembershipNotFoundError: If the user is not a member
    """
    if for_update:
        queryset = GroupMembership.objects.select_for_update()
    else:
        queryset = GroupMembership.objects.select_related('user', 'group')

    try:
        return queryset.get(group_id=group_id, user_id=user_id)
    except GroupMembership.DoesNotExist:
        raise MembershipNotFoundError(
            f"User {user_id} is not a member of group {group_id}"
        )


def get_group_leaderboard(*, group_id: UUID) -> QuerySet[GroupMembership]:
    """
    Get group members ranked by their points in this group.

    Ties are broken by who joined first.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    if not Group.objects.filter(id=group_id).exists():
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    return (
        GroupMembership.objects
        .filter(group_id=group_id)
        .select_related('user')
        .order_by('-points', 'joined_at')
    )
