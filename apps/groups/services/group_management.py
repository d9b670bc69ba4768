"""
Group management service.

Handles group creation with proper transaction safety.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole, generate_invite_code

from .exceptions import GroupNotFoundError

logger = logging.getLogger(__name__)


def create_group(
    *,
    name: str,
    created_by: User,
    max_retries: int = 5
) -> Group:
    """
    Create a new group and add the creator as admin.

    This is a multi-step operation wrapped in a transaction:
    1. Generate unique invite code
    2. Create the group
    3. Create admin membership

    Args:
        name: Group name
        created_by: User who creates (and administers) the group
        max_retries: Maximum attempts to generate unique invite code

    Returns:
        Created Group instance

    Raises:
        RuntimeError: If cannot generate unique invite code after retries
    """
    # Retry logic outside transaction to handle invite code collisions
    for attempt in range(max_retries):
        invite_code = generate_invite_code()

        try:
            # Each attempt is a separate transaction
            with transaction.atomic():
                group = Group.objects.create(
                    name=name,
                    created_by=created_by,
                    invite_code=invite_code
                )

                GroupMembership.objects.create(
                    user=created_by,
                    group=group,
                    role=GroupRole.ADMIN
                )

                logger.info("Group %s created by user %s", group.id, created_by.id)
                return group

        except IntegrityError:
            # Invite code collision
            logger.warning("Invite code collision on attempt %d", attempt + 1)
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique invite code after {max_retries} attempts"
                )
            continue

    raise RuntimeError("Unexpected error in group creation")


def get_group_by_id(*, group_id: UUID, for_update: bool = False) -> Group:
    """
    Get a group by ID.

    Args:
        group_id: UUID of the group
        for_update: Lock the row until the surrounding transaction ends

    Returns:
        Group instance

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    queryset = Group.objects.all()
    if for_update:
        queryset = queryset.select_for_update()

    try:
        return queryset.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")
