"""
Point settlement.

This module is the only code that changes point balances. A completion's
signed delta is applied once (``settle``) when it is approved and taken back
once (``reverse_settlement``) if a settled completion is deleted. Three
balances move together: the submitter's global total, their per-group
balance and their completed-challenge count.

Callers must hold a row lock on the completion (``select_for_update``) in the
surrounding transaction; balance writes use ``F()`` expressions so concurrent
settlements for the same user never overwrite each other.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import User
from apps.completions.models import ChallengeCompletion
from apps.groups.models import GroupMembership
from apps.groups.services import MembershipNotFoundError

from .exceptions import (
    AlreadyApprovedError,
    AlreadySettledError,
    ApproverNotMemberError,
    CompletionNotFoundError,
    InvalidIdentifierError,
    MissingFieldError,
    SelfApprovalForbiddenError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


def as_uuid(value, *, field: str) -> UUID:
    """
    Parse an id given as a UUID or a string in any letter case.

    Raises:
        InvalidIdentifierError: If value is not a well-formed UUID
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise InvalidIdentifierError(f"{field} is not a valid UUID: {value}")


def _apply_delta(completion: ChallengeCompletion, direction: int) -> None:
    """Add (direction=1) or remove (direction=-1) a completion's points."""
    delta = completion.points * direction

    User.objects.filter(id=completion.user_id).update(
        total_points=F('total_points') + delta,
        challenges_completed=F('challenges_completed') + direction,
    )

    updated = GroupMembership.objects.filter(
        group_id=completion.group_id,
        user_id=completion.user_id,
    ).update(points=F('points') + delta)

    if not updated:
        if direction > 0:
            raise MembershipNotFoundError(
                f"User {completion.user_id} is not a member of group {completion.group_id}"
            )
        logger.warning(
            "Membership for user %s in group %s is gone, only global total reversed",
            completion.user_id,
            completion.group_id,
        )


@transaction.atomic
def settle(completion: ChallengeCompletion) -> ChallengeCompletion:
    """
    Apply an approved completion's points to the submitter's balances.

    Raises:
        AlreadySettledError: If the points were applied before
        MembershipNotFoundError: If the submitter has no membership row
    """
    if completion.settled:
        raise AlreadySettledError(f"Completion {completion.id} is already settled")

    _apply_delta(completion, 1)

    completion.settled = True
    completion.settled_at = timezone.now()
    completion.save(update_fields=['settled', 'settled_at'])

    return completion


@transaction.atomic
def reverse_settlement(completion: ChallengeCompletion) -> bool:
    """
    Take a settled completion's points back out of the balances.

    Unsettled (pending) completions never touched a balance, so nothing is
    reversed for them.

    Returns:
        True if balances changed
    """
    if not completion.settled:
        return False

    _apply_delta(completion, -1)

    completion.settled = False
    completion.settled_at = None
    completion.save(update_fields=['settled', 'settled_at'])

    logger.info(
        "Reversed %+d points for user %s in group %s (completion %s)",
        completion.points,
        completion.user_id,
        completion.group_id,
        completion.id,
    )
    return True


@transaction.atomic
def approve_completion(*, completion_id: UUID, approver_id: UUID) -> ChallengeCompletion:
    """
    Approve a pending completion and settle its points.

    All of it happens in one transaction:
        1. Lock the completion row and re-check it is still pending.
        2. Mark it approved by ``approver_id``.
        3. Add its points to the submitter's global total.
        4. Add its points to the submitter's balance in the group.

    Two concurrent approvals serialize on the row lock; the second one sees
    ``approved=True`` and fails instead of crediting twice.

    Args:
        completion_id: UUID of the completion
        approver_id: UUID of the approving user (never the submitter)

    Returns:
        The approved, settled completion

    Raises:
        MissingFieldError: If approver_id is missing
        InvalidIdentifierError: If an id is not a valid UUID
        CompletionNotFoundError: If completion doesn't exist
        AlreadyApprovedError: If it was approved before
        SelfApprovalForbiddenError: If the submitter approves their own completion
        UserNotFoundError: If the approver doesn't exist
        ApproverNotMemberError: If the approver is not in the completion's group
    """
    if not approver_id:
        raise MissingFieldError("Approver ID is required")

    completion_id = as_uuid(completion_id, field='completion_id')
    approver_id = as_uuid(approver_id, field='approver_id')

    try:
        completion = (
            ChallengeCompletion.objects
            .select_for_update()
            .get(id=completion_id)
        )
    except ChallengeCompletion.DoesNotExist:
        raise CompletionNotFoundError(f"Completion with ID {completion_id} not found")

    if completion.approved:
        logger.warning("Repeated approval of completion %s rejected", completion.id)
        raise AlreadyApprovedError("Completion is already approved")

    if completion.user_id == approver_id:
        logger.warning("Self-approval of completion %s rejected", completion.id)
        raise SelfApprovalForbiddenError("You cannot approve your own completion")

    if not User.objects.filter(id=approver_id).exists():
        raise UserNotFoundError(f"User with ID {approver_id} not found")

    is_member = GroupMembership.objects.filter(
        group_id=completion.group_id,
        user_id=approver_id,
    ).exists()
    if not is_member:
        raise ApproverNotMemberError("Only members of the group can approve its completions")

    completion.approved = True
    completion.approved_by_id = approver_id
    completion.approved_at = timezone.now()
    completion.save(update_fields=['approved', 'approved_by', 'approved_at'])

    settle(completion)

    logger.info(
        "Completion %s approved by %s, %+d points to user %s in group %s",
        completion.id,
        approver_id,
        completion.points,
        completion.user_id,
        completion.group_id,
    )
    return completion
