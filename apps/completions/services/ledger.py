"""
Completion ledger service.

Recording, listing and deleting completions. New completions start pending
and do not touch any balance; points move only through ``settlement``.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.challenges.services import (
    ChallengeNotFoundError,
    Reason,
    evaluate_eligibility,
    get_active_challenge,
)
from apps.completions.models import ChallengeCompletion
from apps.groups.models import GroupMembership, GroupRole
from apps.groups.services import get_group_by_id, get_membership

from .exceptions import (
    ChallengeNotSelectedError,
    CompletionDeleteForbiddenError,
    CompletionNotFoundError,
    DuplicateNonRepeatableError,
    MissingFieldError,
)
from .settlement import as_uuid, reverse_settlement

logger = logging.getLogger(__name__)

_REJECTIONS = {
    Reason.CHALLENGE_NOT_FOUND: ChallengeNotFoundError,
    Reason.NOT_SELECTED: ChallengeNotSelectedError,
    Reason.ALREADY_COMPLETED: DuplicateNonRepeatableError,
}


@transaction.atomic
def submit_completion(
    *,
    group_id: UUID,
    user_id: UUID,
    challenge_id: UUID,
    evidence_url: Optional[str] = None,
    notes: Optional[str] = None,
) -> ChallengeCompletion:
    """
    Record a pending completion.

    The submitter's membership row is locked while the completion rules run,
    so two concurrent submissions of the same non-repeatable challenge cannot
    both pass the duplicate check.

    Args:
        group_id: UUID of the group
        user_id: UUID of the submitter
        challenge_id: UUID of the completed challenge
        evidence_url: Optional link to a photo or video
        notes: Optional free text

    Returns:
        Created ChallengeCompletion (pending, unsettled)

    Raises:
        MissingFieldError: If any of the three ids is missing
        InvalidIdentifierError: If an id is not a valid UUID
        ChallengeNotFoundError: If challenge doesn't exist or is inactive
        GroupNotFoundError: If group doesn't exist
        MembershipNotFoundError: If the submitter is not in the group
        ChallengeNotSelectedError: If the group hasn't selected the challenge
        DuplicateNonRepeatableError: If a non-repeatable challenge was already submitted
    """
    missing = [
        name for name, value in (
            ('group_id', group_id),
            ('user_id', user_id),
            ('challenge_id', challenge_id),
        )
        if not value
    ]
    if missing:
        raise MissingFieldError(f"Missing required fields: {', '.join(missing)}")

    group_id = as_uuid(group_id, field='group_id')
    user_id = as_uuid(user_id, field='user_id')
    challenge_id = as_uuid(challenge_id, field='challenge_id')

    challenge = get_active_challenge(challenge_id=challenge_id)
    group = get_group_by_id(group_id=group_id)
    get_membership(group_id=group.id, user_id=user_id, for_update=True)

    eligibility = evaluate_eligibility(challenge=challenge, group_id=group.id, user_id=user_id)
    if not eligibility.completable:
        logger.info(
            "Completion of challenge %s by user %s in group %s rejected: %s",
            challenge.id,
            user_id,
            group.id,
            eligibility.reason,
        )
        raise _REJECTIONS[eligibility.reason]()

    completion = ChallengeCompletion.objects.create(
        group=group,
        user_id=user_id,
        challenge=challenge,
        evidence_url=evidence_url or None,
        notes=notes or None,
        points=challenge.signed_points,
    )

    logger.info(
        "Completion %s submitted by user %s in group %s (%+d points pending)",
        completion.id,
        user_id,
        group.id,
        completion.points,
    )
    return completion


def _completions_with_details() -> QuerySet[ChallengeCompletion]:
    return ChallengeCompletion.objects.select_related(
        'challenge__category',
        'user',
        'approved_by',
    ).order_by('-completed_at')


def list_group_completions(*, group_id: UUID) -> QuerySet[ChallengeCompletion]:
    """
    All completions in a group, newest first.

    Pending and approved completions are both included. An unknown group
    gives an empty result.
    """
    return _completions_with_details().filter(group_id=group_id)


def list_user_group_completions(*, user_id: UUID, group_id: UUID) -> QuerySet[ChallengeCompletion]:
    """All completions by one user in one group, newest first."""
    return _completions_with_details().filter(group_id=group_id, user_id=user_id)


@transaction.atomic
def delete_completion(*, completion_id: UUID, deleted_by: Optional[User] = None) -> None:
    """
    Delete a completion, reversing its points if they were settled.

    Args:
        completion_id: UUID of the completion
        deleted_by: User requesting the delete. When given, must be the
            submitter or an admin of the completion's group.

    Raises:
        CompletionNotFoundError: If completion doesn't exist
        CompletionDeleteForbiddenError: If deleted_by may not delete it
    """
    completion_id = as_uuid(completion_id, field='completion_id')

    try:
        completion = (
            ChallengeCompletion.objects
            .select_for_update()
            .get(id=completion_id)
        )
    except ChallengeCompletion.DoesNotExist:
        raise CompletionNotFoundError(f"Completion with ID {completion_id} not found")

    if deleted_by is not None and completion.user_id != deleted_by.id:
        is_group_admin = GroupMembership.objects.filter(
            group_id=completion.group_id,
            user_id=deleted_by.id,
            role=GroupRole.ADMIN,
        ).exists()
        if not is_group_admin:
            raise CompletionDeleteForbiddenError()

    reversed_points = reverse_settlement(completion)
    completion.delete()

    logger.info(
        "Completion %s deleted by %s (points reversed: %s)",
        completion_id,
        deleted_by.id if deleted_by is not None else 'system',
        reversed_points,
    )
