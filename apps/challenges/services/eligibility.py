"""
Eligibility rules: can this user complete this challenge in this group right now.

``evaluate_eligibility`` is shared by the read-only check exposed to clients
and by completion submission, which runs it again while holding the
submitter's membership lock.
"""

from typing import NamedTuple
from uuid import UUID

from apps.challenges.models import Challenge
from apps.completions.models import ChallengeCompletion
from apps.groups.models import GroupChallenge


class Reason:
    OK = 'ok'
    CHALLENGE_NOT_FOUND = 'challenge_not_found'
    NOT_SELECTED = 'not_selected'
    ALREADY_COMPLETED = 'already_completed'


class Eligibility(NamedTuple):
    completable: bool
    reason: str


def evaluate_eligibility(*, challenge: Challenge, group_id: UUID, user_id: UUID) -> Eligibility:
    """
    Apply the completion rules to an already loaded challenge.

    Rules, in order:
        1. The challenge is active.
        2. The group has the challenge in its selected set.
        3. A non-repeatable challenge has no completion by the user in the
           group, whatever its approval state.
    """
    if not challenge.is_active:
        return Eligibility(False, Reason.CHALLENGE_NOT_FOUND)

    selected = GroupChallenge.objects.filter(
        group_id=group_id,
        challenge=challenge,
    ).exists()
    if not selected:
        return Eligibility(False, Reason.NOT_SELECTED)

    if not challenge.is_repeatable:
        already_done = ChallengeCompletion.objects.filter(
            group_id=group_id,
            user_id=user_id,
            challenge=challenge,
        ).exists()
        if already_done:
            return Eligibility(False, Reason.ALREADY_COMPLETED)

    return Eligibility(True, Reason.OK)


def is_completable(*, group_id: UUID, user_id: UUID, challenge_id: UUID) -> Eligibility:
    """
    Check whether a challenge can be completed, without raising.

    Args:
        group_id: UUID of the group
        user_id: UUID of the would-be submitter
        challenge_id: UUID of the challenge

    Returns:
        Eligibility(completable, reason)
    """
    try:
        challenge = Challenge.objects.get(id=challenge_id)
    except Challenge.DoesNotExist:
        return Eligibility(False, Reason.CHALLENGE_NOT_FOUND)

    return evaluate_eligibility(challenge=challenge, group_id=group_id, user_id=user_id)
