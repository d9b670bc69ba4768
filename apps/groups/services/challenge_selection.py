"""
Group challenge selection service.

A group's challenge list is the set of GroupChallenge rows. It is replaced
wholesale: callers always send the full desired set.
"""

import logging
from typing import Iterable, List
from uuid import UUID

from django.db import transaction

from apps.challenges.models import Challenge
from apps.challenges.services import ChallengeNotFoundError, group_by_category
from apps.groups.models import GroupChallenge

from .exceptions import EmptyChallengeSetError
from .group_management import get_group_by_id

logger = logging.getLogger(__name__)


def get_group_challenge_set(*, group_id: UUID) -> List[dict]:
    """
    Get the challenges a group has opted into, grouped by category.

    Args:
        group_id: UUID of the group

    Returns:
        List of ``{'category': ChallengeCategory, 'challenges': [Challenge, ...]}``

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    group = get_group_by_id(group_id=group_id)

    challenges = (
        Challenge.objects
        .filter(group_selections__group=group)
        .select_related('category')
        .order_by('category__sort_order', 'category__name', 'description')
    )
    return group_by_category(challenges)


@transaction.atomic
def replace_group_challenges(*, group_id: UUID, challenge_ids: Iterable[UUID]) -> List[GroupChallenge]:
    """
    Replace a group's entire challenge selection.

    Locks the group row so concurrent replacements apply one after the
    other, then deletes every association and inserts the new set.
    Completions already recorded are untouched.

    Args:
        group_id: UUID of the group
        challenge_ids: Full desired set as UUIDs or UUID strings; duplicates
            are ignored

    Returns:
        Created GroupChallenge rows

    Raises:
        EmptyChallengeSetError: If no challenge ids were given
        GroupNotFoundError: If group doesn't exist
        ChallengeNotFoundError: If any id is malformed, unknown or inactive
    """
    wanted = set()
    for challenge_id in challenge_ids:
        try:
            wanted.add(challenge_id if isinstance(challenge_id, UUID) else UUID(str(challenge_id)))
        except ValueError:
            raise ChallengeNotFoundError(f"Unknown challenge: {challenge_id}")

    if not wanted:
        raise EmptyChallengeSetError("challenge_ids must contain at least one challenge")

    group = get_group_by_id(group_id=group_id, for_update=True)

    challenges = list(Challenge.objects.filter(id__in=wanted, is_active=True))
    missing = wanted - {c.id for c in challenges}
    if missing:
        raise ChallengeNotFoundError(
            f"Unknown or inactive challenges: {', '.join(sorted(str(m) for m in missing))}"
        )

    GroupChallenge.objects.filter(group=group).delete()
    selections = GroupChallenge.objects.bulk_create(
        GroupChallenge(group=group, challenge=challenge) for challenge in challenges
    )

    logger.info("Group %s challenge set replaced with %d challenges", group.id, len(selections))
    return selections
