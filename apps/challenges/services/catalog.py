"""
Challenge catalog queries.

The catalog is read-only from the API; challenges are curated in the admin.
"""

from typing import Iterable, List
from uuid import UUID

from django.db.models import Prefetch, QuerySet

from apps.challenges.models import Challenge, ChallengeCategory

from .exceptions import ChallengeNotFoundError


def get_active_challenge(*, challenge_id: UUID) -> Challenge:
    """
    Fetch an active challenge.

    Raises:
        ChallengeNotFoundError: If the challenge is missing or inactive
    """
    try:
        return (
            Challenge.objects
            .select_related('category')
            .get(id=challenge_id, is_active=True)
        )
    except Challenge.DoesNotExist:
        raise ChallengeNotFoundError(f"Challenge with ID {challenge_id} not found")


def get_catalog() -> QuerySet[ChallengeCategory]:
    """Categories that have at least one active challenge, with those challenges prefetched."""
    return (
        ChallengeCategory.objects
        .filter(challenges__is_active=True)
        .distinct()
        .prefetch_related(
            Prefetch(
                'challenges',
                queryset=Challenge.objects.filter(is_active=True).order_by('description'),
                to_attr='active_challenges',
            )
        )
        .order_by('sort_order', 'name')
    )


def group_by_category(challenges: Iterable[Challenge]) -> List[dict]:
    """
    Bucket challenges by category, keeping category display order.

    Args:
        challenges: Challenges with ``category`` already loaded

    Returns:
        List of ``{'category': ChallengeCategory, 'challenges': [...]}``
    """
    buckets = {}
    for challenge in challenges:
        bucket = buckets.setdefault(
            challenge.category_id,
            {'category': challenge.category, 'challenges': []},
        )
        bucket['challenges'].append(challenge)

    return sorted(
        buckets.values(),
        key=lambda b: (b['category'].sort_order, b['category'].name),
    )
