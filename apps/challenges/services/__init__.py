"""
Challenges app services layer.

Catalog reads and the eligibility rules used before a completion is recorded.
"""

from .exceptions import ChallengeNotFoundError

from .catalog import (
    get_active_challenge,
    get_catalog,
    group_by_category,
)

from .eligibility import (
    Eligibility,
    Reason,
    evaluate_eligibility,
    is_completable,
)


__all__ = [
    # Exceptions
    'ChallengeNotFoundError',

    # Catalog
    'get_active_challenge',
    'get_catalog',
    'group_by_category',

    # Eligibility
    'Eligibility',
    'Reason',
    'evaluate_eligibility',
    'is_completable',
]
