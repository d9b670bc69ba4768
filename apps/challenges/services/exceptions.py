"""Domain-specific exceptions for the challenge catalog."""

from config.exceptions import NotFoundError


class ChallengeNotFoundError(NotFoundError):
    """Raised when a challenge does not exist or is no longer active."""
    default_detail = 'Challenge not found.'
    default_code = 'challenge_not_found'
