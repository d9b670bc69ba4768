import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.challenges.models import (
    Challenge,
    ChallengeCategory,
    ChallengeSign,
    Repeatability,
)
from apps.groups.models import Group, GroupMembership, GroupChallenge, GroupRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def player(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='player@example.com',
        password='TestPass123!',
        display_name='Player',
    )


@pytest.fixture
def authenticated_client(api_client, player):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(player)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def beach_category(db):
    return ChallengeCategory.objects.create(name='Beach', sort_order=1)


@pytest.fixture
def food_category(db):
    return ChallengeCategory.objects.create(name='Food', sort_order=2)


@pytest.fixture
def swim_challenge(beach_category):
    """Non-repeatable, positive."""
    return Challenge.objects.create(
        category=beach_category,
        description='Swim to the buoy',
        points=10,
        sign=ChallengeSign.POSITIVE,
        repeatable=Repeatability.NO,
    )


@pytest.fixture
def sandcastle_challenge(beach_category):
    """Repeatable, positive."""
    return Challenge.objects.create(
        category=beach_category,
        description='Build a sandcastle',
        points=5,
        sign=ChallengeSign.POSITIVE,
        repeatable=Repeatability.YES,
    )


@pytest.fixture
def sunburn_challenge(beach_category):
    """Repeatable penalty."""
    return Challenge.objects.create(
        category=beach_category,
        description='Get sunburnt',
        points=3,
        sign=ChallengeSign.NEGATIVE,
        repeatable=Repeatability.YES,
    )


@pytest.fixture
def octopus_challenge(food_category):
    return Challenge.objects.create(
        category=food_category,
        description='Eat grilled octopus',
        points=8,
    )


@pytest.fixture
def retired_challenge(food_category):
    return Challenge.objects.create(
        category=food_category,
        description='Retired challenge',
        points=50,
        is_active=False,
    )


@pytest.fixture
def group(player):
    """Group with the player as admin."""
    group = Group.objects.create(name='Island Trip', created_by=player)
    GroupMembership.objects.create(user=player, group=group, role=GroupRole.ADMIN)
    return group


@pytest.fixture
def selected_group(group, swim_challenge, sandcastle_challenge):
    """Group that has opted into the swim and sandcastle challenges."""
    for challenge in (swim_challenge, sandcastle_challenge):
        GroupChallenge.objects.create(group=group, challenge=challenge)
    return group
