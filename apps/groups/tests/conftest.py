import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.challenges.models import Challenge, ChallengeCategory, ChallengeSign, Repeatability
from apps.groups.models import Group, GroupMembership, GroupChallenge, GroupRole


def client_for(user):
    """Return an API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group_admin(db):
    """Create and return the user who created the group."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Group Admin',
    )


@pytest.fixture
def member_user(db):
    """Create and return a member user."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Group Member',
    )


@pytest.fixture
def group_other_user(db):
    """Create and return a user not in any group."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def admin_client(group_admin):
    return client_for(group_admin)


@pytest.fixture
def member_client(member_user):
    return client_for(member_user)


@pytest.fixture
def other_client(group_other_user):
    return client_for(group_other_user)


@pytest.fixture
def group(db, group_admin):
    """Create and return a test group with admin membership."""
    group = Group.objects.create(name='Island Trip', created_by=group_admin)
    GroupMembership.objects.create(
        user=group_admin,
        group=group,
        role=GroupRole.ADMIN,
    )
    return group


@pytest.fixture
def group_with_members(group, member_user):
    """Group with admin and one member."""
    GroupMembership.objects.create(
        user=member_user,
        group=group,
        role=GroupRole.MEMBER,
    )
    return group


@pytest.fixture
def category(db):
    return ChallengeCategory.objects.create(name='Beach', sort_order=1)


@pytest.fixture
def food_category(db):
    return ChallengeCategory.objects.create(name='Food', sort_order=2)


@pytest.fixture
def challenge_one(category):
    return Challenge.objects.create(category=category, description='Swim to the buoy', points=10)


@pytest.fixture
def challenge_two(category):
    return Challenge.objects.create(
        category=category,
        description='Build a sandcastle',
        points=5,
        repeatable=Repeatability.YES,
    )


@pytest.fixture
def challenge_three(food_category):
    return Challenge.objects.create(
        category=food_category,
        description='Skip breakfast',
        points=4,
        sign=ChallengeSign.NEGATIVE,
    )


@pytest.fixture
def inactive_challenge(category):
    return Challenge.objects.create(
        category=category,
        description='Retired challenge',
        points=20,
        is_active=False,
    )


@pytest.fixture
def group_with_challenges(group, challenge_one, challenge_two):
    """Group that has selected challenge_one and challenge_two."""
    for challenge in (challenge_one, challenge_two):
        GroupChallenge.objects.create(group=group, challenge=challenge)
    return group
