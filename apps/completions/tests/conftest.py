import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.challenges.models import Challenge, ChallengeCategory, ChallengeSign, Repeatability
from apps.completions.models import ChallengeCompletion
from apps.groups.models import Group, GroupMembership, GroupChallenge, GroupRole


def client_for(user):
    """Return an API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def make_user(email, display_name):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        display_name=display_name,
    )


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group_admin(db):
    """Created the group; may delete any completion in it."""
    return make_user('admin@example.com', 'Group Admin')


@pytest.fixture
def submitter(db):
    """Member who submits completions."""
    return make_user('submitter@example.com', 'Submitter')


@pytest.fixture
def approver(db):
    """Member who approves completions."""
    return make_user('approver@example.com', 'Approver')


@pytest.fixture
def outsider(db):
    """User who belongs to no group."""
    return make_user('outsider@example.com', 'Outsider')


@pytest.fixture
def submitter_client(submitter):
    return client_for(submitter)


@pytest.fixture
def approver_client(approver):
    return client_for(approver)


@pytest.fixture
def admin_client(group_admin):
    return client_for(group_admin)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


@pytest.fixture
def category(db):
    return ChallengeCategory.objects.create(name='Beach', sort_order=1)


@pytest.fixture
def swim_challenge(category):
    """10 points, once per group."""
    return Challenge.objects.create(
        category=category,
        description='Swim to the buoy',
        points=10,
        repeatable=Repeatability.NO,
    )


@pytest.fixture
def dance_challenge(category):
    """10 points, repeatable."""
    return Challenge.objects.create(
        category=category,
        description='Dance on the pier',
        points=10,
        repeatable=Repeatability.YES,
    )


@pytest.fixture
def sunburn_challenge(category):
    """3 point penalty, repeatable."""
    return Challenge.objects.create(
        category=category,
        description='Get sunburnt',
        points=3,
        sign=ChallengeSign.NEGATIVE,
        repeatable=Repeatability.YES,
    )


@pytest.fixture
def unselected_challenge(category):
    """Active, but no group has picked it."""
    return Challenge.objects.create(
        category=category,
        description='Surf a wave',
        points=15,
    )


@pytest.fixture
def group(group_admin, submitter, approver, swim_challenge, dance_challenge, sunburn_challenge):
    """Group with admin, submitter and approver, playing swim, dance and sunburn."""
    group = Group.objects.create(name='Island Trip', created_by=group_admin)
    GroupMembership.objects.create(user=group_admin, group=group, role=GroupRole.ADMIN)
    GroupMembership.objects.create(user=submitter, group=group, role=GroupRole.MEMBER)
    GroupMembership.objects.create(user=approver, group=group, role=GroupRole.MEMBER)
    for challenge in (swim_challenge, dance_challenge, sunburn_challenge):
        GroupChallenge.objects.create(group=group, challenge=challenge)
    return group


@pytest.fixture
def second_group(group_admin, submitter, swim_challenge):
    """Another group the submitter plays in, with the swim challenge."""
    group = Group.objects.create(name='Ski Trip', created_by=group_admin)
    GroupMembership.objects.create(user=group_admin, group=group, role=GroupRole.ADMIN)
    GroupMembership.objects.create(user=submitter, group=group, role=GroupRole.MEMBER)
    GroupChallenge.objects.create(group=group, challenge=swim_challenge)
    return group


@pytest.fixture
def pending_completion(group, submitter, swim_challenge):
    """Submitter's swim completion, not yet approved."""
    return ChallengeCompletion.objects.create(
        group=group,
        user=submitter,
        challenge=swim_challenge,
        points=swim_challenge.signed_points,
        evidence_url='https://example.com/swim.jpg',
    )
