import uuid
from unittest.mock import patch

import pytest
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, OperationalError
from django.urls import reverse
from rest_framework import status
from apps.completions.models import ChallengeCompletion
from apps.groups.models import GroupMembership


def submit_payload(group, user, challenge, **extra):
    data = {
        'group_id': str(group.id),
        'user_id': str(user.id),
        'challenge_id': str(challenge.id),
    }
    data.update(extra)
    return data


@pytest.mark.django_db
class TestSubmitCompletion:
    """Tests for POST /api/challenge-completions/"""

    def test_submit(self, submitter_client, group, submitter, swim_challenge):
        url = reverse('completions:completion-list')
        data = submit_payload(group, submitter, swim_challenge, evidence_url='https://example.com/a.jpg')
        response = submitter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['points'] == 10
        completion = ChallengeCompletion.objects.get(id=response.data['completion_id'])
        assert completion.approved is False

    def test_submit_with_local_file_evidence(self, submitter_client, group, submitter, swim_challenge):
        """Device-local photo URIs are accepted as evidence."""
        url = reverse('completions:completion-list')
        uri = 'file:///var/mobile/Containers/Data/photo.jpg'
        data = submit_payload(group, submitter, swim_challenge, evidence_url=uri)
        response = submitter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        completion = ChallengeCompletion.objects.get(id=response.data['completion_id'])
        assert completion.evidence_url == uri

    def test_submit_penalty_reports_negative_points(self, submitter_client, group, submitter, sunburn_challenge):
        url = reverse('completions:completion-list')
        response = submitter_client.post(url, submit_payload(group, submitter, sunburn_challenge), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['points'] == -3

    def test_submit_missing_fields(self, submitter_client, group):
        url = reverse('completions:completion-list')
        response = submitter_client.post(url, {'group_id': str(group.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'user_id' in response.data
        assert 'challenge_id' in response.data

    def test_submit_malformed_id(self, submitter_client, group, swim_challenge):
        url = reverse('completions:completion-list')
        data = {'group_id': str(group.id), 'user_id': 'not-a-uuid', 'challenge_id': str(swim_challenge.id)}
        response = submitter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_submit_unknown_challenge(self, submitter_client, group, submitter):
        url = reverse('completions:completion-list')
        data = {'group_id': str(group.id), 'user_id': str(submitter.id), 'challenge_id': str(uuid.uuid4())}
        response = submitter_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'challenge_not_found'

    def test_submit_not_selected(self, submitter_client, group, submitter, unselected_challenge):
        url = reverse('completions:completion-list')
        response = submitter_client.post(url, submit_payload(group, submitter, unselected_challenge), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'challenge_not_selected'

    def test_submit_duplicate_non_repeatable(self, submitter_client, pending_completion, group, submitter, swim_challenge):
        url = reverse('completions:completion-list')
        response = submitter_client.post(url, submit_payload(group, submitter, swim_challenge), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'duplicate_non_repeatable'
        assert 'error' in response.data

    def test_submit_non_member(self, outsider_client, group, outsider, swim_challenge):
        url = reverse('completions:completion-list')
        response = outsider_client.post(url, submit_payload(group, outsider, swim_challenge), format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'membership_not_found'

    def test_submit_unauthenticated(self, api_client, group, submitter, swim_challenge):
        url = reverse('completions:completion-list')
        response = api_client.post(url, submit_payload(group, submitter, swim_challenge), format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestApproveCompletion:
    """Tests for POST /api/challenge-completions/{id}/approve/"""

    def test_approve(self, approver_client, pending_completion, group, submitter, approver):
        url = reverse('completions:completion-approve', kwargs={'pk': pending_completion.id})
        response = approver_client.post(url, {'approver_id': str(approver.id)}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True

        submitter.refresh_from_db()
        assert submitter.total_points == 10
        assert GroupMembership.objects.get(user=submitter, group=group).points == 10

    def test_approve_twice(self, approver_client, pending_completion, submitter, approver):
        url = reverse('completions:completion-approve', kwargs={'pk': pending_completion.id})
        approver_client.post(url, {'approver_id': str(approver.id)}, format='json')
        response = approver_client.post(url, {'approver_id': str(approver.id)}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'already_approved'
        submitter.refresh_from_db()
        assert submitter.total_points == 10

    def test_self_approval(self, submitter_client, pending_completion, submitter):
        url = reverse('completions:completion-approve', kwargs={'pk': pending_completion.id})
        response = submitter_client.post(url, {'approver_id': str(submitter.id)}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'self_approval_forbidden'

    def test_approver_not_in_group(self, outsider_client, pending_completion, outsider):
        url = reverse('completions:completion-approve', kwargs={'pk': pending_completion.id})
        response = outsider_client.post(url, {'approver_id': str(outsider.id)}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'approver_not_member'

    def test_approve_on_behalf_of_someone_else(self, submitter_client, pending_completion, submitter, approver):
        """The approver in the body must be the authenticated user."""
        url = reverse('completions:completion-approve', kwargs={'pk': pending_completion.id})
        response = submitter_client.post(url, {'approver_id': str(approver.id)}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'approver_identity_mismatch'
        pending_completion.refresh_from_db()
        assert pending_completion.approved is False
        submitter.refresh_from_db()
        assert submitter.total_points == 0

    def test_approve_36_character_non_uuid_is_404(self, approver_client, approver):
        response = approver_client.post(
            f"/api/challenge-completions/{'a' * 36}/approve/",
            {'approver_id': str(approver.id)},
            format='json',
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_approve_unknown_completion(self, approver_client, group, approver):
        url = reverse('completions:completion-approve', kwargs={'pk': uuid.uuid4()})
        response = approver_client.post(url, {'approver_id': str(approver.id)}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'completion_not_found'

    def test_approve_without_approver(self, approver_client, pending_completion):
        url = reverse('completions:completion-approve', kwargs={'pk': pending_completion.id})
        response = approver_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'approver_id' in response.data


@pytest.mark.django_db
class TestDeleteCompletion:
    """Tests for DELETE /api/challenge-completions/{id}/"""

    def test_submitter_deletes_approved_completion(
        self, submitter_client, approver_client, pending_completion, group, submitter, approver
    ):
        approve_url = reverse('completions:completion-approve', kwargs={'pk': pending_completion.id})
        approver_client.post(approve_url, {'approver_id': str(approver.id)}, format='json')

        url = reverse('completions:completion-detail', kwargs={'pk': pending_completion.id})
        response = submitter_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        submitter.refresh_from_db()
        assert submitter.total_points == 0
        assert submitter.challenges_completed == 0
        assert GroupMembership.objects.get(user=submitter, group=group).points == 0

    def test_admin_deletes_pending_completion(self, admin_client, pending_completion):
        url = reverse('completions:completion-detail', kwargs={'pk': pending_completion.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert not ChallengeCompletion.objects.filter(id=pending_completion.id).exists()

    def test_other_member_cannot_delete(self, approver_client, pending_completion):
        url = reverse('completions:completion-detail', kwargs={'pk': pending_completion.id})
        response = approver_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert ChallengeCompletion.objects.filter(id=pending_completion.id).exists()

    def test_delete_unknown(self, submitter_client, db):
        url = reverse('completions:completion-detail', kwargs={'pk': uuid.uuid4()})
        response = submitter_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestCompletionFeeds:
    """Tests for the group and user completion lists."""

    def test_group_feed(self, submitter_client, pending_completion, group, submitter):
        url = reverse('completions:group-completions', kwargs={'group_id': group.id})
        response = submitter_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        completions = response.data['completions']
        assert len(completions) == 1
        entry = completions[0]
        assert entry['id'] == str(pending_completion.id)
        assert entry['user']['display_name'] == 'Submitter'
        assert entry['challenge_description'] == 'Swim to the buoy'
        assert entry['category_name'] == 'Beach'
        assert entry['points'] == 10
        assert entry['status'] == 'pending'
        assert entry['approved_by'] is None

    def test_group_feed_shows_approver(
        self, approver_client, pending_completion, group, approver
    ):
        approve_url = reverse('completions:completion-approve', kwargs={'pk': pending_completion.id})
        approver_client.post(approve_url, {'approver_id': str(approver.id)}, format='json')

        url = reverse('completions:group-completions', kwargs={'group_id': group.id})
        response = approver_client.get(url)

        entry = response.data['completions'][0]
        assert entry['approved'] is True
        assert entry['status'] == 'approved'
        assert entry['approved_by']['display_name'] == 'Approver'

    def test_group_feed_empty_for_unknown_group(self, submitter_client, db):
        url = reverse('completions:group-completions', kwargs={'group_id': uuid.uuid4()})
        response = submitter_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'completions': []}

    def test_user_feed(self, approver_client, pending_completion, group, submitter, approver):
        url = reverse(
            'completions:user-group-completions',
            kwargs={'user_id': submitter.id, 'group_id': group.id},
        )
        response = approver_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [c['id'] for c in response.data['completions']] == [str(pending_completion.id)]

        url = reverse(
            'completions:user-group-completions',
            kwargs={'user_id': approver.id, 'group_id': group.id},
        )
        response = approver_client.get(url)

        assert response.data['completions'] == []


@pytest.mark.django_db
class TestStoreFailures:
    """Database errors surface as a retryable 503 without leaking details."""

    def test_database_error_becomes_503(self, submitter_client, group):
        url = reverse('completions:group-completions', kwargs={'group_id': group.id})
        with patch(
            'apps.completions.views.list_group_completions',
            side_effect=OperationalError('connection to server was lost'),
        ):
            response = submitter_client.get(url)

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['code'] == 'transient_store_error'
        assert 'connection to server' not in response.data['error']

    def test_integrity_error_becomes_409(self, submitter_client, group, submitter, swim_challenge):
        """Constraint violations are conflicts, not retryable failures."""
        url = reverse('completions:completion-list')
        with patch(
            'apps.completions.views.submit_completion',
            side_effect=IntegrityError('duplicate key value violates unique constraint'),
        ):
            response = submitter_client.post(url, submit_payload(group, submitter, swim_challenge), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'conflict'
        assert 'duplicate key' not in response.data['error']

    def test_model_validation_error_becomes_400(self, submitter_client, group):
        url = reverse('completions:group-completions', kwargs={'group_id': group.id})
        with patch(
            'apps.completions.views.list_group_completions',
            side_effect=DjangoValidationError('"abc" is not a valid UUID.'),
        ):
            response = submitter_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'
