from rest_framework import serializers
from .models import ChallengeCompletion
from apps.accounts.serializers import UserMinimalSerializer


class ChallengeCompletionSerializer(serializers.ModelSerializer):
    """Completion with the challenge and people involved flattened for the feed."""

    user = UserMinimalSerializer(read_only=True)
    approved_by = UserMinimalSerializer(read_only=True)
    challenge_description = serializers.CharField(source='challenge.description', read_only=True)
    category_id = serializers.UUIDField(source='challenge.category_id', read_only=True)
    category_name = serializers.CharField(source='challenge.category.name', read_only=True)
    status = serializers.CharField(read_only=True)

    class Meta:
        model = ChallengeCompletion
        fields = [
            'id',
            'group',
            'user',
            'challenge',
            'challenge_description',
            'category_id',
            'category_name',
            'points',
            'evidence_url',
            'notes',
            'completed_at',
            'approved',
            'approved_by',
            'approved_at',
            'status',
        ]
        read_only_fields = fields


class SubmitCompletionSerializer(serializers.Serializer):
    """Input for recording a completion."""

    group_id = serializers.UUIDField(required=True)
    user_id = serializers.UUIDField(required=True)
    challenge_id = serializers.UUIDField(required=True)
    # Any URI scheme, including local device paths
    evidence_url = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=500
    )
    notes = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=2000
    )


class ApproveCompletionSerializer(serializers.Serializer):
    """Input for approving a completion."""

    approver_id = serializers.UUIDField(required=True)
